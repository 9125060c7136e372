"""
Windows BMP decoder, restricted to 8-bit uncompressed paletted images.

Header fields (little-endian):
    10  pixel data offset (long)
    14  info header size (long); palette starts at 14 + this value
    18  width (signed long)
    22  height (signed long, negative = top-down rows)
    26  planes (word, must be 1)
    28  bits per pixel (word, must be 8)
    30  compression (long, must be 0)
    46  palette entry count (long, 0 = 256)

Pixel data is width * height index bytes. Index 0 is transparent.
"""

from ..canvas import PixelCanvas
from ..errors import (BitmapError, CorruptDataError, FormatError,
                      UnsupportedFeatureError, attach_filename)
from ..utils.binary_utils import (read_le_long, read_le_long_signed,
                                  read_le_word, safe_slice)
from ..utils.file_utils import read_file_contents
from ..utils.palette_utils import PALETTE_ENTRIES, apply_palette, unpack_palette

BMP_MAGIC = b'BM'
FILE_HEADER_SIZE = 14
MIN_HEADER_SIZE = 50


class BmpImage:
    """Parser for 8-bit paletted BMP files."""

    def __init__(self, data):
        self.data = data

        self.validate_format()
        self.parse_header()
        self.parse_palette()
        self.parse_image_data()

    def validate_format(self):
        """Check the magic number and that the whole header is present."""
        if self.data[0:2] != BMP_MAGIC:
            raise FormatError('not a valid BMP file')
        if len(self.data) < MIN_HEADER_SIZE:
            raise CorruptDataError(f'BMP header truncated ({len(self.data)} bytes)')

    def parse_header(self):
        self.pixel_offset = read_le_long(self.data, 10)
        self.palette_offset = read_le_long(self.data, 14) + FILE_HEADER_SIZE

        width = read_le_long_signed(self.data, 18)
        height = read_le_long_signed(self.data, 22)
        if width <= 0 or height == 0:
            raise FormatError(f'invalid image dimensions: {width}x{height}')

        self.width = width
        self.height = abs(height)
        self.top_down = height < 0

        planes = read_le_word(self.data, 26)
        if planes != 1:
            raise UnsupportedFeatureError(f'number of BMP planes is not 1 ({planes})')

        bpp = read_le_word(self.data, 28)
        if bpp != 8:
            raise UnsupportedFeatureError(f'BMP is not 8-bit ({bpp} bits per pixel)')

        compression = read_le_long(self.data, 30)
        if compression != 0:
            raise UnsupportedFeatureError(f'BMP is compressed (method {compression})')

        self.palette_size = read_le_long(self.data, 46)
        if self.palette_size > PALETTE_ENTRIES:
            raise UnsupportedFeatureError(
                f'BMP header specifies more than 256 colors ({self.palette_size})')
        if self.palette_size == 0:
            self.palette_size = PALETTE_ENTRIES

    def parse_palette(self):
        """Parse the RGBQUAD table (B, G, R, reserved)."""
        raw = safe_slice(self.data, self.palette_offset, self.palette_size * 4)
        if raw is None:
            raise CorruptDataError('BMP palette extends past end of file')
        self.palette = unpack_palette(raw, entry_size=4, bgr=True)

    def parse_image_data(self):
        self.image_data = safe_slice(self.data, self.pixel_offset, self.width * self.height)
        if self.image_data is None:
            raise CorruptDataError('BMP pixel data extends past end of file')

    def rows_top_down(self):
        """Return index bytes reordered so the first row is the top row."""
        if self.top_down:
            return self.image_data

        rows = bytearray()
        for y in range(self.height - 1, -1, -1):
            rows.extend(self.image_data[y * self.width:(y + 1) * self.width])
        return bytes(rows)

    def to_canvas(self):
        pixels, opacity = apply_palette(self.rows_top_down(), self.palette)
        return PixelCanvas(self.width, self.height, pixels, opacity)


def decode_bmp(data):
    """Decode BMP file bytes into a PixelCanvas."""
    return BmpImage(data).to_canvas()


def read_bmp(filename):
    """Load a BMP file, attaching filename to any error."""
    data = read_file_contents(filename)
    try:
        return decode_bmp(data)
    except BitmapError as e:
        raise attach_filename(e, filename)
