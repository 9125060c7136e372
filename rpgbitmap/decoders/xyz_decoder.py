"""
XYZ tile/sprite decoder

Layout:
    - Magic "XYZ1" (4 bytes)
    - Width, height: little-endian 16-bit words
    - zlib stream inflating to a 256 x RGB palette followed by
      width * height index bytes (row-major)

Palette index 0 is the transparency colorkey.
"""

from ..canvas import PixelCanvas
from ..errors import BitmapError, CorruptDataError, FormatError, attach_filename
from ..utils.binary_utils import read_le_word
from ..utils.decompression import decompress_zlib
from ..utils.file_utils import read_file_contents
from ..utils.palette_utils import apply_palette, unpack_palette

XYZ_MAGIC = b'XYZ1'
HEADER_SIZE = 8
PALETTE_SIZE = 256 * 3


class XyzImage:
    """Parser for the XYZ format."""

    def __init__(self, data):
        self.data = data

        self.validate_format()
        self.parse_header()
        self.decompress()
        self.parse_palette()

    def validate_format(self):
        if self.data[0:4] != XYZ_MAGIC:
            raise FormatError('not a valid XYZ file')
        if len(self.data) <= HEADER_SIZE:
            raise FormatError('not a valid XYZ file')

    def parse_header(self):
        self.width = read_le_word(self.data, 4)
        self.height = read_le_word(self.data, 6)
        if self.width == 0 or self.height == 0:
            raise FormatError(f'invalid image dimensions: {self.width}x{self.height}')

    def decompress(self):
        expected_size = PALETTE_SIZE + self.width * self.height
        self.body, error = decompress_zlib(self.data[HEADER_SIZE:], expected_size)
        if self.body is None:
            raise CorruptDataError(error)

    def parse_palette(self):
        self.palette = unpack_palette(self.body[:PALETTE_SIZE], entry_size=3)

    def to_canvas(self):
        pixels, opacity = apply_palette(self.body[PALETTE_SIZE:], self.palette)
        return PixelCanvas(self.width, self.height, pixels, opacity)


def decode_xyz(data):
    """Decode XYZ file bytes into a PixelCanvas."""
    return XyzImage(data).to_canvas()


def read_xyz(filename):
    """Load an XYZ file, attaching filename to any error."""
    data = read_file_contents(filename)
    try:
        return decode_xyz(data)
    except BitmapError as e:
        raise attach_filename(e, filename)
