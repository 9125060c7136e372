"""
Load any supported image file into a PixelCanvas.

Formats are chosen by (lowercased) file extension:
- XYZ: zlib-compressed 8-bit indexed tiles/sprites
- BMP: 8-bit uncompressed paletted Windows bitmaps
- PNG: palette, RGB, RGBA, gray and gray+alpha
"""

from .decoders.bmp_decoder import read_bmp
from .decoders.png_decoder import read_png
from .decoders.xyz_decoder import read_xyz
from .errors import FormatError
from .utils.file_utils import get_extension

READERS = {
    'xyz': read_xyz,
    'bmp': read_bmp,
    'png': read_png,
}

SUPPORTED_EXTENSIONS = tuple(READERS)


def is_supported(filename):
    return get_extension(filename) in READERS


def decode(filename):
    """
    Decode an image file by extension.

    Args:
        filename: path to an .xyz, .bmp or .png file

    Returns:
        PixelCanvas

    Raises:
        FormatError: unknown extension or invalid file contents
        ImageIOError: file could not be read
        CorruptDataError, UnsupportedFeatureError: see the decoders
    """
    reader = READERS.get(get_extension(filename))
    if reader is None:
        raise FormatError('could not determine file type', str(filename))
    return reader(filename)
