"""
Decode legacy game graphics (XYZ, 8-bit BMP, PNG) into a common pixel
canvas, composite them and write the result as PNG.
"""

from .canvas import PixelCanvas, blank_canvas, blit
from .decoders.bmp_decoder import decode_bmp, read_bmp
from .decoders.png_decoder import decode_png, read_png
from .decoders.xyz_decoder import decode_xyz, read_xyz
from .errors import (BitmapError, CorruptDataError, FormatError, ImageIOError,
                     InternalError, InvalidArgumentError, UnsupportedFeatureError)
from .image_loader import SUPPORTED_EXTENSIONS, decode, is_supported
from .png_encoder import encode_png, encode_png_bytes

__version__ = '1.0.0'

__all__ = [
    'PixelCanvas', 'blank_canvas', 'blit',
    'decode', 'decode_bmp', 'decode_png', 'decode_xyz',
    'read_bmp', 'read_png', 'read_xyz',
    'encode_png', 'encode_png_bytes',
    'SUPPORTED_EXTENSIONS', 'is_supported',
    'BitmapError', 'CorruptDataError', 'FormatError', 'ImageIOError',
    'InternalError', 'InvalidArgumentError', 'UnsupportedFeatureError',
]
