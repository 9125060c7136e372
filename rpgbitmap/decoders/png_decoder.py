"""
PNG decoder built on Pillow.

Pillow unpacks sub-byte depths, strips 16-bit RGB/RGBA/LA to 8 bits and
removes interlacing. The remaining per-mode work is collapsing whatever
alpha information the file carries into a boolean opacity mask:

    P     index 0 is transparent (tRNS is not consulted)
    RGB   always opaque
    RGBA  alpha != 0 is opaque
    L     always opaque, gray copied to R, G, B
    LA    alpha != 0 is opaque, gray copied to R, G, B
"""

import io
import struct
import zlib

from PIL import Image

from ..canvas import PixelCanvas
from ..errors import (BitmapError, CorruptDataError, FormatError,
                      UnsupportedFeatureError, attach_filename)
from ..utils.file_utils import read_file_contents
from ..utils.palette_utils import apply_palette, unpack_palette

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

# Everything Pillow is known to raise on a damaged stream
PNG_LIBRARY_ERRORS = (OSError, SyntaxError, ValueError, EOFError, struct.error,
                      zlib.error, Image.DecompressionBombError)


def _spread_gray(gray):
    """Copy one gray byte per pixel into R, G and B."""
    pixels = bytearray(len(gray) * 3)
    pixels[0::3] = gray
    pixels[1::3] = gray
    pixels[2::3] = gray
    return pixels


def _gray16_high_bytes(img):
    """Reduce 16-bit grayscale samples to their high byte."""
    raw = img.tobytes()
    if img.mode in ('I;16', 'I;16L'):
        return raw[1::2]
    if img.mode == 'I;16B':
        return raw[0::2]
    # Mode I: native 32-bit ints holding 0-65535
    return bytes(min(max(v, 0), 0xFFFF) >> 8 for v in memoryview(raw).cast('i'))


def _palette_to_canvas(img):
    palette = unpack_palette(img.getpalette() or [], entry_size=3)
    return apply_palette(img.tobytes(), palette)


def _rgb_to_canvas(img):
    pixels = bytearray(img.tobytes())
    return pixels, [True] * (img.width * img.height)


def _rgba_to_canvas(img):
    raw = img.tobytes()
    pixels = bytearray(img.width * img.height * 3)
    pixels[0::3] = raw[0::4]
    pixels[1::3] = raw[1::4]
    pixels[2::3] = raw[2::4]
    return pixels, [a != 0 for a in raw[3::4]]


def _gray_to_canvas(img):
    if img.mode == '1':
        gray = img.convert('L').tobytes()
    elif img.mode == 'L':
        gray = img.tobytes()
    else:
        gray = _gray16_high_bytes(img)
    return _spread_gray(gray), [True] * (img.width * img.height)


def _gray_alpha_to_canvas(img):
    raw = img.tobytes()
    return _spread_gray(raw[0::2]), [a != 0 for a in raw[1::2]]


MODE_HANDLERS = {
    'P': _palette_to_canvas,
    'RGB': _rgb_to_canvas,
    'RGBA': _rgba_to_canvas,
    '1': _gray_to_canvas,
    'L': _gray_to_canvas,
    'I': _gray_to_canvas,
    'I;16': _gray_to_canvas,
    'I;16L': _gray_to_canvas,
    'I;16B': _gray_to_canvas,
    'LA': _gray_alpha_to_canvas,
}


def image_to_canvas(img):
    """
    Convert a loaded Pillow image into a PixelCanvas.

    Raises:
        FormatError: zero width or height
        UnsupportedFeatureError: mode has no handler
    """
    width, height = img.size
    if width == 0 or height == 0:
        raise FormatError(f'invalid image dimensions: {width}x{height}')

    handler = MODE_HANDLERS.get(img.mode)
    if handler is None:
        raise UnsupportedFeatureError(f'unknown image type: {img.mode}')

    pixels, opacity = handler(img)
    return PixelCanvas(width, height, pixels, opacity)


def decode_png(data):
    """Decode PNG file bytes into a PixelCanvas."""
    if data[0:8] != PNG_SIGNATURE:
        raise FormatError('not a valid PNG file')

    try:
        img = Image.open(io.BytesIO(data), formats=['PNG'])
    except PNG_LIBRARY_ERRORS as e:
        raise CorruptDataError(f'PNG decoder error: {e}') from e

    with img:
        try:
            img.load()
        except PNG_LIBRARY_ERRORS as e:
            raise CorruptDataError(f'PNG decoder error: {e}') from e
        return image_to_canvas(img)


def read_png(filename):
    """Load a PNG file, attaching filename to any error."""
    data = read_file_contents(filename)
    try:
        return decode_png(data)
    except BitmapError as e:
        raise attach_filename(e, filename)
