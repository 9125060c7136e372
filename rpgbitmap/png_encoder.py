"""
PNG encoder: writes a PixelCanvas as 8-bit RGBA, non-interlaced.
Opaque pixels get alpha 255, transparent pixels alpha 0.
"""

import io

from PIL import Image

from .errors import ImageIOError, InternalError, InvalidArgumentError, attach_filename
from .utils.file_utils import mkdirs_for_file, open_binary

ERROR_WRITE = 'unknown error while writing PNG'


def canvas_to_image(canvas):
    """Build an RGBA Pillow image from a canvas."""
    if canvas.is_empty:
        raise InvalidArgumentError(f'cannot encode empty {canvas.width}x{canvas.height} canvas')

    count = canvas.width * canvas.height
    rgba = bytearray(count * 4)
    rgba[0::4] = canvas.pixels[0::3]
    rgba[1::4] = canvas.pixels[1::3]
    rgba[2::4] = canvas.pixels[2::3]
    rgba[3::4] = bytes(255 if opaque else 0 for opaque in canvas.opacity)

    return Image.frombytes('RGBA', (canvas.width, canvas.height), bytes(rgba))


def _write_png(canvas, f):
    try:
        img = canvas_to_image(canvas)
        with img:
            img.save(f, 'PNG')
    except InvalidArgumentError:
        raise
    except Exception as e:
        raise InternalError(ERROR_WRITE) from e


def encode_png_bytes(canvas):
    """Return the PNG encoding of canvas as bytes."""
    buffer = io.BytesIO()
    _write_png(canvas, buffer)
    return buffer.getvalue()


def encode_png(canvas, filename):
    """
    Write canvas to filename as a PNG.

    Raises:
        InvalidArgumentError: canvas is empty
        ImageIOError: destination could not be opened or written
        InternalError: encoding failed
    """
    if canvas.is_empty:
        raise InvalidArgumentError(f'cannot encode empty {canvas.width}x{canvas.height} canvas',
                                   filename)

    # Encode fully before touching the destination
    try:
        data = encode_png_bytes(canvas)
    except InternalError as e:
        raise attach_filename(e, filename)

    mkdirs_for_file(filename)
    with open_binary(filename, 'wb') as f:
        try:
            f.write(data)
        except OSError as e:
            raise ImageIOError(f'could not write file ({e.strerror or e})', filename) from e
