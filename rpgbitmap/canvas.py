"""
Uniform pixel model shared by every decoder, plus the compositor.

A canvas stores RGB bytes and a boolean opacity flag per pixel, both
row-major. Transparent pixels are a colorkey: their RGB is ignored by
blit and written with alpha 0 by the PNG encoder.
"""

from .errors import InvalidArgumentError


class PixelCanvas:
    """Width x height RGB buffer with a per-pixel opacity mask."""

    def __init__(self, width=0, height=0, pixels=None, opacity=None):
        if width < 0 or height < 0:
            raise InvalidArgumentError(f'invalid canvas dimensions: {width}x{height}')

        count = width * height
        if pixels is None:
            pixels = bytearray(count * 3)
        if opacity is None:
            opacity = [False] * count

        if len(pixels) != count * 3:
            raise InvalidArgumentError(
                f'pixel buffer has {len(pixels)} bytes, expected {count * 3}')
        if len(opacity) != count:
            raise InvalidArgumentError(
                f'opacity mask has {len(opacity)} entries, expected {count}')

        self.width = width
        self.height = height
        self.pixels = bytearray(pixels)
        self.opacity = [bool(a) for a in opacity]

    def __repr__(self):
        return f'<PixelCanvas {self.width}x{self.height}>'

    def __eq__(self, other):
        if not isinstance(other, PixelCanvas):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and self.pixels == other.pixels and self.opacity == other.opacity)

    @property
    def is_empty(self):
        return self.width == 0 or self.height == 0

    def index(self, x, y):
        return y * self.width + x

    def contains(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_point(self, x, y):
        if not self.contains(x, y):
            raise InvalidArgumentError(
                f'pixel ({x}, {y}) outside {self.width}x{self.height} canvas')

    def is_opaque(self, x, y):
        self._check_point(x, y)
        return self.opacity[self.index(x, y)]

    def get_pixel(self, x, y):
        """Return the (r, g, b) tuple at (x, y)."""
        self._check_point(x, y)
        offset = self.index(x, y) * 3
        return tuple(self.pixels[offset:offset + 3])

    def copy(self):
        return PixelCanvas(self.width, self.height, self.pixels, self.opacity)


def blank_canvas(width, height):
    """Create a fully transparent canvas to composite onto."""
    return PixelCanvas(width, height)


def _check_region(canvas, x, y, width, height, role):
    if x < 0 or y < 0 or x + width > canvas.width or y + height > canvas.height:
        raise InvalidArgumentError(
            f'{role} region {width}x{height} at ({x}, {y}) '
            f'outside {canvas.width}x{canvas.height} canvas')


def _regions_overlap(ax, ay, bx, by, width, height):
    return abs(ax - bx) < width and abs(ay - by) < height


def blit(dest, dest_x, dest_y, src, src_x, src_y, width, height):
    """
    Overlay a rectangle of src onto dest.

    Opaque source pixels overwrite the destination color and mark it
    opaque; transparent source pixels leave the destination untouched.
    dest and src may be the same canvas as long as the two rectangles
    do not overlap.

    Args:
        dest: canvas to draw on (modified in place)
        dest_x, dest_y: top-left corner in dest
        src: canvas to read from
        src_x, src_y: top-left corner in src
        width, height: size of the region

    Raises:
        InvalidArgumentError: if the region does not fit in either canvas,
            or overlaps itself within one canvas
    """
    if width < 0 or height < 0:
        raise InvalidArgumentError(f'invalid region size: {width}x{height}')

    _check_region(src, src_x, src_y, width, height, 'source')
    _check_region(dest, dest_x, dest_y, width, height, 'destination')

    if dest is src and _regions_overlap(dest_x, dest_y, src_x, src_y, width, height):
        raise InvalidArgumentError(
            f'source and destination regions overlap within the same canvas '
            f'({src_x}, {src_y}) -> ({dest_x}, {dest_y}) [{width}x{height}]')

    for y in range(height):
        for x in range(width):
            src_offset = src.index(src_x + x, src_y + y)
            if not src.opacity[src_offset]:
                continue

            dest_offset = dest.index(dest_x + x, dest_y + y)
            dest.opacity[dest_offset] = True
            dest.pixels[dest_offset * 3:dest_offset * 3 + 3] = \
                src.pixels[src_offset * 3:src_offset * 3 + 3]
