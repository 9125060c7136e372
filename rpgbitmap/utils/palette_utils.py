"""
Palette table utilities.

XYZ palette: 256 entries of 3 bytes (R, G, B)
BMP palette: up to 256 entries of 4 bytes (B, G, R, reserved)
PNG palette: flat list of R, G, B values as returned by Pillow

All of them are normalized to a list of 256 (r, g, b) tuples; entries the
file does not define read as black.
"""

PALETTE_ENTRIES = 256

BLACK = (0, 0, 0)


def unpack_palette(raw, entry_size=3, bgr=False):
    """
    Split a packed palette table into (r, g, b) tuples.

    Args:
        raw: bytes or sequence of ints holding the table
        entry_size: bytes per entry (3 for RGB, 4 for BMP RGBQUAD)
        bgr: True if entries are stored blue first

    Returns:
        list of 256 (r, g, b) tuples
    """
    palette = []
    count = min(len(raw) // entry_size, PALETTE_ENTRIES)

    for i in range(count):
        offset = i * entry_size
        c0, c1, c2 = raw[offset], raw[offset + 1], raw[offset + 2]
        if bgr:
            palette.append((c2, c1, c0))
        else:
            palette.append((c0, c1, c2))

    # Pad palette to 256 colors
    while len(palette) < PALETTE_ENTRIES:
        palette.append(BLACK)

    return palette


def apply_palette(indices, palette):
    """
    Expand index bytes into canvas buffers using index 0 as the colorkey.

    Args:
        indices: one palette index per pixel, row-major
        palette: list of 256 (r, g, b) tuples

    Returns:
        tuple: (pixels: bytearray, opacity: list of bool)
    """
    pixels = bytearray(len(indices) * 3)
    opacity = [False] * len(indices)

    for i, idx in enumerate(indices):
        opacity[i] = idx != 0
        pixels[i * 3:i * 3 + 3] = bytes(palette[idx])

    return pixels, opacity
