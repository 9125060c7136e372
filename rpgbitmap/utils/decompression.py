"""
Decompression helpers for compressed game image formats.
"""

import zlib


def decompress_zlib(data, expected_size):
    """
    Inflate a zlib stream that must produce exactly expected_size bytes.
    Used by the XYZ format (palette + index data in one stream).

    Args:
        data: compressed bytes
        expected_size: exact decompressed size in bytes

    Returns:
        tuple: (decompressed_bytes, error) where exactly one is None
    """
    try:
        output = zlib.decompress(data)
    except zlib.error as e:
        return None, f'zlib error: {e}'

    if len(output) != expected_size:
        return None, f'uncompressed image data has wrong size: {len(output)}, expected {expected_size}'

    return output, None
