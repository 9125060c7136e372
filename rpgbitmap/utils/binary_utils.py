"""
Binary utilities for reading little-endian header fields.
BMP and XYZ headers store all multi-byte values little-endian (Intel order).
"""

import struct


def read_le_word(data, offset):
    """
    Read a little-endian 16-bit word from data at offset.

    Args:
        data: bytes object
        offset: position to read from

    Returns:
        int (0-65535) or None if out of bounds
    """
    if offset < 0 or offset + 2 > len(data):
        return None
    return struct.unpack('<H', data[offset:offset+2])[0]


def read_le_long(data, offset):
    """
    Read a little-endian 32-bit long from data at offset.

    Args:
        data: bytes object
        offset: position to read from

    Returns:
        int (0-4294967295) or None if out of bounds
    """
    if offset < 0 or offset + 4 > len(data):
        return None
    return struct.unpack('<I', data[offset:offset+4])[0]


def read_le_long_signed(data, offset):
    """
    Read a little-endian signed 32-bit long from data at offset.

    Args:
        data: bytes object
        offset: position to read from

    Returns:
        int (-2147483648 to 2147483647) or None if out of bounds
    """
    if offset < 0 or offset + 4 > len(data):
        return None
    return struct.unpack('<i', data[offset:offset+4])[0]


def safe_slice(data, offset, length):
    """
    Safely extract a slice of data, returning None if out of bounds.

    Args:
        data: bytes object
        offset: start position
        length: number of bytes to extract

    Returns:
        bytes or None if out of bounds
    """
    if offset < 0 or length < 0 or offset + length > len(data):
        return None
    return data[offset:offset+length]
