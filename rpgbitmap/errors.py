"""
Exceptions raised by the bitmap decoders, encoder and compositor.

Byte-level decoders raise without a filename; the file-level entry points
attach the path so messages read "<filename>: <reason>".
"""


class BitmapError(Exception):
    """Base class for all bitmap errors."""

    def __init__(self, message, filename=None):
        super().__init__(message)
        self.message = message
        self.filename = str(filename) if filename is not None else None

    def __str__(self):
        if self.filename:
            return f"{self.filename}: {self.message}"
        return self.message


class ImageIOError(BitmapError, OSError):
    """File could not be opened, read or written."""


class FormatError(BitmapError, ValueError):
    """Bad magic number, unknown extension or invalid dimensions."""


class CorruptDataError(BitmapError, ValueError):
    """Decompression failure, size mismatch or truncated data."""


class UnsupportedFeatureError(BitmapError, ValueError):
    """Valid file using a subtype we do not decode."""


class InvalidArgumentError(BitmapError, ValueError):
    """Caller passed out-of-range coordinates or mismatched buffers."""


class InternalError(BitmapError, RuntimeError):
    """Unexpected failure inside the image library."""


def attach_filename(error, filename):
    """Return error with filename set, unless it already names a file."""
    if not error.filename:
        error.filename = str(filename)
    return error
