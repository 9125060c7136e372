"""
Filesystem helpers used by the decoders, the encoder and the CLI.

OS failures are re-raised as ImageIOError carrying the filename.
"""

import os
from pathlib import Path

from ..errors import ImageIOError


def open_binary(filename, mode='rb'):
    """Open filename in binary mode ('rb' or 'wb')."""
    if 'b' not in mode:
        mode += 'b'
    try:
        return open(filename, mode)
    except OSError as e:
        raise ImageIOError(f'could not open file ({e.strerror or e})', filename) from e


def read_file_contents(filename):
    """Read a whole file into memory."""
    with open_binary(filename, 'rb') as f:
        try:
            return f.read()
        except OSError as e:
            raise ImageIOError(f'could not read file ({e.strerror or e})', filename) from e


def get_file_size(filename):
    try:
        return os.path.getsize(filename)
    except OSError as e:
        raise ImageIOError(f'could not stat file ({e.strerror or e})', filename) from e


def get_extension(filename):
    """Lowercased extension without the dot, or '' if there is none."""
    name = Path(filename).name
    dot = name.rfind('.')
    if dot <= 0:
        return ''
    return name[dot + 1:].lower()


def get_without_extension(filename):
    path = Path(filename)
    if not get_extension(path):
        return path
    return path.with_suffix('')


def mkdirs_for_file(filename):
    """Create the parent directories of filename if they are missing."""
    parent = Path(filename).parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ImageIOError(f'could not create directory ({e.strerror or e})', parent) from e


def list_files(folder):
    """
    List regular, non-hidden files in a folder.

    Args:
        folder: directory path

    Returns:
        sorted list of Path objects
    """
    folder = Path(folder)
    try:
        entries = list(folder.iterdir())
    except OSError as e:
        raise ImageIOError(f'could not list files ({e.strerror or e})', folder) from e
    return sorted(f for f in entries if f.is_file() and not f.name.startswith('.'))
