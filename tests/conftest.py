"""
Shared pytest fixtures for bitmap tests
"""

import pytest

from builders import BLUE, GREEN, RED, build_bmp, build_xyz, make_canvas


@pytest.fixture
def red_pixel():
    """1x1 fully opaque red canvas"""
    return make_canvas(1, 1, [RED])


@pytest.fixture
def xyz_file(tmp_path):
    """2x1 XYZ file: opaque red, transparent"""
    path = tmp_path / "tile.xyz"
    path.write_bytes(build_xyz(2, 1, {1: RED}, [1, 0]))
    return path


@pytest.fixture
def bmp_file(tmp_path):
    """2x2 BMP file: [red, green] over [transparent, blue]"""
    path = tmp_path / "sprite.bmp"
    path.write_bytes(build_bmp(2, 2, {1: RED, 2: GREEN, 3: BLUE},
                               [[1, 2], [0, 3]]))
    return path
