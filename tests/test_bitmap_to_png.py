"""
Tests for the rpg-bitmap command line driver
"""

import argparse

import pytest
from PIL import Image

from builders import BLUE, GREEN, RED, build_bmp, build_xyz
from rpgbitmap.bitmap_to_png import (collect_files, compose, convert_files,
                                     main, parse_layer, parse_size)


@pytest.fixture
def asset_dir(tmp_path):
    """Folder with one XYZ, one BMP, one PNG and one unrelated file"""
    folder = tmp_path / "assets"
    folder.mkdir()
    (folder / "a.xyz").write_bytes(build_xyz(2, 1, {1: RED}, [1, 0]))
    (folder / "b.bmp").write_bytes(build_bmp(2, 1, {1: GREEN}, [[0, 1]]))
    Image.new("RGB", (1, 1), BLUE).save(folder / "c.png")
    (folder / "notes.txt").write_text("ignore me")
    return folder


@pytest.mark.unit
class TestArgumentParsing:
    def test_parse_size(self):
        assert parse_size("32x16") == (32, 16)
        assert parse_size("8X8") == (8, 8)

    @pytest.mark.parametrize("value", ["32", "0x4", "ax4", "4x4x4"])
    def test_parse_size_invalid(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_size(value)

    def test_parse_layer_position(self):
        path, position, region = parse_layer("tiles/a.xyz@16,8")
        assert path.name == "a.xyz"
        assert position == (16, 8)
        assert region is None

    def test_parse_layer_region(self):
        path, position, region = parse_layer("me@home/a.png@0,0:16,0,16,16")
        assert str(path) == "me@home/a.png"
        assert region == (16, 0, 16, 16)

    @pytest.mark.parametrize("value", ["a.xyz", "@1,2", "a.xyz@1", "a.xyz@1,2:3"])
    def test_parse_layer_invalid(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_layer(value)


@pytest.mark.integration
class TestConvert:
    def test_collect_files_filters_folder(self, asset_dir):
        names = [f.name for f in collect_files([asset_dir])]
        assert names == ["a.xyz", "b.bmp", "c.png"]

    def test_convert_in_place(self, asset_dir, capsys):
        success, errors = convert_files([asset_dir])

        assert (success, errors) == (2, 0)
        with Image.open(asset_dir / "a.png") as img:
            assert img.getpixel((0, 0)) == (255, 0, 0, 255)
            assert img.getpixel((1, 0))[3] == 0
        assert (asset_dir / "b.png").is_file()
        out = capsys.readouterr().out
        assert "Skipped: c.png" in out
        assert "2 successful, 0 errors" in out

    def test_convert_to_output_dir(self, asset_dir, tmp_path):
        out_dir = tmp_path / "out"
        success, errors = convert_files([asset_dir], out_dir)

        assert (success, errors) == (3, 0)
        assert sorted(f.name for f in out_dir.iterdir()) == ["a.png", "b.png", "c.png"]

    def test_uppercase_png_skipped_in_place(self, tmp_path, capsys):
        source = tmp_path / "b.PNG"
        Image.new("RGB", (1, 1), BLUE).save(source, "PNG")

        assert convert_files([source]) == (0, 0)
        assert "Skipped: b.PNG (already PNG)" in capsys.readouterr().out
        assert [f.name for f in tmp_path.iterdir()] == ["b.PNG"]

    def test_in_place_never_overwrites_source_png(self, tmp_path, capsys):
        Image.new("RGB", (1, 1), BLUE).save(tmp_path / "a.png")
        (tmp_path / "a.xyz").write_bytes(build_xyz(2, 1, {1: RED}, [1, 0]))

        success, errors = convert_files([tmp_path])

        assert (success, errors) == (0, 1)
        with Image.open(tmp_path / "a.png") as img:
            assert img.size == (1, 1)
            assert img.getpixel((0, 0)) == BLUE
        assert "would overwrite source file a.png" in capsys.readouterr().out

    def test_output_dir_name_collision(self, tmp_path, capsys):
        (tmp_path / "a.bmp").write_bytes(build_bmp(1, 1, {1: GREEN}, [[1]]))
        (tmp_path / "a.xyz").write_bytes(build_xyz(2, 1, {1: RED}, [1, 0]))
        out_dir = tmp_path / "out"

        success, errors = convert_files([tmp_path / "a.bmp", tmp_path / "a.xyz"], out_dir)

        assert (success, errors) == (1, 1)
        assert [f.name for f in out_dir.iterdir()] == ["a.png"]
        with Image.open(out_dir / "a.png") as img:
            assert img.size == (1, 1)
            assert img.getpixel((0, 0)) == (0, 255, 0, 255)
        assert "a.png already written in this run" in capsys.readouterr().out

    def test_output_dir_is_source_folder(self, asset_dir):
        success, errors = convert_files([asset_dir], asset_dir)

        assert (success, errors) == (2, 0)
        with Image.open(asset_dir / "c.png") as img:
            assert img.mode == "RGB"

    def test_convert_reports_errors(self, tmp_path, capsys):
        bad = tmp_path / "bad.xyz"
        bad.write_bytes(b"XYZ0")
        success, errors = convert_files([bad])

        assert (success, errors) == (0, 1)
        assert "Error converting bad.xyz" in capsys.readouterr().out

    def test_main_exit_status_on_error(self, tmp_path):
        bad = tmp_path / "bad.bmp"
        bad.write_bytes(b"XX")
        with pytest.raises(SystemExit) as exc_info:
            main(["convert", str(bad)])
        assert exc_info.value.code == 1


@pytest.mark.integration
class TestCompose:
    def test_compose_layers(self, asset_dir, tmp_path):
        out = tmp_path / "map.png"
        layers = [
            parse_layer(f"{asset_dir / 'a.xyz'}@0,0"),
            parse_layer(f"{asset_dir / 'b.bmp'}@1,1"),
            parse_layer(f"{asset_dir / 'c.png'}@0,1:0,0,1,1"),
        ]

        canvas = compose((3, 2), layers, out)

        assert canvas.get_pixel(0, 0) == RED
        assert not canvas.is_opaque(1, 0)
        assert canvas.get_pixel(0, 1) == BLUE
        assert not canvas.is_opaque(1, 1)
        assert canvas.get_pixel(2, 1) == GREEN
        with Image.open(out) as img:
            assert img.size == (3, 2)
            assert img.getpixel((2, 1)) == (0, 255, 0, 255)

    def test_main_compose_out_of_range(self, asset_dir, tmp_path, capsys):
        out = tmp_path / "map.png"
        with pytest.raises(SystemExit) as exc_info:
            main(["compose", "--size", "1x1", "--output", str(out),
                  f"{asset_dir / 'a.xyz'}@0,0"])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
        assert not out.exists()
