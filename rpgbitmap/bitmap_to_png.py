#!/usr/bin/env python3
"""
Game Bitmap to PNG Converter

Converts XYZ, 8-bit BMP and PNG tiles/sprites to RGBA PNG, and composites
several of them onto one canvas (e.g. to rebuild a tileset or map image).

Usage:
    rpg-bitmap convert <folder_or_file> [...] [--output-dir DIR]
    rpg-bitmap compose --size WxH --output OUT.png LAYER [LAYER ...]

A LAYER is "path@x,y" to draw the whole image with its top-left corner at
(x, y), or "path@x,y:sx,sy,w,h" to draw only the w x h region starting at
(sx, sy) in the source image.
"""

import argparse
import sys
from pathlib import Path

from .canvas import blank_canvas, blit
from .errors import BitmapError
from .image_loader import decode, is_supported
from .png_encoder import encode_png
from .utils.file_utils import (get_extension, get_file_size, get_without_extension,
                               list_files)


def collect_files(paths):
    """
    Expand folders into the supported image files they contain.

    Args:
        paths: list of file or folder paths

    Returns:
        list of Path objects
    """
    files = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            files.extend(f for f in list_files(path) if is_supported(f))
        else:
            files.append(path)
    return files


def get_output_path(file_path, output_dir=None):
    if output_dir is None:
        return Path(f"{get_without_extension(file_path)}.png")
    return Path(output_dir) / f"{file_path.stem}.png"


def convert_files(paths, output_dir=None):
    """
    Convert every supported image in paths to PNG.

    Args:
        paths: list of file or folder paths
        output_dir: folder for the PNGs (default: next to each source)

    Returns:
        tuple: (success_count, error_count)
    """
    files = collect_files(paths)

    if not files:
        print("No XYZ/BMP/PNG image files found")
        return 0, 0

    print(f"Found {len(files)} image file(s)")

    success_count = 0
    error_count = 0

    # Never write over a source of this run or an output written earlier in it
    inputs = {f.resolve() for f in files}
    written = set()

    for file_path in files:
        if output_dir is None and get_extension(file_path) == 'png':
            print(f"Skipped: {file_path.name} (already PNG)")
            continue

        output_path = get_output_path(file_path, output_dir)
        target = output_path.resolve()
        if target == file_path.resolve():
            print(f"Skipped: {file_path.name} (already PNG)")
            continue
        if target in inputs:
            print(f"Error converting {file_path.name}: would overwrite source file {output_path.name}")
            error_count += 1
            continue
        if target in written:
            print(f"Error converting {file_path.name}: {output_path.name} already written in this run")
            error_count += 1
            continue

        try:
            canvas = decode(file_path)
            encode_png(canvas, output_path)
            written.add(target)
            print(f"Converted: {file_path.name} ({get_file_size(file_path):,} bytes) -> {output_path.name}")
            success_count += 1
        except BitmapError as e:
            print(f"Error converting {file_path.name}: {e}")
            error_count += 1

    print(f"\nConversion complete: {success_count} successful, {error_count} errors")
    return success_count, error_count


def parse_size(size_str):
    """Parse "WxH" into (width, height)."""
    try:
        width_str, height_str = size_str.lower().split('x')
        width, height = int(width_str), int(height_str)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid size '{size_str}' (expected WxH)")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"invalid size '{size_str}' (must be positive)")
    return width, height


def parse_layer(layer_str):
    """
    Parse a layer argument.

    Args:
        layer_str: "path@x,y" or "path@x,y:sx,sy,w,h"

    Returns:
        tuple: (path, (x, y), region) where region is None or (sx, sy, w, h)
    """
    path, sep, placement = layer_str.rpartition('@')
    if not sep or not path:
        raise argparse.ArgumentTypeError(f"invalid layer '{layer_str}' (expected path@x,y)")

    position, _, region = placement.partition(':')
    try:
        x, y = (int(v) for v in position.split(','))
        if region:
            sx, sy, w, h = (int(v) for v in region.split(','))
            region = (sx, sy, w, h)
        else:
            region = None
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid layer '{layer_str}' (bad coordinates)")

    return Path(path), (x, y), region


def compose(size, layers, output_path):
    """
    Blit layers in order onto a blank canvas and save it as PNG.

    Args:
        size: (width, height) of the output canvas
        layers: list of parse_layer() results
        output_path: PNG file to write
    """
    canvas = blank_canvas(*size)

    for path, (x, y), region in layers:
        src = decode(path)
        if region is None:
            region = (0, 0, src.width, src.height)
        sx, sy, w, h = region
        blit(canvas, x, y, src, sx, sy, w, h)
        print(f"Placed: {path.name} at ({x}, {y}) [{w}x{h}]")

    encode_png(canvas, output_path)
    print(f"Composed {len(layers)} layer(s) -> {Path(output_path).name}")
    return canvas


def build_parser():
    parser = argparse.ArgumentParser(
        prog='rpg-bitmap',
        description='Convert and composite legacy game bitmaps (XYZ, BMP, PNG) to PNG',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  rpg-bitmap convert Picture CharSet
  rpg-bitmap convert ChipSet/tiles.xyz --output-dir out
  rpg-bitmap compose --size 32x16 --output map.png a.xyz@0,0 b.bmp@16,0:0,0,16,16
        '''
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    convert_parser = subparsers.add_parser('convert', help='Convert images to PNG')
    convert_parser.add_argument('paths', nargs='+',
                                help='Image files or folders to convert')
    convert_parser.add_argument('--output-dir', '-o', default=None,
                                help='Write PNGs here instead of next to the sources')

    compose_parser = subparsers.add_parser('compose', help='Composite images onto one canvas')
    compose_parser.add_argument('--size', '-s', type=parse_size, required=True,
                                help='Canvas size as WxH')
    compose_parser.add_argument('--output', '-o', required=True,
                                help='PNG file to write')
    compose_parser.add_argument('layers', nargs='+', type=parse_layer,
                                help='Layers as path@x,y or path@x,y:sx,sy,w,h (drawn in order)')

    return parser


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == 'convert':
            _, error_count = convert_files(args.paths, args.output_dir)
            if error_count:
                sys.exit(1)
        else:
            compose(args.size, args.layers, args.output)
    except BitmapError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
