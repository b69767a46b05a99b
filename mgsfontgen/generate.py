#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Bitmap font atlas generator.

Renders every character of a charset into a 64-column grid twice: a
filled atlas and an outline atlas with identical cell contents, plus a
width table with one game-width byte per character.

Inputs:
  - charset file: UTF-8 text, one cell per character
  - compound character table (optional): "E000-E002"=substitute lines

Outputs:
  - FONT.png / FONT.dds:                 fill atlas, 48x48 cells
  - font-outline.png / font-outline.dds: outline atlas, 57x57 cells
  - widths.bin:                          one byte per charset character

Usage:
  mgsfontgen generate --charset charset.utf8 --font-family "Noto Sans CJK JP"
  mgsfontgen generate --charset charset.utf8 --compound-characters compound.txt \\
                      --font-family DejaVuSans --image-format dds --font-size 36
"""

import argparse
import os
import sys
from collections import namedtuple

from .compound import read_compound_table
from .encoder import ImageFormat, encode_image
from .layout import grid_geometry
from .rasterizer import PillowRasterizer
from .renderer import DEFAULT_BASELINE_ORIGIN, render_pass
from .widths import write_width_table

# ---------------- Config ----------------
DEFAULT_FONT_SIZE = 36
DEFAULT_BASELINE_ORIGIN_X, DEFAULT_BASELINE_ORIGIN_Y = DEFAULT_BASELINE_ORIGIN

OUTPUT_NAME = "FONT"
OUTLINE_NAME = "font-outline"
WIDTHS_NAME = "widths.bin"
# ------------------------------------------

FontOptions = namedtuple(
    'FontOptions', ['family', 'size', 'baseline_origin', 'offset', 'debug_grid']
)

FontAtlas = namedtuple('FontAtlas', ['fill', 'outline', 'widths'])


class UsageError(Exception):
    """Bad command line."""


class ArgumentParser(argparse.ArgumentParser):
    # report usage problems as a single line instead of exiting
    def error(self, message):
        raise UsageError(message)


def read_charset(path):
    """Read the charset file verbatim (a UTF-8 BOM is dropped)."""
    with open(path, 'r', encoding='utf-8-sig', newline='') as f:
        return f.read()


def generate_font(charset, table, options, rasterizer=None, verbose=False):
    """
    Run the fill pass and the outline pass.

    Both passes use the same charset and compound table, so every cell
    holds the same string in both atlases. Only the fill pass widths are
    kept.

    Returns:
        FontAtlas
    """
    rasterizer = rasterizer or PillowRasterizer()

    if verbose:
        print("\nRendering fill atlas...")
    fill, widths = render_pass(
        charset, table, rasterizer, options.family, options.size,
        baseline_origin=options.baseline_origin, outline=False,
        offset=options.offset, debug_grid=options.debug_grid, verbose=verbose,
    )

    if verbose:
        print("\nRendering outline atlas...")
    outline, _ = render_pass(
        charset, table, rasterizer, options.family, options.size,
        baseline_origin=options.baseline_origin, outline=True,
        offset=options.offset, debug_grid=options.debug_grid, verbose=verbose,
    )

    return FontAtlas(fill, outline, widths)


def write_outputs(atlas, output_dir, image_format):
    """
    Encode and write the three artifacts, overwriting existing files.

    Both images are encoded before anything is written.

    Returns:
        list of written paths
    """
    fill_data = encode_image(atlas.fill, image_format)
    outline_data = encode_image(atlas.outline, image_format)

    fill_path = os.path.join(output_dir, OUTPUT_NAME + image_format.extension)
    outline_path = os.path.join(output_dir, OUTLINE_NAME + image_format.extension)
    widths_path = os.path.join(output_dir, WIDTHS_NAME)

    with open(fill_path, 'wb') as f:
        f.write(fill_data)
    with open(outline_path, 'wb') as f:
        f.write(outline_data)
    write_width_table(widths_path, atlas.widths)

    return [fill_path, outline_path, widths_path]


def generate_command(args):
    verbose = not args.quiet

    charset = read_charset(args.charset)
    if not charset:
        raise ValueError(f"Charset is empty: {args.charset}")
    table = read_compound_table(args.compound_characters)

    image_format = ImageFormat.from_name(args.image_format)
    options = FontOptions(
        family=args.font_family,
        size=args.font_size,
        baseline_origin=(args.baseline_originx, args.baseline_originy),
        offset=(args.offsetx, args.offsety),
        debug_grid=args.debug_grid,
    )

    if verbose:
        fill_geometry = grid_geometry(len(charset), outline=False)
        outline_geometry = grid_geometry(len(charset), outline=True)
        print("=" * 70)
        print(f"Generating bitmap font ({len(charset)} characters)")
        print(f"  Font:    {options.family} {options.size}")
        print(f"  Fill:    {fill_geometry.width}x{fill_geometry.height} ({fill_geometry.rows} rows)")
        print(f"  Outline: {outline_geometry.width}x{outline_geometry.height}")
        print(f"  Compound characters: {len(table)}")
        print("=" * 70)

    atlas = generate_font(charset, table, options, verbose=verbose)

    os.makedirs(args.output_dir, exist_ok=True)
    paths = write_outputs(atlas, args.output_dir, image_format)

    if verbose:
        print("\nDone!")
        for path in paths:
            print(f"  ✓ {path}")


def build_parser():
    parser = ArgumentParser(prog='mgsfontgen', description='Generate bitmap font atlases and a width table.')
    commands = parser.add_subparsers(dest='command', metavar='command')
    commands.required = True

    gen = commands.add_parser('generate', help='render FONT, font-outline and widths.bin')
    gen.add_argument('--charset', '-charset', required=True,
                     help='charset file (UTF-8), one cell per character')
    gen.add_argument('--font-family', '-font-family', dest='font_family', required=True,
                     help='font family name or font file')
    gen.add_argument('--compound-characters', '-compound-characters', dest='compound_characters', default=None,
                     help='compound character table file')
    gen.add_argument('--image-format', '-image-format', dest='image_format', default='png',
                     help='png or dds (default: png)')
    gen.add_argument('--font-size', '-font-size', dest='font_size', type=int, default=DEFAULT_FONT_SIZE,
                     help=f'font size (default: {DEFAULT_FONT_SIZE})')
    gen.add_argument('--offsetx', '-offsetx', type=int, default=0,
                     help='grid offset X (default: 0)')
    gen.add_argument('--offsety', '-offsety', type=int, default=0,
                     help='grid offset Y (default: 0)')
    gen.add_argument('--baseline-originx', '-baseline-originx', dest='baseline_originx', type=int,
                     default=DEFAULT_BASELINE_ORIGIN_X,
                     help=f'layout origin X inside a cell (default: {DEFAULT_BASELINE_ORIGIN_X})')
    gen.add_argument('--baseline-originy', '-baseline-originy', dest='baseline_originy', type=int,
                     default=DEFAULT_BASELINE_ORIGIN_Y,
                     help=f'layout origin Y inside a cell (default: {DEFAULT_BASELINE_ORIGIN_Y})')
    gen.add_argument('--output-dir', '-output-dir', dest='output_dir', default='.',
                     help='output directory (default: current directory)')
    gen.add_argument('--debug-grid', dest='debug_grid', action='store_true',
                     help='outline every cell in red')
    gen.add_argument('--quiet', '-q', action='store_true',
                     help='only print errors')
    gen.set_defaults(handler=generate_command)

    return parser


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    parser = build_parser()
    if not argv:
        parser.print_help()
        return 0

    # commands are case insensitive
    argv[0] = argv[0].lower()

    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        print(e)
        return 1

    try:
        args.handler(args)
    except Exception as e:
        print(e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
