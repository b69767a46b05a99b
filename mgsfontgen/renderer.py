# -*- coding: utf-8 -*-
"""
Glyph renderer: per-cell resolve, fit-to-cell scaling and drawing.

Every glyph is measured in game width units (display width / 1.5). A
glyph wider than the game cell is squeezed horizontally so it stays in
its cell; narrower glyphs are never stretched. Compound characters whose
substitute starts with an ordinary letter are first squeezed by
1/len(substitute) so the whole substitute occupies one cell.

All glyphs of a pass draw into one coverage surface (numpy uint8,
height x width) that is finalised into an RGBA image: white glyphs on a
transparent background.
"""

import math
from collections import namedtuple
from contextlib import contextmanager

import numpy as np
from PIL import Image, ImageDraw

from .compound import is_private_use, needs_prescale, resolve
from .layout import AtlasConfig, GAME_WIDTH_MULTIPLIER, NORMAL_CELL_WIDTH, cell_cursors, grid_geometry
from .widths import pack_widths, width_byte

DEFAULT_BASELINE_ORIGIN = (1, -4)

GRID_COLOR = (255, 0, 0, 255)

PROGRESS_INTERVAL = 256

GlyphCell = namedtuple(
    'GlyphCell',
    ['char', 'text', 'transform', 'raw_width', 'game_width', 'prescale', 'fit_scale', 'width'],
)


def game_width(raw_width):
    return math.ceil(raw_width / GAME_WIDTH_MULTIPLIER) + 1


def game_cell_width(normal_cell_width=NORMAL_CELL_WIDTH):
    return int(normal_cell_width // GAME_WIDTH_MULTIPLIER)


def fit_scale(char_game_width, cell_game_width):
    """Horizontal shrink factor; never above 1.0."""
    return min(cell_game_width / char_game_width, 1.0)


def prescale_for(char, text):
    """Horizontal pre-scale for compound characters, 1.0 otherwise."""
    if is_private_use(char) and needs_prescale(text):
        return 1.0 / len(text)
    return 1.0


class PassState:
    """Mutable state of one render pass, passed explicitly to each call."""

    def __init__(self, geometry):
        self.geometry = geometry
        self.surface = np.zeros((geometry.height, geometry.width), dtype=np.uint8)
        self.widths = []

    @property
    def index(self):
        return len(self.widths)

    def release(self):
        self.surface = None


@contextmanager
def drawing_surface(geometry):
    """Allocate a pass surface; it is released whatever happens in the pass."""
    state = PassState(geometry)
    try:
        yield state
    finally:
        state.release()


def layout_cell(char, table, rasterizer, family, size, cursor, cfg=None):
    """
    Resolve, measure and place one charset character.

    Args:
        char: charset scalar
        table: compound character table
        rasterizer: Rasterizer
        family, size: font family and point size
        cursor: Cursor of the cell
        cfg: AtlasConfig (defaults to the fill pass)

    Returns:
        GlyphCell
    """
    cfg = cfg or AtlasConfig()
    text = resolve(char, table)

    raw = rasterizer.measure(text, family, size)
    prescale = prescale_for(char, text)

    # the fit-scale only sees what is left after the pre-scale
    char_game_width = game_width(raw * prescale)
    cell_game_width = game_cell_width(cfg.NORMAL_CELL_WIDTH)
    scale = fit_scale(char_game_width, cell_game_width)

    transform = cursor.scale_x(prescale).scale_x(scale)

    return GlyphCell(
        char, text, transform, raw, char_game_width, prescale, scale,
        width_byte(char_game_width, cell_game_width),
    )


def composite_over(surface, src, x, y):
    """Source-over blend of coverage `src` into `surface` at (x, y), clipped."""
    h, w = src.shape
    surface_h, surface_w = surface.shape

    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + w, surface_w), min(y + h, surface_h)
    if x0 >= x1 or y0 >= y1:
        return

    s = src[y0 - y:y1 - y, x0 - x:x1 - x].astype(np.uint16)
    d = surface[y0:y1, x0:x1].astype(np.uint16)
    surface[y0:y1, x0:x1] = (s + d * (255 - s) // 255).astype(np.uint8)


def draw_cell(state, cell, glyph, baseline_origin=DEFAULT_BASELINE_ORIGIN):
    """Draw a rasterized glyph through the cell transform."""
    mask = glyph.mask
    if mask.width == 0 or mask.height == 0:
        return

    origin_x, origin_y = baseline_origin
    dest_x, dest_y = cell.transform.apply(origin_x + glyph.left, origin_y + glyph.top)

    sx = cell.transform.sx
    if sx != 1.0:
        new_width = max(1, round(mask.width * sx))
        mask = mask.resize((new_width, mask.height), Image.LANCZOS)

    composite_over(state.surface, np.asarray(mask, dtype=np.uint8), round(dest_x), round(dest_y))


def draw_grid_lines(img, geometry):
    """Outline every cell in red."""
    draw = ImageDraw.Draw(img)
    rows = geometry.height // geometry.cell_height
    for row in range(rows):
        for col in range(geometry.columns):
            x = col * geometry.cell_width
            y = row * geometry.cell_height
            draw.rectangle([x, y, x + geometry.cell_width, y + geometry.cell_height], outline=GRID_COLOR)


def finalize_surface(state, debug_grid=False):
    """Convert the coverage surface into an RGBA image."""
    geometry = state.geometry
    if state.surface.size == 0:
        return Image.new('RGBA', (geometry.width, geometry.height), (0, 0, 0, 0))

    rgba = np.full((geometry.height, geometry.width, 4), 255, dtype=np.uint8)
    rgba[:, :, 3] = state.surface
    img = Image.fromarray(rgba)

    if debug_grid:
        grid = Image.new('RGBA', img.size, (0, 0, 0, 0))
        draw_grid_lines(grid, geometry)
        img = Image.alpha_composite(grid, img)

    return img


def render_pass(charset, table, rasterizer, family, size,
                baseline_origin=DEFAULT_BASELINE_ORIGIN, outline=False,
                offset=(0, 0), debug_grid=False, verbose=False):
    """
    Run one complete pass over the charset.

    Args:
        charset: str, one cell per scalar
        table: compound character table
        rasterizer: Rasterizer
        family, size: font family and point size
        baseline_origin: (x, y) layout origin inside each cell
        outline: False for the fill pass, True for the outline pass
        offset: (x, y) translation of the whole grid
        debug_grid: outline every cell in red
        verbose: print progress

    Returns:
        (PIL.Image, bytes): atlas image and width table
    """
    cfg = AtlasConfig(outline)
    geometry = grid_geometry(len(charset), outline)
    label = "outline" if outline else "fill"
    total = len(charset)

    with rasterizer, drawing_surface(geometry) as state:
        cursors = cell_cursors(geometry, total, offset[0], offset[1])
        for char, cursor in zip(charset, cursors):
            cell = layout_cell(char, table, rasterizer, family, size, cursor, cfg)
            if outline:
                glyph = rasterizer.render_outline(cell.text, family, size)
            else:
                glyph = rasterizer.render_filled(cell.text, family, size)

            draw_cell(state, cell, glyph, baseline_origin)
            state.widths.append(cell.width)

            if verbose and (state.index % PROGRESS_INTERVAL == 0 or state.index == total):
                print(f"    {label}: {state.index}/{total}")

        img = finalize_surface(state, debug_grid)
        widths = pack_widths(state.widths)

    return img, widths
