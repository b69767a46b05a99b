# -*- coding: utf-8 -*-
"""
Atlas grid layout.

Atlas layout:
  - 64 columns, fixed
  - rows = ceil(N / 64), the last row may be partially filled
  - fill pass:    48x48 cells -> 3072 px wide
  - outline pass: 57x57 cells -> 3648 px wide
  - height is rounded up to a multiple of 4 (block compressed containers)
"""

import math
from collections import namedtuple

# ---------------- Config ----------------
COLUMN_COUNT = 64

NORMAL_CELL_WIDTH = 48
NORMAL_CELL_HEIGHT = 48
OUTLINE_CELL_WIDTH = 57
OUTLINE_CELL_HEIGHT = 57

# display width -> game (logical) width
GAME_WIDTH_MULTIPLIER = 1.5
# ------------------------------------------


class AtlasConfig:
    """Fixed atlas constants for one pass (fill or outline)."""

    def __init__(self, outline=False):
        self.outline = outline

        self.COLUMN_COUNT = COLUMN_COUNT
        self.GAME_WIDTH_MULTIPLIER = GAME_WIDTH_MULTIPLIER

        # Game widths are always measured against the fill cell
        self.NORMAL_CELL_WIDTH = NORMAL_CELL_WIDTH

        if outline:
            self.CELL_WIDTH = OUTLINE_CELL_WIDTH
            self.CELL_HEIGHT = OUTLINE_CELL_HEIGHT
        else:
            self.CELL_WIDTH = NORMAL_CELL_WIDTH
            self.CELL_HEIGHT = NORMAL_CELL_HEIGHT

    def __repr__(self):
        return f"AtlasConfig(outline={self.outline}, cell={self.CELL_WIDTH}x{self.CELL_HEIGHT})"


GridGeometry = namedtuple(
    'GridGeometry', ['columns', 'rows', 'cell_width', 'cell_height', 'width', 'height']
)


def round_up4(value):
    """Round value up to the next multiple of 4."""
    return 4 * math.ceil(value / 4)


def grid_geometry(count, outline=False):
    """
    Compute the atlas geometry for a charset of `count` characters.

    Args:
        count: number of characters in the charset
        outline: True for the outline pass (57x57 cells)

    Returns:
        GridGeometry
    """
    if count < 0:
        raise ValueError(f"Character count must not be negative: {count}")

    cfg = AtlasConfig(outline)
    rows = math.ceil(count / cfg.COLUMN_COUNT)
    width = cfg.COLUMN_COUNT * cfg.CELL_WIDTH
    height = round_up4(rows * cfg.CELL_HEIGHT)

    return GridGeometry(cfg.COLUMN_COUNT, rows, cfg.CELL_WIDTH, cfg.CELL_HEIGHT, width, height)


class Cursor(namedtuple('Cursor', ['sx', 'tx', 'ty'])):
    """
    Affine cursor transform limited to an X scale plus a translation.

    A point (x, y) in cell space maps to (tx + sx * x, ty + y) on the surface.
    """

    __slots__ = ()

    @classmethod
    def translation(cls, x, y):
        return cls(1.0, float(x), float(y))

    def translate(self, dx, dy):
        """Append a surface-space translation."""
        return Cursor(self.sx, self.tx + dx, self.ty + dy)

    def scale_x(self, factor):
        """Prepend a horizontal scale about the cell origin."""
        return Cursor(self.sx * factor, self.tx, self.ty)

    def apply(self, x, y):
        return self.tx + self.sx * x, self.ty + y


def cell_cursors(geometry, count, offset_x=0, offset_y=0):
    """
    Yield the cursor of every cell, in charset order.

    The cursor advances by one cell width after each glyph; after each
    full row X resets and Y advances by one cell height.
    """
    row_cursor = Cursor.translation(offset_x, offset_y)
    remaining = count
    while remaining > 0:
        row_length = min(geometry.columns, remaining)
        cursor = row_cursor
        for _ in range(row_length):
            yield cursor
            cursor = cursor.translate(geometry.cell_width, 0)
        remaining -= row_length
        row_cursor = row_cursor.translate(0, geometry.cell_height)
