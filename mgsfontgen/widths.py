# -*- coding: utf-8 -*-
"""
Width table: one game-width byte per charset character, charset order,
no header and no terminator.
"""

import numpy as np

MAX_WIDTH_BYTE = 255


class WidthOverflowError(ValueError):
    """A width does not fit in one byte (font or cell size misconfigured)."""


def width_byte(game_width, game_cell_width):
    value = min(game_width, game_cell_width)
    if not 0 <= value <= MAX_WIDTH_BYTE:
        raise WidthOverflowError(
            f"Width {value} is outside 0-{MAX_WIDTH_BYTE}; check font size and cell size."
        )
    return value


def pack_widths(values):
    """Pack width values into the raw byte stream."""
    arr = np.asarray(list(values), dtype=np.int64)
    if arr.size and (arr.min() < 0 or arr.max() > MAX_WIDTH_BYTE):
        raise WidthOverflowError(f"Width table values must be within 0-{MAX_WIDTH_BYTE}")
    return arr.astype(np.uint8).tobytes()


def write_width_table(path, data):
    with open(path, 'wb') as f:
        f.write(data)
