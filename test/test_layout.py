# -*- coding: utf-8 -*-
import math

import pytest

from mgsfontgen.layout import AtlasConfig, Cursor, cell_cursors, grid_geometry, round_up4


@pytest.mark.parametrize('count', [1, 2, 63, 64, 65, 128, 129, 1000, 4321])
@pytest.mark.parametrize('outline', [False, True])
def test_geometry_invariants(count, outline):
    geometry = grid_geometry(count, outline)
    cfg = AtlasConfig(outline)

    assert geometry.columns == 64
    assert geometry.rows == math.ceil(count / 64)
    assert geometry.width == 64 * cfg.CELL_WIDTH
    assert geometry.height % 4 == 0
    assert geometry.rows * cfg.CELL_HEIGHT <= geometry.height < geometry.rows * cfg.CELL_HEIGHT + 4


def test_two_character_fill_geometry():
    geometry = grid_geometry(2)
    assert geometry.width == 3072
    assert geometry.rows == 1
    assert geometry.height == 48
    assert (geometry.cell_width, geometry.cell_height) == (48, 48)


def test_outline_cells_are_larger():
    geometry = grid_geometry(2, outline=True)
    assert geometry.width == 64 * 57
    assert geometry.height == 60


def test_empty_charset_has_zero_rows():
    geometry = grid_geometry(0)
    assert geometry.rows == 0
    assert geometry.height == 0
    assert geometry.width == 3072


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        grid_geometry(-1)


def test_round_up4():
    assert [round_up4(v) for v in (0, 1, 4, 5, 57, 114)] == [0, 4, 4, 8, 60, 116]


def test_cursor_scale_composes_in_cell_space():
    cursor = Cursor.translation(96, 48).scale_x(0.5)
    assert cursor.apply(10, 5) == (101.0, 53.0)
    assert cursor.scale_x(0.5).sx == 0.25
    assert cursor.translate(48, 0).apply(0, 0) == (144.0, 48.0)


def test_cell_cursors_wrap_rows():
    geometry = grid_geometry(130)
    cursors = list(cell_cursors(geometry, 130))

    assert len(cursors) == 130
    assert cursors[0].apply(0, 0) == (0, 0)
    assert cursors[63].apply(0, 0) == (63 * 48, 0)
    assert cursors[64].apply(0, 0) == (0, 48)
    assert cursors[129].apply(0, 0) == (48, 96)
    assert all(c.sx == 1.0 for c in cursors)


def test_cell_cursors_offset():
    geometry = grid_geometry(65, outline=True)
    cursors = list(cell_cursors(geometry, 65, offset_x=3, offset_y=-2))
    assert cursors[1].apply(0, 0) == (60, -2)
    assert cursors[64].apply(0, 0) == (3, 55)


def test_cell_cursors_empty():
    assert list(cell_cursors(grid_geometry(0), 0)) == []
