# -*- coding: utf-8 -*-
import os

import numpy as np
import pytest
from PIL import features

from mgsfontgen.compound import parse_compound_table
from mgsfontgen.rasterizer import find_font_face, load_font
from mgsfontgen.renderer import render_pass


def test_measure(pillow_rasterizer):
    assert pillow_rasterizer.measure('A', 'default', 36) > 0
    assert pillow_rasterizer.measure('AA', 'default', 36) > pillow_rasterizer.measure('A', 'default', 36)
    assert pillow_rasterizer.measure('\n', 'default', 36) == 0.0


def test_render_filled(pillow_rasterizer):
    glyph = pillow_rasterizer.render_filled('A', 'default', 36)
    assert glyph.mask.mode == 'L'
    assert glyph.mask.width > 0 and glyph.mask.height > 0
    assert np.asarray(glyph.mask).max() > 0


def test_render_outline_is_a_ring(pillow_rasterizer):
    filled = pillow_rasterizer.render_filled('O', 'default', 36)
    outline = pillow_rasterizer.render_outline('O', 'default', 36)

    assert np.asarray(outline.mask).max() > 0
    # the stroke extends past the filled glyph
    assert outline.left <= filled.left
    assert outline.top <= filled.top
    assert outline.mask.width > filled.mask.width


def test_blank_glyphs_are_empty(pillow_rasterizer):
    for text in (' ', '\n', ''):
        glyph = pillow_rasterizer.render_filled(text, 'default', 36)
        assert glyph.mask.size == (0, 0)
        glyph = pillow_rasterizer.render_outline(text, 'default', 36)
        assert glyph.mask.size == (0, 0)


def test_fonts_are_cached_per_session(pillow_rasterizer):
    with pillow_rasterizer:
        first = pillow_rasterizer.font('default', 36)
        assert pillow_rasterizer.font('default', 36) is first
    assert pillow_rasterizer._fonts == {}


def test_two_character_atlas(pillow_rasterizer):
    img, widths = render_pass('AB', {}, pillow_rasterizer, 'default', 36)

    assert img.size == (3072, 48)
    assert len(widths) == 2
    assert all(1 <= w <= 32 for w in widths)
    assert np.asarray(img)[:, :96, 3].max() > 0


def test_compound_atlas_stays_in_cell(pillow_rasterizer):
    table = parse_compound_table(['"E000"=WWWW'])
    img, widths = render_pass('\ue000', table, pillow_rasterizer, 'default', 36, baseline_origin=(0, 0))

    assert 1 <= widths[0] <= 32
    alpha = np.asarray(img)[:, :, 3]
    assert alpha[:, :48].max() > 0
    assert alpha[:, 48:].max() == 0


def test_width_table_is_deterministic(pillow_rasterizer):
    charset = 'The quick brown fox, 0123456789!'
    _, first = render_pass(charset, {}, pillow_rasterizer, 'default', 36)
    _, second = render_pass(charset, {}, pillow_rasterizer, 'default', 36)
    assert first == second
    assert len(first) == len(charset)


def test_unknown_font_family():
    with pytest.raises(OSError, match='Unsupported font family'):
        load_font('No Such Font Family 1234', 36)


FONT_DIR = os.path.join(os.path.dirname(__file__), 'fonts')

needs_freetype = pytest.mark.skipif(not features.check('freetype2'), reason="Pillow built without FreeType")


@needs_freetype
def test_find_font_face_by_family_name():
    path, index = find_font_face('DejaVu Sans Mono', [FONT_DIR])
    # the Book face wins over the Bold face of the same family
    assert os.path.basename(path) == 'DejaVuSansMono.ttf'
    assert index == 0


@needs_freetype
def test_find_font_face_ignores_case_and_spaces():
    path, _ = find_font_face('dejavusansmono', [FONT_DIR])
    assert os.path.basename(path) == 'DejaVuSansMono.ttf'
    assert find_font_face('DejaVu Serif', [FONT_DIR]) is None


@needs_freetype
def test_load_font_by_family_name():
    font = load_font('dejavu sans mono', 36, font_dirs=[FONT_DIR])
    assert font.getname() == ('DejaVu Sans Mono', 'Book')
    assert font.size == 36


@needs_freetype
def test_load_font_by_path():
    font = load_font(os.path.join(FONT_DIR, 'DejaVuSansMono-Bold.ttf'), 24)
    assert font.getname() == ('DejaVu Sans Mono', 'Bold')


@needs_freetype
def test_unknown_font_family_in_font_dirs(tmp_path):
    (tmp_path / 'broken.ttf').write_bytes(b'not a font')
    with pytest.raises(OSError, match='Unsupported font family'):
        load_font('No Such Font Family 1234', 36, font_dirs=[str(tmp_path)])
