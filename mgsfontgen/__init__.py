# -*- coding: utf-8 -*-
"""Bitmap font atlas generator: fill atlas, outline atlas and width table."""

from .compound import CompoundTableError, UnresolvedCharacterError, parse_compound_table, read_compound_table, resolve
from .encoder import ImageFormat, encode_image
from .generate import FontAtlas, FontOptions, generate_font, main, write_outputs
from .layout import AtlasConfig, GridGeometry, grid_geometry
from .rasterizer import GlyphImage, PillowRasterizer, Rasterizer
from .renderer import render_pass
from .widths import WidthOverflowError

__version__ = "0.1.0"
