# -*- coding: utf-8 -*-
import io

import pytest
from PIL import Image, ImageDraw, ImageFont, features

from mgsfontgen.rasterizer import GlyphImage, PillowRasterizer, Rasterizer


class BoxRasterizer(Rasterizer):
    """Every scalar is a solid box `advance` px wide and `height` px tall."""

    def __init__(self, advance=20, height=30):
        self.advance = advance
        self.height = height
        self.passes = 0
        self.closed = 0
        self.rendered = []

    def __enter__(self):
        self.passes += 1
        return self

    def measure(self, text, family, size):
        return float(self.advance * len(text))

    def render_filled(self, text, family, size):
        self.rendered.append(('fill', text))
        width = max(1, int(self.measure(text, family, size)))
        return GlyphImage(Image.new('L', (width, self.height), 255), 0, 0)

    def render_outline(self, text, family, size):
        self.rendered.append(('outline', text))
        width = max(1, int(self.measure(text, family, size)))
        mask = Image.new('L', (width, self.height), 0)
        ImageDraw.Draw(mask).rectangle([0, 0, width - 1, self.height - 1], outline=255)
        return GlyphImage(mask, 0, 0)

    def close(self):
        self.closed += 1


@pytest.fixture
def box_rasterizer():
    return BoxRasterizer()


def default_font_loader(family, size):
    return ImageFont.load_default(size=size)


@pytest.fixture
def pillow_rasterizer():
    if not features.check('freetype2'):
        pytest.skip("Pillow built without FreeType")
    return PillowRasterizer(font_loader=default_font_loader)


@pytest.fixture
def decode_image():
    """Decode container bytes back into an RGBA image."""
    def decode(data):
        with Image.open(io.BytesIO(data)) as img:
            return img.convert('RGBA')
    return decode
