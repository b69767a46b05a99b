# -*- coding: utf-8 -*-
"""
Glyph rasterization backends.

A rasterizer turns a render string into an 8-bit coverage mask, either
filled or as an outline stroke, and reports its advance width. The atlas
code only talks to the `Rasterizer` interface; `PillowRasterizer` is the
FreeType backend shipped with the tool.
"""

import os
import unicodedata
from collections import namedtuple

from PIL import Image, ImageChops, ImageDraw, ImageFont

# mask: PIL.Image mode "L"
# left, top: position of the mask's top-left pixel relative to the layout origin
GlyphImage = namedtuple('GlyphImage', ['mask', 'left', 'top'])

FONT_EXTENSIONS = ('', '.ttf', '.otf', '.ttc')
STYLE_SUFFIXES = ('', '-Regular', 'Regular')

# faces probed per .ttc collection
MAX_COLLECTION_FACES = 16

REGULAR_STYLES = ("Regular", "Book", "Normal", "Roman")

OUTLINE_STROKE_WIDTH = 1


class Rasterizer:
    """Capability interface for glyph shaping and rasterization."""

    def measure(self, text, family, size):
        """Advance width of `text` in pixels, trailing whitespace included."""
        raise NotImplementedError

    def render_filled(self, text, family, size):
        """Return a GlyphImage with the filled glyphs of `text`."""
        raise NotImplementedError

    def render_outline(self, text, family, size):
        """Return a GlyphImage with the outline stroke of `text`."""
        raise NotImplementedError

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def _font_dirs():
    dirs = [
        # Linux
        "/usr/share/fonts",
        "/usr/local/share/fonts",
        os.path.expanduser("~/.local/share/fonts"),
        os.path.expanduser("~/.fonts"),
        # macOS
        "/System/Library/Fonts",
        "/Library/Fonts",
        os.path.expanduser("~/Library/Fonts"),
    ]
    windir = os.environ.get("WINDIR")
    if windir:
        dirs.append(os.path.join(windir, "Fonts"))
    return dirs


def _family_key(name):
    return name.replace(' ', '').lower()


def _font_faces(font_dirs):
    """Yield (path, face index) of every font face below `font_dirs`."""
    for font_dir in font_dirs:
        for root, _, files in os.walk(font_dir):
            for filename in sorted(files):
                ext = os.path.splitext(filename)[1].lower()
                if ext not in FONT_EXTENSIONS[1:]:
                    continue
                path = os.path.join(root, filename)
                faces = MAX_COLLECTION_FACES if ext == '.ttc' else 1
                for index in range(faces):
                    yield path, index


def find_font_face(family, font_dirs=None):
    """
    Find the font face whose family name is `family`.

    Family names compare case-insensitively with spaces ignored. A
    regular face (Regular, Book) wins over the other styles of the family.

    Returns:
        (path, index) or None
    """
    wanted = _family_key(family)
    fallback = None

    for path, index in _font_faces(font_dirs if font_dirs is not None else _font_dirs()):
        try:
            name, style = ImageFont.truetype(path, 1, index=index).getname()
        except OSError:
            # past the last face of a collection, or not a font
            continue
        if not name or _family_key(name) != wanted:
            continue
        if style in REGULAR_STYLES:
            return path, index
        if fallback is None:
            fallback = path, index

    return fallback


def load_font(family, size, font_dirs=None):
    """
    Load a FreeType font by family name or file path.

    File names are tried first: Pillow searches the system font
    directories, so "DejaVu Sans", "DejaVuSans" and "DejaVuSans.ttf" all
    resolve, as does a "<name>-Regular" file. Otherwise the font
    directories are scanned for a face whose family name matches, which
    finds "Noto Sans CJK JP" inside NotoSansCJK-Regular.ttc.

    Raises:
        OSError: no matching font was found
    """
    names = []
    for base in (family, family.replace(' ', ''), family.replace(' ', '-')):
        for suffix in STYLE_SUFFIXES:
            if base + suffix not in names:
                names.append(base + suffix)

    for name in names:
        for ext in FONT_EXTENSIONS:
            try:
                return ImageFont.truetype(name + ext, size)
            except OSError:
                continue

    face = find_font_face(family, font_dirs)
    if face is None:
        raise OSError(f"Unsupported font family: {family}")

    path, index = face
    return ImageFont.truetype(path, size, index=index)


def empty_glyph():
    return GlyphImage(Image.new('L', (0, 0)), 0, 0)


def trim_glyph(mask, left, top):
    """Crop a mask to its ink; a mask without ink becomes an empty glyph."""
    ink = mask.getbbox()
    if ink is None:
        return empty_glyph()
    return GlyphImage(mask.crop(ink), left + ink[0], top + ink[1])


def _drawable(text):
    # control characters (line breaks from the charset file) carry no ink
    return ''.join(ch for ch in text if unicodedata.category(ch) != 'Cc')


class PillowRasterizer(Rasterizer):
    """
    Rasterizer backed by Pillow's FreeType binding.

    Args:
        font_loader: callable (family, size) -> FreeTypeFont
        stroke_width: outline stroke width in pixels
    """

    def __init__(self, font_loader=load_font, stroke_width=OUTLINE_STROKE_WIDTH):
        self.font_loader = font_loader
        self.stroke_width = stroke_width
        self._fonts = {}

    def font(self, family, size):
        key = (family, size)
        if key not in self._fonts:
            self._fonts[key] = self.font_loader(family, size)
        return self._fonts[key]

    def measure(self, text, family, size):
        text = _drawable(text)
        if not text:
            return 0.0
        return float(self.font(family, size).getlength(text))

    def _draw(self, text, font, bbox, stroke_width):
        left, top, right, bottom = bbox
        mask = Image.new('L', (right - left, bottom - top), 0)
        draw = ImageDraw.Draw(mask)
        draw.text((-left, -top), text, fill=255, font=font, anchor='la',
                  stroke_width=stroke_width, stroke_fill=255)
        return mask

    def _bbox(self, text, font, stroke_width=0):
        left, top, right, bottom = font.getbbox(text, anchor='la', stroke_width=stroke_width)
        if right <= left or bottom <= top:
            return None
        return int(left), int(top), int(right), int(bottom)

    def render_filled(self, text, family, size):
        text = _drawable(text)
        font = self.font(family, size)
        bbox = self._bbox(text, font) if text else None
        if bbox is None:
            return empty_glyph()

        return trim_glyph(self._draw(text, font, bbox, 0), bbox[0], bbox[1])

    def render_outline(self, text, family, size):
        text = _drawable(text)
        font = self.font(family, size)
        bbox = self._bbox(text, font, self.stroke_width) if text else None
        if bbox is None:
            return empty_glyph()

        # ring = dilated glyph minus the glyph itself
        stroked = self._draw(text, font, bbox, self.stroke_width)
        filled = self._draw(text, font, bbox, 0)
        return trim_glyph(ImageChops.subtract(stroked, filled), bbox[0], bbox[1])

    def close(self):
        self._fonts.clear()
