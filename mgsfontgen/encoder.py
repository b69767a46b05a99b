# -*- coding: utf-8 -*-
"""Image container encoding (PNG, DDS) through Pillow."""

import io
from enum import Enum


class ImageFormat(Enum):
    PNG = 'png'
    DDS = 'dds'

    @property
    def extension(self):
        return '.' + self.value

    @classmethod
    def from_name(cls, name):
        """Parse a format name; anything unrecognized falls back to PNG."""
        if name and name.lower().lstrip('.') == cls.DDS.value:
            return cls.DDS
        return cls.PNG


PIL_FORMATS = {
    ImageFormat.PNG: 'PNG',
    ImageFormat.DDS: 'DDS',
}


def encode_image(img, image_format):
    """
    Encode an RGBA atlas into container bytes.

    Args:
        img: PIL.Image in RGBA mode
        image_format: ImageFormat

    Returns:
        bytes
    """
    if img.width == 0 or img.height == 0:
        raise ValueError(f"Cannot encode an empty {img.width}x{img.height} image")

    buf = io.BytesIO()
    img.save(buf, PIL_FORMATS[image_format])
    return buf.getvalue()
