"""Encoders for generated engines.

- to_svg: Standalone SVG document
- to_image: Pillow raster image
"""

from .image import to_image
from .svg import to_svg

__all__ = ["to_image", "to_svg"]
