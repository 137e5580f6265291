"""Raster output for generated engines, drawn with Pillow."""

from __future__ import annotations

from PIL import Image as PILImage
from PIL import ImageDraw

from siege import config
from siege.engine import Engine
from siege.render.geometry import Circle, Line, Square, engine_primitives


def to_image(engine: Engine, scale: int = config.IMAGE_SCALE) -> PILImage.Image:
    """Rasterize an engine to an RGB image of scale x scale pixels per tile."""
    image = PILImage.new(
        "RGB", (engine.width * scale, engine.height * scale), config.BACKGROUND_COLOR
    )
    drawer = ImageDraw.Draw(image)
    stroke = max(1, round(scale * config.BEAM_WIDTH_RATIO))

    for primitive in engine_primitives(engine, scale):
        match primitive:
            case Square(x, y, size):
                drawer.rectangle(
                    (x, y, x + size - 1, y + size - 1), fill=config.WALL_COLOR
                )
            case Line(x1, y1, x2, y2):
                drawer.line((x1, y1, x2, y2), fill=config.WOOD_COLOR, width=stroke)
            case Circle(cx, cy, radius):
                drawer.ellipse(
                    (cx - radius, cy - radius, cx + radius, cy + radius),
                    outline=config.WOOD_COLOR,
                    width=stroke,
                )

    return image
