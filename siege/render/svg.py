"""SVG output for generated engines."""

from __future__ import annotations

import logging

from siege import config
from siege.engine import Engine
from siege.render.geometry import Circle, Line, Square, engine_primitives
from siege.types import RGB

logger = logging.getLogger(__name__)


def _hex(color: RGB) -> str:
    return "#{:02X}{:02X}{:02X}".format(*color)


def to_svg(engine: Engine, scale: float = config.SVG_SCALE) -> str:
    """Render an engine as a standalone SVG document.

    Args:
        engine: The engine to draw.
        scale: Size of one tile in SVG user units.
    """
    width = engine.width * scale
    height = engine.height * scale
    stroke = scale * config.BEAM_WIDTH_RATIO
    wood = _hex(config.WOOD_COLOR)

    svg = [
        f'<svg width="{width:g}" height="{height:g}" '
        f'viewBox="0 0 {width:g} {height:g}" xmlns="http://www.w3.org/2000/svg">',
        f'<rect width="100%" height="100%" fill="{_hex(config.BACKGROUND_COLOR)}" />',
        f'<g stroke="{wood}" stroke-width="{stroke:g}" stroke-linecap="round" fill="none">',
    ]

    count = 0
    for primitive in engine_primitives(engine, scale):
        count += 1
        match primitive:
            case Square(x, y, size):
                svg.append(
                    f'<rect x="{x:g}" y="{y:g}" width="{size:g}" height="{size:g}" '
                    f'fill="{_hex(config.WALL_COLOR)}" stroke="none" />'
                )
            case Line(x1, y1, x2, y2):
                svg.append(f'<line x1="{x1:g}" y1="{y1:g}" x2="{x2:g}" y2="{y2:g}" />')
            case Circle(cx, cy, radius):
                svg.append(f'<circle cx="{cx:g}" cy="{cy:g}" r="{radius:g}" />')

    svg.append("</g>")
    svg.append("</svg>")

    logger.debug(f"SVG with {count} primitives for {engine!r}")
    return "\n".join(svg)
