"""Drawing primitives for engine tiles.

Both encoders (SVG and raster) draw the same shapes; this module decides what
those shapes are so the two stay in step.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias

from siege import config
from siege.engine import Engine
from siege.tiles import Tile


@dataclass(frozen=True)
class Square:
    """A filled square, top-left corner plus side length."""

    x: float
    y: float
    size: float


@dataclass(frozen=True)
class Line:
    """A beam stroke from (x1, y1) to (x2, y2)."""

    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class Circle:
    """A wheel outline."""

    cx: float
    cy: float
    radius: float


Primitive: TypeAlias = Square | Line | Circle


def tile_primitives(x: int, y: int, tile: Tile, scale: float) -> list[Primitive]:
    """Shapes for one tile at grid position (x, y), in output units."""
    left = x * scale
    top = y * scale
    right = left + scale
    bottom = top + scale
    mid_x = left + scale / 2
    mid_y = top + scale / 2

    horizontal = Line(left, mid_y, right, mid_y)
    vertical = Line(mid_x, top, mid_x, bottom)

    match tile:
        case Tile.WALL:
            return [Square(left, top, scale)]
        case Tile.WHEEL:
            return [Circle(mid_x, mid_y, scale * config.WHEEL_RADIUS_RATIO)]
        case Tile.HORIZONTAL_BEAM:
            return [horizontal]
        case Tile.VERTICAL_BEAM:
            return [vertical]
        case Tile.CROSS:
            return [horizontal, vertical]
        case Tile.DIAGONAL_BEAM_RISING:
            return [Line(left, bottom, right, top)]
        case Tile.DIAGONAL_BEAM_FALLING:
            return [Line(left, top, right, bottom)]
        case Tile.EMPTY:
            return []
        case _:
            raise ValueError(f"{tile.name} cannot be drawn")


def engine_primitives(engine: Engine, scale: float) -> Iterator[Primitive]:
    """Shapes for a whole engine, walls first so beams draw on top."""
    deferred: list[Primitive] = []
    for (x, y), tile in engine.cells():
        for primitive in tile_primitives(x, y, tile, scale):
            if isinstance(primitive, Square):
                yield primitive
            else:
                deferred.append(primitive)
    yield from deferred
