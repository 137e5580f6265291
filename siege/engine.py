"""Generated siege engine skeletons."""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from siege.tiles import Tile
from siege.types import TilePos


class Engine:
    """A generated siege engine.

    Holds a width x height grid of concrete tiles, indexed [x, y]. Never
    contains `Tile.EDGE` or `Tile.ANY`, and is read-only once built.
    """

    def __init__(self, width: int, height: int, tiles: np.ndarray) -> None:
        if tiles.shape != (width, height):
            raise ValueError(
                f"Tile grid of shape {tiles.shape} doesn't match {width}x{height}"
            )
        self._width = width
        self._height = height
        self._tiles = tiles.astype(np.uint8, copy=True)
        self._tiles.flags.writeable = False

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def tiles(self) -> list[Tile]:
        """All tiles in row-major order."""
        return [
            Tile(self._tiles[x, y])
            for y in range(self._height)
            for x in range(self._width)
        ]

    def cells(self) -> Iterator[tuple[TilePos, Tile]]:
        """Yield ((x, y), tile) pairs in row-major order."""
        for y in range(self._height):
            for x in range(self._width):
                yield (x, y), Tile(self._tiles[x, y])

    def to_grid(self) -> np.ndarray:
        """A writable copy of the tile codes, indexed [x, y]."""
        return self._tiles.copy()

    def to_ascii(self) -> str:
        """Render the engine as ASCII art, one line per row."""
        return "\n".join(
            "".join(Tile(self._tiles[x, y]).to_ascii() for x in range(self._width))
            for y in range(self._height)
        )

    def __repr__(self) -> str:
        return f"Engine(width={self._width}, height={self._height})"
