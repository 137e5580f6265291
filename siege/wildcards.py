"""Wildcard resolution.

Templates may mark cells as `Tile.ANY`, meaning "whatever joint or beam fits
here". After generation each wildcard becomes a concrete tile chosen from its
orthogonal neighbors:

    all four non-empty, a diagonal empty  -> CROSS
    all four non-empty, no diagonal empty -> WALL
    only up and down                      -> VERTICAL_BEAM
    only left and right                   -> HORIZONTAL_BEAM
    anything else                         -> CROSS

Non-empty means neither EMPTY nor EDGE; cells outside the grid count as EDGE.
Only original values are read, so one wildcard never sees another wildcard's
resolved tile.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from siege.tiles import Tile


def _resolve(up: bool, down: bool, left: bool, right: bool, any_diagonal_empty: bool) -> Tile:
    if up and down and left and right:
        return Tile.CROSS if any_diagonal_empty else Tile.WALL
    if up and down and not left and not right:
        return Tile.VERTICAL_BEAM
    if left and right and not up and not down:
        return Tile.HORIZONTAL_BEAM
    # TODO: one neighbor, or two at a corner, falls back to a plain joint;
    # decide whether these should become beam ends or elbows instead.
    return Tile.CROSS


def resolve_wildcard_grid(grid: np.ndarray) -> np.ndarray:
    """Resolve every `Tile.ANY` in a grid indexed [x, y]; returns a new array."""
    width, height = grid.shape

    def filled(x: int, y: int) -> bool:
        if not (0 <= x < width and 0 <= y < height):
            return False
        return not Tile(grid[x, y]).is_empty

    resolved = grid.copy()
    for x, y in np.argwhere(grid == Tile.ANY):
        x, y = int(x), int(y)
        diagonals = (
            filled(x - 1, y - 1),
            filled(x + 1, y - 1),
            filled(x - 1, y + 1),
            filled(x + 1, y + 1),
        )
        resolved[x, y] = _resolve(
            up=filled(x, y - 1),
            down=filled(x, y + 1),
            left=filled(x - 1, y),
            right=filled(x + 1, y),
            any_diagonal_empty=not all(diagonals),
        )

    return resolved


def resolve_wildcards(tiles: Sequence[Tile | int], width: int) -> list[Tile]:
    """Resolve every `Tile.ANY` in a flat, row-major tile sequence.

    Args:
        tiles: Row-major tiles; len(tiles) must be a multiple of width.
        width: Row length.

    Returns:
        A new list of the same length without wildcards.
    """
    if width < 1 or len(tiles) % width:
        raise ValueError(f"{len(tiles)} tiles do not form rows of width {width}")

    height = len(tiles) // width
    grid = np.array(tiles, dtype=np.uint8).reshape(height, width).T
    resolved = resolve_wildcard_grid(grid)
    return [Tile(resolved[x, y]) for y in range(height) for x in range(width)]
