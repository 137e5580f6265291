"""Tile taxonomy for siege engine skeletons.

Every cell of a template or a generated engine holds one `Tile`. Tiles have a
fixed integer code (used by the CSV/array template forms and by the numpy
grids) and a fixed ASCII character (used by the ASCII template form and by
`Engine.to_ascii()`).

Two tiles are special:
- `Tile.ANY` is a wildcard authored in templates. It is replaced by a concrete
  tile after generation (see `siege.wildcards`).
- `Tile.EDGE` pads every grid with a one-cell ring. It has no character and is
  never accepted from, or returned to, callers.
"""

from __future__ import annotations

from enum import IntEnum


class Tile(IntEnum):
    """Grid section of a siege engine."""

    EMPTY = 0
    WHEEL = 1
    HORIZONTAL_BEAM = 2
    VERTICAL_BEAM = 3
    CROSS = 4
    WALL = 5
    DIAGONAL_BEAM_RISING = 6
    DIAGONAL_BEAM_FALLING = 7
    ANY = 8

    # Padding ring, internal only.
    EDGE = 255

    def to_ascii(self) -> str:
        """Convert the tile to its single ASCII character.

        Raises:
            ValueError: For `Tile.EDGE`, which must have been stripped first.
        """
        try:
            return TILE_TO_CHAR[self]
        except KeyError:
            raise ValueError(f"{self.name} should have been removed from the output") from None

    @property
    def is_empty(self) -> bool:
        """True for tiles that carry no structure (empty space and the padding ring)."""
        return self in (Tile.EMPTY, Tile.EDGE)


TILE_TO_CHAR: dict[Tile, str] = {
    Tile.EMPTY: " ",
    Tile.WHEEL: "o",
    Tile.HORIZONTAL_BEAM: "-",
    Tile.VERTICAL_BEAM: "|",
    Tile.CROSS: "+",
    Tile.WALL: ".",
    Tile.DIAGONAL_BEAM_RISING: "/",
    Tile.DIAGONAL_BEAM_FALLING: "\\",
    Tile.ANY: "*",
}

CHAR_TO_TILE: dict[str, Tile] = {ch: tile for tile, ch in TILE_TO_CHAR.items()}

# Tiles a template may contain. EDGE is deliberately absent.
TEMPLATE_TILES: frozenset[Tile] = frozenset(TILE_TO_CHAR)


def tile_from_char(ch: str) -> Tile | None:
    """Look up the tile for an ASCII character, or None if it has no tile."""
    return CHAR_TO_TILE.get(ch)


def tile_from_code(code: int) -> Tile | None:
    """Look up the tile for an integer code, or None if the code is not a template tile."""
    try:
        tile = Tile(code)
    except ValueError:
        return None
    return tile if tile in TEMPLATE_TILES else None
