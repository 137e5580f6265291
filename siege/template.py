"""Template parsing.

A template is the small hand-authored engine every generated engine is
resampled from. It can be written three ways:

- ASCII art, one character per tile (see `siege.tiles.TILE_TO_CHAR`)::

      +--+
      |..|
      o  o

- a flat, row-major array of tiles or tile codes plus explicit width/height,
- CSV text, one row of comma-separated tile codes per line.

Whatever the form, the result is a `TemplateGrid`: the authored tiles wrapped
in a one-cell ring of `Tile.EDGE`.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from siege.tiles import Tile, tile_from_char, tile_from_code

logger = logging.getLogger(__name__)


class TemplateError(Exception):
    """Raised when a template cannot be parsed.

    Never retried internally; the template itself has to be fixed.
    """

    pass


class InvalidFieldError(TemplateError):
    """A CSV field is not an integer."""

    pass


class UnknownSymbolError(TemplateError):
    """A character or numeric code does not name a template tile."""

    pass


class DimensionMismatchError(TemplateError):
    """The tile count does not match the declared or implied dimensions."""

    pass


@dataclass(frozen=True, eq=False)
class TemplateGrid:
    """Authored tiles padded with one ring of `Tile.EDGE`.

    Attributes:
        tiles: uint8 array of tile codes indexed [x, y], shape
            (width + 2, height + 2).
        width: Interior width, excluding the ring.
        height: Interior height, excluding the ring.
    """

    tiles: np.ndarray
    width: int
    height: int

    @property
    def padded_width(self) -> int:
        return self.width + 2

    @property
    def padded_height(self) -> int:
        return self.height + 2

    def interior(self) -> np.ndarray:
        """The authored tiles without the ring, indexed [x, y]."""
        return self.tiles[1:-1, 1:-1]

    def corner_tiles(self) -> tuple[Tile, Tile, Tile, Tile]:
        """Interior corner tiles: top-left, top-right, bottom-left, bottom-right."""
        interior = self.interior()
        return (
            Tile(interior[0, 0]),
            Tile(interior[-1, 0]),
            Tile(interior[0, -1]),
            Tile(interior[-1, -1]),
        )

    def to_ascii(self) -> str:
        """Render the interior back to ASCII art."""
        interior = self.interior()
        return "\n".join(
            "".join(Tile(interior[x, y]).to_ascii() for x in range(self.width))
            for y in range(self.height)
        )


def coord_is_edge(x: int, y: int, width: int, height: int) -> bool:
    """True if (x, y) lies on the outer ring of a width x height grid."""
    return x == 0 or x == width - 1 or y == 0 or y == height - 1


def _pad(interior: np.ndarray) -> TemplateGrid:
    width, height = interior.shape
    tiles = np.full((width + 2, height + 2), Tile.EDGE, dtype=np.uint8)
    tiles[1:-1, 1:-1] = interior
    logger.debug(f"Parsed {width}x{height} template")
    return TemplateGrid(tiles=tiles, width=width, height=height)


def parse_ascii(text: str) -> TemplateGrid:
    """Parse ASCII art into a padded template grid.

    Rows shorter than the longest row are right-padded with `Tile.EMPTY`.

    Raises:
        UnknownSymbolError: If a character has no tile.
        DimensionMismatchError: If the text holds no rows at all.
    """
    lines = text.splitlines()
    if not lines:
        raise DimensionMismatchError("ASCII template is empty")

    width = max(len(line) for line in lines)
    if width == 0:
        raise DimensionMismatchError("ASCII template has no columns")

    interior = np.full((width, len(lines)), Tile.EMPTY, dtype=np.uint8)
    for y, line in enumerate(lines):
        for x, ch in enumerate(line):
            tile = tile_from_char(ch)
            if tile is None:
                raise UnknownSymbolError(
                    f"Unknown template character {ch!r} at column {x + 1}, row {y + 1}"
                )
            interior[x, y] = tile

    return _pad(interior)


def parse_array(width: int, height: int, tiles: Sequence[Tile | int]) -> TemplateGrid:
    """Parse a flat, row-major array of tiles or tile codes.

    Raises:
        DimensionMismatchError: If width * height differs from len(tiles), or
            either dimension is below 1.
        UnknownSymbolError: If a code does not name a template tile.
    """
    if width < 1 or height < 1:
        raise DimensionMismatchError(
            f"Template must be at least 1x1, got {width}x{height}"
        )
    if len(tiles) != width * height:
        raise DimensionMismatchError(
            f"Array of {len(tiles)} tiles doesn't match {width}x{height}"
        )

    interior = np.empty((width, height), dtype=np.uint8)
    for index, code in enumerate(tiles):
        tile = tile_from_code(int(code))
        if tile is None:
            raise UnknownSymbolError(
                f"No tile with code {int(code)} at index {index}"
            )
        interior[index % width, index // width] = tile

    return _pad(interior)


def parse_csv(text: str) -> TemplateGrid:
    """Parse comma-separated tile codes, one template row per line.

    Blank lines are skipped and fields may carry surrounding whitespace.

    Raises:
        InvalidFieldError: If a field is not an integer.
        DimensionMismatchError: If rows differ in length or there are none.
        UnknownSymbolError: If a code does not name a template tile.
    """
    rows: list[list[int]] = []
    for record_number, record in enumerate(csv.reader(io.StringIO(text)), start=1):
        if not record or all(not field.strip() for field in record):
            continue
        row: list[int] = []
        for field in record:
            try:
                row.append(int(field.strip()))
            except ValueError:
                raise InvalidFieldError(
                    f"CSV field {field!r} in record {record_number} is not a number"
                ) from None
        rows.append(row)

    if not rows:
        raise DimensionMismatchError("CSV template is empty")

    width = len(rows[0])
    for row_index, row in enumerate(rows):
        if len(row) != width:
            raise DimensionMismatchError(
                f"CSV row {row_index + 1} has {len(row)} fields, expected {width}"
            )

    flat = [code for row in rows for code in row]
    return parse_array(width, len(rows), flat)
