"""Tests for template parsing into padded grids."""

from __future__ import annotations

import numpy as np
import pytest

from siege.template import (
    DimensionMismatchError,
    InvalidFieldError,
    TemplateError,
    UnknownSymbolError,
    coord_is_edge,
    parse_array,
    parse_ascii,
    parse_csv,
)
from siege.tiles import Tile


def assert_ring_is_edge(tiles: np.ndarray) -> None:
    width, height = tiles.shape
    for x in range(width):
        for y in range(height):
            if coord_is_edge(x, y, width, height):
                assert tiles[x, y] == Tile.EDGE, f"ring cell ({x}, {y}) is not EDGE"
            else:
                assert tiles[x, y] != Tile.EDGE, f"interior cell ({x}, {y}) is EDGE"


class TestParseAscii:
    def test_dimensions_and_padding(self) -> None:
        grid = parse_ascii("+-+\n|.|\n+-+")

        assert (grid.width, grid.height) == (3, 3)
        assert grid.tiles.shape == (5, 5)
        assert (grid.padded_width, grid.padded_height) == (5, 5)
        assert_ring_is_edge(grid.tiles)

    def test_tiles_indexed_x_then_y(self) -> None:
        grid = parse_ascii("o-\n|.")

        interior = grid.interior()
        assert interior[0, 0] == Tile.WHEEL
        assert interior[1, 0] == Tile.HORIZONTAL_BEAM
        assert interior[0, 1] == Tile.VERTICAL_BEAM
        assert interior[1, 1] == Tile.WALL

    def test_short_rows_padded_with_empty(self) -> None:
        grid = parse_ascii("+--\n|\n")

        assert (grid.width, grid.height) == (3, 2)
        interior = grid.interior()
        assert interior[0, 1] == Tile.VERTICAL_BEAM
        assert interior[1, 1] == Tile.EMPTY
        assert interior[2, 1] == Tile.EMPTY
        assert_ring_is_edge(grid.tiles)

    def test_all_characters(self) -> None:
        grid = parse_ascii(" o-|+./\\*")

        assert [Tile(v) for v in grid.interior()[:, 0]] == [
            Tile.EMPTY,
            Tile.WHEEL,
            Tile.HORIZONTAL_BEAM,
            Tile.VERTICAL_BEAM,
            Tile.CROSS,
            Tile.WALL,
            Tile.DIAGONAL_BEAM_RISING,
            Tile.DIAGONAL_BEAM_FALLING,
            Tile.ANY,
        ]

    def test_unknown_character(self) -> None:
        with pytest.raises(UnknownSymbolError, match="'x'.*column 2, row 2"):
            parse_ascii("++\n+x")

    def test_empty_text(self) -> None:
        with pytest.raises(DimensionMismatchError):
            parse_ascii("")

    def test_blank_lines_only(self) -> None:
        with pytest.raises(DimensionMismatchError):
            parse_ascii("\n\n")

    def test_round_trip(self) -> None:
        text = "  +--+\n  |..|\n+-*--*-+\n o    o"

        grid = parse_ascii(text)

        assert grid.to_ascii() == "\n".join(
            line.ljust(grid.width) for line in text.splitlines()
        )
        assert [line.rstrip() for line in grid.to_ascii().splitlines()] == text.splitlines()

    def test_corner_tiles(self) -> None:
        grid = parse_ascii("o-+\n|..\n+- ")

        assert grid.corner_tiles() == (Tile.WHEEL, Tile.CROSS, Tile.CROSS, Tile.EMPTY)


class TestParseArray:
    def test_row_major_layout(self) -> None:
        grid = parse_array(3, 2, [1, 2, 3, 4, 5, 0])

        interior = grid.interior()
        assert interior[:, 0].tolist() == [1, 2, 3]
        assert interior[:, 1].tolist() == [4, 5, 0]
        assert_ring_is_edge(grid.tiles)

    def test_accepts_tiles(self) -> None:
        grid = parse_array(2, 1, [Tile.WALL, Tile.ANY])

        assert grid.interior()[:, 0].tolist() == [Tile.WALL, Tile.ANY]

    def test_dimension_mismatch(self) -> None:
        with pytest.raises(DimensionMismatchError):
            parse_array(3, 3, [Tile.EMPTY] * 8)

    def test_zero_size(self) -> None:
        with pytest.raises(DimensionMismatchError):
            parse_array(0, 3, [])

    @pytest.mark.parametrize("code", [9, 42, 255, -1])
    def test_unknown_code(self, code: int) -> None:
        with pytest.raises(UnknownSymbolError):
            parse_array(2, 1, [0, code])


class TestParseCsv:
    def test_basic(self) -> None:
        grid = parse_csv("4,2,4\n3,5,3\n4,2,4\n")

        assert (grid.width, grid.height) == (3, 3)
        assert grid.to_ascii() == "+-+\n|.|\n+-+"

    def test_whitespace_and_blank_lines(self) -> None:
        grid = parse_csv(" 1 , 0\n\n0 ,1\n\n")

        assert (grid.width, grid.height) == (2, 2)
        assert grid.to_ascii() == "o \n o"

    def test_malformed_field(self) -> None:
        with pytest.raises(InvalidFieldError, match="'x'"):
            parse_csv("1,2\n3,x\n")

    def test_ragged_rows(self) -> None:
        with pytest.raises(DimensionMismatchError):
            parse_csv("1,2,3\n4,5\n")

    def test_empty(self) -> None:
        with pytest.raises(DimensionMismatchError):
            parse_csv("")

    def test_out_of_range_code(self) -> None:
        with pytest.raises(UnknownSymbolError):
            parse_csv("1,2\n3,12\n")

    def test_errors_share_a_base(self) -> None:
        for bad in ("1,a", "1,2\n3", "1,99"):
            with pytest.raises(TemplateError):
                parse_csv(bad)
