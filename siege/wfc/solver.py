"""Wave Function Collapse run for overlapping pattern catalogs.

This module is pattern-agnostic: it only sees pattern ids, their weights and
the per-direction compatibility matrices in `GlobalStats` (built by
`siege.wfc.patterns.OverlappingPatterns`).

Usage:
    from siege.wfc import OverlappingPatterns, Run

    catalog = OverlappingPatterns(grid, pattern_size=2)
    run = Run(width, height, catalog.global_stats(), forbid, rng)
    wave = run.collapse_retrying(retries=100)
    ids = wave.grid()  # Chosen pattern id per cell, indexed [x, y]

Representation:
    The wave is a boolean numpy array of shape (width, height, num_patterns).
    wave[x, y, p] is True while pattern p is still possible at (x, y).
    Propagation turns a cell's possibilities into the set its neighbor may
    hold with one `any` over rows of the compatibility matrix.

Custom constraints:
    A forbid object (anything with a `forbid(fi, rng)` method) is applied at
    the start of every attempt through a `ForbidInterface`. Each forbid call
    propagates immediately, so an emptied cell raises `WFCContradiction`
    straight away and fails the attempt.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterable

    from siege.types import PatternId, TilePos
    from siege.util.rng import RNG

logger = logging.getLogger(__name__)


class WFCContradiction(Exception):
    """Raised when WFC reaches an unsolvable state.

    This occurs when constraint propagation eliminates all possibilities
    for a cell, meaning no valid solution exists with the current constraints.
    """

    pass


class WFCRetriesExhausted(WFCContradiction):
    """Raised when every attempt of `Run.collapse_retrying` contradicted."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"All {attempts} collapse attempts contradicted")
        self.attempts = attempts


# Direction utilities
DIRECTIONS = ["N", "E", "S", "W"]
OPPOSITE_DIR = {"N": "S", "E": "W", "S": "N", "W": "E"}
DIR_OFFSETS = {"N": (0, -1), "E": (1, 0), "S": (0, 1), "W": (-1, 0)}


@dataclass(frozen=True, eq=False)
class GlobalStats:
    """Catalog-wide statistics a run needs.

    Attributes:
        weights: Relative frequency of each pattern, shape (num_patterns,).
        compatibility: Maps direction to a (num_patterns, num_patterns) bool
            matrix; compatibility[d][a, b] is True when pattern b may sit
            in direction d of pattern a.
    """

    weights: np.ndarray
    compatibility: dict[str, np.ndarray]

    @property
    def num_patterns(self) -> int:
        return len(self.weights)


class ForbidPattern(Protocol):
    """A constraint applied to a fresh wave at the start of every attempt."""

    def forbid(self, fi: ForbidInterface, rng: RNG) -> None: ...


class ForbidNothing:
    """Leaves the wave unconstrained."""

    def forbid(self, fi: ForbidInterface, rng: RNG) -> None:
        pass


class ForbidInterface:
    """Mutable view of an in-progress wave handed to `ForbidPattern.forbid`."""

    def __init__(self, run: Run) -> None:
        self._run = run

    def wave_size(self) -> tuple[int, int]:
        """(width, height) of the wave being constrained."""
        return self._run.width, self._run.height

    @property
    def num_patterns(self) -> int:
        return self._run.num_patterns

    def forbid_all_patterns_except(self, coord: TilePos, pattern_id: PatternId) -> None:
        """Restrict the cell at coord to exactly one pattern.

        Raises:
            WFCContradiction: If that pattern was already ruled out there.
        """
        keep = np.zeros(self._run.num_patterns, dtype=bool)
        keep[pattern_id] = True
        self._run.restrict_cell(coord, keep)

    def forbid_pattern(self, coord: TilePos, pattern_id: PatternId) -> None:
        """Remove one pattern from the cell at coord."""
        self.forbid_patterns(coord, (pattern_id,))

    def forbid_patterns(self, coord: TilePos, pattern_ids: Iterable[PatternId]) -> None:
        """Remove several patterns from the cell at coord, propagating once."""
        keep = np.ones(self._run.num_patterns, dtype=bool)
        keep[list(pattern_ids)] = False
        self._run.restrict_cell(coord, keep)


class Wave:
    """A fully collapsed wave: one chosen pattern per cell."""

    def __init__(self, chosen: np.ndarray) -> None:
        self._chosen = chosen

    @property
    def width(self) -> int:
        return self._chosen.shape[0]

    @property
    def height(self) -> int:
        return self._chosen.shape[1]

    def chosen_pattern_id(self, coord: TilePos) -> PatternId:
        x, y = coord
        return int(self._chosen[x, y])

    def grid(self) -> np.ndarray:
        """Chosen pattern ids indexed [x, y]."""
        return self._chosen.copy()


class Run:
    """One WFC problem: an output size, a catalog's statistics and a constraint.

    Each call to `collapse` starts from a fresh wave, applies the forbid
    constraint, then repeatedly collapses the lowest-entropy cell until every
    cell holds one pattern.
    """

    def __init__(
        self,
        width: int,
        height: int,
        stats: GlobalStats,
        forbid: ForbidPattern | None,
        rng: RNG,
    ) -> None:
        """Initialize the run.

        Args:
            width: Wave width in cells.
            height: Wave height in cells.
            stats: Pattern weights and compatibility from the catalog.
            forbid: Constraint applied at the start of every attempt.
            rng: Default random source for attempts.
        """
        if width < 1 or height < 1:
            raise ValueError(f"Wave must be at least 1x1, got {width}x{height}")
        if stats.num_patterns == 0:
            raise ValueError("Catalog has no patterns")

        self.width = width
        self.height = height
        self.stats = stats
        self.forbid = forbid if forbid is not None else ForbidNothing()
        self.rng = rng
        self.num_patterns = stats.num_patterns

        self._weights = stats.weights.astype(np.float64)
        self._weight_log_weights = self._weights * np.log(self._weights)

        self.wave = np.ones((width, height, self.num_patterns), dtype=bool)

    # -------------------------------------------------------------------------
    # Constraint propagation
    # -------------------------------------------------------------------------

    def restrict_cell(self, coord: TilePos, keep: np.ndarray) -> None:
        """Intersect a cell's possibilities with keep and propagate the change.

        Raises:
            WFCContradiction: If the cell or any neighbor ends up empty.
        """
        x, y = coord
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) is outside the {self.width}x{self.height} wave")

        old_mask = self.wave[x, y]
        new_mask = old_mask & keep

        if not new_mask.any():
            raise WFCContradiction(f"No valid patterns at ({x}, {y}) after constraint")

        if not np.array_equal(new_mask, old_mask):
            self.wave[x, y] = new_mask
            self._propagate([(x, y)])

    def _propagate(self, cells: list[tuple[int, int]]) -> None:
        """Propagate constraints from the given cells until nothing changes."""
        stack = list(cells)
        in_stack = set(stack)

        while stack:
            x, y = stack.pop()
            in_stack.discard((x, y))

            current_mask = self.wave[x, y]

            for direction in DIRECTIONS:
                dx, dy = DIR_OFFSETS[direction]
                nx, ny = x + dx, y + dy

                if not (0 <= nx < self.width and 0 <= ny < self.height):
                    continue

                neighbor_mask = self.wave[nx, ny]
                valid_for_neighbor = self.stats.compatibility[direction][
                    current_mask
                ].any(axis=0)
                new_mask = neighbor_mask & valid_for_neighbor

                if not np.array_equal(new_mask, neighbor_mask):
                    if not new_mask.any():
                        raise WFCContradiction(
                            f"No valid patterns at ({nx}, {ny}) after propagation"
                        )

                    self.wave[nx, ny] = new_mask

                    if (nx, ny) not in in_stack:
                        stack.append((nx, ny))
                        in_stack.add((nx, ny))

    # -------------------------------------------------------------------------
    # Observation
    # -------------------------------------------------------------------------

    def _reset(self, rng: RNG) -> None:
        """Start a fresh attempt: full wave, arc consistency, then the constraint."""
        self.wave = np.ones((self.width, self.height, self.num_patterns), dtype=bool)
        self._propagate(
            [(x, y) for x in range(self.width) for y in range(self.height)]
        )
        self.forbid.forbid(ForbidInterface(self), rng)

    def _lowest_entropy_cell(self, rng: RNG) -> tuple[int, int] | None:
        """Pick an undecided cell of minimum Shannon entropy, ties broken by rng."""
        counts = self.wave.sum(axis=2)
        undecided = counts > 1
        if not undecided.any():
            return None

        sum_weights = (self.wave * self._weights).sum(axis=2)
        sum_weight_log_weights = (self.wave * self._weight_log_weights).sum(axis=2)
        with np.errstate(divide="ignore", invalid="ignore"):
            entropy = np.log(sum_weights) - sum_weight_log_weights / sum_weights
        entropy[~undecided] = math.inf

        lowest = entropy.min()
        candidates = np.argwhere(entropy <= lowest + 1e-9)
        x, y = candidates[rng.randrange(len(candidates))]
        return int(x), int(y)

    def _observe(self, x: int, y: int, rng: RNG) -> None:
        """Collapse one cell to a weighted random pattern and propagate."""
        possible = np.flatnonzero(self.wave[x, y])
        chosen = rng.choices(
            possible.tolist(), weights=self._weights[possible].tolist()
        )[0]

        self.wave[x, y] = False
        self.wave[x, y, chosen] = True
        self._propagate([(x, y)])

    def collapse(self, rng: RNG | None = None) -> Wave:
        """Run a single attempt to completion.

        Raises:
            WFCContradiction: If the attempt reaches an empty cell.
        """
        rng = rng if rng is not None else self.rng
        self._reset(rng)

        while (cell := self._lowest_entropy_cell(rng)) is not None:
            self._observe(*cell, rng)

        return Wave(self.wave.argmax(axis=2))

    def collapse_retrying(self, retries: int, rng: RNG | None = None) -> Wave:
        """Collapse, restarting from scratch up to `retries` more times.

        Args:
            retries: Extra attempts after the first; 0 means a single attempt.
            rng: Random source; defaults to the run's own.

        Raises:
            WFCRetriesExhausted: If every attempt contradicted.
        """
        if retries < 0:
            raise ValueError(f"retries must be non-negative, got {retries}")

        attempts = retries + 1
        for attempt in range(attempts):
            try:
                return self.collapse(rng)
            except WFCContradiction as exc:
                logger.debug(f"Collapse attempt {attempt + 1}/{attempts} failed: {exc}")
                continue

        raise WFCRetriesExhausted(attempts)
