"""Overlapping pattern catalog.

Slides an N x N window over every coordinate of a grid, deduplicates the
windows into patterns and records how often each occurs. Only windows in the
grid's original orientation are taken: no rotations, no reflections, no
wraparound. A window starting on the last rows/columns overhangs the grid;
its overhanging cells repeat the grid's last row/column, which for a padded
template is the ring itself.
"""

from __future__ import annotations

import logging

import numpy as np

from siege.types import PatternId
from siege.wfc.solver import DIR_OFFSETS, DIRECTIONS, GlobalStats

logger = logging.getLogger(__name__)


class OverlappingPatterns:
    """Pattern catalog built from one grid.

    Attributes:
        pattern_size: Window side length N.
        patterns: Array of shape (num_patterns, N, N), each window indexed [x, y].
        counts: Occurrences of each pattern in the grid.
        id_grid: Pattern id of the window whose top-left corner is at [x, y].
        top_left_values: Value at each pattern's top-left cell, indexed by id.
    """

    def __init__(self, grid: np.ndarray, pattern_size: int) -> None:
        if pattern_size < 2:
            raise ValueError(f"pattern_size must be at least 2, got {pattern_size}")

        self.pattern_size = pattern_size
        width, height = grid.shape
        n = pattern_size

        extended = np.pad(grid, ((0, n - 1), (0, n - 1)), mode="edge")

        ids_by_key: dict[bytes, PatternId] = {}
        windows: list[np.ndarray] = []
        counts: list[int] = []
        self.id_grid = np.empty((width, height), dtype=np.intp)

        for x in range(width):
            for y in range(height):
                window = extended[x : x + n, y : y + n]
                key = window.tobytes()
                pattern_id = ids_by_key.get(key)
                if pattern_id is None:
                    pattern_id = len(windows)
                    ids_by_key[key] = pattern_id
                    windows.append(window.copy())
                    counts.append(0)
                counts[pattern_id] += 1
                self.id_grid[x, y] = pattern_id

        self.patterns = np.stack(windows)
        self.counts = np.array(counts, dtype=np.int64)
        self.top_left_values = self.patterns[:, 0, 0].copy()

        logger.debug(
            f"Catalog of {self.num_patterns} patterns ({n}x{n}) "
            f"from a {width}x{height} grid"
        )

    @property
    def num_patterns(self) -> int:
        return len(self.patterns)

    def pattern_top_left_value(self, pattern_id: PatternId) -> int:
        return int(self.top_left_values[pattern_id])

    def _compatibility(self, direction: str) -> np.ndarray:
        """Pairs of patterns whose overlap agrees when b sits in direction of a."""
        dx, dy = DIR_OFFSETS[direction]
        n = self.pattern_size

        a_cells = self.patterns[:, max(0, dx) : n + min(0, dx), max(0, dy) : n + min(0, dy)]
        b_cells = self.patterns[:, max(0, -dx) : n + min(0, -dx), max(0, -dy) : n + min(0, -dy)]

        a_flat = a_cells.reshape(self.num_patterns, -1)
        b_flat = b_cells.reshape(self.num_patterns, -1)
        return (a_flat[:, None, :] == b_flat[None, :, :]).all(axis=2)

    def global_stats(self) -> GlobalStats:
        """Weights and per-direction compatibility for a `Run`."""
        return GlobalStats(
            weights=self.counts.astype(np.float64),
            compatibility={d: self._compatibility(d) for d in DIRECTIONS},
        )
