"""Tests for the Wave Function Collapse run.

Most tests use the catalog of a striped grid: three vertically uniform
patterns A (column of 0s then 1s), B (1s then 0s) and C (all 1s). Every
output column holds one pattern, and A may only be followed by B or C while
B may only be followed by A. Arc consistency alone keeps this catalog
contradiction-free, so failures can only come from the constraints a test adds.
"""

from __future__ import annotations

import logging
import random

import numpy as np
import pytest

from siege.util.rng import RNG
from siege.wfc import (
    ForbidInterface,
    GlobalStats,
    OverlappingPatterns,
    Run,
    WFCContradiction,
    WFCRetriesExhausted,
)
from siege.wfc.solver import DIRECTIONS

A, B, C = 0, 1, 2


def stripes_stats() -> GlobalStats:
    grid = np.zeros((4, 4), dtype=np.uint8)
    grid[1::2, :] = 1
    return OverlappingPatterns(grid, pattern_size=2).global_stats()


class PinCorner:
    """Pins (0, 0) to one pattern and counts how often it was applied."""

    def __init__(self, pattern_id: int) -> None:
        self.pattern_id = pattern_id
        self.calls = 0

    def forbid(self, fi: ForbidInterface, rng: RNG) -> None:
        self.calls += 1
        fi.forbid_all_patterns_except((0, 0), self.pattern_id)


class PinTwoAs:
    """Two As side by side: impossible, since A is never followed by A."""

    def __init__(self) -> None:
        self.calls = 0

    def forbid(self, fi: ForbidInterface, rng: RNG) -> None:
        self.calls += 1
        fi.forbid_all_patterns_except((0, 0), A)
        fi.forbid_all_patterns_except((1, 0), A)


class FailOnce:
    """Contradicts on the first attempt only."""

    def __init__(self) -> None:
        self.calls = 0

    def forbid(self, fi: ForbidInterface, rng: RNG) -> None:
        self.calls += 1
        if self.calls == 1:
            raise WFCContradiction("first attempt")


def assert_valid_stripes(ids: np.ndarray, stats: GlobalStats) -> None:
    width, height = ids.shape
    for x in range(width):
        assert len(set(ids[x, :].tolist())) == 1, f"column {x} is not uniform"
    for x in range(width - 1):
        for y in range(height):
            assert stats.compatibility["E"][ids[x, y], ids[x + 1, y]]


# =============================================================================
# Collapse
# =============================================================================


class TestCollapse:
    """Tests for single collapse attempts."""

    def test_collapse_respects_adjacency(self) -> None:
        stats = stripes_stats()
        run = Run(7, 5, stats, None, random.Random(1))

        wave = run.collapse()

        assert (wave.width, wave.height) == (7, 5)
        assert wave.grid().shape == (7, 5)
        assert_valid_stripes(wave.grid(), stats)

    def test_every_cell_collapsed_to_one_pattern(self) -> None:
        run = Run(6, 3, stripes_stats(), None, random.Random(2))

        run.collapse()

        assert (run.wave.sum(axis=2) == 1).all()

    @pytest.mark.parametrize("seed", range(10))
    def test_never_contradicts_without_constraints(self, seed: int) -> None:
        stats = stripes_stats()
        run = Run(8, 4, stats, None, random.Random(seed))

        assert_valid_stripes(run.collapse().grid(), stats)

    def test_same_seed_same_wave(self) -> None:
        stats = stripes_stats()

        first = Run(9, 4, stats, None, random.Random(7)).collapse().grid()
        second = Run(9, 4, stats, None, random.Random(7)).collapse().grid()

        assert (first == second).all()

    def test_rng_argument_overrides_run_rng(self) -> None:
        stats = stripes_stats()
        run = Run(9, 4, stats, None, random.Random(0))

        first = run.collapse(random.Random(11)).grid()
        second = run.collapse(random.Random(11)).grid()

        assert (first == second).all()

    def test_single_cell_wave(self) -> None:
        run = Run(1, 1, stripes_stats(), None, random.Random(0))

        wave = run.collapse()

        assert wave.chosen_pattern_id((0, 0)) in (A, B, C)

    def test_grid_returns_a_copy(self) -> None:
        wave = Run(3, 3, stripes_stats(), None, random.Random(0)).collapse()

        grid = wave.grid()
        grid[0, 0] = 99

        assert wave.chosen_pattern_id((0, 0)) != 99


# =============================================================================
# Forbid constraints
# =============================================================================


class TestForbid:
    """Tests for constraints applied through ForbidInterface."""

    def test_pin_propagates_through_column_and_neighbor(self) -> None:
        forbid = PinCorner(B)
        run = Run(5, 4, stripes_stats(), forbid, random.Random(3))

        ids = run.collapse().grid()

        assert ids[0, :].tolist() == [B] * 4
        assert ids[1, :].tolist() == [A] * 4
        assert forbid.calls == 1

    def test_forbid_pattern_removes_one_option(self) -> None:
        class OnlyB:
            def forbid(self, fi: ForbidInterface, rng: RNG) -> None:
                fi.forbid_pattern((2, 1), A)
                fi.forbid_pattern((2, 1), C)

        ids = Run(4, 3, stripes_stats(), OnlyB(), random.Random(5)).collapse().grid()

        assert ids[2, :].tolist() == [B] * 3

    def test_forbid_patterns_removes_several(self) -> None:
        class NoA:
            def forbid(self, fi: ForbidInterface, rng: RNG) -> None:
                for x in range(fi.wave_size()[0]):
                    fi.forbid_patterns((x, 0), [A])

        # B must be followed by A, so once A is gone B survives only in the
        # last column, which has nothing to its east
        ids = Run(4, 3, stripes_stats(), NoA(), random.Random(5)).collapse().grid()

        assert (ids != A).all()
        assert (ids[:3, :] == C).all()

    def test_interface_reports_wave(self) -> None:
        seen = {}

        class Inspect:
            def forbid(self, fi: ForbidInterface, rng: RNG) -> None:
                seen["size"] = fi.wave_size()
                seen["patterns"] = fi.num_patterns

        Run(6, 2, stripes_stats(), Inspect(), random.Random(0)).collapse()

        assert seen == {"size": (6, 2), "patterns": 3}

    def test_contradicting_pin_raises(self) -> None:
        run = Run(4, 2, stripes_stats(), PinTwoAs(), random.Random(0))

        with pytest.raises(WFCContradiction):
            run.collapse()

    def test_restrict_outside_wave(self) -> None:
        class OutOfBounds:
            def forbid(self, fi: ForbidInterface, rng: RNG) -> None:
                fi.forbid_pattern((5, 0), A)

        run = Run(3, 3, stripes_stats(), OutOfBounds(), random.Random(0))

        with pytest.raises(IndexError):
            run.collapse()


# =============================================================================
# Retrying
# =============================================================================


class TestCollapseRetrying:
    """Tests for restarts after contradictions."""

    def test_attempts_are_retries_plus_one(self) -> None:
        forbid = PinTwoAs()
        run = Run(4, 2, stripes_stats(), forbid, random.Random(0))

        with pytest.raises(WFCRetriesExhausted) as excinfo:
            run.collapse_retrying(retries=3)

        assert excinfo.value.attempts == 4
        assert forbid.calls == 4

    def test_zero_retries_is_one_attempt(self) -> None:
        forbid = PinTwoAs()
        run = Run(4, 2, stripes_stats(), forbid, random.Random(0))

        with pytest.raises(WFCRetriesExhausted):
            run.collapse_retrying(retries=0)

        assert forbid.calls == 1

    def test_exhaustion_is_a_contradiction(self) -> None:
        assert issubclass(WFCRetriesExhausted, WFCContradiction)

    def test_recovers_after_a_failed_attempt(self) -> None:
        forbid = FailOnce()
        stats = stripes_stats()
        run = Run(5, 3, stats, forbid, random.Random(0))

        wave = run.collapse_retrying(retries=1)

        assert forbid.calls == 2
        assert_valid_stripes(wave.grid(), stats)

    def test_each_attempt_starts_from_a_fresh_wave(self) -> None:
        stats = stripes_stats()
        run = Run(5, 3, stats, FailOnce(), random.Random(0))
        run.wave[:] = False

        wave = run.collapse_retrying(retries=2)

        assert_valid_stripes(wave.grid(), stats)

    def test_failed_attempts_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        run = Run(4, 2, stripes_stats(), PinTwoAs(), random.Random(0))

        with (
            caplog.at_level(logging.DEBUG, logger="siege.wfc.solver"),
            pytest.raises(WFCRetriesExhausted),
        ):
            run.collapse_retrying(retries=1)

        assert "Collapse attempt 1/2 failed" in caplog.text
        assert "Collapse attempt 2/2 failed" in caplog.text

    def test_negative_retries(self) -> None:
        run = Run(2, 2, stripes_stats(), None, random.Random(0))

        with pytest.raises(ValueError, match="retries"):
            run.collapse_retrying(retries=-1)


# =============================================================================
# Construction
# =============================================================================


class TestRunConstruction:
    def test_empty_wave(self) -> None:
        with pytest.raises(ValueError):
            Run(0, 3, stripes_stats(), None, random.Random(0))

    def test_empty_catalog(self) -> None:
        stats = GlobalStats(
            weights=np.zeros(0),
            compatibility={d: np.zeros((0, 0), dtype=bool) for d in DIRECTIONS},
        )

        with pytest.raises(ValueError, match="no patterns"):
            Run(2, 2, stats, None, random.Random(0))
