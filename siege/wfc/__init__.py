"""Overlapping Wave Function Collapse.

- OverlappingPatterns: Pattern catalog and frequency statistics from a grid
- Run: One collapse problem with a custom forbid constraint and retries
- ForbidInterface: What a constraint may do to a fresh wave
"""

from .patterns import OverlappingPatterns
from .solver import (
    DIR_OFFSETS,
    DIRECTIONS,
    OPPOSITE_DIR,
    ForbidInterface,
    ForbidNothing,
    ForbidPattern,
    GlobalStats,
    Run,
    Wave,
    WFCContradiction,
    WFCRetriesExhausted,
)

__all__ = [
    "DIRECTIONS",
    "DIR_OFFSETS",
    "OPPOSITE_DIR",
    "ForbidInterface",
    "ForbidNothing",
    "ForbidPattern",
    "GlobalStats",
    "OverlappingPatterns",
    "Run",
    "WFCContradiction",
    "WFCRetriesExhausted",
    "Wave",
]
