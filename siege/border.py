"""Border-forcing constraint.

Every generated engine must keep the template's frame. The rule below is
built once from the template's pattern catalog (pure, no solver involved) and
then applied by the solver at the start of every collapse attempt:

1. The four corners of the output wave are pinned to the patterns found at
   the four corners of the padded template, and optionally the top edge
   midpoint to the template's top edge midpoint.
2. No pattern seen on the template's ring may appear inside the output.
3. Only patterns seen on the template's ring may appear on the output's ring.

Pins run first: the exclusion passes never remove a pinned pattern, but the
propagation a pin triggers must see the full interior domains.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from siege.template import coord_is_edge

if TYPE_CHECKING:
    from siege.types import PatternId
    from siege.util.rng import RNG
    from siege.wfc.solver import ForbidInterface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BorderForcingRule:
    """Corner pins and ring motifs taken from a padded template.

    Attributes:
        top_left: Pattern id at the template's padded (0, 0).
        bot_left: Pattern id at (0, H + 1).
        top_right: Pattern id at (W + 1, 0).
        bot_right: Pattern id at (W + 1, H + 1).
        top_mid: Pattern id at ((W + 2) // 2, 0), or None when the top edge
            midpoint is left free.
        border_pattern_ids: Every pattern id found on the template's ring.
    """

    top_left: PatternId
    bot_left: PatternId
    top_right: PatternId
    bot_right: PatternId
    top_mid: PatternId | None
    border_pattern_ids: frozenset[PatternId]

    @classmethod
    def from_id_grid(cls, id_grid: np.ndarray, pin_top_mid: bool = False) -> BorderForcingRule:
        """Build the rule from a padded template's pattern id grid (indexed [x, y])."""
        width, height = id_grid.shape

        border_pattern_ids: set[PatternId] = set()
        for x in range(width):
            border_pattern_ids.add(int(id_grid[x, 0]))
            border_pattern_ids.add(int(id_grid[x, height - 1]))
        for y in range(height):
            border_pattern_ids.add(int(id_grid[0, y]))
            border_pattern_ids.add(int(id_grid[width - 1, y]))

        return cls(
            top_left=int(id_grid[0, 0]),
            bot_left=int(id_grid[0, height - 1]),
            top_right=int(id_grid[width - 1, 0]),
            bot_right=int(id_grid[width - 1, height - 1]),
            top_mid=int(id_grid[width // 2, 0]) if pin_top_mid else None,
            border_pattern_ids=frozenset(border_pattern_ids),
        )

    def forbid(self, fi: ForbidInterface, rng: RNG) -> None:
        """Apply the rule to a fresh wave.

        Raises:
            WFCContradiction: If the wave cannot satisfy the rule.
        """
        width, height = fi.wave_size()

        fi.forbid_all_patterns_except((0, 0), self.top_left)
        fi.forbid_all_patterns_except((0, height - 1), self.bot_left)
        fi.forbid_all_patterns_except((width - 1, 0), self.top_right)
        fi.forbid_all_patterns_except((width - 1, height - 1), self.bot_right)

        if self.top_mid is not None:
            fi.forbid_all_patterns_except((width // 2, 0), self.top_mid)

        # The inside is never allowed to hold a border motif
        for x in range(width):
            for y in range(height):
                if not coord_is_edge(x, y, width, height):
                    fi.forbid_patterns((x, y), self.border_pattern_ids)

        # ...and the ring holds nothing else
        interior_ids = [
            pattern_id
            for pattern_id in range(fi.num_patterns)
            if pattern_id not in self.border_pattern_ids
        ]
        for x in range(width):
            for y in range(height):
                if coord_is_edge(x, y, width, height):
                    fi.forbid_patterns((x, y), interior_ids)
