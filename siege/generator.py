"""Siege engine generator.

Turns a template into new engines of any size with overlapping Wave Function
Collapse:

1. The template is parsed into a grid padded with a ring of `Tile.EDGE`.
2. Every window of `pattern_size` x `pattern_size` tiles becomes a pattern.
3. Each generation run collapses a wave two cells larger than the requested
   engine, under a `BorderForcingRule` that keeps the template's frame.
4. The chosen patterns are mapped back to tiles, the ring is stripped and
   wildcards are resolved.

Generation is probabilistic: `generate` returns None when every attempt
contradicts. A `Generator` is read-only once built, so one instance can serve
concurrent callers as long as each passes its own rng.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import numpy as np

from siege import config
from siege.border import BorderForcingRule
from siege.engine import Engine
from siege.template import TemplateGrid, parse_array, parse_ascii, parse_csv
from siege.tiles import Tile
from siege.types import PatternId
from siege.util import rng as rng_module
from siege.util.rng import RNG
from siege.wfc import OverlappingPatterns, Run, WFCRetriesExhausted
from siege.wildcards import resolve_wildcard_grid

logger = logging.getLogger(__name__)

_generate_rng = rng_module.get("siege.generate")


class Generator:
    """The siege engine generator.

    Attributes:
        template: The padded template grid.
        overlapping_patterns: Pattern catalog of the padded template.
        pin_top_mid: Whether outputs keep the template's top edge midpoint.
    """

    def __init__(
        self,
        template: TemplateGrid,
        pattern_size: int = config.PATTERN_SIZE,
        pin_top_mid: bool = config.PIN_TOP_MID,
    ) -> None:
        """Build the pattern catalog for a parsed template.

        Args:
            template: Parsed, padded template.
            pattern_size: Side length of the extracted windows (2 or 3).
            pin_top_mid: Pin the output's top edge midpoint to the template's,
                for asymmetric templates with a distinguishing peak.
        """
        self.template = template
        self.pin_top_mid = pin_top_mid
        self.overlapping_patterns = OverlappingPatterns(template.tiles, pattern_size)
        self._global_stats = self.overlapping_patterns.global_stats()

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_ascii(cls, text: str, **kwargs) -> Generator:
        """Use a template drawn as ASCII art.

        Raises:
            TemplateError: If the text cannot be parsed.
        """
        return cls(parse_ascii(text), **kwargs)

    @classmethod
    def from_array(
        cls, width: int, height: int, tiles: Sequence[Tile | int], **kwargs
    ) -> Generator:
        """Use a template from a flat, row-major array of tiles or codes."""
        return cls(parse_array(width, height, tiles), **kwargs)

    @classmethod
    def from_csv(cls, text: str, **kwargs) -> Generator:
        """Use a template from CSV text of tile codes."""
        return cls(parse_csv(text), **kwargs)

    @classmethod
    def from_ascii_file(cls, path: str | Path, **kwargs) -> Generator:
        return cls.from_ascii(Path(path).read_text(), **kwargs)

    @classmethod
    def from_csv_file(cls, path: str | Path, **kwargs) -> Generator:
        return cls.from_csv(Path(path).read_text(), **kwargs)

    @classmethod
    def default(cls, **kwargs) -> Generator:
        """Use the bundled default template."""
        return cls.from_csv_file(config.DEFAULT_TEMPLATE_PATH, **kwargs)

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    @property
    def pattern_size(self) -> int:
        return self.overlapping_patterns.pattern_size

    def border_pattern_ids(self) -> frozenset[PatternId]:
        """Ids of the patterns found on the padded template's ring."""
        return self.border_rule().border_pattern_ids

    def border_rule(self) -> BorderForcingRule:
        """Create the border-forcing rule for one generation call."""
        return BorderForcingRule.from_id_grid(
            self.overlapping_patterns.id_grid, pin_top_mid=self.pin_top_mid
        )

    def generate(
        self,
        output_width: int,
        output_height: int,
        retries: int = config.DEFAULT_RETRIES,
        rng: RNG | None = None,
    ) -> Engine | None:
        """Generate an engine of the requested size.

        Args:
            output_width: Engine width in tiles (at least 1).
            output_height: Engine height in tiles (at least 1).
            retries: Extra attempts after the first one contradicts.
            rng: Random source; all randomness of the call flows through it.
                Defaults to the "siege.generate" stream.

        Returns:
            The engine, or None if every attempt contradicted.
        """
        if output_width < 1 or output_height < 1:
            raise ValueError(
                f"Output must be at least 1x1, got {output_width}x{output_height}"
            )
        if rng is None:
            rng = _generate_rng

        run = Run(
            output_width + 2,
            output_height + 2,
            self._global_stats,
            self.border_rule(),
            rng,
        )

        try:
            wave = run.collapse_retrying(retries, rng)
        except WFCRetriesExhausted as exc:
            logger.info(
                f"No {output_width}x{output_height} engine after {exc.attempts} attempts"
            )
            return None

        tiles = self.overlapping_patterns.top_left_values[wave.grid()]
        interior = resolve_wildcard_grid(tiles[1:-1, 1:-1].astype(np.uint8))

        logger.debug(f"Generated {output_width}x{output_height} engine")
        return Engine(output_width, output_height, interior)
