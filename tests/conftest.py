from __future__ import annotations

from collections.abc import Iterator

import pytest

from siege.util import rng

FRAME_TEMPLATE = "+--+\n|..|\n|..|\n+--+"


@pytest.fixture(autouse=True)
def reseed_global_rng() -> Iterator[None]:
    """Give every test the same global streams, whatever ran before it."""
    rng.init(0)
    yield
    rng.init(0)


@pytest.fixture
def frame_template() -> str:
    """A plain rectangular frame that stretches to any size of at least 3x3."""
    return FRAME_TEMPLATE
