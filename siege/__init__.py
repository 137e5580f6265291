"""Procedurally generated siege engine skeletons.

Uses overlapping Wave Function Collapse to grow a small hand-drawn template
into larger engines that keep the template's frame:

    from siege import Generator

    generator = Generator.from_ascii(template_text)
    engine = generator.generate(12, 8, retries=100, rng=random.Random(7))
    if engine is not None:
        print(engine.to_ascii())
"""

from .engine import Engine
from .generator import Generator
from .template import (
    DimensionMismatchError,
    InvalidFieldError,
    TemplateError,
    TemplateGrid,
    UnknownSymbolError,
)
from .tiles import Tile
from .wildcards import resolve_wildcards

__all__ = [
    "DimensionMismatchError",
    "Engine",
    "Generator",
    "InvalidFieldError",
    "TemplateError",
    "TemplateGrid",
    "Tile",
    "UnknownSymbolError",
    "resolve_wildcards",
]
