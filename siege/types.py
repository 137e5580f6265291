from __future__ import annotations

# =============================================================================
# GRID COORDINATE SYSTEMS (Always integers)
# =============================================================================

TileCoord = int  # Always integer tile position

# Position on an unpadded grid (template interior or generated engine)
TilePos = tuple[TileCoord, TileCoord]  # Example: (5, 3) = column 5, row 3

# =============================================================================
# GENERATION-RELATED TYPES
# =============================================================================

# Opaque index into a pattern catalog
PatternId = int

RandomSeed = int | str | None

# =============================================================================
# RENDERING-RELATED TYPES
# =============================================================================

RGB = tuple[int, int, int]  # Example: (255, 255, 255) = white
