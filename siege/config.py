"""
Configuration constants.

Centralizes the tunable values used throughout the package.
Organized by functional area for easy maintenance.
"""

from pathlib import Path

from siege.types import RandomSeed

# =============================================================================
# GENERAL
# =============================================================================

PACKAGE_ROOT_PATH = Path(__file__).resolve().parent

# None gives non-deterministic output; the CLI's --seed overrides it.
RANDOM_SEED: RandomSeed = None

# =============================================================================
# GENERATION
# =============================================================================

# Side length of the square windows extracted from the template (2 or 3).
PATTERN_SIZE = 2

# Extra collapse attempts after the first one fails.
DEFAULT_RETRIES = 100

# Output size (interior, without the padding ring)
DEFAULT_OUTPUT_WIDTH = 10
DEFAULT_OUTPUT_HEIGHT = 10

# Pin the output's top edge midpoint to the template's (asymmetric templates).
PIN_TOP_MID = False

# =============================================================================
# RENDERING
# =============================================================================

SVG_SCALE = 10.0  # Pixels per tile in SVG output
IMAGE_SCALE = 16  # Pixels per tile in raster output

BACKGROUND_COLOR = (255, 255, 255)
WOOD_COLOR = (133, 94, 66)  # Beams, crosses and wheels
WALL_COLOR = (181, 155, 124)  # Wall panels
BEAM_WIDTH_RATIO = 0.2  # Beam stroke width relative to tile size
WHEEL_RADIUS_RATIO = 0.45  # Wheel radius relative to tile size

# =============================================================================
# ASSET PATHS
# =============================================================================

ASSETS_BASE_DIR = PACKAGE_ROOT_PATH / "assets"

DEFAULT_TEMPLATE_PATH = ASSETS_BASE_DIR / "templates" / "default.csv"
