"""Global configuration and constants for the coach-mark engine."""

from __future__ import annotations

import os
from typing import Final

DEFAULT_TOUR_ID: Final = "wardrobe_onboarding"

# Bubble geometry used by the overlay renderer (window coordinates, px)
BUBBLE_MAX_WIDTH: Final = 280
BUBBLE_HEIGHT: Final = 88  # conservative guess; text is not measured
BUBBLE_MARGIN: Final = 10
ARROW_SIZE: Final = 10
ARROW_INSET: Final = 16

BACKDROP_ALPHA: Final = 89  # ~35% black
BUBBLE_COLOR: Final = "#111111"
HINT_COLOR: Final = "#bbbbbb"

DATA_DIR: Final = os.environ.get("WARDROBE_COACH_DATA_DIR", "data")
DEFAULT_LOCALE: Final = os.environ.get("WARDROBE_COACH_LOCALE", "en")
