"""PyQt6 renderer for coach marks.

Imports Qt at module import time; keep it out of headless code paths.
"""

from .coach_overlay import CoachOverlay  # noqa: F401
from .coach_mark import CoachMark, coach_mark, track_stack  # noqa: F401
