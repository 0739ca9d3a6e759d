"""wardrobe-coach public API.

Curated, intentionally small surface for the navigation layer, anchor
wrappers, renderer and tests. The Qt renderer lives in ``coach.widgets`` and
is not imported here so headless callers never pull in PyQt6.
"""

from __future__ import annotations

from .services.event_bus import EventBus, TutorialEvent, Event  # noqa: F401
from .services.settings_service import SettingsService  # noqa: F401
from .tour import (  # noqa: F401
    Placement,
    Step,
    Geometry,
    OverlayDescriptor,
    Viewport,
    BubbleMetrics,
    compute_placement,
    TutorialEngine,
    LaunchWindow,
    default_tour,
    item_saved_followup,
)
from .i18n.translator import Translator  # noqa: F401
from .app.bootstrap import AppContext, create_app  # noqa: F401

__all__ = [
    "EventBus",
    "TutorialEvent",
    "Event",
    "SettingsService",
    "Placement",
    "Step",
    "Geometry",
    "OverlayDescriptor",
    "Viewport",
    "BubbleMetrics",
    "compute_placement",
    "TutorialEngine",
    "LaunchWindow",
    "default_tour",
    "item_saved_followup",
    "Translator",
    "AppContext",
    "create_app",
]
