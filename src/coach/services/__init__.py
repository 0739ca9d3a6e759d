"""Service layer exports.

Responsibilities:
 - EventBus publish/subscribe core shared by engine and renderer
 - SettingsService mirroring the persisted tutorial toggle and locale
"""

from .event_bus import EventBus, TutorialEvent, Event  # noqa: F401
from .settings_service import SettingsService  # noqa: F401

__all__ = [
    "EventBus",
    "TutorialEvent",
    "Event",
    "SettingsService",
]
