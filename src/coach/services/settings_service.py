"""Settings service for the tutorial toggle and locale.

Mirrors the persisted preferences in memory and announces every change on the
EventBus (``TutorialEvent.SETTINGS_CHANGED``). The bootstrap subscribes the
engine's ``set_enabled`` to that event, so switching the tutorial off in the
settings screen stops a running flow immediately.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from coach.app.preferences import CoachPreferences, load_preferences, save_preferences

from .event_bus import EventBus, TutorialEvent

__all__ = ["SettingsService"]


@dataclass
class SettingsService:
    """Runtime settings backed by ``coach_prefs.json``.

    Attributes:
        bus: EventBus receiving ``settings_changed`` payloads.
        base_dir: Directory holding the preferences file. ``None`` keeps the
            settings in memory only (tests, headless runs).
        prefs: Current preference values.
    """

    bus: EventBus
    base_dir: Optional[Path] = None
    prefs: CoachPreferences = field(default_factory=CoachPreferences)

    @classmethod
    def load(cls, bus: EventBus, base_dir: str | Path | None = None) -> "SettingsService":
        path = Path(base_dir) if base_dir is not None else None
        prefs = load_preferences(path) if path is not None else CoachPreferences()
        return cls(bus=bus, base_dir=path, prefs=prefs)

    @property
    def tutorial_enabled(self) -> bool:
        return self.prefs.tutorial_enabled

    @property
    def locale(self) -> str:
        return self.prefs.locale

    def set_tutorial_enabled(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled == self.prefs.tutorial_enabled:
            return
        self.prefs.tutorial_enabled = enabled
        self._commit()

    def set_locale(self, locale: str) -> None:
        if locale == self.prefs.locale:
            return
        self.prefs.locale = locale
        self._commit()

    def _commit(self) -> None:
        if self.base_dir is not None:
            save_preferences(self.prefs, self.base_dir)
        self.bus.publish(TutorialEvent.SETTINGS_CHANGED, self.prefs.to_dict())
