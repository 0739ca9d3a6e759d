"""User preference persistence.

Stores the tutorial toggle and the UI locale for the coach layer.

Design Goals
------------
- Pure-Python (no Qt import) to allow headless unit tests.
- Explicit schema with versioning for forward migrations.
- Graceful fallback on corrupt / incompatible data.
- Small surface: load_preferences / save_preferences + dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
import json
import logging
from pathlib import Path
from typing import Any, Dict

from coach.config.settings import DEFAULT_LOCALE

__all__ = [
    "CoachPreferences",
    "load_preferences",
    "save_preferences",
    "PREF_VERSION",
]

PREF_VERSION = 1
PREF_FILENAME = "coach_prefs.json"

_log = logging.getLogger(__name__)


@dataclass
class CoachPreferences:
    """Serializable preference settings.

    Attributes
    ----------
    version: Schema version for future migrations.
    tutorial_enabled: Whether coach-mark overlays may run at all.
    locale: Preferred locale code used to resolve tutorial text.
    """

    version: int = PREF_VERSION
    tutorial_enabled: bool = True
    locale: str = DEFAULT_LOCALE

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CoachPreferences":
        return cls(
            version=int(data.get("version", PREF_VERSION)),
            tutorial_enabled=bool(data.get("tutorial_enabled", True)),
            locale=str(data.get("locale", DEFAULT_LOCALE)),
        )


def _resolve_path(base_dir: str | Path | None) -> Path:
    base = Path(base_dir) if base_dir else Path.cwd()
    return base / PREF_FILENAME


def load_preferences(base_dir: str | Path | None = None) -> CoachPreferences:
    path = _resolve_path(base_dir)
    if not path.exists():
        return CoachPreferences()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        prefs = CoachPreferences.from_dict(data)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        _log.warning("Ignoring unreadable preferences %s: %s", path, exc)
        return CoachPreferences()
    if prefs.version != PREF_VERSION:
        # Full reset, but keep the user's language
        return CoachPreferences(locale=prefs.locale)
    return prefs


def save_preferences(prefs: CoachPreferences, base_dir: str | Path | None = None) -> Path:
    path = _resolve_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(prefs.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)
    return path
