"""Application bootstrap for the coach layer.

Responsibilities:
 - Optional headless bootstrap (tests / environments without PyQt6)
 - Loading persisted preferences and building the SettingsService
 - Constructing the single TutorialEngine and wiring settings -> engine
 - Returning one context object the navigation layer, anchor wrappers and
   renderer receive explicitly (no ambient lookup)

The bootstrap avoids importing PyQt6 at module import time so test
collection stays fast and headless environments keep working.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import sys
import time
from typing import Any, Optional, Sequence

from coach.config import settings as config
from coach.i18n.translator import Translator
from coach.services.event_bus import Event, EventBus, TutorialEvent
from coach.services.settings_service import SettingsService
from coach.tour.engine import TutorialEngine
from coach.tour.session_flags import LaunchWindow
from coach.tour.steps import Step

try:  # Lazy / optional Qt import
    from PyQt6.QtWidgets import QApplication  # type: ignore

    _QT_AVAILABLE = True
except Exception:  # noqa: BLE001
    QApplication = None  # type: ignore
    _QT_AVAILABLE = False

__all__ = ["AppContext", "create_app"]

_log = logging.getLogger(__name__)


@dataclass
class AppContext:
    """References created during bootstrap.

    Attributes
    ----------
    qt_app: The QApplication instance (None if headless or Qt missing)
    headless: Whether headless bootstrap was used
    bus: Shared EventBus
    settings: SettingsService mirroring persisted preferences
    engine: The single TutorialEngine
    translator: Resolves step text references for the renderer
    launch_window: One-shot auto-start gate for this launch
    duration_s: Total elapsed seconds for bootstrap
    """

    qt_app: Optional[Any]
    headless: bool
    bus: EventBus
    settings: SettingsService
    engine: TutorialEngine
    translator: Translator
    launch_window: LaunchWindow
    duration_s: float
    metadata: dict[str, Any] = field(default_factory=dict)


def create_app(
    *,
    headless: bool | None = None,
    data_dir: str | None = None,
    persist: bool = True,
    default_flow: Sequence[Step] | None = None,
) -> AppContext:
    """Create and wire the tutorial context.

    Parameters
    ----------
    headless: Force headless (no QApplication). If None, inferred by Qt availability.
    data_dir: Preferences directory; defaults to ``WARDROBE_COACH_DATA_DIR``.
    persist: When False preferences stay in memory (nothing read or written).
    default_flow: Override the onboarding script (tests, demos).
    """
    started = time.perf_counter()
    if headless is None:
        headless = not _QT_AVAILABLE

    qt_app = None
    if not headless and _QT_AVAILABLE:
        qt_app = QApplication.instance() or QApplication(sys.argv[:1])

    bus = EventBus()
    settings = SettingsService.load(bus, (data_dir or config.DATA_DIR) if persist else None)
    engine = TutorialEngine(default_flow, bus=bus, enabled=settings.tutorial_enabled)
    translator = Translator(locale=settings.locale)

    def _on_settings(evt: Event) -> None:
        payload = evt.payload or {}
        translator.locale = payload.get("locale", translator.locale)
        engine.set_enabled(payload.get("tutorial_enabled", engine.is_enabled()))

    bus.subscribe(TutorialEvent.SETTINGS_CHANGED, _on_settings)

    duration = time.perf_counter() - started
    _log.debug("coach bootstrap finished in %.1f ms", duration * 1000)
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        bus=bus,
        settings=settings,
        engine=engine,
        translator=translator,
        launch_window=LaunchWindow(),
        duration_s=duration,
        metadata={"qt_available": _QT_AVAILABLE, "data_dir": settings.base_dir},
    )
