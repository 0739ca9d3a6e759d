"""Ephemeral per-launch flags gating tutorial auto-start.

The onboarding flow may auto-start only in the window right after the landing
screen closes, and only once per launch. Nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass

from .engine import TutorialEngine

__all__ = ["LaunchWindow"]


@dataclass
class LaunchWindow:
    landing_seen: bool = False

    def mark_landing_seen(self) -> None:
        self.landing_seen = True

    def can_auto_start(self) -> bool:
        return self.landing_seen

    def consume(self) -> None:
        self.landing_seen = False

    def auto_start(self, engine: TutorialEngine) -> bool:
        """Start ``engine`` if the window is open; the window closes either way."""
        if not self.can_auto_start():
            return False
        self.consume()
        return engine.start()
