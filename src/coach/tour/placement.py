"""Callout placement geometry.

Given the target rectangle, the viewport size and a preferred side, compute
where the bubble and its arrow go. The function is pure so it is unit tested
headlessly; the Qt overlay only paints what it returns.

Rules
-----
* ``auto`` resolves to ``below`` when the target leaves room for the bubble
  plus a margin on both sides underneath it, otherwise ``above``.
* ``above`` / ``below``: bubble left edge follows the target's left edge,
  clamped into the viewport. The arrow is centred on the target's horizontal
  centre and clamped to the bubble extent minus ``arrow_inset``.
* ``left`` / ``right``: bubble is vertically centred on the target, clamped
  into the viewport, and placed outside the target on the requested side.
  The arrow follows the target's vertical centre.
* The bubble width shrinks to ``W - 2 * margin`` on narrow viewports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from coach.config import settings

from .anchors import Geometry
from .steps import Placement

__all__ = [
    "Viewport",
    "BubbleMetrics",
    "Rect",
    "Arrow",
    "PlacementResult",
    "resolve_side",
    "compute_placement",
]


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float


@dataclass(frozen=True)
class BubbleMetrics:
    width: float = settings.BUBBLE_MAX_WIDTH
    height: float = settings.BUBBLE_HEIGHT
    margin: float = settings.BUBBLE_MARGIN
    arrow: float = settings.ARROW_SIZE
    arrow_inset: float = settings.ARROW_INSET


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class Arrow:
    """Triangle bounding box (top-left ``x``/``y``) and the way its tip points."""

    x: float
    y: float
    size: float
    direction: str  # "up" | "down" | "left" | "right"

    def points(self) -> List[Tuple[float, float]]:
        s = self.size
        x, y = self.x, self.y
        if self.direction == "up":
            return [(x, y + s), (x + 2 * s, y + s), (x + s, y)]
        if self.direction == "down":
            return [(x, y), (x + 2 * s, y), (x + s, y + s)]
        if self.direction == "left":
            return [(x + s, y), (x + s, y + 2 * s), (x, y + s)]
        return [(x, y), (x, y + 2 * s), (x + s, y + s)]


@dataclass(frozen=True)
class PlacementResult:
    side: Placement
    bubble: Rect
    arrow: Arrow


def _clamp(value: float, lo: float, hi: float) -> float:
    if hi < lo:
        return lo
    return min(max(value, lo), hi)


def resolve_side(
    target: Geometry, viewport: Viewport, preference: Placement, metrics: BubbleMetrics
) -> Placement:
    if preference is not Placement.AUTO:
        return preference
    needed = target.y + target.height + metrics.margin + metrics.height + metrics.margin
    return Placement.BELOW if needed < viewport.height else Placement.ABOVE


def compute_placement(
    target: Geometry,
    viewport: Viewport,
    preference: Placement | str | None = Placement.AUTO,
    metrics: BubbleMetrics | None = None,
) -> PlacementResult:
    m = metrics or BubbleMetrics()
    side = resolve_side(target, viewport, Placement.coerce(preference), m)
    bw = max(0.0, min(m.width, viewport.width - 2 * m.margin))
    bh = m.height
    a = m.arrow

    if side in (Placement.ABOVE, Placement.BELOW):
        left = _clamp(target.x, m.margin, viewport.width - bw - m.margin)
        arrow_x = _clamp(
            target.center_x - a, left + m.arrow_inset, left + bw - m.arrow_inset - 2 * a
        )
        if side is Placement.BELOW:
            top = target.y + target.height + m.margin + a
            arrow = Arrow(arrow_x, target.y + target.height + m.margin, a, "up")
        else:
            top = max(m.margin, target.y - bh - m.margin - a)
            arrow = Arrow(arrow_x, top + bh, a, "down")
        return PlacementResult(side, Rect(left, top, bw, bh), arrow)

    top = _clamp(target.center_y - bh / 2, m.margin, viewport.height - bh - m.margin)
    arrow_y = _clamp(target.center_y - a, top + m.arrow_inset, top + bh - m.arrow_inset - 2 * a)
    if side is Placement.RIGHT:
        left = _clamp(
            target.x + target.width + m.margin + a, m.margin, viewport.width - bw - m.margin
        )
        arrow = Arrow(left - a, arrow_y, a, "left")
    else:
        left = _clamp(target.x - m.margin - a - bw, m.margin, viewport.width - bw - m.margin)
        arrow = Arrow(left + bw, arrow_y, a, "right")
    return PlacementResult(side, Rect(left, top, bw, bh), arrow)
