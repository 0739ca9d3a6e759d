"""Anchor registry.

Stores the last geometry reported for each named UI target. Layout passes
often report identical values repeatedly; ``register`` only reports a change
when one of the four fields differs, which keeps the engine from recomputing
(and the renderer from repainting) in a loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

__all__ = ["Geometry", "AnchorRegistry"]


@dataclass(frozen=True)
class Geometry:
    x: float
    y: float
    width: float
    height: float

    @property
    def is_laid_out(self) -> bool:
        return self.width > 0 and self.height > 0

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "Geometry":
        return cls(
            x=float(data.get("x", 0)),
            y=float(data.get("y", 0)),
            width=float(data.get("width", data.get("w", 0))),
            height=float(data.get("height", data.get("h", 0))),
        )


class AnchorRegistry:
    """Last-write-wins mapping of anchor id -> Geometry (not thread-safe on its own)."""

    def __init__(self) -> None:
        self._anchors: Dict[str, Geometry] = {}

    def register(self, anchor_id: str, geometry: Geometry) -> bool:
        """Upsert geometry; return True only when the stored value changed."""
        if not geometry.is_laid_out:
            return False
        if self._anchors.get(anchor_id) == geometry:
            return False
        self._anchors[anchor_id] = geometry
        return True

    def remove(self, anchor_id: str) -> bool:
        return self._anchors.pop(anchor_id, None) is not None

    def get(self, anchor_id: str) -> Optional[Geometry]:
        return self._anchors.get(anchor_id)

    def clear(self) -> None:
        self._anchors.clear()

    def __contains__(self, anchor_id: object) -> bool:
        return anchor_id in self._anchors

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._anchors))

    def __len__(self) -> int:
        return len(self._anchors)
