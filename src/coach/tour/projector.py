"""Overlay projector.

Pure mapping from engine inputs to the descriptor a renderer paints. Partial
readiness (screen not reached yet, anchor not measured yet) is the normal
case while screens mount, so every miss yields the hidden descriptor rather
than an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .anchors import AnchorRegistry, Geometry
from .steps import Placement, Step

__all__ = ["OverlayDescriptor", "HIDDEN", "project"]


@dataclass(frozen=True)
class OverlayDescriptor:
    visible: bool
    step_id: Optional[str] = None
    text_key: str = ""
    target: Optional[Geometry] = None
    placement: Placement = Placement.AUTO

    def to_dict(self) -> Dict[str, Any]:
        return {
            "visible": self.visible,
            "step_id": self.step_id,
            "text_key": self.text_key,
            "target": self.target.to_dict() if self.target else None,
            "placement": self.placement.value,
        }


HIDDEN = OverlayDescriptor(visible=False)


def project(
    *,
    running: bool,
    step: Optional[Step],
    screen: Optional[str],
    anchors: AnchorRegistry,
    enabled: bool,
) -> OverlayDescriptor:
    if not enabled or not running or step is None:
        return HIDDEN
    if screen != step.screen:
        return HIDDEN
    target = anchors.get(step.anchor_id)
    if target is None:
        return HIDDEN
    return OverlayDescriptor(
        visible=True,
        step_id=step.id,
        text_key=step.text_key,
        target=target,
        placement=step.placement,
    )
