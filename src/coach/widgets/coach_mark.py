"""Anchor registration and screen tracking glue for Qt widgets.

``CoachMark`` is an event filter installed on a target widget. On every
show / move / resize it measures the widget in its top-level window's
coordinates and reports the geometry to the engine (the engine ignores
repeats and zero sizes). Hiding the widget forgets the anchor.

``track_stack`` drives ``TutorialEngine.on_screen`` from a
``QStackedWidget``: each page's ``objectName`` is the screen name used in
step definitions.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QEvent, QObject, QPoint
from PyQt6.QtWidgets import QStackedWidget, QWidget

from coach.tour.anchors import Geometry
from coach.tour.engine import TutorialEngine

__all__ = ["CoachMark", "coach_mark", "track_stack"]

_MEASURE_EVENTS = (QEvent.Type.Show, QEvent.Type.Move, QEvent.Type.Resize)


class CoachMark(QObject):
    def __init__(self, widget: QWidget, anchor_id: str, engine: TutorialEngine):
        super().__init__(widget)
        self._widget = widget
        self._anchor_id = anchor_id
        self._engine = engine
        widget.installEventFilter(self)
        if widget.isVisible():
            self.measure()

    @property
    def anchor_id(self) -> str:
        return self._anchor_id

    def measure(self) -> Optional[Geometry]:
        w = self._widget
        window = w.window()
        origin = w.mapTo(window, QPoint(0, 0)) if window is not w else QPoint(0, 0)
        geometry = Geometry(origin.x(), origin.y(), w.width(), w.height())
        if not geometry.is_laid_out:
            return None
        self._engine.register_anchor(self._anchor_id, geometry)
        return geometry

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if watched is self._widget:
            kind = event.type()
            if kind in _MEASURE_EVENTS:
                self.measure()
            elif kind == QEvent.Type.Hide:
                self._engine.remove_anchor(self._anchor_id)
        return False


def coach_mark(widget: QWidget, anchor_id: str, engine: TutorialEngine) -> CoachMark:
    """Wrap ``widget`` so it reports itself as anchor ``anchor_id``."""
    return CoachMark(widget, anchor_id, engine)


def track_stack(stack: QStackedWidget, engine: TutorialEngine) -> None:
    def _focus(index: int) -> None:
        page = stack.widget(index)
        if page is not None and page.objectName():
            engine.on_screen(page.objectName())

    stack.currentChanged.connect(_focus)  # type: ignore[attr-defined]
    if stack.count():
        _focus(stack.currentIndex())
