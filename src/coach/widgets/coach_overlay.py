"""Coach-mark overlay widget.

Transparent child widget covering its parent window. It subscribes to
``TutorialEvent.OVERLAY_CHANGED`` and paints, for a visible descriptor:

* a translucent backdrop over the whole window
* a rounded bubble with the resolved step text and a "tap anywhere" hint
* a triangle arrow pointing at the anchor

Geometry comes from ``compute_placement`` (pure, tested headlessly); this
widget only paints it. Anchors must be registered in the coordinates of the
overlay's parent window (``CoachMark`` does this).

Interaction: any mouse press advances the flow, Escape stops it. Closing
the widget detaches it from the engine.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QEvent, QObject, QPointF, QRectF, Qt
from PyQt6.QtGui import QColor, QFont, QPainter, QPolygonF
from PyQt6.QtWidgets import QWidget

from coach.config import settings
from coach.i18n.translator import Translator
from coach.services.event_bus import Event, TutorialEvent
from coach.tour.engine import TutorialEngine
from coach.tour.placement import BubbleMetrics, PlacementResult, Viewport, compute_placement
from coach.tour.projector import HIDDEN, OverlayDescriptor

__all__ = ["CoachOverlay"]

_PADDING = 12
_RADIUS = 10


class CoachOverlay(QWidget):
    def __init__(
        self,
        parent: QWidget,
        engine: TutorialEngine,
        translator: Optional[Translator] = None,
        metrics: Optional[BubbleMetrics] = None,
    ):
        super().__init__(parent)
        self.setObjectName("CoachOverlay")
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self._engine = engine
        self._translator = translator or Translator()
        self._metrics = metrics or BubbleMetrics()
        self._descriptor: OverlayDescriptor = HIDDEN
        self._placement: Optional[PlacementResult] = None
        parent.installEventFilter(self)
        self._sub = engine.bus.subscribe(TutorialEvent.OVERLAY_CHANGED, self._on_overlay)
        # the wrapper may outlive the C++ widget (parent deleted without close())
        bus, sub = engine.bus, self._sub
        self.destroyed.connect(lambda *_: bus.unsubscribe(sub))
        self._apply(engine.overlay)

    # Public API --------------------------------------------------------------
    @property
    def descriptor(self) -> OverlayDescriptor:
        return self._descriptor

    @property
    def placement(self) -> Optional[PlacementResult]:
        return self._placement

    def text(self) -> str:
        key = self._descriptor.text_key
        return self._translator.t(key, key)

    def hint(self) -> str:
        return self._translator.t("tutorial.tapAnywhere", "Tap anywhere to continue")

    def detach(self) -> None:
        """Stop listening to the engine; the widget stays hidden afterwards."""
        self._engine.bus.unsubscribe(self._sub)
        parent = self.parentWidget()
        if parent is not None:
            parent.removeEventFilter(self)
        self._apply(HIDDEN)

    # Engine / parent signals -------------------------------------------------
    def _on_overlay(self, evt: Event) -> None:
        self._apply(evt.payload)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if watched is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self._apply(self._descriptor)
        return False

    def _apply(self, descriptor: OverlayDescriptor) -> None:
        self._descriptor = descriptor
        parent = self.parentWidget()
        if not descriptor.visible or descriptor.target is None or parent is None:
            self._placement = None
            self.hide()
            return
        self.setGeometry(0, 0, parent.width(), parent.height())
        self._placement = compute_placement(
            descriptor.target,
            Viewport(parent.width(), parent.height()),
            descriptor.placement,
            self._metrics,
        )
        self.raise_()
        self.show()
        self.setFocus()
        self.update()

    # Input -------------------------------------------------------------------
    def mousePressEvent(self, event):  # type: ignore[override]
        event.accept()
        self._engine.advance()

    def keyPressEvent(self, event):  # type: ignore[override]
        if event.key() == Qt.Key.Key_Escape:
            event.accept()
            self._engine.stop()
            return
        super().keyPressEvent(event)

    def closeEvent(self, event):  # type: ignore[override]
        self.detach()
        super().closeEvent(event)

    # Painting ----------------------------------------------------------------
    def paintEvent(self, event):  # type: ignore[override]
        if self._placement is None:
            return
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        p.fillRect(self.rect(), QColor(0, 0, 0, settings.BACKDROP_ALPHA))

        bubble = self._placement.bubble
        rect = QRectF(bubble.x, bubble.y, bubble.width, bubble.height)
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(QColor(settings.BUBBLE_COLOR))
        p.drawRoundedRect(rect, _RADIUS, _RADIUS)
        p.drawPolygon(QPolygonF([QPointF(x, y) for x, y in self._placement.arrow.points()]))

        inner = rect.adjusted(_PADDING, _PADDING, -_PADDING, -_PADDING)
        font = QFont(self.font())
        font.setPointSize(11)
        p.setFont(font)
        p.setPen(QColor("white"))
        p.drawText(inner, Qt.TextFlag.TextWordWrap.value, self.text())
        font.setPointSize(9)
        p.setFont(font)
        p.setPen(QColor(settings.HINT_COLOR))
        p.drawText(
            inner,
            (Qt.AlignmentFlag.AlignBottom | Qt.AlignmentFlag.AlignLeft).value,
            self.hint(),
        )
        p.end()
