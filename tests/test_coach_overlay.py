"""Tests for the CoachOverlay renderer widget."""

from __future__ import annotations

from PyQt6 import sip
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QWidget

from coach.i18n.translator import Translator
from coach.services.event_bus import TutorialEvent
from coach.tour.anchors import Geometry
from coach.tour.steps import Placement
from coach.widgets.coach_overlay import CoachOverlay

from tests.factories import SQUARE, make_engine


def _host(qtbot, width=390, height=844):
    # callers hold root; qtbot keeps only a weak reference
    root = QWidget()
    root.resize(width, height)
    container = QWidget(root)
    container.setGeometry(0, 0, width, height)
    qtbot.addWidget(root)
    root.show()
    return root, container


def _ready_engine():
    engine = make_engine()
    engine.on_screen("ScreenA")
    engine.start()
    return engine


def test_overlay_hidden_until_anchor_ready(qtbot):
    root, container = _host(qtbot)
    engine = _ready_engine()
    overlay = CoachOverlay(container, engine)
    assert not overlay.isVisible()
    assert overlay.placement is None

    engine.register_anchor("anchorA", SQUARE)
    assert overlay.isVisible()
    assert overlay.placement.side is Placement.BELOW
    assert overlay.geometry().width() == 390
    assert overlay.text() == "text.S1"  # unknown key falls back to itself


def test_overlay_resolves_text_and_hint(qtbot):
    root, container = _host(qtbot)
    engine = _ready_engine()
    translator = Translator({"en": {"text": {"S1": "Add your first item"}}})
    overlay = CoachOverlay(container, engine, translator)
    engine.register_anchor("anchorA", SQUARE)
    assert overlay.text() == "Add your first item"
    assert overlay.hint() == "Tap anywhere to continue"
    overlay.repaint()  # paint path must not raise


def test_click_advances_flow(qtbot):
    root, container = _host(qtbot)
    engine = _ready_engine()
    overlay = CoachOverlay(container, engine)
    engine.register_anchor("anchorA", SQUARE)
    qtbot.mouseClick(overlay, Qt.MouseButton.LeftButton)
    assert engine.current_step.id == "S2"
    assert not overlay.isVisible()


def test_escape_stops_flow(qtbot):
    root, container = _host(qtbot)
    engine = _ready_engine()
    overlay = CoachOverlay(container, engine)
    engine.register_anchor("anchorA", SQUARE)
    qtbot.keyClick(overlay, Qt.Key.Key_Escape)
    assert not engine.is_running()
    assert not overlay.isVisible()


def test_parent_resize_recomputes_placement(qtbot):
    root, container = _host(qtbot)
    engine = _ready_engine()
    overlay = CoachOverlay(container, engine)
    engine.register_anchor("anchorA", Geometry(10, 300, 50, 50))
    assert overlay.placement.side is Placement.BELOW
    container.resize(390, 400)
    assert overlay.placement.side is Placement.ABOVE


def test_detach_unsubscribes(qtbot):
    root, container = _host(qtbot)
    engine = _ready_engine()
    overlay = CoachOverlay(container, engine)
    overlay.detach()
    assert engine.bus.subscriber_count(TutorialEvent.OVERLAY_CHANGED) == 0
    engine.register_anchor("anchorA", SQUARE)
    assert not overlay.isVisible()


def test_close_unsubscribes_from_engine(qtbot):
    root, container = _host(qtbot)
    engine = _ready_engine()
    overlay = CoachOverlay(container, engine)
    engine.register_anchor("anchorA", SQUARE)
    assert overlay.isVisible()
    overlay.close()
    assert engine.bus.subscriber_count(TutorialEvent.OVERLAY_CHANGED) == 0
    engine.advance()
    assert engine.current_step.id == "S2"
    assert engine.bus.errors == []


def test_deleted_overlay_drops_subscription(qtbot):
    root, container = _host(qtbot)
    engine = _ready_engine()
    overlay = CoachOverlay(container, engine)
    sip.delete(overlay)
    assert engine.bus.subscriber_count(TutorialEvent.OVERLAY_CHANGED) == 0
    engine.register_anchor("anchorA", SQUARE)
    assert engine.bus.errors == []


def test_overlay_hides_when_step_handler_stops_run(qtbot):
    root, container = _host(qtbot)
    engine = make_engine()
    engine.on_screen("ScreenA")
    engine.register_anchor("anchorA", SQUARE)
    overlay = CoachOverlay(container, engine)
    engine.bus.subscribe(
        TutorialEvent.STEP_CHANGED,
        lambda evt: engine.stop() if evt.payload is not None else None,
    )
    engine.start()
    assert not engine.is_running()
    assert not overlay.isVisible()
    assert overlay.descriptor == engine.overlay
