"""Readiness gating: each condition alone hides the overlay."""

from coach.tour.anchors import AnchorRegistry, Geometry
from coach.tour.projector import HIDDEN, project
from coach.tour.steps import Placement

from tests.factories import make_step

STEP = make_step("S1", "ScreenA", "anchorA", placement=Placement.ABOVE)
GEO = Geometry(10, 10, 50, 50)


def _anchors(register: bool = True) -> AnchorRegistry:
    reg = AnchorRegistry()
    if register:
        reg.register("anchorA", GEO)
    return reg


def _ready(**overrides):
    kwargs = dict(running=True, step=STEP, screen="ScreenA", anchors=_anchors(), enabled=True)
    kwargs.update(overrides)
    return project(**kwargs)


def test_visible_when_all_conditions_hold():
    out = _ready()
    assert out.visible
    assert out.step_id == "S1"
    assert out.text_key == "text.S1"
    assert out.target == GEO
    assert out.placement is Placement.ABOVE


def test_hidden_on_other_screen():
    assert _ready(screen="ScreenB") == HIDDEN


def test_hidden_without_screen():
    assert _ready(screen=None) == HIDDEN


def test_hidden_when_anchor_unregistered():
    assert _ready(anchors=_anchors(register=False)) == HIDDEN


def test_hidden_when_not_running():
    assert _ready(running=False) == HIDDEN


def test_hidden_when_disabled():
    assert _ready(enabled=False) == HIDDEN


def test_hidden_without_step():
    assert _ready(step=None) == HIDDEN


def test_descriptor_to_dict():
    assert _ready().to_dict() == {
        "visible": True,
        "step_id": "S1",
        "text_key": "text.S1",
        "target": {"x": 10, "y": 10, "width": 50, "height": 50},
        "placement": "above",
    }
    assert HIDDEN.to_dict()["target"] is None
