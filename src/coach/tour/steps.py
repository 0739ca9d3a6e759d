"""Tour step model and tour registry.

Provides the immutable ``Step`` value object used by the engine plus a
registry-based definition model for named tours. The default wardrobe
onboarding tour is registered on import so the engine and CLI can look it up
by id.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from coach.config.settings import DEFAULT_TOUR_ID

__all__ = [
    "Placement",
    "Step",
    "TourDefinition",
    "register_tour",
    "get_tour",
    "list_tours",
    "clear_tours",
    "default_tour",
    "item_saved_followup",
]


class Placement(str, Enum):  # str subclass so JSON scripts can use plain names
    ABOVE = "above"
    BELOW = "below"
    LEFT = "left"
    RIGHT = "right"
    AUTO = "auto"

    @classmethod
    def coerce(cls, value: "Placement | str | None") -> "Placement":
        if value is None or value == "":
            return cls.AUTO
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown placement: {value!r}") from None


@dataclass(frozen=True)
class Step:
    id: str
    screen: str
    anchor_id: str
    text_key: str
    placement: Placement = Placement.AUTO

    def __post_init__(self) -> None:
        # frozen dataclass: bypass __setattr__ for the coerced value
        object.__setattr__(self, "placement", Placement.coerce(self.placement))


@dataclass(frozen=True)
class TourDefinition:
    id: str
    steps: Sequence[Step] = field(default_factory=tuple)

    def step_ids(self) -> List[str]:  # convenience
        return [s.id for s in self.steps]


_registry: Dict[str, TourDefinition] = {}


def register_tour(defn: TourDefinition) -> None:
    if defn.id in _registry:
        raise ValueError(f"Tour already registered: {defn.id}")
    ids = set()
    for step in defn.steps:
        if step.id in ids:
            raise ValueError(f"Duplicate step id {step.id} in tour {defn.id}")
        ids.add(step.id)
    _registry[defn.id] = defn


def get_tour(tour_id: str) -> TourDefinition:
    return _registry[tour_id]


def list_tours() -> List[TourDefinition]:
    return list(_registry.values())


def clear_tours() -> None:
    """Drop every registered tour, then re-register the default one."""
    _registry.clear()
    register_tour(_build_default_tour())


def _build_default_tour() -> TourDefinition:
    steps = (
        # Wardrobe
        Step("wardrobe:add", "Wardrobe", "wardrobe:addItem", "tutorial.choosePhoto"),
        # AddItemDetails: bubble sits above the colour chips
        Step("additem:colors", "AddItemDetails", "additem:colors", "tutorial.chooseTags", Placement.ABOVE),
        # Profile -> create look
        Step("profile:go", "Profile", "profile:create", "tutorial.gotoProfile"),
        # CreateLook
        Step("create:addPhoto", "CreateLook", "create:addPhoto", "tutorial.addMyPhoto"),
        Step("create:base", "CreateLook", "create:base", "tutorial.chooseBase"),
        Step("create:type", "CreateLook", "create:type", "tutorial.pickType"),
        Step("create:continue", "CreateLook", "create:continue", "tutorial.continue"),
    )
    return TourDefinition(id=DEFAULT_TOUR_ID, steps=steps)


def default_tour() -> TourDefinition:
    return get_tour(DEFAULT_TOUR_ID)


def item_saved_followup() -> Tuple[Step, ...]:
    """Steps injected once a wardrobe item has been saved.

    Points at the Profile tab in the bottom navigation so the user continues
    towards creating a look after returning to the wardrobe.
    """
    return (
        Step(
            id="wardrobe:gotoProfile",
            screen="Wardrobe",
            anchor_id="nav:profile",
            text_key="tutorial.gotoProfile",
            placement=Placement.ABOVE,
        ),
    )


register_tour(_build_default_tour())
