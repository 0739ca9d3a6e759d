"""Flow queue value and its transitions.

``FlowState`` is an immutable pair of (current step, pending queue). Every
transition below is a total function returning a new state; nothing raises,
so the engine can apply them without guarding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .steps import Step

__all__ = [
    "FlowState",
    "EMPTY",
    "seed",
    "replace_current",
    "queue_front",
    "advance",
]


@dataclass(frozen=True)
class FlowState:
    current: Optional[Step] = None
    queue: Tuple[Step, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.current is None and not self.queue

    def step_ids(self) -> list[str]:
        ids = [self.current.id] if self.current is not None else []
        ids.extend(s.id for s in self.queue)
        return ids


EMPTY = FlowState()


def seed(steps: Iterable[Step]) -> FlowState:
    items = tuple(steps)
    if not items:
        return EMPTY
    return FlowState(current=items[0], queue=items[1:])


def replace_current(state: FlowState, step: Step) -> FlowState:
    return FlowState(current=step, queue=state.queue)


def queue_front(state: FlowState, steps: Iterable[Step]) -> FlowState:
    batch = tuple(steps)
    if not batch:
        return state
    if state.current is None:
        return FlowState(current=batch[0], queue=batch[1:] + state.queue)
    return FlowState(current=state.current, queue=batch + state.queue)


def advance(state: FlowState) -> FlowState:
    if not state.queue:
        return EMPTY
    return FlowState(current=state.queue[0], queue=state.queue[1:])
