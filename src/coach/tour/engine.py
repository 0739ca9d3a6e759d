"""Tutorial engine.

Single in-process coordinator for coach-mark overlays. It owns the flow
queue, the anchor registry, the tracked screen and the run state, and
re-projects the overlay descriptor synchronously after every mutation.

Usage::

    engine = TutorialEngine(bus=bus)
    engine.on_screen("Wardrobe")
    engine.start()
    engine.register_anchor("wardrobe:addItem", Geometry(16, 700, 120, 44))
    engine.overlay.visible  # True

Threading: every mutation happens under one re-entrant lock. Events are
published after the lock is released so handlers (the renderer) may call
``advance()`` / ``stop()`` from inside a callback. Such a nested mutation
publishes its own events first; whatever the outer call had not yet
published is then dropped, and ``overlay_changed`` always carries the
descriptor current at publish time.

Policy violations (operating while disabled, zero-size or malformed
geometry, advancing an idle engine) are silent no-ops. A guidance overlay
must never take the host application down, so nothing here raises at
runtime.
"""

from __future__ import annotations

import itertools
import logging
from threading import RLock
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from coach.services.event_bus import EventBus, TutorialEvent

from . import flow as flow_ops
from .anchors import AnchorRegistry, Geometry
from .flow import EMPTY, FlowState
from .projector import HIDDEN, OverlayDescriptor, project
from .steps import Placement, Step, default_tour

__all__ = ["TutorialEngine"]

_log = logging.getLogger(__name__)

_Pending = List[Tuple[TutorialEvent, Any]]
_Batch = Tuple[int, _Pending]


class TutorialEngine:
    def __init__(
        self,
        default_flow: Optional[Sequence[Step]] = None,
        *,
        bus: Optional[EventBus] = None,
        enabled: bool = True,
    ) -> None:
        self._lock = RLock()
        self._bus = bus or EventBus()
        self._default_flow: Tuple[Step, ...] = (
            tuple(default_flow) if default_flow is not None else tuple(default_tour().steps)
        )
        self._enabled = bool(enabled)
        self._running = False
        self._flow: FlowState = EMPTY
        self._screen: Optional[str] = None
        self._anchors = AnchorRegistry()
        # default-flow auto-seed latch; only replay() re-arms it
        self._seeded = False
        self._overlay: OverlayDescriptor = HIDDEN
        self._recomputes = 0
        # set when the descriptor changed and is not yet published
        self._overlay_dirty = False
        # bumped whenever a mutation queues step/run events
        self._generation = 0
        self._custom_ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Flow operations
    # ------------------------------------------------------------------
    def start(self) -> bool:
        with self._lock:
            if not self._enabled:
                _log.debug("start ignored: tutorial disabled")
                return False
            batch = self._seal(self._start_locked())
        self._emit(batch)
        return True

    def set_current(self, step: Step) -> bool:
        with self._lock:
            if not self._enabled:
                _log.debug("set_current(%s) ignored: tutorial disabled", step.id)
                return False
            state = flow_ops.replace_current(self._flow, step)
            batch = self._seal(self._transition(state, running=True))
        self._emit(batch)
        return True

    def prompt(
        self,
        anchor_id: str,
        text_key: str,
        *,
        screen: Optional[str] = None,
        placement: Placement | str | None = None,
    ) -> Optional[Step]:
        """Show a one-off step, by default on whatever screen is current."""
        with self._lock:
            step = Step(
                id=f"custom:{next(self._custom_ids)}",
                screen=screen or self._screen or "",
                anchor_id=anchor_id,
                text_key=text_key,
                placement=Placement.coerce(placement),
            )
        return step if self.set_current(step) else None

    def queue_front(self, steps: Iterable[Step]) -> bool:
        steps = tuple(steps)
        with self._lock:
            if not self._enabled:
                _log.debug("queue_front ignored: tutorial disabled")
                return False
            if not steps:
                return False
            state = flow_ops.queue_front(self._flow, steps)
            batch = self._seal(self._transition(state, running=True))
        _log.debug("queued %d step(s) ahead: %s", len(steps), [s.id for s in steps])
        self._emit(batch)
        return True

    def advance(self) -> bool:
        with self._lock:
            if not self._enabled or (not self._running and self._flow.is_empty):
                return False
            nxt = flow_ops.advance(self._flow)
            batch = self._seal(self._transition(nxt, running=nxt.current is not None))
        self._emit(batch)
        return True

    def stop(self) -> None:
        with self._lock:
            if not self._running and self._flow.is_empty:
                return
            batch = self._seal(self._transition(EMPTY, running=False))
        self._emit(batch)

    def replay(self) -> bool:
        """Restart the default flow from its first step."""
        with self._lock:
            if not self._enabled:
                return False
            self._seeded = False
            pending = self._transition(EMPTY, running=False)
            pending += self._start_locked()
            batch = self._seal(pending)
        self._emit(batch)
        return True

    # ------------------------------------------------------------------
    # Inputs from settings, navigation and layout
    # ------------------------------------------------------------------
    def set_enabled(self, enabled: bool) -> None:
        enabled = bool(enabled)
        with self._lock:
            if enabled == self._enabled:
                return
            self._enabled = enabled
            _log.debug("tutorial %s", "enabled" if enabled else "disabled")
            if enabled:
                self._recompute()
                batch = self._seal([])
            else:
                batch = self._seal(self._transition(EMPTY, running=False))
        self._emit(batch)

    def on_screen(self, name: str) -> None:
        with self._lock:
            if name == self._screen:
                return
            self._screen = name
            self._recompute()
            batch = self._seal([])
        self._emit(batch)

    def register_anchor(self, anchor_id: str, geometry: Geometry | Mapping[str, float]) -> bool:
        if not isinstance(geometry, Geometry):
            try:
                geometry = Geometry.from_dict(dict(geometry))
            except (TypeError, ValueError) as exc:
                _log.debug("anchor %s ignored: bad geometry %r (%s)", anchor_id, geometry, exc)
                return False
        with self._lock:
            if not self._anchors.register(anchor_id, geometry):
                return False
            self._recompute()
            batch = self._seal([])
        self._emit(batch)
        return True

    def remove_anchor(self, anchor_id: str) -> bool:
        with self._lock:
            if not self._anchors.remove(anchor_id):
                return False
            self._recompute()
            batch = self._seal([])
        self._emit(batch)
        return True

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def bus(self) -> EventBus:
        return self._bus

    def is_running(self) -> bool:
        with self._lock:
            return self._running

    def is_enabled(self) -> bool:
        with self._lock:
            return self._enabled

    @property
    def current_step(self) -> Optional[Step]:
        with self._lock:
            return self._flow.current

    @property
    def pending_steps(self) -> Tuple[Step, ...]:
        with self._lock:
            return self._flow.queue

    @property
    def current_screen(self) -> Optional[str]:
        with self._lock:
            return self._screen

    @property
    def overlay(self) -> OverlayDescriptor:
        with self._lock:
            return self._overlay

    @property
    def recompute_count(self) -> int:
        with self._lock:
            return self._recomputes

    def anchor(self, anchor_id: str) -> Optional[Geometry]:
        with self._lock:
            return self._anchors.get(anchor_id)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _start_locked(self) -> _Pending:
        state = self._flow
        if not self._seeded:
            self._seeded = True
            if state.is_empty:
                state = flow_ops.seed(self._default_flow)
            else:
                # a prompt is already up; the script follows it
                state = FlowState(state.current, state.queue + self._default_flow)
            _log.debug("seeded default flow (%d steps)", len(self._default_flow))
        elif state.current is None and state.queue:
            state = flow_ops.advance(state)
        return self._transition(state, running=True)

    def _transition(self, state: FlowState, *, running: bool) -> _Pending:
        pending: _Pending = []
        prev_step, was_running = self._flow.current, self._running
        self._flow = state
        self._running = running
        if state.current != prev_step:
            _log.debug("current step -> %s", state.current.id if state.current else None)
            pending.append((TutorialEvent.STEP_CHANGED, state.current))
        if running and not was_running:
            pending.append((TutorialEvent.RUN_STARTED, None))
        elif was_running and not running:
            _log.debug("run ended")
            pending.append((TutorialEvent.RUN_ENDED, None))
        self._recompute()
        return pending

    def _recompute(self) -> None:
        self._recomputes += 1
        descriptor = project(
            running=self._running,
            step=self._flow.current,
            screen=self._screen,
            anchors=self._anchors,
            enabled=self._enabled,
        )
        if descriptor != self._overlay:
            self._overlay = descriptor
            self._overlay_dirty = True

    def _seal(self, pending: _Pending) -> _Batch:
        # a batch goes stale once a later mutation has queued its own events
        if pending:
            self._generation += 1
        return self._generation, pending

    def _emit(self, batch: _Batch) -> None:
        generation, pending = batch
        for idx, (name, payload) in enumerate(pending):
            with self._lock:
                if self._generation != generation:
                    _log.debug("dropped %d superseded event(s)", len(pending) - idx)
                    break
            self._bus.publish(name, payload)
        with self._lock:
            if not self._overlay_dirty:
                return
            self._overlay_dirty = False
            descriptor = self._overlay
        self._bus.publish(TutorialEvent.OVERLAY_CHANGED, descriptor)
