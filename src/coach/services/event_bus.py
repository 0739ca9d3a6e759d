"""EventBus core.

Lightweight synchronous publish/subscribe used between the tutorial engine,
the settings service and the renderer.

Goals:
 - Decouple the engine from whatever paints the overlay (no Qt dependency)
 - Error isolation: one failing handler doesn't break the publish cycle
 - One-shot (once) subscriptions and cancellable handles
 - Small ring buffer of recent events for diagnostics / the CLI
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Deque, Dict, List, Protocol

__all__ = [
    "TutorialEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
    "TraceEntry",
]


class TutorialEvent(str, Enum):
    OVERLAY_CHANGED = "overlay_changed"
    STEP_CHANGED = "step_changed"
    RUN_STARTED = "run_started"
    RUN_ENDED = "run_ended"
    SETTINGS_CHANGED = "settings_changed"


@dataclass
class Event:
    name: str  # matches TutorialEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


@dataclass(frozen=True)
class TraceEntry:
    name: str
    timestamp: float
    summary: str


def _key(name: str | TutorialEvent) -> str:
    return name.value if isinstance(name, TutorialEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Subscriber lists are guarded by a re-entrant lock, but handlers run with
    the lock released (snapshot first) so a handler may publish, subscribe or
    call back into the engine without deadlocking.
    """

    DEFAULT_TRACE_CAPACITY = 50

    def __init__(self, trace_capacity: int = DEFAULT_TRACE_CAPACITY) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []
        self._traces: Deque[TraceEntry] = deque(maxlen=trace_capacity)

    # Subscription management -----------------------------------------
    def subscribe(
        self, name: str | TutorialEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                bucket[:] = [s for s in bucket if s is not sub]
                if not bucket:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()
            self._traces.clear()

    # Publishing ------------------------------------------------------
    def publish(self, name: str | TutorialEvent, payload: Any = None) -> Event:
        evt = Event(name=_key(name), payload=payload, timestamp=perf_counter())
        text = "-" if payload is None else str(payload)
        summary = text if len(text) <= 60 else text[:57] + "..."
        with self._lock:
            subs = list(self._subs.get(evt.name, ()))
            self._traces.append(TraceEntry(evt.name, evt.timestamp, summary))
        spent: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            if sub.once:
                # deactivate before dispatch so a re-entrant publish skips it
                sub.active = False
                spent.append(sub)
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                with self._lock:
                    self._errors.append((evt, exc))
        for sub in spent:
            self.unsubscribe(sub)
        return evt

    # Introspection ---------------------------------------------------
    def subscriber_count(self, name: str | TutorialEvent) -> int:
        with self._lock:
            return len([s for s in self._subs.get(_key(name), ()) if s.active])

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)

    def recent_traces(self) -> list[TraceEntry]:
        with self._lock:
            return list(self._traces)
