"""EventBus for onboarding tour notifications.

Lightweight synchronous publish/subscribe used by the tour engine to notify
renderers (overlay widget, demo shell) of state changes.

Goals:
 - Decouple the engine from whatever draws it (no Qt dependency here)
 - Safe error isolation: one failing handler doesn't break the publish cycle
 - One-shot (once) subscriptions and unsubscribe handles
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "TourEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class TourEvent(str, Enum):  # str subclass so payload consumers can compare to plain names
    STARTED = "tour_started"
    STEP_CHANGED = "tour_step_changed"
    COMPLETED = "tour_completed"
    ENDED = "tour_ended"
    COMPLETIONS_CHANGED = "tour_completions_changed"
    HYDRATED = "tour_hydrated"


@dataclass
class Event:
    name: str  # matches TourEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | TourEvent) -> str:
    return name.value if isinstance(name, TourEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Handlers run on the publishing thread, in subscription order, against a
    snapshot of the subscriber list so a handler may subscribe or unsubscribe
    while being dispatched. Handler exceptions are captured in ``errors``.
    """

    def __init__(self) -> None:
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, Exception]] = []

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------
    def subscribe(
        self, name: str | TourEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def subscribe_all(self, handler: EventHandler) -> List[Subscription]:
        """Subscribe ``handler`` to every ``TourEvent``."""
        return [self.subscribe(evt, handler) for evt in TourEvent]

    def unsubscribe(self, sub: Subscription) -> None:
        bucket = self._subs.get(sub.event)
        sub.active = False
        if not bucket:
            return
        self._subs[sub.event] = [s for s in bucket if s is not sub]
        if not self._subs[sub.event]:
            self._subs.pop(sub.event, None)

    def clear(self) -> None:
        self._subs.clear()
        self._errors.clear()

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(self, name: str | TourEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        spent: List[Subscription] = []
        for sub in list(self._subs.get(key, ())):
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - capture any handler failure
                self._errors.append((evt, exc))
            if sub.once:
                spent.append(sub)
        for sub in spent:
            self.unsubscribe(sub)
        return evt

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def subscriber_count(self, name: str | TourEvent) -> int:
        return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, Exception]]:
        return list(self._errors)
