"""Auto-launch of page tours.

On every page change, if the engine is hydrated and Idle and the page maps to
a tour the user has not completed, ``start_tour`` is scheduled after a short
delay so the page widgets can finish mounting before the spotlight tries to
locate them. Navigating away before the delay elapses cancels the pending
start; conditions are checked again when the timer fires.

Scheduling goes through a small ``Scheduler`` protocol. ``QtTimerScheduler``
backs it with single-shot ``QTimer`` objects; tests use
``bizops.testing.ManualScheduler``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol

from bizops import settings
from bizops.design.onboarding_tour import TourRegistry

from .tour_engine import TourEngine

__all__ = ["ScheduledCall", "Scheduler", "QtTimerScheduler", "AutoLaunchController"]

log = logging.getLogger(__name__)


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...  # pragma: no cover - structural


class Scheduler(Protocol):
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall: ...  # pragma: no cover


class _QtCall:
    def __init__(self, timer: Any) -> None:
        self._timer = timer

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer.deleteLater()
            self._timer = None


class QtTimerScheduler:
    """Scheduler backed by single-shot QTimers (requires a running Qt app)."""

    def __init__(self, parent: Any = None) -> None:
        self._parent = parent

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        from PyQt6.QtCore import QTimer  # local import keeps the engine layer headless

        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.timeout.connect(callback)
        timer.start(max(0, int(delay_ms)))
        return _QtCall(timer)


class AutoLaunchController:
    def __init__(
        self,
        engine: TourEngine,
        registry: TourRegistry,
        scheduler: Scheduler,
        *,
        delay_ms: int = settings.AUTO_LAUNCH_DELAY_MS,
        enabled: bool = True,
    ) -> None:
        self.engine = engine
        self.registry = registry
        self.scheduler = scheduler
        self.delay_ms = delay_ms
        self.enabled = enabled
        self._page_id: Optional[str] = None
        self._pending: Optional[ScheduledCall] = None

    @property
    def page_id(self) -> Optional[str]:
        return self._page_id

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def page_changed(self, page_id: Optional[str]) -> None:
        self.cancel()
        self._page_id = page_id
        self._evaluate()

    def identity_hydrated(self) -> None:
        """Re-check the current page once completions are known."""
        self.cancel()
        self._evaluate()

    # Internal ---------------------------------------------------------
    def _eligible_tour(self) -> Optional[str]:
        if not self.enabled or self._page_id is None:
            return None
        if not self.engine.is_hydrated or self.engine.is_active:
            return None
        tour_id = self.registry.tour_for_page(self._page_id)
        if tour_id is None or self.engine.is_tour_completed(tour_id):
            return None
        return tour_id

    def _evaluate(self) -> None:
        tour_id = self._eligible_tour()
        if tour_id is None:
            return
        log.debug("Scheduling tour %s for page %s in %d ms", tour_id, self._page_id, self.delay_ms)
        self._pending = self.scheduler.schedule(self.delay_ms, self._fire)

    def _fire(self) -> None:
        self._pending = None
        tour_id = self._eligible_tour()
        if tour_id is not None:
            self.engine.start_tour(tour_id)
