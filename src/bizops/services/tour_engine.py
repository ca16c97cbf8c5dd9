"""Onboarding tour engine.

Session-scoped state machine over two states:

    Idle
    Running(tour_id, step_index)      0 <= step_index <= last index of tour

Operations
----------
start_tour(id)   Running(id, 0) if id is registered (overwrites a running
                 tour, last call wins); unknown ids are ignored.
next_step()      advance; on the last step mark the tour completed -> Idle.
prev_step()      step back; no-op at step 0 or when Idle.
skip_tour()      mark completed -> Idle (same effect as finishing).
end_tour()       -> Idle without marking completion (tour reappears later).
reset_tour(id) / reset_all_tours()
                 drop ids from the completion set; active tour untouched.

The completion set is a set: finishing or skipping an already completed tour
leaves it unchanged. It is persisted through ``TourCompletionStore`` keyed by
the signed-in identity. ``hydrate`` loads it once per identity and only
after hydration are changes written back, so an empty in-memory set can
never clobber persisted completions.

Every change is published on the ``EventBus`` for renderers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Set

from bizops.design.onboarding_tour import Tour, TourRegistry, TourStep

from .event_bus import EventBus, TourEvent
from .tour_completion_store import TourCompletionStore, UserIdentity

__all__ = ["EngineState", "TourEngine", "STEP_CURRENT", "STEP_VISITED", "STEP_UPCOMING"]

log = logging.getLogger(__name__)

STEP_CURRENT = "current"
STEP_VISITED = "visited"
STEP_UPCOMING = "upcoming"


@dataclass(frozen=True)
class EngineState:
    active_tour_id: Optional[str]
    current_step_index: int
    completed: FrozenSet[str]

    @property
    def is_running(self) -> bool:
        return self.active_tour_id is not None


class TourEngine:
    def __init__(
        self,
        registry: TourRegistry,
        store: Optional[TourCompletionStore] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.registry = registry
        self.store = store
        self.bus = bus or EventBus()
        self._active: Optional[Tour] = None
        self._index = 0
        self._completed: Set[str] = set()
        self._identity: Optional[UserIdentity] = None
        self._initialized = False

    # ------------------------------------------------------------------
    # Hydration / identity
    # ------------------------------------------------------------------
    @property
    def is_hydrated(self) -> bool:
        return self._initialized

    @property
    def identity(self) -> Optional[UserIdentity]:
        return self._identity

    def hydrate(self, identity: Optional[UserIdentity]) -> bool:
        """Load completions for ``identity``; returns True when a load happened.

        Repeated calls for the same identity are ignored. ``None`` (or an
        identity without id and email) means signed out: completions are
        cleared from memory and any running tour ends unrecorded. Switching to a
        different identity also ends the running tour unrecorded.
        """
        if identity is None or not identity.storage_id:
            if self._active is not None:
                self.end_tour()
            was_initialized = self._initialized
            self._identity = None
            self._initialized = False
            self._completed = set()
            if was_initialized:
                self._publish(TourEvent.COMPLETIONS_CHANGED)
            return False
        if self._initialized and self._identity is not None:
            if self._identity.storage_id == identity.storage_id:
                return False
            # A tour started by the previous user must not complete under this one
            if self._active is not None:
                self.end_tour()
        self._identity = identity
        self._completed = self.store.load(identity) if self.store is not None else set()
        self._initialized = True
        log.debug(
            "Hydrated %d completed tour(s) for %s", len(self._completed), identity.storage_id
        )
        self._publish(TourEvent.HYDRATED)
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def is_active(self) -> bool:
        return self._active is not None

    @property
    def active_tour(self) -> Optional[Tour]:
        return self._active

    @property
    def active_tour_id(self) -> Optional[str]:
        return self._active.id if self._active is not None else None

    @property
    def current_step_index(self) -> int:
        return self._index

    @property
    def current_step(self) -> Optional[TourStep]:
        if self._active is None:
            return None
        return self._active.step_at(self._index)

    @property
    def is_first_step(self) -> bool:
        return self._active is not None and self._index == 0

    @property
    def is_last_step(self) -> bool:
        return self._active is not None and self._index == self._active.last_index

    @property
    def completed_tours(self) -> tuple[str, ...]:
        return tuple(sorted(self._completed))

    def is_tour_completed(self, tour_id: str) -> bool:
        return tour_id in self._completed

    def state(self) -> EngineState:
        return EngineState(
            active_tour_id=self.active_tour_id,
            current_step_index=self._index,
            completed=frozenset(self._completed),
        )

    def step_progress(self) -> List[str]:
        """Per-step status for progress indicators (empty when Idle)."""
        if self._active is None:
            return []
        out: List[str] = []
        for i in range(len(self._active.steps)):
            if i == self._index:
                out.append(STEP_CURRENT)
            elif i < self._index:
                out.append(STEP_VISITED)
            else:
                out.append(STEP_UPCOMING)
        return out

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------
    def start_tour(self, tour_id: str) -> bool:
        tour = self.registry.get(tour_id)
        if tour is None:
            log.debug("Ignoring start of unknown tour %r", tour_id)
            return False
        self._active = tour
        self._index = 0
        log.debug("Tour %s started", tour.id)
        self._publish(TourEvent.STARTED)
        return True

    def next_step(self) -> None:
        if self._active is None:
            return
        if self._index < self._active.last_index:
            self._index += 1
            self._publish(TourEvent.STEP_CHANGED)
            return
        tour_id = self._active.id
        self._go_idle()
        self._mark_completed(tour_id)
        log.info("Tour %s finished", tour_id)
        self._publish(TourEvent.COMPLETED, tour_id=tour_id, skipped=False)

    def prev_step(self) -> None:
        if self._active is None or self._index == 0:
            return
        self._index -= 1
        self._publish(TourEvent.STEP_CHANGED)

    def skip_tour(self) -> None:
        if self._active is None:
            return
        tour_id = self._active.id
        self._go_idle()
        self._mark_completed(tour_id)
        log.info("Tour %s skipped", tour_id)
        self._publish(TourEvent.COMPLETED, tour_id=tour_id, skipped=True)

    def end_tour(self) -> None:
        if self._active is None:
            return
        tour_id = self._active.id
        self._go_idle()
        log.debug("Tour %s ended without completion", tour_id)
        self._publish(TourEvent.ENDED, tour_id=tour_id)

    def reset_tour(self, tour_id: str) -> None:
        if tour_id not in self._completed:
            return
        self._completed.discard(tour_id)
        self._persist()
        self._publish(TourEvent.COMPLETIONS_CHANGED)

    def reset_all_tours(self) -> None:
        self._completed.clear()
        self._persist()
        self._publish(TourEvent.COMPLETIONS_CHANGED)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _go_idle(self) -> None:
        self._active = None
        self._index = 0

    def _mark_completed(self, tour_id: str) -> None:
        if tour_id in self._completed:
            return
        self._completed.add(tour_id)
        self._persist()
        self._publish(TourEvent.COMPLETIONS_CHANGED)

    def _persist(self) -> None:
        if not self._initialized or self._identity is None or self.store is None:
            return
        self.store.save(self._identity, self._completed)

    def _publish(self, name: TourEvent, **extra) -> None:
        payload = {
            "tour_id": self.active_tour_id,
            "step_index": self._index,
        }
        payload.update(extra)
        self.bus.publish(name, payload)
