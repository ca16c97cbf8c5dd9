"""Onboarding tour definitions and registry.

Provides a registry-based definition model for page-scoped onboarding tours.
A tour is an ordered walkthrough: step order *is* the navigation order. Each
step names a target locator (``[data-tour="marker"]`` or ``body``), display
copy and a placement hint consumed by the spotlight geometry.

The registry also carries the page -> tour association used by auto-launch.
A page absent from the map never auto-launches a tour.

Everything here is immutable once registered and free of Qt imports so it
can be exercised headless.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

__all__ = [
    "Placement",
    "TourStep",
    "Tour",
    "TourRegistry",
    "TourDefinitionError",
    "BODY_TARGET",
    "tour_target",
]

BODY_TARGET = "body"


class TourDefinitionError(ValueError):
    """Raised when a tour or page mapping is malformed at registration time."""


class Placement(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


def tour_target(marker: str) -> str:
    """Return the canonical locator for a widget tagged with ``marker``."""
    return f'[data-tour="{marker}"]'


@dataclass(frozen=True)
class TourStep:
    id: str
    target: str
    title: str
    description: str
    placement: Placement = Placement.BOTTOM

    def __post_init__(self) -> None:
        # Accept plain strings ("left") for convenience in catalog definitions
        if not isinstance(self.placement, Placement):
            object.__setattr__(self, "placement", Placement(self.placement))

    @property
    def is_centered(self) -> bool:
        return self.placement is Placement.CENTER


@dataclass(frozen=True)
class Tour:
    id: str
    name: str
    steps: Tuple[TourStep, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))

    def step_ids(self) -> List[str]:  # convenience
        return [s.id for s in self.steps]

    @property
    def last_index(self) -> int:
        return len(self.steps) - 1

    def step_at(self, index: int) -> TourStep:
        return self.steps[index]


class TourRegistry:
    """Catalog of tours by id plus the page -> tour auto-launch map.

    Populated at build time; read-only afterwards by convention. Lookups used
    at runtime (``get`` / ``tour_for_page``) are permissive and return None.
    """

    def __init__(self) -> None:
        self._tours: Dict[str, Tour] = {}
        self._pages: Dict[str, str] = {}

    def register(self, tour: Tour) -> None:
        if tour.id in self._tours:
            raise TourDefinitionError(f"Tour already registered: {tour.id}")
        if not tour.steps:
            raise TourDefinitionError(f"Tour {tour.id} has no steps")
        ids = set()
        for step in tour.steps:
            if step.id in ids:
                raise TourDefinitionError(f"Duplicate step id {step.id} in tour {tour.id}")
            ids.add(step.id)
        self._tours[tour.id] = tour

    def map_page(self, page_id: str, tour_id: str) -> None:
        if tour_id not in self._tours:
            raise TourDefinitionError(f"Cannot map page {page_id} to unknown tour {tour_id}")
        self._pages[page_id] = tour_id

    def get(self, tour_id: str) -> Optional[Tour]:
        return self._tours.get(tour_id)

    def require(self, tour_id: str) -> Tour:
        return self._tours[tour_id]

    def list(self) -> List[Tour]:
        return list(self._tours.values())

    def tour_for_page(self, page_id: str) -> Optional[str]:
        return self._pages.get(page_id)

    def page_map(self) -> Dict[str, str]:
        return dict(self._pages)

    def __contains__(self, tour_id: object) -> bool:
        return tour_id in self._tours

    def __len__(self) -> int:
        return len(self._tours)

    def __iter__(self) -> Iterator[Tour]:
        return iter(list(self._tours.values()))
