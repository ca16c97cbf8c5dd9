"""BizOps onboarding public API.

Curated, intentionally small surface for callers (launcher, CLI, tests) that
want the tour subsystem without depending on deep module paths. Nothing here
imports PyQt; widgets live in ``bizops.components`` and ``bizops.main_window``.
"""

from __future__ import annotations

from .design.onboarding_tour import Placement, Tour, TourRegistry, TourStep  # noqa: F401
from .design.builtin_tours import build_default_registry  # noqa: F401
from .services.event_bus import EventBus, TourEvent  # noqa: F401
from .services.tour_completion_store import TourCompletionStore, UserIdentity  # noqa: F401
from .services.tour_engine import TourEngine  # noqa: F401
from .services.onboarding_provider import OnboardingProvider  # noqa: F401

__all__ = [
    "Placement",
    "Tour",
    "TourRegistry",
    "TourStep",
    "build_default_registry",
    "EventBus",
    "TourEvent",
    "TourCompletionStore",
    "UserIdentity",
    "TourEngine",
    "OnboardingProvider",
]
