"""Tour definitions and spotlight geometry (pure, Qt-free)."""

from .onboarding_tour import (  # noqa: F401
    BODY_TARGET,
    Placement,
    Tour,
    TourDefinitionError,
    TourRegistry,
    TourStep,
    tour_target,
)
from .builtin_tours import BUILTIN_TOURS, PAGE_TOUR_MAP, build_default_registry  # noqa: F401
from .spotlight import (  # noqa: F401
    Point,
    Rect,
    SpotlightLayout,
    SpotlightMetrics,
    SpotlightTracker,
    Viewport,
    center_position,
    tooltip_position,
)
