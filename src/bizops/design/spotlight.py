"""Spotlight geometry for onboarding tours.

Pure functions that turn the current tour step plus live layout into overlay
geometry: the highlighted cutout around the step target and the tooltip
anchor. The page is abstracted behind a ``TargetLocator`` so geometry can be
computed from synthetic rectangles in tests.

Coordinates
-----------
Locators report rectangles relative to the viewport. Results are expressed in
document coordinates (viewport rect shifted by the scroll offset).

Placement rules (W/H = tooltip size, p = tooltip padding):
  top     tooltip above the target, horizontally centered
  bottom  tooltip below the target, horizontally centered
  left    tooltip left of the target, vertically centered
  right   tooltip right of the target, vertically centered
  center  tooltip centered in the viewport, no highlight

Clamping: ``left`` is clamped into ``[p, viewport.width - W - p]`` and
``top`` is kept ``>= p``. There is no bottom clamp, so a tooltip may extend
past the lower viewport edge on short windows.

A step whose target cannot be located yields no highlight; the tooltip keeps
the last successfully computed position (``SpotlightTracker``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from bizops import settings

from .onboarding_tour import Placement, TourStep

__all__ = [
    "Rect",
    "Point",
    "Viewport",
    "SpotlightMetrics",
    "SpotlightLayout",
    "TargetLocator",
    "tooltip_position",
    "center_position",
    "SpotlightTracker",
]


@dataclass(frozen=True)
class Rect:
    top: float
    left: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def right(self) -> float:
        return self.left + self.width

    def inflate(self, amount: float) -> "Rect":
        return Rect(
            top=self.top - amount,
            left=self.left - amount,
            width=self.width + 2 * amount,
            height=self.height + 2 * amount,
        )

    def translated(self, dx: float, dy: float) -> "Rect":
        return Rect(top=self.top + dy, left=self.left + dx, width=self.width, height=self.height)


@dataclass(frozen=True)
class Point:
    top: float
    left: float


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float
    scroll_x: float = 0.0
    scroll_y: float = 0.0


@dataclass(frozen=True)
class SpotlightMetrics:
    highlight_padding: float = settings.HIGHLIGHT_PADDING
    tooltip_padding: float = settings.TOOLTIP_PADDING
    tooltip_width: float = settings.TOOLTIP_WIDTH
    tooltip_height: float = settings.TOOLTIP_HEIGHT


@dataclass(frozen=True)
class SpotlightLayout:
    """Geometry for one render pass.

    highlight: cutout region (target inflated by highlight padding) or None.
    target: located target rect in document coordinates or None.
    tooltip: tooltip top-left position.
    centered: True when the step uses center placement.
    """

    highlight: Optional[Rect]
    target: Optional[Rect]
    tooltip: Point
    centered: bool = False


class TargetLocator(Protocol):
    def locate(self, selector: str) -> Optional[Rect]: ...  # pragma: no cover - structural


def center_position(viewport: Viewport, metrics: SpotlightMetrics = SpotlightMetrics()) -> Point:
    return Point(
        top=(viewport.height - metrics.tooltip_height) / 2,
        left=(viewport.width - metrics.tooltip_width) / 2,
    )


def tooltip_position(
    target: Rect,
    placement: Placement,
    viewport: Viewport,
    metrics: SpotlightMetrics = SpotlightMetrics(),
) -> Point:
    """Tooltip top-left for ``target`` (document coordinates) and ``placement``.

    Center placement ignores the target entirely.
    """
    if placement is Placement.CENTER:
        return center_position(viewport, metrics)
    w = metrics.tooltip_width
    h = metrics.tooltip_height
    p = metrics.tooltip_padding
    if placement is Placement.TOP:
        top = target.top - h - p
        left = target.left + target.width / 2 - w / 2
    elif placement is Placement.BOTTOM:
        top = target.bottom + p
        left = target.left + target.width / 2 - w / 2
    elif placement is Placement.LEFT:
        top = target.top + target.height / 2 - h / 2
        left = target.left - w - p
    else:  # right
        top = target.top + target.height / 2 - h / 2
        left = target.right + p
    # Keep tooltip within the viewport horizontally; lower bound wins when narrow
    left = max(p, min(left, viewport.width - w - p))
    top = max(p, top)
    return Point(top=top, left=left)


class SpotlightTracker:
    """Recomputes spotlight geometry on demand.

    Each ``update`` call re-runs the full locate-and-measure pass; the only
    state carried between calls is the last anchored tooltip position, reused
    when a target cannot be found.
    """

    def __init__(
        self,
        locator: TargetLocator,
        metrics: SpotlightMetrics = SpotlightMetrics(),
    ) -> None:
        self._locator = locator
        self.metrics = metrics
        self._last_tooltip = Point(top=0, left=0)

    @property
    def last_tooltip(self) -> Point:
        return self._last_tooltip

    def update(self, step: TourStep, viewport: Viewport) -> SpotlightLayout:
        if step.placement is Placement.CENTER:
            return SpotlightLayout(
                highlight=None,
                target=None,
                tooltip=center_position(viewport, self.metrics),
                centered=True,
            )
        located = self._locator.locate(step.target)
        if located is None:
            return SpotlightLayout(highlight=None, target=None, tooltip=self._last_tooltip)
        target = located.translated(viewport.scroll_x, viewport.scroll_y)
        tooltip = tooltip_position(target, step.placement, viewport, self.metrics)
        self._last_tooltip = tooltip
        return SpotlightLayout(
            highlight=target.inflate(self.metrics.highlight_padding),
            target=target,
            tooltip=tooltip,
        )
