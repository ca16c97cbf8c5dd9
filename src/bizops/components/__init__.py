"""Reusable widgets for the BizOps shell."""

from .tour_overlay import TourOverlay, WidgetTargetLocator, tag_widget  # noqa: F401

__all__ = ["TourOverlay", "WidgetTargetLocator", "tag_widget"]
