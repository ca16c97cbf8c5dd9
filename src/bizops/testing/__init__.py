"""Testing utilities for headless verification of the tour subsystem.

This subpackage intentionally avoids importing PyQt so engine and geometry
tests run without a display.
"""

from __future__ import annotations

__all__ = ["ManualScheduler", "StaticLocator"]

from .fakes import ManualScheduler, StaticLocator
