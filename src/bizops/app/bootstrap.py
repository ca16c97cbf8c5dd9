"""Application bootstrap for the BizOps shell.

Responsibilities:
 - Create (or reuse) the QApplication unless running headless
 - Load the onboarding config and build the ``OnboardingProvider``
 - Pick the scheduler: Qt timers with a Qt app, a caller-supplied one otherwise
 - Return a single context object with references

PyQt6 is imported lazily so headless callers (CLI, engine tests) never load it.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import sys
import time
from typing import Any, Optional

from bizops import settings
from bizops.app.config_store import OnboardingConfig, load_config
from bizops.services.auto_launch import QtTimerScheduler, Scheduler
from bizops.services.onboarding_provider import OnboardingProvider

__all__ = ["AppContext", "create_application", "configure_logging"]

log = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Container with references created during bootstrap.

    Attributes
    ----------
    qt_app: The underlying QApplication instance (None if headless)
    headless: Whether headless bootstrap was used
    provider: Onboarding provider for this application mount
    config: Loaded onboarding configuration
    data_dir: Directory holding persisted completions and config
    duration_s: Total elapsed seconds for bootstrap
    """

    qt_app: Optional[Any]
    headless: bool
    provider: OnboardingProvider
    config: OnboardingConfig
    data_dir: str
    duration_s: float


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_application(
    *,
    data_dir: str | None = None,
    headless: bool = False,
    scheduler: Scheduler | None = None,
    config: OnboardingConfig | None = None,
) -> AppContext:
    """Create and initialize the application context.

    Headless bootstrap requires an explicit ``scheduler`` since there is no
    Qt event loop to drive timers.
    """
    started = time.perf_counter()
    data_dir = data_dir or settings.DATA_DIR
    qt_app = None
    if not headless:
        from PyQt6.QtWidgets import QApplication  # local import to keep headless callers light

        qt_app = QApplication.instance() or QApplication(sys.argv[:1])
    if scheduler is None:
        if headless:
            raise ValueError("headless bootstrap needs an explicit scheduler")
        scheduler = QtTimerScheduler(qt_app)
    cfg = config or load_config(data_dir)
    provider = OnboardingProvider.create(scheduler=scheduler, data_dir=data_dir, config=cfg)
    duration = time.perf_counter() - started
    log.debug("Bootstrap finished in %.3fs (headless=%s)", duration, headless)
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        provider=provider,
        config=cfg,
        data_dir=data_dir,
        duration_s=duration,
    )
