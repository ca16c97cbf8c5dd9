"""Onboarding provider: the context object handed to tour consumers.

Constructed once per application mount and passed by reference to every
widget that needs the tour engine (overlay, page shell, settings panel). It
wires the engine to the two external inputs the subsystem consumes:

 - the signed-in identity (``set_identity``), used only to namespace
   persisted completions
 - the current page identifier (``navigate``), used only to look up the
   auto-launch tour

Usage::

    provider = OnboardingProvider.create(data_dir="data", scheduler=QtTimerScheduler(window))
    provider.set_identity(UserIdentity(user_id="u-1", email="a@example.com"))
    provider.navigate("/clients")
    provider.engine.next_step()
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from bizops.app.config_store import OnboardingConfig
from bizops.design.builtin_tours import build_default_registry
from bizops.design.onboarding_tour import TourRegistry

from .auto_launch import AutoLaunchController, Scheduler
from .event_bus import EventBus
from .tour_completion_store import TourCompletionStore, UserIdentity
from .tour_engine import TourEngine
from .tour_storage import InMemoryStorage, JsonFileStorage, KeyValueStorage

__all__ = ["OnboardingProvider"]


class OnboardingProvider:
    def __init__(
        self,
        *,
        registry: TourRegistry,
        storage: KeyValueStorage,
        scheduler: Scheduler,
        config: Optional[OnboardingConfig] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.config = config or OnboardingConfig()
        self.registry = registry
        self.bus = bus or EventBus()
        self.storage = storage
        self.completion_store = TourCompletionStore(storage)
        self.engine = TourEngine(registry, self.completion_store, self.bus)
        self.auto_launch = AutoLaunchController(
            self.engine,
            registry,
            scheduler,
            delay_ms=self.config.auto_launch_delay_ms,
            enabled=self.config.auto_launch_enabled,
        )

    @classmethod
    def create(
        cls,
        *,
        scheduler: Scheduler,
        data_dir: str | Path | None = None,
        config: Optional[OnboardingConfig] = None,
        registry: Optional[TourRegistry] = None,
    ) -> "OnboardingProvider":
        """Build a provider over the built-in catalog.

        ``data_dir`` selects file-backed storage; without it completions live
        in memory for the process lifetime.
        """
        storage: KeyValueStorage
        if data_dir is not None:
            storage = JsonFileStorage(data_dir)
        else:
            storage = InMemoryStorage()
        return cls(
            registry=registry or build_default_registry(),
            storage=storage,
            scheduler=scheduler,
            config=config,
        )

    # External inputs ----------------------------------------------------
    def set_identity(self, identity: Optional[UserIdentity]) -> None:
        if self.engine.hydrate(identity):
            self.auto_launch.identity_hydrated()
        elif not self.engine.is_hydrated:
            self.auto_launch.cancel()

    def navigate(self, page_id: Optional[str]) -> None:
        self.auto_launch.page_changed(page_id)

    @property
    def current_page(self) -> Optional[str]:
        return self.auto_launch.page_id

    def shutdown(self) -> None:
        self.auto_launch.cancel()
