# Shared fixtures for the onboarding tests. Qt widgets run on the offscreen
# platform so the suite works without a display; pytest-qt supplies `qtbot`.

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402

from bizops.design.builtin_tours import build_default_registry  # noqa: E402
from bizops.services.event_bus import EventBus  # noqa: E402
from bizops.services.tour_completion_store import TourCompletionStore, UserIdentity  # noqa: E402
from bizops.services.tour_engine import TourEngine  # noqa: E402
from bizops.services.tour_storage import InMemoryStorage  # noqa: E402
from bizops.testing import ManualScheduler  # noqa: E402


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def store(storage):
    return TourCompletionStore(storage)


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def alice():
    return UserIdentity(user_id="user-a", email="alice@example.com")


@pytest.fixture
def engine(registry, store, bus, alice):
    eng = TourEngine(registry, store, bus)
    eng.hydrate(alice)
    return eng


@pytest.fixture
def scheduler():
    return ManualScheduler()
