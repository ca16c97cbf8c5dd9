from bizops.app.config_store import OnboardingConfig
from bizops.design.builtin_tours import build_default_registry
from bizops.services.onboarding_provider import OnboardingProvider
from bizops.services.tour_completion_store import UserIdentity
from bizops.services.tour_storage import InMemoryStorage


def _provider(scheduler, storage=None, config=None):
    return OnboardingProvider(
        registry=build_default_registry(),
        storage=storage or InMemoryStorage(),
        scheduler=scheduler,
        config=config,
    )


def test_first_visit_after_sign_in_launches_page_tour(scheduler):
    p = _provider(scheduler)
    p.navigate("/dashboard")
    scheduler.advance(1000)
    assert not p.engine.is_active  # identity unknown

    p.set_identity(UserIdentity(user_id="u1", email="u1@example.com"))
    scheduler.advance(500)
    assert p.engine.active_tour_id == "dashboard-tour"
    assert p.current_page == "/dashboard"


def test_completed_tours_survive_new_provider(scheduler):
    storage = InMemoryStorage()
    first = _provider(scheduler, storage)
    first.set_identity(UserIdentity(user_id="u1"))
    first.navigate("/clients")
    scheduler.advance(500)
    first.engine.next_step()
    first.engine.next_step()

    second = _provider(scheduler, storage)
    second.set_identity(UserIdentity(user_id="u1"))
    second.navigate("/clients")
    scheduler.advance(500)
    assert not second.engine.is_active
    assert second.engine.is_tour_completed("clients-tour")


def test_config_controls_delay_and_enablement(scheduler):
    p = _provider(scheduler, config=OnboardingConfig(auto_launch_delay_ms=50))
    p.set_identity(UserIdentity(user_id="u"))
    p.navigate("/invoices")
    scheduler.advance(50)
    assert p.engine.active_tour_id == "invoices-tour"

    off = _provider(scheduler, config=OnboardingConfig(auto_launch_enabled=False))
    off.set_identity(UserIdentity(user_id="u"))
    off.navigate("/invoices")
    scheduler.advance(1000)
    assert not off.engine.is_active


def test_sign_out_cancels_pending_launch(scheduler):
    p = _provider(scheduler)
    p.set_identity(UserIdentity(user_id="u"))
    p.navigate("/bookings")
    p.set_identity(None)
    scheduler.advance(1000)
    assert not p.engine.is_active


def test_create_uses_file_storage(tmp_path, scheduler):
    p = OnboardingProvider.create(scheduler=scheduler, data_dir=tmp_path)
    p.set_identity(UserIdentity(email="owner@example.com"))
    p.engine.start_tour("settings-tour")
    p.engine.skip_tour()
    assert (tmp_path / "tour_storage.json").exists()

    again = OnboardingProvider.create(scheduler=scheduler, data_dir=tmp_path)
    again.set_identity(UserIdentity(email="owner@example.com"))
    assert again.engine.is_tour_completed("settings-tour")
