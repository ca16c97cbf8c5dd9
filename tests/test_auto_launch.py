from bizops.services.auto_launch import AutoLaunchController
from bizops.services.tour_completion_store import TourCompletionStore, UserIdentity
from bizops.services.tour_engine import TourEngine


def _controller(engine, registry, scheduler, **kw):
    return AutoLaunchController(engine, registry, scheduler, delay_ms=500, **kw)


def test_page_visit_starts_tour_after_delay(engine, registry, scheduler):
    ctl = _controller(engine, registry, scheduler)
    ctl.page_changed("/clients")
    assert ctl.pending
    scheduler.advance(499)
    assert not engine.is_active
    scheduler.advance(1)
    assert engine.active_tour_id == "clients-tour"
    assert not ctl.pending


def test_navigating_away_cancels_pending_start(engine, registry, scheduler):
    ctl = _controller(engine, registry, scheduler)
    ctl.page_changed("/clients")
    scheduler.advance(200)
    ctl.page_changed("/login")
    scheduler.advance(1000)
    assert not engine.is_active
    assert scheduler.pending_count == 0


def test_navigation_restarts_delay_for_new_page(engine, registry, scheduler):
    ctl = _controller(engine, registry, scheduler)
    ctl.page_changed("/clients")
    scheduler.advance(300)
    ctl.page_changed("/invoices")
    scheduler.advance(300)
    assert not engine.is_active
    scheduler.advance(200)
    assert engine.active_tour_id == "invoices-tour"


def test_completed_tour_is_not_relaunched(engine, registry, scheduler):
    engine.start_tour("clients-tour")
    engine.skip_tour()
    ctl = _controller(engine, registry, scheduler)
    ctl.page_changed("/clients")
    assert not ctl.pending


def test_reset_tour_retriggers_auto_launch(engine, registry, scheduler):
    engine.start_tour("clients-tour")
    engine.skip_tour()
    engine.reset_tour("clients-tour")
    ctl = _controller(engine, registry, scheduler)
    ctl.page_changed("/clients")
    scheduler.advance(500)
    assert engine.active_tour_id == "clients-tour"


def test_no_launch_while_running_or_unhydrated(registry, store, scheduler):
    engine = TourEngine(registry, store)
    ctl = _controller(engine, registry, scheduler)
    ctl.page_changed("/clients")
    assert not ctl.pending  # identity not known yet

    engine.hydrate(UserIdentity(user_id="u"))
    ctl.identity_hydrated()
    assert ctl.pending
    scheduler.advance(500)
    assert engine.active_tour_id == "clients-tour"

    ctl.page_changed("/invoices")
    assert not ctl.pending
    assert engine.active_tour_id == "clients-tour"


def test_conditions_rechecked_when_timer_fires(engine, registry, scheduler):
    ctl = _controller(engine, registry, scheduler)
    ctl.page_changed("/clients")
    engine.start_tour("settings-tour")  # manual start wins
    scheduler.advance(500)
    assert engine.active_tour_id == "settings-tour"


def test_unmapped_page_and_disabled_controller(engine, registry, scheduler):
    ctl = _controller(engine, registry, scheduler)
    ctl.page_changed("/contact")
    assert not ctl.pending
    off = _controller(engine, registry, scheduler, enabled=False)
    off.page_changed("/clients")
    assert not off.pending


def test_end_tour_reappears_on_next_visit(engine, registry, scheduler):
    ctl = _controller(engine, registry, scheduler)
    ctl.page_changed("/clients")
    scheduler.advance(500)
    engine.end_tour()
    ctl.page_changed("/dashboard")
    scheduler.advance(500)
    engine.skip_tour()
    ctl.page_changed("/clients")
    scheduler.advance(500)
    assert engine.active_tour_id == "clients-tour"


def test_other_identity_store_unaffected(registry, storage, scheduler):
    store = TourCompletionStore(storage)
    a = TourEngine(registry, store)
    a.hydrate(UserIdentity(user_id="a"))
    a.start_tour("clients-tour")
    a.skip_tour()
    b = TourEngine(registry, store)
    b.hydrate(UserIdentity(user_id="b"))
    ctl = _controller(b, registry, scheduler)
    ctl.page_changed("/clients")
    scheduler.advance(500)
    assert b.active_tour_id == "clients-tour"
