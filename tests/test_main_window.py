from bizops.components.tour_overlay import WidgetTargetLocator
from bizops.main_window import PAGES, MainWindow
from bizops.services.onboarding_provider import OnboardingProvider
from bizops.services.tour_completion_store import UserIdentity
from bizops.testing import ManualScheduler


def _window(qtbot):
    scheduler = ManualScheduler()
    provider = OnboardingProvider.create(scheduler=scheduler)
    win = MainWindow(provider)
    qtbot.addWidget(win)
    provider.set_identity(UserIdentity(user_id="demo"))
    return win, provider, scheduler


def test_every_builtin_target_exists_in_shell(qtbot):
    win, provider, _ = _window(qtbot)
    locator = WidgetTargetLocator(win.centralWidget())
    for tour in provider.registry.list():
        for step in tour.steps:
            assert locator.resolve(step.target) is not None, step.target


def test_page_switch_auto_launches_tour(qtbot):
    win, provider, scheduler = _window(qtbot)
    win.show_page("/clients")
    assert win.current_page == "/clients"
    scheduler.advance(500)
    assert provider.engine.active_tour_id == "clients-tour"
    layout = win.overlay.current_layout()
    assert layout is not None
    assert layout.highlight is not None


def test_switching_before_delay_cancels(qtbot):
    win, provider, scheduler = _window(qtbot)
    win.show_page("/clients")
    scheduler.advance(100)
    win.show_page("/settings")
    scheduler.advance(500)
    assert provider.engine.active_tour_id == "settings-tour"


def test_sidebar_buttons_cover_all_pages(qtbot):
    win, _provider, _ = _window(qtbot)
    assert list(win.page_buttons) == [p for p, _ in PAGES]
