from bizops.design.onboarding_tour import (
    Placement,
    Tour,
    TourDefinitionError,
    TourRegistry,
    TourStep,
    tour_target,
)
from factories import make_registry, make_step, make_tour
import pytest


def test_register_and_retrieve_tour():
    steps = [
        TourStep(id="intro", target="body", title="Intro", description="Welcome", placement="center"),
        TourStep(id="feature", target=tour_target("feature"), title="Feature", description="Explain"),
        TourStep(id="finish", target=tour_target("done"), title="Done", description="You're set"),
    ]
    registry = TourRegistry()
    registry.register(Tour(id="onboarding_basic", name="Basic", steps=steps))

    fetched = registry.get("onboarding_basic")
    assert fetched is not None
    assert fetched.step_ids() == ["intro", "feature", "finish"]
    assert fetched.last_index == 2
    assert fetched.steps[0].placement is Placement.CENTER
    assert fetched.steps[0].is_centered


def test_unknown_tour_lookup_is_permissive():
    registry = TourRegistry()
    assert registry.get("missing") is None
    assert registry.tour_for_page("/nowhere") is None
    with pytest.raises(KeyError):
        registry.require("missing")


def test_register_duplicate_tour_id():
    t = make_tour("dup")
    registry = make_registry(t)
    with pytest.raises(TourDefinitionError):
        registry.register(t)


def test_duplicate_step_id_rejected():
    tour = Tour(id="bad", name="Bad", steps=[make_step("a"), make_step("a")])
    with pytest.raises(ValueError):
        TourRegistry().register(tour)


def test_empty_tour_rejected():
    with pytest.raises(TourDefinitionError):
        TourRegistry().register(Tour(id="empty", name="Empty", steps=[]))


def test_invalid_placement_rejected():
    with pytest.raises(ValueError):
        TourStep(id="x", target="body", title="X", description="X", placement="diagonal")


def test_page_map_requires_registered_tour():
    registry = make_registry(make_tour("t1"))
    registry.map_page("/one", "t1")
    assert registry.tour_for_page("/one") == "t1"
    with pytest.raises(TourDefinitionError):
        registry.map_page("/two", "t2")
    assert registry.page_map() == {"/one": "t1"}


def test_list_tours_returns_all_in_registration_order():
    registry = make_registry(make_tour("t1"), make_tour("t2"))
    assert [t.id for t in registry.list()] == ["t1", "t2"]
    assert len(registry) == 2
    assert "t1" in registry and "t3" not in registry


def test_steps_are_immutable_tuple():
    tour = make_tour("t", ["a", "b"])
    assert isinstance(tour.steps, tuple)
    with pytest.raises(AttributeError):
        tour.steps[0].title = "changed"  # type: ignore[misc]
