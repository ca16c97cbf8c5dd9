from __future__ import annotations

from typing import Sequence

from bizops.design.onboarding_tour import Placement, Tour, TourRegistry, TourStep, tour_target


def make_step(
    step_id: str, marker: str | None = None, placement: Placement | str = Placement.BOTTOM
) -> TourStep:
    return TourStep(
        id=step_id,
        target=tour_target(marker or step_id),
        title=step_id.title(),
        description=f"About {step_id}",
        placement=placement,
    )


def make_tour(tour_id: str, step_ids: Sequence[str] = ("one", "two")) -> Tour:
    return Tour(id=tour_id, name=tour_id.title(), steps=[make_step(s) for s in step_ids])


def make_registry(*tours: Tour, pages: dict[str, str] | None = None) -> TourRegistry:
    registry = TourRegistry()
    for tour in tours:
        registry.register(tour)
    for page_id, tour_id in (pages or {}).items():
        registry.map_page(page_id, tour_id)
    return registry


__all__ = ["make_step", "make_tour", "make_registry"]
