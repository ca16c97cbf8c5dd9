"""Built-in tour catalog for the BizOps dashboard pages.

One tour per app page. Targets refer to ``tour`` markers placed on widgets in
``bizops.main_window``; changing a marker there means changing it here too.
"""

from __future__ import annotations

from typing import Dict, Tuple

from .onboarding_tour import BODY_TARGET, Placement, Tour, TourRegistry, TourStep, tour_target

__all__ = ["BUILTIN_TOURS", "PAGE_TOUR_MAP", "build_default_registry"]


DASHBOARD_TOUR = Tour(
    id="dashboard-tour",
    name="Dashboard Tour",
    steps=(
        TourStep(
            id="welcome",
            target=BODY_TARGET,
            title="Welcome to BizOps!",
            description=(
                "Your all-in-one solution for managing your service business. "
                "Let's take a quick tour."
            ),
            placement=Placement.CENTER,
        ),
        TourStep(
            id="sidebar",
            target=tour_target("sidebar"),
            title="Navigation Hub",
            description="Access all your modules from here: Clients, Services, Bookings, and Invoices.",
            placement=Placement.RIGHT,
        ),
        TourStep(
            id="metrics",
            target=tour_target("dashboard-metrics"),
            title="Quick Insights",
            description="Track your key business metrics at a glance - Clients, Revenue, and more.",
            placement=Placement.BOTTOM,
        ),
        TourStep(
            id="bookings",
            target=tour_target("upcoming-bookings"),
            title="Today's Agenda",
            description="Keep track of your upcoming appointments and schedule.",
            placement=Placement.TOP,
        ),
    ),
)

CLIENTS_TOUR = Tour(
    id="clients-tour",
    name="Clients Tour",
    steps=(
        TourStep(
            id="add-client",
            target=tour_target("add-client-btn"),
            title="Add Your First Client",
            description="Click here to start building your client database.",
            placement=Placement.LEFT,
        ),
        TourStep(
            id="clients-table",
            target=tour_target("clients-table"),
            title="Client Management",
            description="View details, contact info, and history for all your clients here.",
            placement=Placement.TOP,
        ),
    ),
)

INVOICES_TOUR = Tour(
    id="invoices-tour",
    name="Invoices Tour",
    steps=(
        TourStep(
            id="create-invoice",
            target=tour_target("create-invoice-btn"),
            title="Get Paid Faster",
            description="Create professional invoices for your services in seconds.",
            placement=Placement.LEFT,
        ),
        TourStep(
            id="invoices-table",
            target=tour_target("invoices-table"),
            title="Payment Tracking",
            description="Monitor paid and unpaid invoices to keep your cash flow healthy.",
            placement=Placement.TOP,
        ),
    ),
)

BOOKINGS_TOUR = Tour(
    id="bookings-tour",
    name="Bookings Tour",
    steps=(
        TourStep(
            id="new-booking",
            target=tour_target("new-booking-btn"),
            title="Schedule Appointments",
            description="Easily book new appointments for your clients.",
            placement=Placement.LEFT,
        ),
        TourStep(
            id="bookings-table",
            target=tour_target("bookings-table"),
            title="Calendar Management",
            description="View and manage all your scheduled services in one place.",
            placement=Placement.TOP,
        ),
    ),
)

SERVICES_TOUR = Tour(
    id="services-tour",
    name="Services Tour",
    steps=(
        TourStep(
            id="add-service",
            target=tour_target("add-service-btn"),
            title="Define Your Offerings",
            description="Create and manage the services you offer to clients.",
            placement=Placement.LEFT,
        ),
        TourStep(
            id="services-grid",
            target=tour_target("services-grid"),
            title="Service Catalog",
            description="View your service menu, prices, and durations at a glance.",
            placement=Placement.TOP,
        ),
    ),
)

SETTINGS_TOUR = Tour(
    id="settings-tour",
    name="Settings Tour",
    steps=(
        TourStep(
            id="business-info",
            target=tour_target("business-info"),
            title="Business Profile",
            description="Keep your business contact details up to date.",
            placement=Placement.TOP,
        ),
        TourStep(
            id="security",
            target=tour_target("security-settings"),
            title="Account Security",
            description="Manage your password and account security settings here.",
            placement=Placement.TOP,
        ),
    ),
)

BUILTIN_TOURS: Tuple[Tour, ...] = (
    DASHBOARD_TOUR,
    CLIENTS_TOUR,
    INVOICES_TOUR,
    BOOKINGS_TOUR,
    SERVICES_TOUR,
    SETTINGS_TOUR,
)

PAGE_TOUR_MAP: Dict[str, str] = {
    "/dashboard": "dashboard-tour",
    "/clients": "clients-tour",
    "/invoices": "invoices-tour",
    "/bookings": "bookings-tour",
    "/services": "services-tour",
    "/settings": "settings-tour",
}


def build_default_registry() -> TourRegistry:
    """Return a fresh registry holding the built-in tours and page map."""
    registry = TourRegistry()
    for tour in BUILTIN_TOURS:
        registry.register(tour)
    for page_id, tour_id in PAGE_TOUR_MAP.items():
        registry.map_page(page_id, tour_id)
    return registry
