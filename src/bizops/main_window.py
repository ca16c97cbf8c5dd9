"""BizOps demo shell.

A minimal dashboard window hosting the six app pages with the widgets the
built-in tours point at. Business data is static placeholder content; the
window exists to give the tour overlay real targets and to feed page changes
into the onboarding provider.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from PyQt6.QtWidgets import (
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from bizops.components.tour_overlay import TourOverlay, tag_widget
from bizops.services.onboarding_provider import OnboardingProvider

__all__ = ["MainWindow", "PAGES"]

# (page id, sidebar label)
PAGES: List[Tuple[str, str]] = [
    ("/dashboard", "Dashboard"),
    ("/clients", "Clients"),
    ("/services", "Services"),
    ("/bookings", "Bookings"),
    ("/invoices", "Invoices"),
    ("/settings", "Settings"),
]


def _table(marker: str, headers: List[str], rows: List[List[str]]) -> QTableWidget:
    table = QTableWidget(len(rows), len(headers))
    table.setHorizontalHeaderLabels(headers)
    for r, row in enumerate(rows):
        for c, value in enumerate(row):
            table.setItem(r, c, QTableWidgetItem(value))
    tag_widget(table, marker)
    return table


def _list_page(title: str, button_text: str, button_marker: str, table: QWidget) -> QWidget:
    page = QWidget()
    col = QVBoxLayout(page)
    header = QHBoxLayout()
    header.addWidget(QLabel(f"<h2>{title}</h2>"), 1)
    header.addWidget(tag_widget(QPushButton(button_text), button_marker))
    col.addLayout(header)
    col.addWidget(table, 1)
    return page


def _dashboard_page() -> QWidget:
    page = QWidget()
    col = QVBoxLayout(page)
    col.addWidget(QLabel("<h2>Dashboard</h2>"))
    metrics = tag_widget(QFrame(), "dashboard-metrics")
    row = QHBoxLayout(metrics)
    for label, value in (("Clients", "0"), ("Revenue", "$0.00"), ("Bookings", "0"), ("Unpaid", "0")):
        row.addWidget(QLabel(f"<b>{value}</b><br>{label}"))
    col.addWidget(metrics)
    col.addWidget(
        _table("upcoming-bookings", ["Client", "Service", "When"], [["-", "-", "-"]]), 1
    )
    return page


def _services_page() -> QWidget:
    page = QWidget()
    col = QVBoxLayout(page)
    header = QHBoxLayout()
    header.addWidget(QLabel("<h2>Services</h2>"), 1)
    header.addWidget(tag_widget(QPushButton("Add Service"), "add-service-btn"))
    col.addLayout(header)
    grid_host = tag_widget(QFrame(), "services-grid")
    grid = QGridLayout(grid_host)
    for i, (name, price) in enumerate((("Standard Clean", "$120"), ("Deep Clean", "$240"))):
        grid.addWidget(QLabel(f"<b>{name}</b><br>{price}"), i // 2, i % 2)
    col.addWidget(grid_host, 1)
    return page


def _settings_page() -> QWidget:
    page = QWidget()
    col = QVBoxLayout(page)
    col.addWidget(QLabel("<h2>Settings</h2>"))
    business = tag_widget(QFrame(), "business-info")
    QVBoxLayout(business).addWidget(QLabel("Business name, email, phone, address"))
    security = tag_widget(QFrame(), "security-settings")
    QVBoxLayout(security).addWidget(QPushButton("Change password"))
    col.addWidget(business)
    col.addWidget(security)
    col.addStretch(1)
    return page


class MainWindow(QMainWindow):
    def __init__(self, provider: OnboardingProvider, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("BizOps")
        self.resize(1200, 800)
        self.provider = provider

        root = QWidget()
        self.setCentralWidget(root)
        body = QHBoxLayout(root)
        body.setContentsMargins(0, 0, 0, 0)

        sidebar = tag_widget(QFrame(), "sidebar")
        sidebar.setFixedWidth(200)
        nav = QVBoxLayout(sidebar)
        self.stack = QStackedWidget()
        self.page_buttons: Dict[str, QPushButton] = {}
        self._page_index: Dict[str, int] = {}
        for page_id, label in PAGES:
            btn = QPushButton(label)
            btn.clicked.connect(lambda _checked=False, p=page_id: self.show_page(p))
            nav.addWidget(btn)
            self.page_buttons[page_id] = btn
            self._page_index[page_id] = self.stack.addWidget(self._build_page(page_id))
        nav.addStretch(1)
        body.addWidget(sidebar)
        body.addWidget(self.stack, 1)

        self.overlay = TourOverlay(provider, root)

    def _build_page(self, page_id: str) -> QWidget:
        if page_id == "/dashboard":
            return _dashboard_page()
        if page_id == "/clients":
            return _list_page(
                "Clients",
                "Add Client",
                "add-client-btn",
                _table("clients-table", ["Name", "Email", "Phone"], []),
            )
        if page_id == "/invoices":
            return _list_page(
                "Invoices",
                "Create Invoice",
                "create-invoice-btn",
                _table("invoices-table", ["Number", "Client", "Total", "Status"], []),
            )
        if page_id == "/bookings":
            return _list_page(
                "Bookings",
                "New Booking",
                "new-booking-btn",
                _table("bookings-table", ["Client", "Service", "Date", "Status"], []),
            )
        if page_id == "/services":
            return _services_page()
        return _settings_page()

    @property
    def current_page(self) -> Optional[str]:
        return self.provider.current_page

    def show_page(self, page_id: str) -> None:
        self.stack.setCurrentIndex(self._page_index[page_id])
        self.provider.navigate(page_id)

    def closeEvent(self, event):  # type: ignore[override]
        self.provider.shutdown()
        self.overlay.detach()
        super().closeEvent(event)
