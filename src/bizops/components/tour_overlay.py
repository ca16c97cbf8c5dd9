"""Spotlight tour overlay widget.

Transparent widget stretched over a host window that renders the active tour
step of an ``OnboardingProvider``:

* Dims the window (black, 60% alpha) except for a rounded cutout around the
  step target, outlined by an accent ring.
* Shows a tooltip card with title, description, progress dots and
  Back / Next (Finish on the last step) / close controls.
* Clicking the dimmed backdrop or the close button skips the tour; keys are
  routed through ``bizops.services.tour_keys.dispatch_key``.

Geometry comes from ``SpotlightTracker``. It is recomputed on every tour
event, host resize and scroll of any scroll area inside the host; each pass
locates the target afresh. Targets are resolved by ``WidgetTargetLocator``
against widgets carrying a ``tour`` dynamic property.

The overlay owns no tour state; it reads the engine and calls its controls.
"""

from __future__ import annotations

import re
from typing import List, Optional

from PyQt6.QtCore import QEvent, QObject, QPoint, QRectF, Qt
from PyQt6.QtGui import QColor, QPainter, QPainterPath, QPen
from PyQt6.QtWidgets import (
    QAbstractScrollArea,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollBar,
    QVBoxLayout,
    QWidget,
)

from bizops.design.onboarding_tour import BODY_TARGET
from bizops.design.spotlight import Rect, SpotlightLayout, SpotlightTracker, TargetLocator, Viewport
from bizops.services.event_bus import Event, Subscription
from bizops.services.onboarding_provider import OnboardingProvider
from bizops.services.tour_engine import STEP_CURRENT, STEP_VISITED, TourEngine
from bizops.services.tour_keys import TourKeyBindings, dispatch_key

__all__ = ["TOUR_PROPERTY", "WidgetTargetLocator", "TourOverlay", "qt_key_name", "tag_widget"]

TOUR_PROPERTY = "tour"

_SELECTOR_RE = re.compile(r'^\[data-tour=["\']?([^"\'\]]+)["\']?\]$')

_DIM_COLOR = QColor(0, 0, 0, 153)
_RING_COLOR = QColor("#3b82f6")
_DOT_COLORS = {
    STEP_CURRENT: QColor("#2563eb"),
    STEP_VISITED: QColor("#93c5fd"),
}
_DOT_UPCOMING = QColor("#e5e7eb")
_CUTOUT_RADIUS = 8.0
# Marker set on scroll bars already connected to an overlay
_SCROLL_HOOK_PROPERTY = "tourOverlayHooked"

_KEY_NAMES = {
    Qt.Key.Key_Escape.value: "Escape",
    Qt.Key.Key_Right.value: "ArrowRight",
    Qt.Key.Key_Left.value: "ArrowLeft",
    Qt.Key.Key_Return.value: "Enter",
    Qt.Key.Key_Enter.value: "Enter",
}


def qt_key_name(key) -> Optional[str]:
    """Translate a Qt key code (int or ``Qt.Key``) into a tour key name."""
    return _KEY_NAMES.get(int(getattr(key, "value", key)))


def tag_widget(widget: QWidget, marker: str) -> QWidget:
    """Attach a tour marker so ``[data-tour="marker"]`` resolves to ``widget``."""
    widget.setProperty(TOUR_PROPERTY, marker)
    return widget


class WidgetTargetLocator:
    """Resolve tour selectors against the widget tree under ``root``.

    ``[data-tour="x"]`` matches the first descendant whose ``tour`` property
    (or, failing that, object name) equals ``x``; ``body`` is the root itself.
    Widgets hidden relative to the root (e.g. inactive stacked pages) do not
    resolve. Rectangles are in root coordinates.
    """

    def __init__(self, root: QWidget) -> None:
        self._root = root

    def resolve(self, selector: str) -> Optional[QWidget]:
        if selector == BODY_TARGET:
            return self._root
        match = _SELECTOR_RE.match(selector.strip())
        marker = match.group(1) if match else selector.strip()
        fallback: Optional[QWidget] = None
        for w in self._root.findChildren(QWidget):
            if w.property(TOUR_PROPERTY) == marker:
                return w
            if fallback is None and w.objectName() == marker:
                fallback = w
        return fallback

    def locate(self, selector: str) -> Optional[Rect]:
        widget = self.resolve(selector)
        if widget is None:
            return None
        if widget is self._root:
            return Rect(top=0, left=0, width=widget.width(), height=widget.height())
        if not widget.isVisibleTo(self._root):
            return None
        origin = widget.mapTo(self._root, QPoint(0, 0))
        return Rect(top=origin.y(), left=origin.x(), width=widget.width(), height=widget.height())


class _ProgressDots(QWidget):
    DOT = 8
    GAP = 6

    def __init__(self, engine: TourEngine, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self.setFixedHeight(self.DOT)

    def states(self) -> List[str]:
        return self._engine.step_progress()

    def paintEvent(self, event):  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.setPen(Qt.PenStyle.NoPen)
        for i, state in enumerate(self.states()):
            painter.setBrush(_DOT_COLORS.get(state, _DOT_UPCOMING))
            painter.drawEllipse(i * (self.DOT + self.GAP), 0, self.DOT, self.DOT)


class TourOverlay(QWidget):
    def __init__(
        self,
        provider: OnboardingProvider,
        host: QWidget,
        *,
        locator: Optional[TargetLocator] = None,
        key_bindings: Optional[TourKeyBindings] = None,
    ) -> None:
        super().__init__(host)
        self.setObjectName("TourOverlay")
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self._provider = provider
        self._engine = provider.engine
        self._host = host
        self._key_bindings = key_bindings
        self._tracker = SpotlightTracker(
            locator or WidgetTargetLocator(host), provider.config.spotlight_metrics()
        )
        self._layout: Optional[SpotlightLayout] = None
        self._subs: List[Subscription] = provider.bus.subscribe_all(self._on_tour_event)
        self._build_card()
        host.installEventFilter(self)
        self.hide()
        self.refresh()

    # UI construction -----------------------------------------------------
    def _build_card(self) -> None:
        metrics = self._tracker.metrics
        self.card = QFrame(self)
        self.card.setObjectName("tourTooltipCard")
        self.card.setFixedSize(int(metrics.tooltip_width), int(metrics.tooltip_height))
        self.card.setStyleSheet(
            "QFrame#tourTooltipCard { background: #ffffff; border-radius: 16px; }"
        )
        self.title_label = QLabel(self.card)
        self.title_label.setObjectName("tourTitle")
        self.title_label.setStyleSheet("font-size: 15px; font-weight: 600; color: #111827;")
        self.description_label = QLabel(self.card)
        self.description_label.setObjectName("tourDescription")
        self.description_label.setWordWrap(True)
        self.description_label.setStyleSheet("font-size: 12px; color: #4b5563;")

        self.close_button = QPushButton("✕", self.card)
        self.close_button.setObjectName("tourClose")
        self.close_button.setAccessibleName("Close tour")
        self.close_button.setFlat(True)
        self.close_button.clicked.connect(lambda: self._engine.skip_tour())

        self.dots = _ProgressDots(self._engine, self.card)
        self.back_button = QPushButton("Back", self.card)
        self.back_button.setObjectName("tourBack")
        self.back_button.clicked.connect(lambda: self._engine.prev_step())
        self.next_button = QPushButton("Next", self.card)
        self.next_button.setObjectName("tourNext")
        self.next_button.clicked.connect(lambda: self._engine.next_step())
        for btn in (self.close_button, self.back_button, self.next_button):
            # Keep keyboard focus on the overlay so arrow keys drive the tour
            btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        header = QHBoxLayout()
        header.addWidget(self.title_label, 1)
        header.addWidget(self.close_button, 0, Qt.AlignmentFlag.AlignTop)
        footer = QHBoxLayout()
        footer.addWidget(self.dots, 1)
        footer.addWidget(self.back_button)
        footer.addWidget(self.next_button)
        col = QVBoxLayout(self.card)
        col.setContentsMargins(20, 16, 20, 16)
        col.addLayout(header)
        col.addWidget(self.description_label, 1)
        col.addLayout(footer)

    # Public API ------------------------------------------------------------
    @property
    def tracker(self) -> SpotlightTracker:
        return self._tracker

    def current_layout(self) -> Optional[SpotlightLayout]:
        return self._layout

    def refresh(self) -> None:
        """Re-run the locate-and-measure pass for the current step."""
        step = self._engine.current_step
        if step is None:
            self._layout = None
            self.hide()
            return
        self.setGeometry(0, 0, self._host.width(), self._host.height())
        viewport = Viewport(width=self._host.width(), height=self._host.height())
        self._layout = self._tracker.update(step, viewport)
        self._hook_scroll_areas()

        self.title_label.setText(step.title)
        self.description_label.setText(step.description)
        self.back_button.setVisible(not self._engine.is_first_step)
        self.next_button.setText("Finish" if self._engine.is_last_step else "Next")
        tip = self._layout.tooltip
        self.card.move(int(tip.left), int(tip.top))
        self.dots.update()

        self.show()
        self.raise_()
        self.setFocus(Qt.FocusReason.OtherFocusReason)
        self.update()

    def detach(self) -> None:
        for sub in self._subs:
            self._provider.bus.unsubscribe(sub)
        self._subs = []
        self._host.removeEventFilter(self)
        for bar in self._scroll_bars():
            if bar.property(_SCROLL_HOOK_PROPERTY):
                bar.valueChanged.disconnect(self._on_scrolled)
                bar.setProperty(_SCROLL_HOOK_PROPERTY, None)

    # Event wiring -------------------------------------------------------------
    def _on_tour_event(self, event: Event) -> None:
        self.refresh()

    def _scroll_bars(self) -> List[QScrollBar]:
        bars = []
        for area in self._host.findChildren(QAbstractScrollArea):
            for bar in (area.verticalScrollBar(), area.horizontalScrollBar()):
                if bar is not None:
                    bars.append(bar)
        return bars

    def _hook_scroll_areas(self) -> None:
        for bar in self._scroll_bars():
            if bar.property(_SCROLL_HOOK_PROPERTY):
                continue
            bar.valueChanged.connect(self._on_scrolled)
            bar.setProperty(_SCROLL_HOOK_PROPERTY, True)

    def _on_scrolled(self, _value: int) -> None:
        if self._engine.is_active:
            self.refresh()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if watched is self._host and event.type() == QEvent.Type.Resize:
            if self._engine.is_active:
                self.refresh()
        return False

    def keyPressEvent(self, event):  # type: ignore[override]
        name = qt_key_name(event.key())
        if name is not None and dispatch_key(self._engine, name, self._key_bindings):
            event.accept()
            return
        super().keyPressEvent(event)

    def mousePressEvent(self, event):  # type: ignore[override]
        if not self.card.geometry().contains(event.position().toPoint()):
            self._engine.skip_tour()
        event.accept()

    # Painting ----------------------------------------------------------------
    def paintEvent(self, event):  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        full = QPainterPath()
        full.addRect(QRectF(0, 0, self.width(), self.height()))
        hl = self._layout.highlight if self._layout is not None else None
        if hl is None:
            painter.fillPath(full, _DIM_COLOR)
            return
        hole_rect = QRectF(hl.left, hl.top, hl.width, hl.height)
        hole = QPainterPath()
        hole.addRoundedRect(hole_rect, _CUTOUT_RADIUS, _CUTOUT_RADIUS)
        painter.fillPath(full.subtracted(hole), _DIM_COLOR)
        ring = QPen(_RING_COLOR, 4)
        ring.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        painter.setPen(ring)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRoundedRect(hole_rect, _CUTOUT_RADIUS, _CUTOUT_RADIUS)
