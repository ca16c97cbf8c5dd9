"""Keyboard control surface for running tours.

Maintains the mapping of key names to tour actions. Key names follow the
DOM ``KeyboardEvent.key`` vocabulary (``Escape``, ``ArrowRight`` ...); the
overlay widget translates Qt key codes into these names before dispatching.

Keys are only consumed while a tour is active.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .tour_engine import TourEngine

__all__ = ["TourKeyBinding", "TourKeyBindings", "default_key_bindings", "dispatch_key"]

ACTION_SKIP = "skip"
ACTION_NEXT = "next"
ACTION_PREV = "prev"


@dataclass(frozen=True)
class TourKeyBinding:
    key: str
    action: str
    description: str


class TourKeyBindings:
    def __init__(self) -> None:
        self._entries: Dict[str, TourKeyBinding] = {}

    def register(self, key: str, action: str, description: str) -> bool:
        """Register a binding. Returns False if the key is already bound."""
        if key in self._entries:
            return False
        if action not in (ACTION_SKIP, ACTION_NEXT, ACTION_PREV):
            raise ValueError(f"Unknown tour action: {action}")
        self._entries[key] = TourKeyBinding(key, action, description)
        return True

    def action_for(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        return entry.action if entry else None

    def list(self) -> List[TourKeyBinding]:
        return list(self._entries.values())


def default_key_bindings() -> TourKeyBindings:
    bindings = TourKeyBindings()
    bindings.register("Escape", ACTION_SKIP, "Skip the tour")
    bindings.register("ArrowRight", ACTION_NEXT, "Next step")
    bindings.register("Enter", ACTION_NEXT, "Next step")
    bindings.register("ArrowLeft", ACTION_PREV, "Previous step")
    return bindings


_DEFAULT_BINDINGS = default_key_bindings()


def dispatch_key(
    engine: TourEngine, key: str, bindings: Optional[TourKeyBindings] = None
) -> bool:
    """Apply the action bound to ``key``; returns True when the key was consumed."""
    if not engine.is_active:
        return False
    action = (bindings or _DEFAULT_BINDINGS).action_for(key)
    if action == ACTION_SKIP:
        engine.skip_tour()
    elif action == ACTION_NEXT:
        engine.next_step()
    elif action == ACTION_PREV:
        engine.prev_step()
    else:
        return False
    return True
