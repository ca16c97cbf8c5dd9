"""Per-user persistence of completed onboarding tours.

One storage entry per signed-in identity: key = prefix + stable user id,
value = JSON array of completed tour ids (order not significant). Keying by
user keeps completions from bleeding between identities that share a
machine profile.

Corrupt entries (invalid JSON, non-list payloads) load as an empty set
rather than raising. Write failures are logged and reported as ``False``;
losing onboarding progress has no effect on the rest of the application.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Set

from bizops import settings

from .tour_storage import KeyValueStorage

__all__ = ["UserIdentity", "TourCompletionStore"]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserIdentity:
    """Signed-in identity as handed over by the session provider."""

    user_id: Optional[str] = None
    email: Optional[str] = None

    @property
    def storage_id(self) -> Optional[str]:
        # Prefer the explicit id; fall back to email
        return self.user_id or self.email or None


class TourCompletionStore:
    def __init__(
        self, storage: KeyValueStorage, prefix: str = settings.STORAGE_KEY_PREFIX
    ) -> None:
        self.storage = storage
        self.prefix = prefix

    def key_for(self, identity: UserIdentity) -> str:
        storage_id = identity.storage_id
        if not storage_id:
            raise ValueError("identity has neither user id nor email")
        return f"{self.prefix}{storage_id}"

    def load(self, identity: UserIdentity) -> Set[str]:
        key = self.key_for(identity)
        raw = self.storage.get_item(key)
        if raw is None:
            return set()
        try:
            data = json.loads(raw)
        except ValueError:
            log.warning("Ignoring corrupt tour completion data under %s", key)
            return set()
        if not isinstance(data, list) or not all(isinstance(x, str) for x in data):
            log.warning("Ignoring malformed tour completion data under %s", key)
            return set()
        return set(data)

    def save(self, identity: UserIdentity, completed: Iterable[str]) -> bool:
        key = self.key_for(identity)
        try:
            self.storage.set_item(key, json.dumps(sorted(set(completed))))
            return True
        except OSError as exc:
            log.warning("Failed to persist tour completions under %s: %s", key, exc)
            return False

    def clear(self, identity: UserIdentity) -> bool:
        key = self.key_for(identity)
        try:
            self.storage.remove_item(key)
            return True
        except OSError as exc:
            log.warning("Failed to clear tour completions under %s: %s", key, exc)
            return False
