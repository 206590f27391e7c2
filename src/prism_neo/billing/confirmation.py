"""
prism_neo.billing.confirmation

Pending-logout confirmation store.

Responsibilities:
- Remember, per target user, when a logout was first requested.
- Decide whether a repeated request is a confirmation (inside the TTL) or a new request.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass(frozen=True, slots=True)
class Confirmation:
    confirmed: bool
    # Epoch ms of the request that opened the window (the current call when not confirmed).
    requested_at_ms: int


class ConfirmationStore:
    """
    Process-local map of user id -> epoch ms of the pending request.

    `begin_or_confirm` never awaits, so under a single event loop each check-and-set is
    atomic: of two requests racing for the same user, exactly one consumes the entry.
    Stale entries are only replaced when that user is seen again; nothing sweeps them.
    """

    def __init__(self, *, ttl_ms: int = 60_000, clock: Callable[[], int] = _wall_clock_ms) -> None:
        if ttl_ms <= 0:
            raise ValueError("ttl_ms must be positive")
        self._ttl_ms = ttl_ms
        self._clock = clock
        self._pending: dict[str, int] = {}

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_ms // 1000

    def begin_or_confirm(self, user_id: str, now_ms: int | None = None) -> Confirmation:
        now = self._clock() if now_ms is None else now_ms
        requested_at = self._pending.get(user_id)
        if requested_at is not None and now - requested_at < self._ttl_ms:
            del self._pending[user_id]
            return Confirmation(confirmed=True, requested_at_ms=requested_at)
        self._pending[user_id] = now
        return Confirmation(confirmed=False, requested_at_ms=now)

    def cancel(self, user_id: str, requested_at_ms: int) -> bool:
        """
        Drop the pending entry for `user_id` if it was opened at `requested_at_ms`.

        A newer request for the same user is left alone. Returns True when an entry was removed.
        """
        if self._pending.get(user_id) != requested_at_ms:
            return False
        del self._pending[user_id]
        return True

    def pending_since(self, user_id: str) -> int | None:
        return self._pending.get(user_id)

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._pending


# --- Module Notes -----------------------------------------------------------
# The store is the only mutable state shared between command invocations. It is reset on
# process restart; a pending logout does not survive a deploy.
