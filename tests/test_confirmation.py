from __future__ import annotations

import pytest

from prism_neo.billing.confirmation import ConfirmationStore

T0 = 1_736_935_200_000


def test_second_request_inside_window_confirms_and_clears() -> None:
    store = ConfirmationStore(ttl_ms=60_000)

    first = store.begin_or_confirm("alice", T0)
    second = store.begin_or_confirm("alice", T0 + 30_000)
    third = store.begin_or_confirm("alice", T0 + 30_001)

    assert (first.confirmed, second.confirmed, third.confirmed) == (False, True, False)
    assert second.requested_at_ms == T0
    # The third call opened a fresh window.
    assert store.pending_since("alice") == T0 + 30_001


def test_stale_entry_starts_a_new_window() -> None:
    store = ConfirmationStore(ttl_ms=60_000)

    assert store.begin_or_confirm("alice", T0).confirmed is False
    assert store.begin_or_confirm("alice", T0 + 61_000).confirmed is False
    assert store.pending_since("alice") == T0 + 61_000
    # ...which can itself be confirmed.
    assert store.begin_or_confirm("alice", T0 + 62_000).confirmed is True


def test_age_equal_to_ttl_is_stale() -> None:
    store = ConfirmationStore(ttl_ms=60_000)
    store.begin_or_confirm("alice", T0)
    assert store.begin_or_confirm("alice", T0 + 60_000).confirmed is False


def test_users_are_independent() -> None:
    store = ConfirmationStore(ttl_ms=60_000)
    store.begin_or_confirm("alice", T0)

    assert store.begin_or_confirm("bob", T0 + 1_000).confirmed is False
    assert store.begin_or_confirm("alice", T0 + 2_000).confirmed is True
    assert "alice" not in store
    assert "bob" in store
    assert len(store) == 1


def test_injected_clock_is_used_when_now_is_omitted() -> None:
    now = [T0]
    store = ConfirmationStore(ttl_ms=10_000, clock=lambda: now[0])

    assert store.begin_or_confirm("alice").confirmed is False
    now[0] += 9_999
    assert store.begin_or_confirm("alice").confirmed is True


def test_ttl_seconds_and_validation() -> None:
    assert ConfirmationStore(ttl_ms=60_000).ttl_seconds == 60
    with pytest.raises(ValueError):
        ConfirmationStore(ttl_ms=0)


def test_cancel_only_drops_the_matching_request() -> None:
    store = ConfirmationStore(ttl_ms=60_000)
    opened = store.begin_or_confirm("alice", T0)

    assert store.cancel("alice", opened.requested_at_ms + 1) is False
    assert store.pending_since("alice") == T0

    assert store.cancel("alice", opened.requested_at_ms) is True
    assert "alice" not in store
    assert store.begin_or_confirm("alice", T0 + 1_000).confirmed is False
    assert store.cancel("bob", T0) is False
