from __future__ import annotations

import pytest

from prism_neo.auth.capability import has_capability, strip_bind_prefix
from prism_neo.auth.models import Caller


@pytest.mark.parametrize(
    ("authority", "expected"),
    [(1, False), (2, False), (3, True), (4, True)],
)
def test_authority_descriptor(authority: int, expected: bool) -> None:
    assert has_capability(Caller("u", authority=authority), "authority:3") is expected


def test_named_permission_descriptor() -> None:
    caller = Caller("u", authority=5, permissions=frozenset({"space.admin"}))
    assert has_capability(caller, "space.admin")
    assert not has_capability(Caller("u", authority=5), "space.admin")


def test_malformed_authority_fails_closed() -> None:
    assert not has_capability(Caller("u", authority=99), "authority:high")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("onebot:12345", "12345"), ("12345", "12345"), ("qq:a:b", "a:b")],
)
def test_strip_bind_prefix(raw: str, expected: str) -> None:
    assert strip_bind_prefix(raw) == expected
