"""
prism_neo.auth.capability

Capability checks for acting on another member's behalf.

Responsibilities:
- Evaluate a configured capability descriptor against a chat `Caller`.
- Normalize chat user references into the raw ids the remote API expects.
"""

from __future__ import annotations

from prism_neo.auth.models import Caller

AUTHORITY_PREFIX = "authority:"


def has_capability(caller: Caller, descriptor: str) -> bool:
    """
    `authority:N` passes when the caller's authority level is at least N; any other
    descriptor is treated as a named permission that must be granted to the caller.
    """

    descriptor = descriptor.strip()
    if descriptor.startswith(AUTHORITY_PREFIX):
        raw_level = descriptor[len(AUTHORITY_PREFIX) :].strip()
        try:
            required = int(raw_level)
        except ValueError:
            # Misconfigured descriptor: nobody gets admin rights.
            return False
        return caller.authority >= required
    return descriptor in caller.permissions


def strip_bind_prefix(user: str) -> str:
    # "onebot:12345" -> "12345"
    _, sep, raw_id = user.partition(":")
    return raw_id if sep else user
