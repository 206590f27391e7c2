"""
prism_neo.auth.models

Auth domain models.

Responsibilities:
- `Principal`: the authenticated service calling the HTTP API (the chat adapter).
- `Caller`: the chat user on whose behalf a command runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Principal:
    subject: str
    roles: frozenset[str]

    @property
    def is_admin(self) -> bool:
        return "admin" in self.roles


@dataclass(frozen=True, slots=True)
class Caller:
    """
    Chat-side identity of whoever typed the command.

    `authority` mirrors the tiered authority level of the chat framework (1 = regular
    member); `permissions` carries any named grants the framework resolved for the user.
    """

    user_id: str
    authority: int = 1
    permissions: frozenset[str] = field(default_factory=frozenset)


# --- Module Notes -----------------------------------------------------------
# The two identities are deliberately separate: a Principal proves the adapter may call us,
# a Caller is asserted by that adapter and only decides what the chat user may do.
