"""
prism_neo.auth.jwt

Gateway tokens for the chat adapter -> command API hop.

Responsibilities:
- Mint tokens for a gateway subject (dev endpoint, tests).
- Turn a presented token into a `Principal`, rejecting anything without a subject or a
  well-formed `roles` claim.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from prism_neo.auth.models import Principal
from prism_neo.settings import Settings

GATEWAY_ROLE = "chat_gateway"


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
        )


class JwtValidationError(Exception):
    pass


def issue_token(
    *,
    cfg: JwtConfig,
    subject: str,
    roles: list[str] | None = None,
    ttl: timedelta = timedelta(hours=1),
) -> str:
    now = datetime.now(tz=UTC)
    claims: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": subject,
        "roles": [GATEWAY_ROLE] if roles is None else roles,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(claims, cfg.secret, algorithm=cfg.alg)


def decode_principal(*, cfg: JwtConfig, token: str) -> Principal:
    try:
        claims = jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={"require": ["exp", "iat", "iss", "aud", "sub"]},
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e

    subject = str(claims.get("sub", ""))
    if not subject:
        raise JwtValidationError("empty subject")
    roles = claims.get("roles", [])
    if not isinstance(roles, list):
        raise JwtValidationError("roles claim must be a list")
    return Principal(subject=subject, roles=frozenset(str(r) for r in roles))
