"""
prism_neo.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Own the remote-call policy (timeout/retries) so command logic never does.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PRISM_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "prism-neo"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Inbound auth (chat adapter -> this service)
    jwt_alg: str = "HS256"
    jwt_issuer: str = "prism-neo"
    jwt_audience: str = "prism-neo-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Remote access/billing API
    space_api_base_url: str
    bind_type: str = "QQ"
    http_timeout_seconds: float = Field(default=10.0, gt=0)
    # Connection-level retries only; requests that reached the API are never replayed.
    http_retries: int = Field(default=0, ge=0)

    # Commands
    admin_capability: str = "authority:3"
    logout_confirm_ttl_seconds: int = Field(default=60, ge=1)
    display_timezone: str = "Asia/Shanghai"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]


# --- Module Notes -----------------------------------------------------------
# `space_api_base_url` has no default: the service cannot do anything useful without it,
# so a missing PRISM_SPACE_API_BASE_URL fails at startup rather than at the first command.
