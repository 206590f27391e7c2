"""
prism_neo.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Expose the settings and command router built at startup (stored on app.state).
"""

from __future__ import annotations

from fastapi import Request

from prism_neo.commands.router import CommandRouter
from prism_neo.settings import Settings


def settings_dep(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def command_router_dep(request: Request) -> CommandRouter:
    # Built in `prism_neo.api.app.create_app` on startup.
    return request.app.state.command_router  # type: ignore[attr-defined]
