"""
prism_neo.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`): startup wiring finished and the HTTP client is open.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(request: Request) -> dict[str, str]:
    http = getattr(request.app.state, "http", None)
    if http is None or http.is_closed:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Not ready")
    return {"status": "ready"}


# --- Module Notes -----------------------------------------------------------
# Readiness deliberately does not call the remote billing API: an outage there should
# surface as command replies, not take this service out of rotation.
