"""
prism_neo.space_api.client

HTTP client boundary for the remote access/billing API.

Responsibilities:
- Build endpoint URLs from the configured base URL.
- Issue one request per operation (no retries beyond the transport policy).
- Turn non-2xx responses into `SpaceApiError` and 2xx bodies into typed models.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import TypeAdapter

from prism_neo.observability.logging import get_logger
from prism_neo.settings import Settings
from prism_neo.space_api.errors import SpaceApiError
from prism_neo.space_api.models import (
    ActiveUser,
    BillingPreview,
    DoorPassword,
    LogoutResult,
    MachinePower,
    RedeemedItem,
    UserAsset,
    Wallet,
    WalletAdjustment,
)

log = get_logger(__name__)

API_PREFIX = "api"

_active_users = TypeAdapter(list[ActiveUser])
_user_assets = TypeAdapter(list[UserAsset])
_machines = TypeAdapter(list[MachinePower])
_redeemed = TypeAdapter(list[RedeemedItem])


def make_url(base_url: str, endpoint: str) -> str:
    # Exactly one separator at each seam, whatever the configured base looks like.
    return f"{base_url.strip().rstrip('/')}/{API_PREFIX}/{endpoint.strip().lstrip('/')}"


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        transport=httpx.AsyncHTTPTransport(retries=settings.http_retries),
        headers={"user-agent": f"{settings.service_name}"},
    )


class SpaceApiClient:
    """
    One coroutine per remote operation. Users are addressed as `{bind_type}:{id}`.

    The injected `httpx.AsyncClient` owns timeouts and connection retries; transport
    failures propagate as `httpx.HTTPError`, HTTP failures as `SpaceApiError`.
    """

    def __init__(self, *, base_url: str, http: httpx.AsyncClient, bind_type: str = "QQ") -> None:
        self._base_url = base_url
        self._http = http
        self._bind_type = bind_type

    @classmethod
    def from_settings(cls, settings: Settings, http: httpx.AsyncClient) -> SpaceApiClient:
        return cls(base_url=settings.space_api_base_url, http=http, bind_type=settings.bind_type)

    def _user(self, user_id: str) -> str:
        return f"{self._bind_type}:{user_id}"

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        url = make_url(self._base_url, endpoint)
        r = await self._http.request(method, url, json=json, params=params)
        if r.is_error:
            err = SpaceApiError.from_response(r)
            log.warning("space_api_error", method=method, endpoint=endpoint, status=r.status_code)
            raise err
        if not r.content:
            return None
        return r.json()

    # --- membership / sessions ------------------------------------------------

    async def register(self, user_id: str) -> Any:
        return await self._request(
            "POST",
            "/users",
            json=[{"binds": [{"type": self._bind_type, "bid": user_id}]}],
        )

    async def login(self, user_id: str) -> Any:
        return await self._request("POST", f"/users/{self._user(user_id)}/login")

    async def logout(self, user_id: str) -> LogoutResult:
        body = await self._request("POST", f"/users/{self._user(user_id)}/logout")
        return LogoutResult.model_validate(body)

    async def billing(self, user_id: str) -> BillingPreview:
        body = await self._request("GET", f"/users/{self._user(user_id)}/billing")
        return BillingPreview.model_validate(body)

    async def list_active(self) -> list[ActiveUser]:
        body = await self._request(
            "GET", "/users/logined", params={"binds": "true", "sessions": "true"}
        )
        return _active_users.validate_python(body or [])

    async def door_password(self, user_id: str) -> DoorPassword:
        body = await self._request("GET", f"/users/{self._user(user_id)}/door-password")
        return DoorPassword.model_validate(body)

    # --- wallet / assets -------------------------------------------------------

    async def wallet(self, user_id: str) -> Wallet:
        body = await self._request(
            "GET", f"/users/{self._user(user_id)}/wallet", params={"details": "true"}
        )
        return Wallet.model_validate(body)

    async def assets(self, user_id: str) -> list[UserAsset]:
        body = await self._request(
            "GET", f"/users/{self._user(user_id)}/assets", params={"details": "true"}
        )
        return _user_assets.validate_python(body or [])

    async def adjust_wallet(self, user_id: str, *, amount: int, comment: str) -> WalletAdjustment:
        # Admin adjustments always go to the free balance; negative amounts deduct.
        body = await self._request(
            "POST",
            f"/users/{self._user(user_id)}/wallet",
            json={"type": "free", "action": amount, "comment": comment},
        )
        return WalletAdjustment.model_validate(body)

    async def overwrite_cost(self, user_id: str, *, cost: int) -> Any:
        return await self._request(
            "POST", f"/users/{self._user(user_id)}/billing-overwrite", json={"cost": cost}
        )

    async def redeem(self, user_id: str, *, code: str) -> list[RedeemedItem]:
        body = await self._request(
            "POST", f"/users/{self._user(user_id)}/redeem", json={"code": code}
        )
        return _redeemed.validate_python(body or [])

    # --- machines --------------------------------------------------------------

    async def set_machine_power(self, machine_name: str, *, on: bool, user_id: str) -> MachinePower:
        body = await self._request(
            "POST",
            "/machine/power",
            json={"machineName": machine_name, "powerState": on, "userId": self._user(user_id)},
        )
        return MachinePower.model_validate(body)

    async def machine_power(self, machine_name: str) -> MachinePower:
        body = await self._request("GET", "/machine/power", params={"name": machine_name})
        return MachinePower.model_validate(body)

    async def all_machine_power(self) -> list[MachinePower]:
        body = await self._request("GET", "/machine/power")
        return _machines.validate_python(body or [])


# --- Module Notes -----------------------------------------------------------
# Retries are a transport concern (`create_http_client`): AsyncHTTPTransport only retries
# failed connection attempts, so a POST that reached the API is never sent twice.
