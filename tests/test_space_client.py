from __future__ import annotations

import httpx
import pytest

from payloads import billing_payload

from prism_neo.settings import Settings
from prism_neo.space_api.client import SpaceApiClient, create_http_client, make_url
from prism_neo.space_api.errors import SpaceApiError


@pytest.mark.parametrize(
    ("base", "endpoint"),
    [
        ("http://space.test", "/users"),
        ("http://space.test/", "users"),
        ("http://space.test//", "//users"),
        (" http://space.test/ ", " /users"),
    ],
)
def test_make_url_normalizes_the_seam(base: str, endpoint: str) -> None:
    assert make_url(base, endpoint) == "http://space.test/api/users"


def test_make_url_keeps_base_path() -> None:
    assert make_url("https://x.test/prism/", "/users/QQ:1/login") == (
        "https://x.test/prism/api/users/QQ:1/login"
    )


@pytest.mark.asyncio
async def test_register_posts_bind_list(fake_api, space_client: SpaceApiClient) -> None:
    fake_api.on("POST", "/api/users", {"ok": True}, status=201)

    await space_client.register("12345")

    assert fake_api.json_body() == [{"binds": [{"type": "QQ", "bid": "12345"}]}]


@pytest.mark.asyncio
async def test_billing_parses_preview(fake_api, space_client: SpaceApiClient) -> None:
    fake_api.on("GET", "/api/users/QQ:42/billing", billing_payload(total_cost=70))

    preview = await space_client.billing("42")

    assert preview.billing.total_cost == 70
    assert preview.discount is None
    assert preview.billing.segments[0].rule_name == "Daytime"


@pytest.mark.asyncio
async def test_query_parameters(fake_api, space_client: SpaceApiClient) -> None:
    fake_api.on("GET", "/api/users/logined", [])
    fake_api.on("GET", "/api/users/QQ:42/assets", [])
    fake_api.on("GET", "/api/machine/power", {"machine": "laser", "state": {"state": True}})

    assert await space_client.list_active() == []
    assert await space_client.assets("42") == []
    machine = await space_client.machine_power("laser")

    params = [dict(c.url.params) for c in fake_api.calls]
    assert params == [
        {"binds": "true", "sessions": "true"},
        {"details": "true"},
        {"name": "laser"},
    ]
    assert machine.state.state is True


@pytest.mark.asyncio
async def test_machine_power_body(fake_api, space_client: SpaceApiClient) -> None:
    fake_api.on("POST", "/api/machine/power", {"machine": "laser", "state": {"state": False}})

    await space_client.set_machine_power("laser", on=False, user_id="42")

    assert fake_api.json_body() == {"machineName": "laser", "powerState": False, "userId": "QQ:42"}


@pytest.mark.asyncio
async def test_wallet_adjustment_body(fake_api, space_client: SpaceApiClient) -> None:
    fake_api.on(
        "POST", "/api/users/QQ:42/wallet", {"originalBalance": 100, "finalBalance": 90}
    )

    res = await space_client.adjust_wallet("42", amount=-10, comment="test")

    assert fake_api.json_body() == {"type": "free", "action": -10, "comment": "test"}
    assert (res.original_balance, res.final_balance) == (100, 90)


@pytest.mark.asyncio
async def test_error_with_message(fake_api, space_client: SpaceApiClient) -> None:
    fake_api.on("POST", "/api/users/QQ:42/login", {"message": "已经在场内"}, status=409)

    with pytest.raises(SpaceApiError) as exc_info:
        await space_client.login("42")

    assert exc_info.value.status_code == 409
    assert exc_info.value.message == "已经在场内"


@pytest.mark.asyncio
async def test_error_message_list_is_joined(fake_api, space_client: SpaceApiClient) -> None:
    fake_api.on("POST", "/api/users/QQ:42/redeem", {"message": ["code expired", ""]}, status=400)

    with pytest.raises(SpaceApiError) as exc_info:
        await space_client.redeem("42", code="X")

    assert exc_info.value.message == "code expired"


@pytest.mark.asyncio
async def test_error_without_message(space_client: SpaceApiClient, fake_api) -> None:
    fake_api.on("GET", "/api/users/QQ:42/wallet", {"error": "boom"}, status=500)

    with pytest.raises(SpaceApiError) as exc_info:
        await space_client.wallet("42")

    assert exc_info.value.message is None


@pytest.mark.asyncio
async def test_error_with_non_json_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>bad gateway</html>")

    client = SpaceApiClient(
        base_url="http://space.test", http=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )
    with pytest.raises(SpaceApiError) as exc_info:
        await client.door_password("42")

    assert exc_info.value.status_code == 502
    assert exc_info.value.message is None


@pytest.mark.asyncio
async def test_custom_bind_type(fake_api, http: httpx.AsyncClient) -> None:
    fake_api.on("GET", "/api/users/TG:7/door-password", {"password": "1234"})
    client = SpaceApiClient(base_url="http://space.test", http=http, bind_type="TG")

    assert (await client.door_password("7")).password == "1234"


@pytest.mark.asyncio
async def test_http_client_uses_configured_timeout(settings: Settings) -> None:
    http = create_http_client(settings.model_copy(update={"http_timeout_seconds": 3.5}))
    try:
        assert http.timeout.read == 3.5
    finally:
        await http.aclose()
