import json

import httpx
import pytest
import pytest_asyncio

from src.exceptions import ContentServiceError, SlideNotFoundError, TransientNetworkError
from src.hero_slider.client import ContentServiceClient
from src.hero_slider.models import ReorderEntry

BASE = "http://api.test"
ROOT = f"{BASE}/api/hero-slider"


def wire(sid="s1", order=0, active=True):
    return {
        "id": sid, "title": f"T{sid}", "subtitle": "S", "description": "D",
        "imageUrl": f"https://img/{sid}.jpg", "isActive": active, "orderIndex": order,
        "createdAt": "2025-01-01T00:00:00.000Z", "updatedAt": "2025-01-01T00:00:00.000Z",
    }


@pytest_asyncio.fixture
async def client():
    c = ContentServiceClient(base_url=BASE + "/", token="tok")
    yield c
    await c.aclose()


@pytest.mark.asyncio
async def test_list_active_parses_slides(client, respx_mock):
    route = respx_mock.get(ROOT).mock(
        return_value=httpx.Response(200, json={"slides": [wire("a", 0), wire("b", 1)]})
    )
    slides = await client.list_active(timeout=3.0)
    assert [s.id for s in slides] == ["a", "b"]
    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_list_all_hits_admin_endpoint(client, respx_mock):
    respx_mock.get(f"{ROOT}/admin").mock(
        return_value=httpx.Response(200, json={"slides": [wire("a", 0, active=False)]})
    )
    slides = await client.list_all()
    assert slides[0].is_active is False


@pytest.mark.asyncio
async def test_no_auth_header_without_token(respx_mock):
    route = respx_mock.get(ROOT).mock(return_value=httpx.Response(200, json={"slides": []}))
    c = ContentServiceClient(base_url=BASE)
    try:
        assert await c.list_active() == []
    finally:
        await c.aclose()
    assert "Authorization" not in route.calls.last.request.headers


@pytest.mark.asyncio
async def test_timeout_is_transient(client, respx_mock):
    respx_mock.get(ROOT).mock(side_effect=httpx.ReadTimeout("slow"))
    with pytest.raises(TransientNetworkError):
        await client.list_active()


@pytest.mark.asyncio
async def test_connect_error_is_transient(client, respx_mock):
    respx_mock.get(f"{ROOT}/admin").mock(side_effect=httpx.ConnectError("refused"))
    with pytest.raises(TransientNetworkError):
        await client.list_all()


@pytest.mark.asyncio
async def test_service_error_message_is_surfaced(client, respx_mock):
    respx_mock.post(ROOT).mock(
        return_value=httpx.Response(400, json={"error": "Title is required"})
    )
    with pytest.raises(ContentServiceError) as info:
        await client.create({"title": ""})
    assert not isinstance(info.value, TransientNetworkError)
    assert info.value.message == "Title is required"
    assert info.value.status_code == 400
    assert info.value.operation == "create"


@pytest.mark.asyncio
async def test_error_without_json_body_uses_default(client, respx_mock):
    respx_mock.get(f"{ROOT}/admin").mock(return_value=httpx.Response(503, text="upstream down"))
    with pytest.raises(ContentServiceError) as info:
        await client.list_all()
    assert info.value.status_code == 503
    assert "list_all failed" in info.value.message


@pytest.mark.asyncio
async def test_get_missing_slide_raises_not_found(client, respx_mock):
    respx_mock.get(f"{ROOT}/nope").mock(
        return_value=httpx.Response(404, json={"error": "Slide no encontrado"})
    )
    with pytest.raises(SlideNotFoundError) as info:
        await client.get("nope")
    assert info.value.message == "Slide no encontrado"


@pytest.mark.asyncio
async def test_missing_slides_key_is_terminal(client, respx_mock):
    respx_mock.get(ROOT).mock(return_value=httpx.Response(200, json={"items": []}))
    with pytest.raises(ContentServiceError):
        await client.list_active()


@pytest.mark.asyncio
async def test_write_operations_use_expected_routes(client, respx_mock):
    respx_mock.put(f"{ROOT}/s1").mock(return_value=httpx.Response(200, json={"slide": wire("s1", 4)}))
    respx_mock.delete(f"{ROOT}/s1").mock(return_value=httpx.Response(204))
    reorder = respx_mock.post(f"{ROOT}/reorder").mock(
        return_value=httpx.Response(200, json={"success": True})
    )
    respx_mock.patch(f"{ROOT}/s1/toggle").mock(
        return_value=httpx.Response(200, json={"slide": wire("s1", 4, active=False)})
    )

    updated = await client.update("s1", {"orderIndex": 4})
    assert updated.order_index == 4
    assert await client.delete("s1") is None
    await client.reorder([ReorderEntry("a", 1), ReorderEntry("b", 0)])
    assert json.loads(reorder.calls.last.request.content) == [
        {"id": "a", "orderIndex": 1}, {"id": "b", "orderIndex": 0},
    ]
    toggled = await client.toggle_status("s1")
    assert toggled.is_active is False


@pytest.mark.asyncio
async def test_injected_client_is_not_closed():
    http = httpx.AsyncClient()
    c = ContentServiceClient(base_url=BASE, client=http)
    await c.aclose()
    assert not http.is_closed
    await http.aclose()
