import json

import httpx
import pytest

from src.integrations.clients.real_http.http_transport import HttpTransport
from src.integrations.contracts.interfaces import TransportError
from src.integrations.services.catalog_service import CatalogClient
from tests.factories import product_payload


def _transport(handler, **kwargs):
    return HttpTransport(
        base_url="https://catalog.test/",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_get_builds_url_and_query():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["method"] = request.method
        return httpx.Response(200, json={"products": [], "total": 0, "skip": 0, "limit": 10})

    body = await _transport(handler).get("/products", {"limit": 10, "skip": 20})

    assert seen["method"] == "GET"
    assert seen["url"] == "https://catalog.test/products?limit=10&skip=20"
    assert body["total"] == 0


@pytest.mark.asyncio
async def test_search_query_is_url_encoded():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["q"] = request.url.params["q"]
        seen["raw"] = str(request.url)
        return httpx.Response(200, json={"products": [], "total": 0})

    await CatalogClient(_transport(handler)).search_products("red & blue")

    assert seen["q"] == "red & blue"
    assert "red+%26+blue" in seen["raw"] or "red%20%26%20blue" in seen["raw"]


@pytest.mark.asyncio
async def test_post_and_put_send_json_with_bearer_token():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(
            {
                "method": request.method,
                "path": request.url.path,
                "auth": request.headers.get("Authorization"),
                "content_type": request.headers.get("Content-Type"),
                "body": json.loads(request.content),
            }
        )
        return httpx.Response(200, json=product_payload(3, title="X"))

    transport = _transport(handler, api_token="secret-token")
    await transport.post("/products/add", {"title": "Widget"})
    await transport.put("/products/3", {"title": "X"})

    assert [s["method"] for s in seen] == ["POST", "PUT"]
    assert [s["path"] for s in seen] == ["/products/add", "/products/3"]
    assert all(s["auth"] == "Bearer secret-token" for s in seen)
    assert all(s["content_type"] == "application/json" for s in seen)
    assert seen[1]["body"] == {"title": "X"}


@pytest.mark.asyncio
async def test_no_authorization_header_without_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"id": 1, "isDeleted": True})

    await _transport(handler).delete("/products/1")
    assert seen["auth"] is None


@pytest.mark.asyncio
async def test_http_error_carries_server_message_and_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Product with id '999' not found"})

    with pytest.raises(TransportError) as exc_info:
        await _transport(handler).get("/products/999")

    assert exc_info.value.message == "Product with id '999' not found"
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="Internal Server Error"),
        httpx.Response(502, json={"error": "bad gateway"}),
        httpx.Response(400, json={"message": "   "}),
    ],
)
async def test_http_error_without_usable_message(response):
    with pytest.raises(TransportError) as exc_info:
        await _transport(lambda request: response).get("/products")
    assert exc_info.value.message is None
    assert exc_info.value.status_code == response.status_code


@pytest.mark.asyncio
async def test_connection_failure_has_no_message():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as exc_info:
        await _transport(handler).get("/products")

    assert exc_info.value.message is None
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_undecodable_body_is_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(TransportError) as exc_info:
        await _transport(handler).get("/products")
    assert exc_info.value.message is None


@pytest.mark.asyncio
async def test_empty_body_decodes_to_empty_mapping():
    body = await _transport(lambda request: httpx.Response(200)).delete("/products/1")
    assert body == {}


def test_missing_base_url_is_rejected():
    with pytest.raises(ValueError):
        HttpTransport(base_url="")
