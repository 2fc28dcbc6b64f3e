from __future__ import annotations

import asyncio

import httpx
import pytest

from restaurant_grid.core.places_client import GooglePlacesClient, PlacesUpstreamError


def _client(handler) -> GooglePlacesClient:
    return GooglePlacesClient("test-key", transport=httpx.MockTransport(handler))


def test_nearby_search_sends_cell_parameters():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"status": "OK", "results": [{"place_id": "abc123"}]})

    data = asyncio.run(_client(handler).nearby_search(25.033, 121.5654, 1000, "restaurant", "zh-TW"))

    assert data["results"][0]["place_id"] == "abc123"
    assert seen["path"] == "/maps/api/place/nearbysearch/json"
    assert seen["params"] == {
        "location": "25.033,121.5654",
        "radius": "1000",
        "type": "restaurant",
        "key": "test-key",
        "language": "zh-TW",
    }


def test_nearby_search_returns_embedded_error_untouched():
    def handler(request):
        return httpx.Response(200, json={"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid."})

    data = asyncio.run(_client(handler).nearby_search(0, 0, 1000, "restaurant", "zh-TW"))
    assert data["error_message"] == "The provided API key is invalid."


def test_place_details_joins_fields_and_omits_language_when_unset():
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"status": "OK", "result": {"website": "https://example.com"}})

    asyncio.run(_client(handler).place_details("abc123", ["website"]))
    assert seen["params"] == {"place_id": "abc123", "fields": "website", "key": "test-key"}

    asyncio.run(_client(handler).place_details("abc123", ["formatted_address", "rating"], language="zh-TW"))
    assert seen["params"]["fields"] == "formatted_address,rating"
    assert seen["params"]["language"] == "zh-TW"


def test_http_error_raises_upstream_error_with_status():
    def handler(request):
        return httpx.Response(503, text="unavailable")

    with pytest.raises(PlacesUpstreamError) as exc_info:
        asyncio.run(_client(handler).nearby_search(0, 0, 1000, "restaurant", "zh-TW"))
    assert exc_info.value.status == "503"


def test_transport_error_raises_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(PlacesUpstreamError) as exc_info:
        asyncio.run(_client(handler).place_details("abc123", ["website"]))
    assert exc_info.value.status == "TRANSPORT_ERROR"


def test_invalid_json_raises_upstream_error():
    def handler(request):
        return httpx.Response(200, text="<html>not json</html>")

    with pytest.raises(PlacesUpstreamError):
        asyncio.run(_client(handler).nearby_search(0, 0, 1000, "restaurant", "zh-TW"))


def test_photo_url_is_built_without_a_request():
    client = GooglePlacesClient("test-key")
    assert client.photo_url("REF", 800) == (
        "https://maps.googleapis.com/maps/api/place/photo?maxwidth=800&photo_reference=REF&key=test-key"
    )
