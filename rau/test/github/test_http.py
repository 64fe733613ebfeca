"""Tests for rau.github.http - async HTTP client abstraction."""

import asyncio
from collections.abc import AsyncIterator

import httpx
import pytest

from rau.core.result import Err, Ok
from rau.github.http import (
    HttpClient,
    HttpError,
    HttpResponse,
    MockHttpClient,
    RealHttpClient,
)


async def _stream(*chunks: bytes) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk


# =============================================================================
# Value types
# =============================================================================


class TestHttpError:
    def test_str(self) -> None:
        error = HttpError(url="https://example.com", message="Connection refused")
        assert str(error) == "Connection refused (https://example.com)"

    def test_is_frozen(self) -> None:
        error = HttpError(url="https://example.com", message="x")
        with pytest.raises(AttributeError):
            error.message = "y"  # type: ignore[misc]


class TestHttpResponse:
    def test_json(self) -> None:
        assert HttpResponse(200, b'{"a": 1}').json() == {"a": 1}

    def test_json_invalid_raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            HttpResponse(200, b"<html>").json()

    def test_text(self) -> None:
        assert HttpResponse(500, b"oops").text == "oops"


# =============================================================================
# MockHttpClient
# =============================================================================


class TestMockHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(MockHttpClient(), HttpClient)

    def test_canned_response(self) -> None:
        http = MockHttpClient()
        http.set_json("GET", "https://api.example.com/x", {"ok": True})

        result = asyncio.run(http.request("GET", "https://api.example.com/x"))

        assert isinstance(result, Ok)
        assert result.value.status == 200
        assert result.value.json() == {"ok": True}

    def test_unknown_url_is_404(self) -> None:
        http = MockHttpClient()
        result = asyncio.run(http.request("GET", "https://api.example.com/missing"))
        assert isinstance(result, Ok)
        assert result.value.status == 404

    def test_transport_error(self) -> None:
        http = MockHttpClient()
        error = HttpError(url="https://api.example.com/x", message="boom")
        http.set_response("DELETE", "https://api.example.com/x", error)

        result = asyncio.run(http.request("delete", "https://api.example.com/x"))

        assert result == Err(error)

    def test_records_calls_and_drains_streams(self) -> None:
        http = MockHttpClient()

        asyncio.run(
            http.request(
                "POST",
                "https://uploads.example.com/a",
                headers={"Content-Type": "text/plain"},
                params={"name": "a.txt"},
                content=_stream(b"hello ", b"world"),
            )
        )

        (call,) = http.calls
        assert call.method == "POST"
        assert call.params == {"name": "a.txt"}
        assert call.headers["Content-Type"] == "text/plain"
        assert call.body == b"hello world"


# =============================================================================
# RealHttpClient (over httpx.MockTransport)
# =============================================================================


class TestRealHttpClient:
    def test_passes_request_through(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, content=b'{"id": 1}')

        async def go() -> object:
            async with RealHttpClient(transport=httpx.MockTransport(handler)) as http:
                return await http.request(
                    "POST",
                    "https://uploads.example.com/assets",
                    headers={"Authorization": "token abc"},
                    params={"name": "a.txt", "label": "A"},
                    content=b"data",
                )

        result = asyncio.run(go())

        assert result == Ok(HttpResponse(status=201, body=b'{"id": 1}'))
        (request,) = seen
        assert request.url.params["name"] == "a.txt"
        assert request.url.params["label"] == "A"
        assert request.headers["Authorization"] == "token abc"
        assert request.headers["User-Agent"].startswith("rau/")
        assert request.content == b"data"

    def test_error_status_is_not_a_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(422, text="Validation Failed")

        async def go() -> object:
            async with RealHttpClient(transport=httpx.MockTransport(handler)) as http:
                return await http.request("GET", "https://api.example.com/x")

        result = asyncio.run(go())

        assert isinstance(result, Ok)
        assert result.value.status == 422
        assert result.value.text == "Validation Failed"

    def test_streamed_body(self) -> None:
        bodies: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(request.read())
            return httpx.Response(201, content=b"{}")

        async def go() -> None:
            async with RealHttpClient(transport=httpx.MockTransport(handler)) as http:
                await http.request(
                    "POST",
                    "https://uploads.example.com/assets",
                    headers={"Content-Length": "6"},
                    content=_stream(b"abc", b"def"),
                )

        asyncio.run(go())

        assert bodies == [b"abcdef"]

    def test_connect_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async def go() -> object:
            async with RealHttpClient(transport=httpx.MockTransport(handler)) as http:
                return await http.request("GET", "https://api.example.com/x")

        result = asyncio.run(go())

        assert result == Err(
            HttpError(url="https://api.example.com/x", message="connection refused")
        )

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        async def go() -> object:
            async with RealHttpClient(transport=httpx.MockTransport(handler)) as http:
                return await http.request("GET", "https://api.example.com/x")

        result = asyncio.run(go())

        assert isinstance(result, Err)
        assert result.error.message == "Request timed out"

    def test_request_after_close(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200)

        async def go() -> object:
            http = RealHttpClient(transport=httpx.MockTransport(handler))
            await http.aclose()
            return await http.request("GET", "https://api.example.com/x")

        result = asyncio.run(go())

        assert result == Err(
            HttpError(url="https://api.example.com/x", message="Client is closed")
        )
