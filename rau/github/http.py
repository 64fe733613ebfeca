"""Async HTTP client abstraction.

This module provides:
- HttpClient: Protocol for HTTP requests (injectable for tests)
- RealHttpClient: Implementation on httpx.AsyncClient
- MockHttpClient: Canned responses and call recording for tests

Clients report transport failures (DNS, refused connection, timeout) as
HttpError. Any HTTP status, including 4xx/5xx, is a successful request here;
status checks belong to the API layer.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import httpx

from rau import __version__
from rau.core.result import Err, Ok, Result

__all__ = [
    "Body",
    "HttpCall",
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
]

Body = bytes | AsyncIterator[bytes]

DEFAULT_USER_AGENT = f"rau/{__version__}"


@dataclass(frozen=True, slots=True)
class HttpError:
    """Transport failure.

    Attributes:
        url: The URL that failed
        message: Human-readable error message
    """

    url: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class HttpResponse:
    status: int
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> object:
        """Decode the body as JSON.

        Raises:
            ValueError: If the body is not valid UTF-8 JSON.
        """
        return json.loads(self.body.decode("utf-8"))


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for async HTTP requests."""

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        content: Body | None = None,
    ) -> Result[HttpResponse, HttpError]:
        """Send one request.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Extra request headers
            params: Query parameters appended to the URL
            content: Request body, either bytes or an async byte stream

        Returns:
            Ok with the response (any status), or Err with HttpError
        """
        ...

    async def aclose(self) -> None: ...


class RealHttpClient:
    """HTTP client backed by one shared httpx.AsyncClient.

    Use as an async context manager so the connection pool is closed:

        async with RealHttpClient() as http:
            result = await http.request("GET", url)
    """

    def __init__(
        self,
        timeout: float = 60.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    async def __aenter__(self) -> RealHttpClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        content: Body | None = None,
    ) -> Result[HttpResponse, HttpError]:
        # Uploads abandoned after a sibling failed may still get here.
        if self._client.is_closed:
            return Err(HttpError(url=url, message="Client is closed"))
        try:
            response = await self._client.request(
                method,
                url,
                headers=dict(headers or {}),
                params=dict(params) if params else None,
                content=content,
            )
            return Ok(HttpResponse(status=response.status_code, body=response.content))
        except httpx.TimeoutException:
            return Err(HttpError(url=url, message="Request timed out"))
        except httpx.HTTPError as e:
            return Err(HttpError(url=url, message=str(e) or type(e).__name__))
        except OSError as e:
            # Raised while streaming a local file body.
            return Err(HttpError(url=url, message=str(e)))


@dataclass(frozen=True, slots=True)
class HttpCall:
    method: str
    url: str
    headers: dict[str, str]
    params: dict[str, str]
    body: bytes


def _no_calls() -> list[HttpCall]:
    return []


def _no_responses() -> dict[tuple[str, str], HttpResponse | HttpError]:
    return {}


@dataclass
class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        http = MockHttpClient()
        http.set_response("GET", "https://api.example.com/x", HttpResponse(200, b"{}"))
        result = await http.request("GET", "https://api.example.com/x")

    Unknown (method, url) pairs answer 404. Streamed bodies are drained so
    tests can assert on the bytes that would have been sent.
    """

    responses: dict[tuple[str, str], HttpResponse | HttpError] = field(
        default_factory=_no_responses
    )
    calls: list[HttpCall] = field(default_factory=_no_calls)
    closed: bool = False

    def set_response(self, method: str, url: str, response: HttpResponse | HttpError) -> None:
        self.responses[(method.upper(), url)] = response

    def set_json(self, method: str, url: str, payload: object, status: int = 200) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.set_response(method, url, HttpResponse(status=status, body=body))

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        content: Body | None = None,
    ) -> Result[HttpResponse, HttpError]:
        if content is None:
            body = b""
        elif isinstance(content, bytes):
            body = content
        else:
            body = b"".join([chunk async for chunk in content])

        self.calls.append(
            HttpCall(
                method=method.upper(),
                url=url,
                headers=dict(headers or {}),
                params=dict(params or {}),
                body=body,
            )
        )

        response = self.responses.get((method.upper(), url))
        if response is None:
            return Ok(HttpResponse(status=404, body=b'{"message": "Not Found (mock)"}'))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    async def aclose(self) -> None:
        self.closed = True
