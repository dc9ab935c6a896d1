"""
HTTP transport for the Swellforms REST API.

A *fetch* is any async callable ``fetch(url, init)`` returning an object with an
integer ``status`` and an awaitable ``text()``. HttpxFetch is the default one.
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Optional, Protocol
from urllib.parse import quote

import httpx

from swellforms.errors import ErrorCode, SwellformsError

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://app.swellforms.com"
API_VERSION = "v1"
DEFAULT_TIMEOUT_S = 15.0
USER_AGENT = "swellforms-python/0.1.0"


class RequestInit:
    __slots__ = ("method", "headers", "body", "signal")

    def __init__(
        self,
        method: str = "GET",
        headers: Optional[dict[str, str]] = None,
        body: Optional[str] = None,
        signal: Optional[asyncio.Event] = None,
    ):
        self.method = method
        self.headers = headers or {}
        self.body = body
        self.signal = signal

    def __repr__(self) -> str:
        return f"RequestInit(method={self.method!r}, body={self.body!r})"


class Response(Protocol):
    status: int

    async def text(self) -> str: ...


Fetch = Callable[[str, RequestInit], Awaitable[Response]]


class FetchResponse:
    __slots__ = ("status", "_body")

    def __init__(self, status: int, body: str = ""):
        self.status = status
        self._body = body

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    async def text(self) -> str:
        return self._body


class HttpxFetch:
    """Default fetch backed by ``httpx.AsyncClient``.

    Pass ``client`` to reuse a connection pool, or ``transport`` (for example
    ``httpx.MockTransport``) to route requests elsewhere.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = client
        self._transport = transport

    async def __call__(self, url: str, init: RequestInit) -> FetchResponse:
        headers = {"User-Agent": USER_AGENT, **init.headers}
        content = init.body.encode("utf-8") if init.body is not None else None
        if self._client is not None:
            resp = await self._client.request(init.method, url, headers=headers, content=content)
        else:
            async with httpx.AsyncClient(transport=self._transport, timeout=None) as client:
                resp = await client.request(init.method, url, headers=headers, content=content)
        return FetchResponse(resp.status_code, resp.text)


def endpoint(base_url: str, form_id: str, action: str) -> str:
    return f"{base_url.rstrip('/')}/api/{API_VERSION}/forms/{quote(form_id, safe='')}/{action}"


def json_request(method: str, body: Optional[dict[str, Any]] = None) -> RequestInit:
    headers = {"Accept": "application/json"}
    if body is None:
        return RequestInit(method, headers)
    headers["Content-Type"] = "application/json"
    return RequestInit(method, headers, json.dumps(body))


def _parse(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


async def fetch_json(
    url: str,
    init: RequestInit,
    fetch: Optional[Fetch] = None,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> tuple[Response, Any]:
    """Issue one request and return ``(response, parsed_body)``.

    The body is None when empty or not valid JSON. The timeout covers both the
    request and reading the body; on expiry ``init.signal`` is set and the
    call raises SwellformsError with code TIMEOUT.
    """
    fetch = fetch or HttpxFetch()
    signal = asyncio.Event()
    init.signal = signal

    async def _exchange() -> tuple[Response, Any]:
        res = await fetch(url, init)
        return res, _parse(await res.text())

    log.debug("%s %s", init.method, url)
    try:
        res, body = await asyncio.wait_for(_exchange(), timeout=timeout)
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        signal.set()
        log.warning("%s %s timed out", init.method, url)
        raise SwellformsError("Request timed out", 0, ErrorCode.TIMEOUT) from e
    except SwellformsError:
        raise
    except Exception as e:
        log.warning("%s %s failed: %s", init.method, url, e)
        raise SwellformsError(str(e) or "Network error", 0, ErrorCode.NETWORK) from e
    log.debug("%s %s -> %s", init.method, url, res.status)
    return res, body
