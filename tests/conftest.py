import json
from typing import Any, Optional

import pytest

from swellforms.transport.http import FetchResponse, RequestInit


class StubFetch:
    """Fetch double: replies with queued (status, body) pairs and records every call."""

    def __init__(self, *replies: tuple[int, Any]):
        self.replies = list(replies)
        self.calls: list[tuple[str, RequestInit]] = []

    async def __call__(self, url: str, init: RequestInit) -> FetchResponse:
        self.calls.append((url, init))
        status, body = self.replies.pop(0)
        text = body if isinstance(body, str) else ("" if body is None else json.dumps(body))
        return FetchResponse(status, text)

    def sent(self, index: int = -1) -> Optional[dict[str, Any]]:
        body = self.calls[index][1].body
        return json.loads(body) if body else None


@pytest.fixture
def stub():
    return StubFetch
