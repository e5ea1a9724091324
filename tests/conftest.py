"""Pytest fixtures for testing."""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio


class RecordingTransport:
    """httpx mock transport that records every request it receives."""

    def __init__(self, status_code: int = 200, body: Any = None, headers: dict | None = None):
        self.status_code = status_code
        self.body = body
        self.headers = headers or {}
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body, headers=self.headers)
        return httpx.Response(self.status_code, text=self.body or "", headers=self.headers)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture
def completion_payload() -> dict[str, Any]:
    """A successful chat completion response body."""
    return {
        "id": "chatcmpl-7QyqpwdfhqwajicIEznoc6Q47XAyW",
        "object": "chat.completion",
        "created": 1677664795,
        "model": "gpt-4-0613",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "Why did the chicken cross the road?"},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 13, "completion_tokens": 9, "total_tokens": 22},
    }


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for a RecordingTransport with a canned response."""

    def _make(status_code: int = 200, body: Any = None, headers: dict | None = None) -> RecordingTransport:
        return RecordingTransport(status_code=status_code, body=body, headers=headers)

    return _make


@pytest_asyncio.fixture
async def recorder(completion_payload: dict[str, Any]) -> AsyncGenerator[tuple[RecordingTransport, httpx.AsyncClient], None]:
    """A recording transport answering with a completion, plus an AsyncClient using it."""
    transport = RecordingTransport(body=completion_payload)
    async with httpx.AsyncClient(transport=httpx.MockTransport(transport.handler)) as http_client:
        yield transport, http_client
