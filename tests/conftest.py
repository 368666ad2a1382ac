"""Pytest configuration and shared fixtures."""
import json
import logging
import os
from collections.abc import AsyncIterator, Callable

import httpx
import pytest
import pytest_asyncio

from perplexity_mcp.tools.perplexity.client import PerplexityClient

os.environ.setdefault("PERPLEXITY_API_KEY", "test-perplexity-key")

Responder = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, responder: Responder) -> None:
        """Wrap the responder so requests are captured before it runs."""
        self.requests: list[httpx.Request] = []

        def handle(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return responder(request)

        super().__init__(handle)

    def last_payload(self) -> dict:
        """Decode the JSON body of the most recent request."""
        return json.loads(self.requests[-1].content)


def _completion_body(
    content: str = "Paris.",
    citations: list[str] | None = None,
    total_tokens: int = 12,
) -> dict:
    return {
        "id": "cmpl-1",
        "model": "sonar-reasoning-pro",
        "object": "chat.completion",
        "created": 1700000000,
        "citations": citations if citations is not None else [],
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
        "usage": {"prompt_tokens": 4, "completion_tokens": 8, "total_tokens": total_tokens},
    }


@pytest.fixture
def completion_body() -> Callable[..., dict]:
    """Return a builder for chat-completions replies in the Perplexity shape."""
    return _completion_body


@pytest_asyncio.fixture
async def make_client() -> AsyncIterator[Callable[..., tuple[PerplexityClient, RecordingTransport]]]:
    """Yield a factory building a PerplexityClient over a recording transport."""
    http_clients: list[httpx.AsyncClient] = []

    def factory(
        responder: Responder,
        api_key: str | None = "test-key",
    ) -> tuple[PerplexityClient, RecordingTransport]:
        transport = RecordingTransport(responder)
        http_client = httpx.AsyncClient(transport=transport)
        http_clients.append(http_client)
        client = PerplexityClient(
            api_key=api_key,
            base_url="https://api.perplexity.test",
            http_client=http_client,
        )
        return client, transport

    yield factory

    for http_client in http_clients:
        await http_client.aclose()


@pytest.fixture(autouse=True)
def _reset_root_logger():
    """Drop handlers bound to captured streams once a test finishes."""
    yield
    logging.getLogger().handlers.clear()
