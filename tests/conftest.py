"""
Pytest configuration and fixtures for http-transport tests.
"""

from typing import Any, List, Optional

import httpx
import pytest
import responses as responses_lib

from http_transport import create_client
from http_transport.core.context import Response
from http_transport.core.exceptions import ConnectionError


class SpyTransport:
    """
    Scripted transport: returns/raises queued outcomes and records calls.

    Outcomes are ints (status codes), Response objects or exceptions. The
    last outcome repeats once the queue is exhausted.
    """

    def __init__(self, *outcomes: Any):
        self.outcomes: List[Any] = list(outcomes) or [200]
        self.calls: List[dict] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: httpx.Headers,
        query,
        body: Any = None,
        timeout_ms: Optional[float] = None,
    ) -> Response:
        self.calls.append({
            "method": method,
            "url": url,
            "headers": httpx.Headers(headers),
            "query": list(query),
            "body": body,
            "timeout_ms": timeout_ms,
        })
        index = min(len(self.calls) - 1, len(self.outcomes) - 1)
        outcome = self.outcomes[index]

        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, Response):
            return outcome
        return Response(status_code=outcome, body="ok", elapsed_time_ms=1.0)


@pytest.fixture
def mock_responses():
    """Mock requests-based HTTP calls using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def url():
    """URL for testing."""
    return "http://www.example.com/"


@pytest.fixture
def spy_transport():
    """Transport that answers 200 "ok" and records calls."""
    return SpyTransport(200)


@pytest.fixture
def client(spy_transport):
    """Client wired to the spy transport."""
    return create_client(transport=spy_transport)


@pytest.fixture
def connection_refused(url):
    """Transport-level failure for the test URL."""
    return ConnectionError("GET", url, "connection refused")


@pytest.fixture
def make_transport():
    """Factory for scripted transports: ``make_transport(500, 200)``."""
    return SpyTransport
