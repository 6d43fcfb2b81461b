"""
Tests for transports and the terminal invoker.

httpx transport is mocked with respx, requests transport with responses.
"""

import json

import httpx
import pytest
import requests
import respx
import responses

from http_transport.core.context import Context, Response
from http_transport.core.exceptions import (
    ConnectionError,
    HttpStatusError,
    TimeoutError,
    TransportError,
)
from http_transport.core.transport import HttpxTransport, RequestsTransport, TransportInvoker

URL = "http://www.example.com/"


async def send(transport, method="GET", url=URL, **kwargs):
    kwargs.setdefault("headers", httpx.Headers({"User-Agent": "test-agent"}))
    kwargs.setdefault("query", [])
    return await transport.send(method, url, **kwargs)


class TestHttpxTransport:
    """HttpxTransport with respx mocks."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_text_response(self):
        respx.get(URL).mock(return_value=httpx.Response(200, text="Illegitimi non carborundum"))

        response = await send(HttpxTransport())

        assert response.status_code == 200
        assert response.body == "Illegitimi non carborundum"
        assert response.elapsed_time_ms >= 0

    @respx.mock
    @pytest.mark.asyncio
    async def test_binary_response_kept_as_bytes(self):
        payload = b"\x89PNG\r\n\x1a\n\xff\x00"
        respx.get(URL).mock(
            return_value=httpx.Response(200, content=payload, headers={"Content-Type": "image/png"})
        )

        response = await send(HttpxTransport())

        assert response.body == payload

    @respx.mock
    @pytest.mark.asyncio
    async def test_missing_content_type_is_text(self):
        respx.get(URL).mock(return_value=httpx.Response(200, content=b"plain"))

        response = await send(HttpxTransport())

        assert response.body == "plain"

    @respx.mock
    @pytest.mark.asyncio
    async def test_sends_headers_and_query(self):
        route = respx.get(URL).mock(return_value=httpx.Response(200))

        await send(
            HttpxTransport(),
            headers=httpx.Headers({"User-Agent": "ua/1", "foo": "bar"}),
            query=[("a", 1), ("a", 2), ("b", "x")],
        )

        request = route.calls.last.request
        assert request.headers["user-agent"] == "ua/1"
        assert request.headers["foo"] == "bar"
        assert request.url.params.get_list("a") == ["1", "2"]
        assert request.url.params["b"] == "x"

    @respx.mock
    @pytest.mark.asyncio
    async def test_dict_body_sent_as_json(self):
        route = respx.post(URL).mock(return_value=httpx.Response(201, json={"foo": "bar"}))

        response = await send(HttpxTransport(), method="POST", body={"foo": "bar"})

        request = route.calls.last.request
        assert json.loads(request.content) == {"foo": "bar"}
        assert request.headers["content-type"] == "application/json"
        assert response.status_code == 201

    @respx.mock
    @pytest.mark.asyncio
    async def test_string_body_sent_raw(self):
        route = respx.put(URL).mock(return_value=httpx.Response(204))

        response = await send(HttpxTransport(), method="PUT", body="raw")

        assert route.calls.last.request.content == b"raw"
        assert response.body is None

    @respx.mock
    @pytest.mark.asyncio
    async def test_head_has_no_body(self):
        respx.head(URL).mock(return_value=httpx.Response(200))

        response = await send(HttpxTransport(), method="HEAD")

        assert response.status_code == 200
        assert response.body is None

    @respx.mock
    @pytest.mark.asyncio
    async def test_error_status_is_not_raised(self):
        """Транспорт не решает что считать ошибкой."""
        respx.get(URL).mock(return_value=httpx.Response(500, headers={"www-authenticate": "Bearer"}))

        response = await send(HttpxTransport())

        assert response.status_code == 500
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @respx.mock
    @pytest.mark.asyncio
    async def test_timeout(self):
        respx.get(URL).mock(side_effect=httpx.ReadTimeout("timed out"))

        with pytest.raises(TimeoutError) as exc_info:
            await send(HttpxTransport(), timeout_ms=20)

        assert exc_info.value.retryable is True
        assert str(exc_info.value) == f"Request failed for GET {URL}: timeout of 20 ms exceeded"

    @respx.mock
    @pytest.mark.asyncio
    async def test_connection_error(self):
        respx.get(URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(ConnectionError, match="connection refused"):
            await send(HttpxTransport())

    @respx.mock
    @pytest.mark.asyncio
    async def test_uses_given_client(self):
        respx.get(URL).mock(return_value=httpx.Response(200, text="shared"))

        async with httpx.AsyncClient() as client:
            response = await send(HttpxTransport(client))

        assert response.body == "shared"


class TestRequestsTransport:
    """RequestsTransport with responses mocks."""

    @pytest.mark.asyncio
    async def test_text_response(self, mock_responses):
        mock_responses.add(responses.GET, URL, body="Illegitimi non carborundum", status=200)

        response = await send(RequestsTransport())

        assert response.status_code == 200
        assert response.body == "Illegitimi non carborundum"
        assert mock_responses.calls[0].request.headers["User-Agent"] == "test-agent"

    @pytest.mark.asyncio
    async def test_binary_response_kept_as_bytes(self, mock_responses):
        payload = b"\x00\x01\xfe\xff"
        mock_responses.add(
            responses.GET, URL, body=payload, status=200, content_type="application/octet-stream"
        )

        response = await send(RequestsTransport())

        assert response.body == payload

    @pytest.mark.asyncio
    async def test_query_and_json_body(self, mock_responses):
        mock_responses.add(responses.POST, URL, json={"ok": True}, status=201)

        response = await send(
            RequestsTransport(),
            method="POST",
            query=[("a", 1), ("a", 2)],
            body={"foo": "bar"},
        )

        request = mock_responses.calls[0].request
        assert request.url == f"{URL}?a=1&a=2"
        assert json.loads(request.body) == {"foo": "bar"}
        assert response.headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_timeout(self, mock_responses):
        mock_responses.add(responses.GET, URL, body=requests.exceptions.ReadTimeout())

        with pytest.raises(TimeoutError):
            await send(RequestsTransport(), timeout_ms=50)

    @pytest.mark.asyncio
    async def test_connection_error(self, mock_responses):
        mock_responses.add(responses.GET, URL, body=requests.exceptions.ConnectionError("refused"))

        with pytest.raises(ConnectionError):
            await send(RequestsTransport())

    @pytest.mark.asyncio
    async def test_other_request_exception(self, mock_responses):
        mock_responses.add(responses.GET, URL, body=requests.exceptions.TooManyRedirects("loop"))

        with pytest.raises(TransportError, match="loop"):
            await send(RequestsTransport())

    @pytest.mark.asyncio
    async def test_uses_session(self, mock_responses):
        mock_responses.add(responses.GET, URL, body="via session")

        with requests.Session() as session:
            response = await send(RequestsTransport(session))

        assert response.body == "via session"


class FixedTransport:
    def __init__(self, outcome):
        self.outcome = outcome
        self.timeouts = []

    async def send(self, method, url, *, headers, query, body=None, timeout_ms=None):
        self.timeouts.append(timeout_ms)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class TestTransportInvoker:
    """Terminal element."""

    @pytest.mark.asyncio
    async def test_success_sets_response(self):
        ctx = Context("GET", URL)
        await TransportInvoker(FixedTransport(Response(200, body="ok")))(ctx)

        assert ctx.response.body == "ok"
        assert ctx.error is None

    @pytest.mark.asyncio
    async def test_transport_failure_sets_error(self):
        ctx = Context("GET", URL)
        error = ConnectionError("GET", URL, "refused")

        with pytest.raises(ConnectionError):
            await TransportInvoker(FixedTransport(error))(ctx)

        assert ctx.error is error
        assert ctx.response is None

    @pytest.mark.asyncio
    async def test_fail_on_status(self):
        ctx = Context("DELETE", URL)
        response = Response(500, headers=httpx.Headers({"x-reason": "down"}), body="oops")

        with pytest.raises(HttpStatusError) as exc_info:
            await TransportInvoker(FixedTransport(response))(ctx)

        error = exc_info.value
        assert str(error) == f"Request failed for DELETE {URL}"
        assert error.status_code == 500
        assert error.headers["x-reason"] == "down"
        assert error.body == "oops"
        assert ctx.error is error
        assert ctx.response is None

    @pytest.mark.asyncio
    async def test_client_errors_pass_by_default(self):
        ctx = Context("GET", URL)
        await TransportInvoker(FixedTransport(Response(404, body="missing")))(ctx)

        assert ctx.response.status_code == 404
        assert ctx.error is None

    @pytest.mark.asyncio
    async def test_strict_policy_fails_on_client_errors(self):
        ctx = Context("GET", URL)

        with pytest.raises(HttpStatusError) as exc_info:
            await TransportInvoker(FixedTransport(Response(404)), fail_on_status=400)(ctx)

        assert exc_info.value.status_code == 404
        assert exc_info.value.retryable is False

    @pytest.mark.asyncio
    async def test_status_passthrough_when_policy_disabled(self):
        ctx = Context("GET", URL)
        await TransportInvoker(FixedTransport(Response(503)), fail_on_status=None)(ctx)

        assert ctx.response.status_code == 503

    @pytest.mark.asyncio
    async def test_context_timeout_reaches_transport(self):
        transport = FixedTransport(Response(200))
        invoker = TransportInvoker(transport)

        await invoker(Context("GET", URL))
        await invoker(Context("GET", URL, timeout_ms=20))

        assert transport.timeouts == [None, 20]
