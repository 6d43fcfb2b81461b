"""
Transports and the terminal chain element.

A transport performs exactly one physical HTTP call. ``TransportInvoker``
is the innermost element of every chain and the only place where I/O
happens.
"""

import asyncio
import functools
import time
from typing import Any, Callable, Dict, Optional, Protocol, Sequence, Tuple

import httpx
import requests

from .context import Context, Response
from .exceptions import ConnectionError, HttpStatusError, TimeoutError, TransportError

Query = Sequence[Tuple[str, Any]]


class Transport(Protocol):
    """Perform one HTTP call or raise a ``TransportError``."""

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: httpx.Headers,
        query: Query,
        body: Any = None,
        timeout_ms: Optional[float] = None,
    ) -> Response:
        ...


def _body_kwargs(body: Any) -> Dict[str, Any]:
    """dict/list уходят как JSON, остальное как есть."""
    if body is None:
        return {}
    if isinstance(body, (dict, list)):
        return {"json": body}
    return {"content": body}


_TEXT_MARKERS = ("json", "xml", "javascript", "x-www-form-urlencoded")


def _is_text(content_type: str) -> bool:
    """Без Content-Type тело считается текстом."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    if not media_type or media_type.startswith("text/"):
        return True
    return any(marker in media_type for marker in _TEXT_MARKERS)


def _response_body(content: bytes, content_type: str, text: Callable[[], str]) -> Any:
    """None для пустого тела, str для текстовых типов, иначе bytes."""
    if not content:
        return None
    return text() if _is_text(content_type) else content


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class HttpxTransport:
    """
    Транспорт на базе httpx.

    Без переданного клиента создаёт ``httpx.AsyncClient`` на каждый вызов,
    поэтому не держит ресурсов между запросами.

    Example:
        >>> transport = HttpxTransport(verify=False)
        >>> client = create_client(transport=transport)
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, **client_kwargs: Any):
        """
        Args:
            client: Готовый httpx.AsyncClient (владелец закрывает его сам)
            **client_kwargs: Параметры для создаваемого httpx.AsyncClient
        """
        self._client = client
        self._client_kwargs = client_kwargs

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: httpx.Headers,
        query: Query,
        body: Any = None,
        timeout_ms: Optional[float] = None,
    ) -> Response:
        kwargs = _body_kwargs(body)
        if query:
            kwargs["params"] = [(key, str(value)) for key, value in query]
        if timeout_ms is not None:
            kwargs["timeout"] = httpx.Timeout(timeout_ms / 1000)

        start = time.perf_counter()
        try:
            if self._client is not None:
                response = await self._client.request(method, url, headers=headers, **kwargs)
            else:
                async with httpx.AsyncClient(**self._client_kwargs) as client:
                    response = await client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException:
            raise TimeoutError(method, url, timeout_ms)
        except httpx.TransportError as e:
            raise ConnectionError(method, url, str(e) or e.__class__.__name__)

        return Response(
            status_code=response.status_code,
            headers=httpx.Headers(response.headers),
            body=_response_body(
                response.content,
                response.headers.get("content-type", ""),
                lambda: response.text,
            ),
            elapsed_time_ms=_elapsed_ms(start),
        )


class RequestsTransport:
    """
    Транспорт на базе requests.

    requests блокирующий, поэтому вызов выполняется в executor event loop'а.

    Example:
        >>> session = requests.Session()
        >>> client = create_client(transport=RequestsTransport(session))
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self._session = session

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: httpx.Headers,
        query: Query,
        body: Any = None,
        timeout_ms: Optional[float] = None,
    ) -> Response:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            functools.partial(
                self._send_sync, method, url, headers, list(query), body, timeout_ms
            ),
        )

    def _send_sync(
        self,
        method: str,
        url: str,
        headers: httpx.Headers,
        query: Query,
        body: Any,
        timeout_ms: Optional[float],
    ) -> Response:
        kwargs: Dict[str, Any] = {
            "headers": dict(headers.items()),
            "params": query or None,
            "timeout": timeout_ms / 1000 if timeout_ms is not None else None,
        }
        if isinstance(body, (dict, list)):
            kwargs["json"] = body
        elif body is not None:
            kwargs["data"] = body

        requester = self._session.request if self._session is not None else requests.request

        start = time.perf_counter()
        try:
            response = requester(method, url, **kwargs)
        except requests.exceptions.Timeout:
            raise TimeoutError(method, url, timeout_ms)
        except requests.exceptions.ConnectionError as e:
            raise ConnectionError(method, url, str(e) or e.__class__.__name__)
        except requests.exceptions.RequestException as e:
            raise TransportError(method, url, str(e) or e.__class__.__name__)

        return Response(
            status_code=response.status_code,
            headers=httpx.Headers(dict(response.headers)),
            body=_response_body(
                response.content,
                response.headers.get("content-type", ""),
                lambda: response.text,
            ),
            elapsed_time_ms=_elapsed_ms(start),
        )


class TransportInvoker:
    """
    Terminal element of every chain.

    Performs the physical call for ``ctx`` and stores the result on
    ``ctx.response``. Transport failures, and any status at or above
    ``fail_on_status``, are stored on ``ctx.error`` and raised.

    Args:
        transport: Transport that performs the call
        fail_on_status: Lowest status treated as a failure (500 by default,
                        400 to fail on client errors too, None to hand every
                        status to the plugins)
    """

    def __init__(self, transport: Transport, fail_on_status: Optional[int] = 500):
        self.transport = transport
        self.fail_on_status = fail_on_status

    async def __call__(self, ctx: Context) -> None:
        try:
            response = await self.transport.send(
                ctx.method,
                ctx.url,
                headers=ctx.headers,
                query=ctx.query,
                body=ctx.body,
                timeout_ms=ctx.timeout_ms,
            )
        except TransportError as error:
            ctx.error = error
            raise

        if self.fail_on_status is not None and response.status_code >= self.fail_on_status:
            error = HttpStatusError(
                ctx.method,
                ctx.url,
                response.status_code,
                headers=response.headers,
                body=response.body,
            )
            ctx.error = error
            raise error

        ctx.response = response
