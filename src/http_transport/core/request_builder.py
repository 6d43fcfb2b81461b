"""Fluent request builder."""

from typing import TYPE_CHECKING, Any, Awaitable, Generator, List, Mapping, Optional, Tuple, Union

import httpx

from .chain import PluginFunc, validate_plugin
from .context import RequestDescriptor, Response
from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..client import Client


class RequestBuilder:
    """
    Accumulates one request's configuration.

    Every method validates its argument immediately and returns the builder.
    Nothing is sent until ``as_response()`` / ``as_body()`` is called (or
    the builder is awaited).

    Example:
        >>> body = await (
        ...     client.get("https://api.example.com/users")
        ...     .headers({"Accept": "application/json"})
        ...     .query("page", 2)
        ...     .retry(2)
        ...     .use(as_json())
        ...     .as_body()
        ... )
    """

    def __init__(self, client: 'Client'):
        self._client = client
        self._method = "GET"
        self._url: Optional[str] = None
        self._body: Any = None
        self._headers = httpx.Headers(client.default_headers)
        self._query: List[Tuple[str, Any]] = []
        self._timeout_ms = client.config.timeout_ms
        self._retries = client.config.retries
        self._plugins: List[PluginFunc] = []

    # ==================== HTTP методы ====================

    def request(self, method: str, url: str, body: Any = None) -> 'RequestBuilder':
        if not url:
            raise ConfigurationError("missing url")
        self._method = method.upper()
        self._url = url
        self._body = body
        return self

    def get(self, url: str, body: Any = None) -> 'RequestBuilder':
        return self.request("GET", url, body)

    def post(self, url: str, body: Any = None) -> 'RequestBuilder':
        return self.request("POST", url, body)

    def put(self, url: str, body: Any = None) -> 'RequestBuilder':
        return self.request("PUT", url, body)

    def patch(self, url: str, body: Any = None) -> 'RequestBuilder':
        return self.request("PATCH", url, body)

    def delete(self, url: str, body: Any = None) -> 'RequestBuilder':
        return self.request("DELETE", url, body)

    def head(self, url: str, body: Any = None) -> 'RequestBuilder':
        return self.request("HEAD", url, body)

    # ==================== Настройка ====================

    def headers(self, headers: Optional[Mapping[str, Any]] = None) -> 'RequestBuilder':
        """
        Добавить заголовки; одинаковые ключи (без учёта регистра) перезаписываются.

        Raises:
            ConfigurationError: Если ``headers`` пустой, не передан или не mapping
        """
        if not headers:
            raise ConfigurationError("missing headers")
        if not isinstance(headers, Mapping):
            raise ConfigurationError(f"headers must be a mapping, got {type(headers).__name__}")
        for name, value in headers.items():
            self._headers[name] = str(value)
        return self

    def query(
        self,
        key: Union[str, Mapping[str, Any], None] = None,
        value: Any = None,
    ) -> 'RequestBuilder':
        """
        Добавить query параметр ``query("a", 1)`` или несколько ``query({"a": 1})``.

        Повторяющиеся ключи добавляются, а не заменяются.

        Raises:
            ConfigurationError: Если mapping пустой или ключ не передан
        """
        if isinstance(key, Mapping):
            if not key:
                raise ConfigurationError("missing query strings")
            self._query.extend(key.items())
        elif key:
            self._query.append((key, value))
        else:
            raise ConfigurationError("missing query strings")
        return self

    def timeout(self, ms: float) -> 'RequestBuilder':
        """Таймаут одной физической попытки в миллисекундах."""
        if isinstance(ms, bool) or not isinstance(ms, (int, float)) or ms <= 0:
            raise ConfigurationError(f"timeout must be a positive number of ms, got {ms!r}")
        self._timeout_ms = ms
        return self

    def retry(self, count: int) -> 'RequestBuilder':
        """Максимум повторов (0 = без повторов)."""
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ConfigurationError(f"retry count must be a non-negative int, got {count!r}")
        self._retries = count
        return self

    def use(self, plugin: PluginFunc) -> 'RequestBuilder':
        """
        Добавить плагин только для этого запроса.

        Raises:
            InvalidPluginError: Если плагин нельзя вызвать
        """
        self._plugins.append(validate_plugin(plugin))
        return self

    # ==================== Отправка ====================

    def build(self) -> RequestDescriptor:
        """Снимок запроса вместе с текущими глобальными плагинами клиента."""
        if self._url is None:
            raise ConfigurationError("missing url: call get/post/put/patch/delete/head first")
        return RequestDescriptor(
            method=self._method,
            url=self._url,
            headers=httpx.Headers(self._headers),
            query=tuple(self._query),
            body=self._body,
            timeout_ms=self._timeout_ms,
            retries=self._retries,
            plugins=self._client.plugins + tuple(self._plugins),
        )

    def as_response(self) -> Awaitable[Response]:
        """Отправить запрос; результат - awaitable с ``Response``."""
        return self._client.dispatch(self.build())

    def as_body(self) -> Awaitable[Any]:
        """Отправить запрос; результат - awaitable с телом ответа."""
        return self._body_of(self.build())

    async def _body_of(self, descriptor: RequestDescriptor) -> Any:
        response = await self._client.dispatch(descriptor)
        return response.body

    def __await__(self) -> Generator[Any, None, Response]:
        return self.as_response().__await__()

    def __repr__(self) -> str:
        return f"RequestBuilder({self._method} {self._url})"
