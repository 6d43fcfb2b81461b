# src/http_transport/client.py
"""
Асинхронный HTTP клиент с цепочкой плагинов.

Клиент хранит глобальные плагины и настройки по умолчанию и создаёт
RequestBuilder для каждого запроса. Запрос проходит через цепочку
``[глобальные плагины] + [плагины запроса] + TransportInvoker`` под
управлением RetryEngine.
"""

import logging
import time
from typing import Any, List, Mapping, Optional, Tuple

import httpx

from .core.chain import PluginFunc, compose, validate_plugin
from .core.config import TransportConfig
from .core.context import RequestDescriptor, Response
from .core.logging import TransportLogger
from .core.request_builder import RequestBuilder
from .core.retry_engine import DelayStrategy, RetryEngine
from .core.transport import HttpxTransport, Transport, TransportInvoker
from .core.utils import default_user_agent, sanitize_headers, sanitize_url

logger = logging.getLogger(__name__)


class Client:
    """
    HTTP клиент с глобальными и per-request плагинами.

    Example:
        >>> client = create_client().use_global(log()).use_global(to_error())
        >>> body = await client.get("https://api.example.com/users").retry(2).as_body()

        >>> # Плагин только для одного запроса
        >>> data = await client.use(as_json()).get("https://api.example.com/me").as_body()

    Features:
        - Onion-style плагины: глобальные снаружи, плагины запроса внутри
        - Повторы с историей попыток
        - Подключаемый транспорт (httpx по умолчанию, requests)
        - Подключаемая задержка между повторами
    """

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        *,
        transport: Optional[Transport] = None,
        delay: Optional[DelayStrategy] = None,
    ):
        """
        Args:
            config: TransportConfig (по умолчанию без таймаута и повторов)
            transport: Транспорт (по умолчанию HttpxTransport)
            delay: Стратегия задержки между повторами (по умолчанию без задержки)
        """
        self._config = config or TransportConfig()
        self._transport = transport or HttpxTransport()
        self._delay = delay
        self._plugins: List[PluginFunc] = []

        headers = httpx.Headers({"User-Agent": self._config.user_agent or default_user_agent()})
        headers.update(self._config.headers)
        self._default_headers = headers

        self._logger: Optional[TransportLogger] = None
        if self._config.logging:
            self._logger = TransportLogger(self._config.logging)

    @property
    def config(self) -> TransportConfig:
        return self._config

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def default_headers(self) -> httpx.Headers:
        """Копия заголовков по умолчанию (включая User-Agent)."""
        return httpx.Headers(self._default_headers)

    @property
    def plugins(self) -> Tuple[PluginFunc, ...]:
        """Снимок глобальных плагинов в порядке регистрации."""
        return tuple(self._plugins)

    # ==================== Плагины ====================

    def use_global(self, plugin: PluginFunc) -> 'Client':
        """
        Зарегистрировать плагин для всех последующих запросов.

        Уже отправленные запросы не видят новый плагин.

        Raises:
            InvalidPluginError: Если плагин нельзя вызвать
        """
        self._plugins.append(validate_plugin(plugin))
        return self

    def use(self, plugin: PluginFunc) -> RequestBuilder:
        """Новый RequestBuilder с плагином только для этого запроса."""
        return RequestBuilder(self).use(plugin)

    def headers(self, headers: Optional[Mapping[str, Any]] = None) -> RequestBuilder:
        """Новый RequestBuilder с дополнительными заголовками."""
        return RequestBuilder(self).headers(headers)

    # ==================== HTTP методы ====================

    def request(self, method: str, url: str, body: Any = None) -> RequestBuilder:
        return RequestBuilder(self).request(method, url, body)

    def get(self, url: str, body: Any = None) -> RequestBuilder:
        """GET запрос."""
        return self.request("GET", url, body)

    def post(self, url: str, body: Any = None) -> RequestBuilder:
        """POST запрос."""
        return self.request("POST", url, body)

    def put(self, url: str, body: Any = None) -> RequestBuilder:
        """PUT запрос."""
        return self.request("PUT", url, body)

    def patch(self, url: str, body: Any = None) -> RequestBuilder:
        """PATCH запрос."""
        return self.request("PATCH", url, body)

    def delete(self, url: str, body: Any = None) -> RequestBuilder:
        """DELETE запрос."""
        return self.request("DELETE", url, body)

    def head(self, url: str, body: Any = None) -> RequestBuilder:
        """HEAD запрос."""
        return self.request("HEAD", url, body)

    # ==================== Отправка ====================

    async def dispatch(self, descriptor: RequestDescriptor) -> Response:
        """
        Выполнить запрос по снимку.

        Raises:
            TransportError: Сетевая ошибка (после исчерпания повторов)
            HttpStatusError: Статус >= config.fail_on_status (500 по умолчанию)
            Exception: Любая ошибка плагина, с атрибутом ``retries``
        """
        chain = compose(
            descriptor.plugins,
            TransportInvoker(self._transport, fail_on_status=self._config.fail_on_status),
        )
        engine = RetryEngine(descriptor.retries, delay=self._delay)
        url = sanitize_url(descriptor.url)

        if self._logger:
            self._logger.debug(
                f"Dispatching {descriptor.method} {url}",
                method=descriptor.method,
                url=url,
                headers=sanitize_headers(descriptor.headers),
                plugins=len(chain),
                retries=descriptor.retries,
            )

        start = time.perf_counter()
        try:
            ctx = await engine.run(descriptor, chain)
        except Exception as error:
            if self._logger:
                self._logger.warning(
                    f"{descriptor.method} {url} failed: {error}",
                    method=descriptor.method,
                    url=url,
                    status_code=getattr(error, 'status_code', None),
                    attempts=len(engine.history) + 1,
                )
            raise

        if self._logger:
            self._logger.info(
                f"{descriptor.method} {url} {ctx.response.status_code}",
                method=descriptor.method,
                url=url,
                status_code=ctx.response.status_code,
                attempts=len(engine.history) + 1,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
        else:
            logger.debug(f"{descriptor.method} {url} {ctx.response.status_code}")

        return ctx.response

    def __repr__(self) -> str:
        return f"Client(plugins={len(self._plugins)}, transport={type(self._transport).__name__})"


def create_client(config: Optional[TransportConfig] = None, **kwargs: Any) -> Client:
    """
    Создать новый клиент без глобальных плагинов.

    Args:
        config: TransportConfig
        **kwargs: transport=..., delay=...

    Example:
        >>> client = create_client()
        >>> client = create_client(TransportConfig.create(retries=2), transport=RequestsTransport())
    """
    return Client(config, **kwargs)
