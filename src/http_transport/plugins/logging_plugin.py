"""Log one line per completed request."""

import inspect
import logging
import time
from typing import Any, Callable, Optional

from ..core.context import Context
from ..core.utils import sanitize_url
from .plugin import Plugin

logger = logging.getLogger(__name__)

_STARTED = 'logging_plugin.started'


class LoggingPlugin(Plugin):
    """
    Логирует ``<METHOD> <URL> <status> <elapsed> ms`` после завершения запроса.

    Успешный ответ логируется через ``info``, ошибка через ``warning``
    (``<METHOD> <URL> <status|-> <elapsed> ms failed: <error>``).
    Логгер - любой объект с методами ``info``/``warning`` (stdlib logger,
    TransportLogger, async логгер). Ошибки самого логгера не ломают запрос.
    """

    def __init__(self, request_logger: Optional[Any] = None):
        self.logger = request_logger if request_logger is not None else logger

    async def before(self, ctx: Context) -> None:
        ctx.metadata[_STARTED] = time.perf_counter()

    async def after(self, ctx: Context) -> None:
        response = ctx.response
        if response is None:
            return

        def message() -> str:
            return (
                f"{ctx.method} {sanitize_url(ctx.url)} {response.status_code} "
                f"{int(round(response.elapsed_time_ms))} ms"
            )

        await self._emit('info', message)

    async def on_error(self, ctx: Context, error: Exception) -> None:
        now = time.perf_counter()
        elapsed_ms = (now - ctx.metadata.get(_STARTED, now)) * 1000

        def message() -> str:
            status = getattr(error, 'status_code', None)
            return (
                f"{ctx.method} {sanitize_url(ctx.url)} {status if status is not None else '-'} "
                f"{int(round(elapsed_ms))} ms failed: {error}"
            )

        await self._emit('warning', message)

    async def _emit(self, level: str, message: Callable[[], str]) -> None:
        try:
            method = getattr(self.logger, level, None) or self.logger.info
            result = method(message())
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.debug("Request logger failed", exc_info=True)


def log(request_logger: Optional[Any] = None) -> LoggingPlugin:
    """
    Example:
        >>> client = create_client().use_global(log(logging.getLogger("api")))
    """
    return LoggingPlugin(request_logger)
