# src/http_transport/plugins/error_plugin.py
"""Turn non-2xx responses into HttpStatusError."""

from ..core.context import Context
from ..core.exceptions import HttpStatusError
from .plugin import Plugin


class ErrorPlugin(Plugin):
    """
    Статус >= 400 становится HttpStatusError.

    Ошибка несёт статус, заголовки и тело ответа. 5xx остаются
    retryable, поэтому плагин можно ставить внутри цепочки с retry().
    """

    async def after(self, ctx: Context) -> None:
        response = ctx.response
        if response is None:
            return
        if response.status_code >= 400:
            raise HttpStatusError(
                ctx.method,
                ctx.url,
                response.status_code,
                headers=response.headers,
                body=response.body,
            )


def to_error() -> ErrorPlugin:
    """
    Example:
        >>> client = create_client().use_global(to_error())
        >>> await client.get("https://api.example.com/missing")  # HttpStatusError(404)
    """
    return ErrorPlugin()
