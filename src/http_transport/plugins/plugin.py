# src/http_transport/plugins/plugin.py
"""
Базовый класс для плагинов с хуками.

Любой callable ``(ctx, next_)`` уже является плагином. Plugin даёт
готовый onion ``__call__`` и хуки, которые вызываются вокруг ``next_()``.
"""

from abc import ABC
from typing import Awaitable, Callable

from ..core.context import Context


class Plugin(ABC):
    """
    Плагин с хуками before/after/on_error.

    ``after`` вызывается только если внутренняя часть цепочки завершилась
    успешно. ``on_error`` видит ошибку, после чего она пробрасывается
    дальше. Чтобы подменить ошибку ответом, переопределите ``__call__``.

    Example:
        >>> class TagPlugin(Plugin):
        ...     async def before(self, ctx):
        ...         ctx.headers['X-Tag'] = 'demo'
        ...
        ...     async def after(self, ctx):
        ...         ctx.response.body = 'tagged ' + ctx.response.body
    """

    async def before(self, ctx: Context) -> None:
        """Вызывается перед next_()."""

    async def after(self, ctx: Context) -> None:
        """Вызывается после успешного next_()."""

    async def on_error(self, ctx: Context, error: Exception) -> None:
        """Вызывается если next_() упал; ошибка будет проброшена."""

    async def __call__(self, ctx: Context, next_: Callable[[], Awaitable[None]]) -> None:
        await self.before(ctx)
        try:
            await next_()
        except Exception as error:
            await self.on_error(ctx, error)
            raise
        await self.after(ctx)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
