"""
Chain composer: runs plugins onion-style around the terminal transport call.

Order for ``compose([g1, g2, p1, p2], terminal)``::

    g1 -> g2 -> p1 -> p2 -> terminal
    g1 <- g2 <- p1 <- p2 <-

Each plugin is called as ``plugin(ctx, next_)``. ``next_()`` returns an
awaitable that settles once every inner plugin and the terminal call have
settled. A plugin that never calls ``next_()`` short-circuits the chain.
"""

import inspect
from typing import Any, Awaitable, Callable, Iterable, Optional, Sequence

from .context import Context
from .exceptions import EmptyResponseError, InvalidPluginError

PluginFunc = Callable[[Context, Callable[[], Awaitable[None]]], Optional[Awaitable[Any]]]
Terminal = Callable[[Context], Awaitable[None]]


def validate_plugin(plugin: Any) -> PluginFunc:
    """
    Проверить что плагин можно вызвать.

    Raises:
        InvalidPluginError: Если ``plugin`` не callable
    """
    if not callable(plugin):
        raise InvalidPluginError(plugin)
    return plugin


class Chain:
    """
    Composed chain for one request.

    Dispatch is index-driven: the continuation handed to plugin ``i`` runs
    plugin ``i + 1`` (or the terminal call), so nothing is pre-built per
    element and the plugin tuple is shared read-only between attempts.
    """

    def __init__(self, plugins: Sequence[PluginFunc], terminal: Terminal):
        self._plugins = tuple(validate_plugin(p) for p in plugins)
        self._terminal = terminal

    def __len__(self) -> int:
        return len(self._plugins)

    @property
    def plugins(self):
        return self._plugins

    async def __call__(self, ctx: Context) -> None:
        """
        Execute the chain against ``ctx``.

        On return exactly one of ``ctx.response`` / ``ctx.error`` is set.
        Any failure is recorded on ``ctx.error`` and re-raised.
        """
        try:
            await self._dispatch(ctx, 0)
        except Exception as error:
            ctx.response = None
            ctx.error = error
            raise

        if ctx.response is None:
            error = EmptyResponseError(ctx.method, ctx.url)
            ctx.error = error
            raise error

        # A plugin may have replaced a failed continuation with a response
        ctx.error = None

    async def _dispatch(self, ctx: Context, index: int) -> None:
        if index == len(self._plugins):
            await self._terminal(ctx)
            return

        called = False

        def next_() -> Awaitable[None]:
            nonlocal called
            if called:
                raise RuntimeError("next() called multiple times")
            called = True
            return self._dispatch(ctx, index + 1)

        result = self._plugins[index](ctx, next_)
        if inspect.isawaitable(result):
            await result


def compose(plugins: Iterable[PluginFunc], terminal: Terminal) -> Chain:
    """
    Собрать цепочку из плагинов и terminal вызова.

    Args:
        plugins: Плагины в порядке от внешнего к внутреннему
                 (глобальные, затем плагины запроса)
        terminal: Terminal transport invoker

    Returns:
        Chain instance

    Example:
        >>> chain = compose([log(), as_json()], TransportInvoker(HttpxTransport()))
        >>> await chain(ctx)
    """
    return Chain(list(plugins), terminal)
