# src/http_transport/plugins/json_plugin.py
"""Coerce JSON response bodies into Python values."""

import json

from ..core.context import Context
from ..core.exceptions import ParseError
from .plugin import Plugin


class JsonPlugin(Plugin):
    """
    Парсит тело ответа, если Content-Type указывает на JSON.

    Срабатывает для ``application/json`` и ``application/*+json``.
    Невалидный JSON превращается в ParseError.
    """

    async def after(self, ctx: Context) -> None:
        response = ctx.response
        if response is None:
            return
        body = response.body
        if not isinstance(body, (str, bytes)) or not body:
            return

        content_type = response.headers.get('content-type', '')
        if 'json' not in content_type.lower():
            return

        try:
            response.body = json.loads(body)
        except ValueError as e:
            raise ParseError(
                f"Failed to parse JSON body for {ctx.method} {ctx.url}: {e}",
                body=body,
            ) from e


def as_json() -> JsonPlugin:
    """
    Example:
        >>> body = await client.use(as_json()).get(url).as_body()
        >>> body['foo']
        'bar'
    """
    return JsonPlugin()
