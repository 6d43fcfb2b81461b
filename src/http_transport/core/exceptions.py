"""
Иерархия исключений HTTP Transport.

Классификация:
- retryable=True - RetryEngine может повторить попытку
- fatal=True - НЕ ретраить никогда

Ошибки конфигурации (ConfigurationError, InvalidPluginError) выбрасываются
синхронно при настройке запроса. Все остальные приходят только через
await результата запроса.
"""

from typing import Any, List, Mapping, Optional

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportException(Exception):
    """Базовое исключение HTTP Transport."""

    retryable: bool = False
    fatal: bool = False

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        headers: Optional[Mapping[str, str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.headers = headers
        self.retries: List[Any] = []
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ КОНФИГУРАЦИИ (синхронные)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConfigurationError(TransportException, ValueError):
    """Невалидный аргумент builder'а или конфига."""
    fatal = True


class InvalidPluginError(TransportException, TypeError):
    """
    Плагин нельзя вызвать.

    Args:
        plugin: Переданный объект
    """
    fatal = True

    def __init__(self, plugin: Any):
        self.plugin = plugin
        super().__init__(f"Plugin is not callable: {plugin!r}")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ ТРАНСПОРТА (retryable=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def failure_message(method: str, url: str, reason: Optional[str] = None) -> str:
    """
    Сообщение об ошибке запроса.

    Examples:
        >>> failure_message("GET", "http://www.example.com/")
        'Request failed for GET http://www.example.com/'
        >>> failure_message("GET", "http://www.example.com/", "timeout")
        'Request failed for GET http://www.example.com/: timeout'
    """
    msg = f"Request failed for {method} {url}"
    if reason:
        msg += f": {reason}"
    return msg


class TransportError(TransportException):
    """
    Сетевая ошибка terminal вызова.

    Args:
        method: HTTP метод
        url: URL запроса
        reason: Причина (текст исходного исключения)
    """
    retryable = True

    def __init__(self, method: str, url: str, reason: str):
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(failure_message(method, url, reason))


class TimeoutError(TransportError):
    """
    Таймаут запроса.

    Args:
        method: HTTP метод
        url: URL запроса
        timeout_ms: Значение таймаута (мс)
    """

    def __init__(self, method: str, url: str, timeout_ms: Optional[float] = None):
        self.timeout_ms = timeout_ms
        reason = "timeout"
        if timeout_ms:
            reason += f" of {timeout_ms:g} ms exceeded"
        super().__init__(method, url, reason)


class ConnectionError(TransportError):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - Connection reset
    - DNS failure
    """
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ ОТВЕТА
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HttpStatusError(TransportException):
    """
    Ответ со статусом >= 400.

    5xx считаются временными и ретраятся, 4xx нет.

    Args:
        method: HTTP метод
        url: URL запроса
        status_code: HTTP статус
        headers: Заголовки ответа
        body: Тело ответа
    """

    def __init__(
        self,
        method: str,
        url: str,
        status_code: int,
        headers: Optional[Mapping[str, str]] = None,
        body: Any = None,
    ):
        self.method = method
        self.url = url
        self.body = body
        super().__init__(
            failure_message(method, url),
            status_code=status_code,
            headers=headers if headers is not None else {},
        )

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.status_code >= 500


class ParseError(TransportException):
    """
    Тело ответа не удалось распарсить.

    Args:
        message: Сообщение
        body: Исходное тело
    """
    fatal = True

    def __init__(self, message: str, body: Any = None):
        self.body = body
        super().__init__(message)


class EmptyResponseError(TransportException):
    """Цепочка завершилась, но никто не установил ответ."""
    fatal = True

    def __init__(self, method: str, url: str):
        super().__init__(f"No response produced for {method} {url}")
