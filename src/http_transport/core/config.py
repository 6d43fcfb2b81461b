"""
Система конфигурации для HTTP Transport.

Все конфиги immutable (frozen dataclasses): клиент разделяет их между
параллельными запросами.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Mapping, Optional

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .logging import LoggingConfig

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# RETRY CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class RetryConfig:
    """
    Конфигурация задержки между попытками (для ExponentialBackoff).

    Количество попыток задаётся на запросе через ``retry(count)``,
    здесь только форма задержки.

    Args:
        backoff_base: Базовая задержка (сек)
        backoff_factor: Множитель для exponential backoff
        backoff_max: Максимальная задержка (сек)
        backoff_jitter: Добавлять случайность (против thundering herd)
        respect_retry_after: Учитывать Retry-After header
        retry_after_max: Максимум ждать из Retry-After (сек)

    Examples:
        >>> RetryConfig(backoff_base=0.5)
        >>> RetryConfig(backoff_max=10, backoff_jitter=False)
    """
    backoff_base: float = 0.5
    backoff_factor: float = 2.0
    backoff_max: float = 60.0
    backoff_jitter: bool = True
    respect_retry_after: bool = True
    retry_after_max: float = 300  # 5 минут

    def __post_init__(self):
        """Валидация."""
        if self.backoff_base < 0:
            raise ConfigurationError("backoff_base must be non-negative")
        if self.backoff_factor < 1:
            raise ConfigurationError("backoff_factor must be >= 1")
        if self.backoff_max < 0:
            raise ConfigurationError("backoff_max must be non-negative")
        if self.retry_after_max < 0:
            raise ConfigurationError("retry_after_max must be non-negative")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _freeze_dict(d: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    """
    Convert dict to immutable MappingProxyType.

    Example:
        >>> frozen = _freeze_dict({"X-API-Key": "secret"})
        >>> frozen["X-New"] = "value"  # Raises TypeError
    """
    if d is None:
        return MappingProxyType({})
    return MappingProxyType(dict(d))


@dataclass(frozen=True)
class TransportConfig:
    """
    Общие настройки клиента.

    Args:
        headers: Заголовки по умолчанию для всех запросов
        timeout_ms: Таймаут по умолчанию (мс), None = дефолт транспорта
        retries: Количество повторов по умолчанию
        fail_on_status: Минимальный статус, который транспорт считает ошибкой
                        (500 по умолчанию, 400 для строгого режима,
                        None - все статусы доходят до плагинов)
        user_agent: User-Agent по умолчанию (None = "http-transport/<version>")
        logging: Конфигурация логирования (None = без логирования клиента)

    Examples:
        >>> config = TransportConfig(headers={"Accept": "application/json"})
        >>> config = TransportConfig.create(timeout_ms=2000, retries=2)
    """
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    timeout_ms: Optional[float] = None
    retries: int = 0
    fail_on_status: Optional[int] = 500
    user_agent: Optional[str] = None
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Валидация и заморозка заголовков."""
        if not isinstance(self.headers, MappingProxyType):
            object.__setattr__(self, 'headers', _freeze_dict(self.headers))
        if self.timeout_ms is not None and self.timeout_ms <= 0:
            raise ConfigurationError("timeout_ms must be positive")
        if self.retries < 0:
            raise ConfigurationError("retries must be non-negative")
        if self.fail_on_status is not None and (
            isinstance(self.fail_on_status, bool)
            or not isinstance(self.fail_on_status, int)
            or not 400 <= self.fail_on_status <= 599
        ):
            raise ConfigurationError(
                f"fail_on_status must be a status in 400..599 or None, got {self.fail_on_status!r}"
            )

    @classmethod
    def create(
        cls,
        headers: Optional[Dict[str, str]] = None,
        timeout_ms: Optional[float] = None,
        retries: int = 0,
        fail_on_status: Optional[int] = 500,
        user_agent: Optional[str] = None,
        logging: Optional['LoggingConfig'] = None,
    ) -> 'TransportConfig':
        """
        Удобный конструктор конфигурации.

        Example:
            >>> config = TransportConfig.create(headers={"X-Team": "core"}, retries=3)
        """
        return cls(
            headers=headers or {},
            timeout_ms=timeout_ms,
            retries=retries,
            fail_on_status=fail_on_status,
            user_agent=user_agent,
            logging=logging,
        )

    def with_headers(self, headers: Dict[str, str]) -> 'TransportConfig':
        """
        Создать новый конфиг с дополнительными заголовками.

        Example:
            >>> new_config = config.with_headers({"X-API-Key": "secret"})
        """
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=merged)

    def with_timeout(self, timeout_ms: Optional[float]) -> 'TransportConfig':
        """Создать новый конфиг с изменённым таймаутом."""
        return replace(self, timeout_ms=timeout_ms)

    def with_retries(self, retries: int) -> 'TransportConfig':
        """Создать новый конфиг с изменённым количеством повторов."""
        return replace(self, retries=retries)
