"""
Retry engine для повторных попыток запроса.

Включает:
- Строго последовательные попытки на свежем Context
- Историю неудачных попыток (AttemptRecord)
- Подключаемую стратегию задержки (по умолчанию без задержки)
- Exponential backoff с jitter и Retry-After parsing
"""

import asyncio
import logging
import random
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Callable, List, Optional

from .chain import Chain
from .config import RetryConfig
from .context import AttemptRecord, Context, RequestDescriptor

logger = logging.getLogger(__name__)

DelayStrategy = Callable[[int, BaseException], float]


def no_delay(attempt: int, error: BaseException) -> float:
    """Повторять сразу."""
    return 0.0


class ExponentialBackoff:
    """
    Задержка ``backoff_base * backoff_factor ** attempt`` с jitter.

    Retry-After из ответа (если есть у ошибки) имеет приоритет.

    Examples:
        >>> delay = ExponentialBackoff(RetryConfig(backoff_base=0.2))
        >>> client = create_client(delay=delay)
    """

    def __init__(self, config: Optional[RetryConfig] = None):
        self.config = config or RetryConfig()

    def __call__(self, attempt: int, error: BaseException) -> float:
        # Приоритет 1: Retry-After header
        if self.config.respect_retry_after:
            retry_after = self._parse_retry_after(getattr(error, 'headers', None))
            if retry_after is not None:
                return min(retry_after, self.config.retry_after_max)

        # Приоритет 2: Exponential backoff
        wait = self.config.backoff_base * (self.config.backoff_factor ** attempt)
        wait = min(wait, self.config.backoff_max)

        # Добавить jitter (50-150% от wait)
        if self.config.backoff_jitter:
            wait = wait * (0.5 + random.random())

        return wait

    @staticmethod
    def _parse_retry_after(headers) -> Optional[float]:
        """
        Распарсить Retry-After header.

        Returns:
            Секунды или None
        """
        if not headers:
            return None

        retry_after = headers.get('Retry-After')
        if not retry_after:
            return None

        # Нормальные значения: "60" или "Wed, 21 Oct 2015 07:28:00 GMT"
        if len(retry_after) > 100:
            logger.warning(
                f"Retry-After header too long ({len(retry_after)} chars), ignoring"
            )
            return None

        try:
            seconds = float(retry_after)
        except ValueError:
            try:
                retry_date = parsedate_to_datetime(retry_after)
                delta = (retry_date - datetime.now(timezone.utc)).total_seconds()
                return max(0.0, delta)
            except (ValueError, TypeError, OverflowError) as e:
                logger.debug(f"Failed to parse Retry-After header '{retry_after}': {e}")
                return None

        if seconds < 0:
            logger.warning(f"Negative Retry-After value ignored: {seconds}")
            return None
        return seconds


class RetryEngine:
    """
    Прогоняет цепочку до ``retries + 1`` раз.

    Попытка повторяется только если ошибка помечена ``retryable``
    (сетевая ошибка или 5xx) и бюджет не исчерпан. Каждая повторённая
    ошибка попадает в историю; история прикрепляется к ответу при успехе
    или к последней ошибке при неудаче.

    Examples:
        >>> engine = RetryEngine(retries=2)
        >>> ctx = await engine.run(descriptor, chain)
        >>> ctx.response.retries
        [AttemptRecord(index=0, status_code=500, reason='Request failed for GET ...')]
    """

    def __init__(self, retries: int = 0, delay: Optional[DelayStrategy] = None):
        """
        Args:
            retries: Максимум повторов (0 = без повторов)
            delay: Стратегия задержки ``(attempt, error) -> seconds``
        """
        self.retries = retries
        self.delay = delay or no_delay
        self._history: List[AttemptRecord] = []

    @property
    def history(self) -> List[AttemptRecord]:
        """Неудачные попытки в порядке поступления."""
        return list(self._history)

    def should_retry(self, attempt: int, error: BaseException) -> bool:
        """
        Решить нужен ли retry.

        Args:
            attempt: Номер только что завершившейся попытки (с 0)
            error: Исключение этой попытки
        """
        if attempt >= self.retries:
            return False

        # Фатальные ошибки НЕ ретраим
        if getattr(error, 'fatal', False):
            return False

        return bool(getattr(error, 'retryable', False))

    async def run(self, descriptor: RequestDescriptor, chain: Chain) -> Context:
        """
        Выполнить запрос с повторами.

        Returns:
            Context успешной попытки (response.retries заполнен)

        Raises:
            Exception: Ошибка последней попытки с атрибутом ``retries``
        """
        attempt = 0
        while True:
            ctx = Context.from_descriptor(descriptor, attempt=attempt)
            try:
                await chain(ctx)
            except Exception as error:
                if not self.should_retry(attempt, error):
                    self._annotate(error)
                    raise

                self._history.append(AttemptRecord.from_error(attempt, error))
                wait = self.delay(attempt, error)
                logger.debug(
                    f"Retrying {descriptor.method} {descriptor.url} "
                    f"(attempt {attempt + 2}/{self.retries + 1}) in {wait:.2f}s: {error}"
                )
                if wait > 0:
                    await asyncio.sleep(wait)
                attempt += 1
                continue

            ctx.response.retries = self.history
            return ctx

    def _annotate(self, error: BaseException) -> None:
        if self._history:
            logger.warning(
                f"Giving up after {len(self._history) + 1} attempts: {error}"
            )
        try:
            error.retries = self.history  # type: ignore[attr-defined]
        except AttributeError:
            # Исключения со __slots__ не принимают атрибуты
            logger.debug(f"Cannot attach retry history to {type(error).__name__}")
