"""
Structured logger used by the client.

Wraps a stdlib logger: request fields go in as ``**kwargs`` and come out
through the configured formatter (see ``formatters.request_fields``).
"""

import logging
import sys
from typing import Any, Optional

from .config import LoggingConfig
from .formatters import get_formatter


class TransportLogger:
    """
    Logger the client writes to when ``TransportConfig.logging`` is set.

    Owns its stdlib logger: handlers are replaced on every construction and
    records do not propagate to the root logger.

    Example:
        >>> logger = TransportLogger(LoggingConfig.create(level="DEBUG"))
        >>> logger.info("GET https://api.com 200", method="GET", status_code=200)
    """

    def __init__(self, config: Optional[LoggingConfig] = None):
        self.config = config or LoggingConfig()
        self.name = self.config.name

        self._logger = logging.getLogger(self.name)
        self._logger.setLevel(self.config.numeric_level)
        self._logger.propagate = False

        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        if self.config.enable_console:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(get_formatter(self.config.format.value))
            self._logger.addHandler(handler)

    @property
    def logger(self) -> logging.Logger:
        """Underlying stdlib logger."""
        return self._logger

    def _log(self, level: int, message: str, fields: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        extra = {**self.config.extra_fields, **fields}
        self._logger.log(level, message, extra=extra)

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, fields)

    def info(self, message: str, **fields: Any) -> None:
        """
        Example:
            >>> logger.info("GET https://api.com 200", status_code=200, duration_ms=150)
        """
        self._log(logging.INFO, message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, fields)

    def error(self, message: str, **fields: Any) -> None:
        self._log(logging.ERROR, message, fields)
