"""
Client logging settings.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union


class LogLevel(str, Enum):
    """Log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Output formats."""
    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True)
class LoggingConfig:
    """
    How the client reports dispatches.

    Attributes:
        level: Minimum level written
        format: ``json`` (one object per line) or ``text``
        enable_console: Write to stderr
        name: Logger name the client writes to
        extra_fields: Fields added to every record (service name, env, ...)

    Example:
        >>> config = LoggingConfig.create(level="DEBUG", format="json")
        >>> client = create_client(TransportConfig(logging=config))
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    enable_console: bool = True
    name: str = "http_transport.client"
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    @property
    def numeric_level(self) -> int:
        """Level as understood by ``logging.Logger.setLevel``."""
        return logging.getLevelName(self.level.value)

    @classmethod
    def create(
        cls,
        level: Union[str, LogLevel] = "INFO",
        format: Union[str, LogFormat] = "text",
        enable_console: bool = True,
        name: str = "http_transport.client",
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> "LoggingConfig":
        """
        Build from plain strings (case-insensitive), e.g. values read from env.

        Raises:
            ValueError: Unknown level or format
        """
        return cls(
            level=LogLevel(str(getattr(level, 'value', level)).upper()),
            format=LogFormat(str(getattr(format, 'value', format)).lower()),
            enable_console=enable_console,
            name=name,
            extra_fields=dict(extra_fields or {}),
        )
