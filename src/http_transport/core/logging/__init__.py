"""
Logging system for HTTP Transport.

Example:
    >>> from http_transport.core.logging import LoggingConfig
    >>>
    >>> config = TransportConfig.create(logging=LoggingConfig.create(level="DEBUG", format="json"))
    >>> client = create_client(config)
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import TransportLogger
from .formatters import JSONFormatter, TextFormatter, get_formatter

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "TransportLogger",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",
]
