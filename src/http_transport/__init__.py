"""HTTP Transport - async HTTP client with a composable plugin pipeline."""

import logging

from .client import Client, create_client
from .core.config import RetryConfig, TransportConfig
from .core.context import AttemptRecord, Context, Response
from .core.request_builder import RequestBuilder
from .core.retry_engine import ExponentialBackoff, RetryEngine, no_delay
from .core.transport import HttpxTransport, RequestsTransport, TransportInvoker
from .core.env_config import load_from_env
from .core.logging import LoggingConfig
from .core.utils import package_version
from .core.exceptions import (
    TransportException,
    ConfigurationError,
    InvalidPluginError,
    TransportError,
    TimeoutError,
    ConnectionError,
    HttpStatusError,
    ParseError,
    EmptyResponseError,
)
from .plugins import Plugin, as_json, to_error, log

# Set up logging - add NullHandler to prevent "No handler found" warnings
# Users can configure logging themselves using logging.getLogger('http_transport')
logging.getLogger('http_transport').addHandler(logging.NullHandler())

__version__ = package_version()
__license__ = "MIT"

# All public exports
__all__ = [
    # Core
    "Client",
    "create_client",
    "RequestBuilder",
    "Context",
    "Response",
    "AttemptRecord",

    # Config
    "TransportConfig",
    "RetryConfig",
    "LoggingConfig",
    "load_from_env",

    # Retry
    "RetryEngine",
    "ExponentialBackoff",
    "no_delay",

    # Transport
    "HttpxTransport",
    "RequestsTransport",
    "TransportInvoker",

    # Exceptions
    "TransportException",
    "ConfigurationError",
    "InvalidPluginError",
    "TransportError",
    "TimeoutError",
    "ConnectionError",
    "HttpStatusError",
    "ParseError",
    "EmptyResponseError",

    # Plugins
    "Plugin",
    "as_json",
    "to_error",
    "log",

    # Version
    "__version__",
]
