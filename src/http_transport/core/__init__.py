"""Core HTTP Transport модули."""

from .config import RetryConfig, TransportConfig
from .context import AttemptRecord, Context, RequestDescriptor, Response
from .chain import Chain, compose, validate_plugin
from .retry_engine import ExponentialBackoff, RetryEngine, no_delay
from .request_builder import RequestBuilder
from .transport import HttpxTransport, RequestsTransport, Transport, TransportInvoker
from .exceptions import (
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

__all__ = [
    # Config
    "RetryConfig",
    "TransportConfig",
    # Data model
    "AttemptRecord",
    "Context",
    "RequestDescriptor",
    "Response",
    # Chain
    "Chain",
    "compose",
    "validate_plugin",
    # Retry
    "RetryEngine",
    "ExponentialBackoff",
    "no_delay",
    # Builder
    "RequestBuilder",
    # Transport
    "Transport",
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
]
