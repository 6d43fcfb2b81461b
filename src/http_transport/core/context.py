"""Request context and result records passed through the plugin chain."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx


@dataclass(frozen=True)
class AttemptRecord:
    """
    One failed attempt consumed by the retry engine.

    Attributes:
        index: Zero-based attempt number
        status_code: HTTP status of the failed attempt (None for network errors)
        reason: Failure message
    """

    index: int
    status_code: Optional[int]
    reason: str

    @classmethod
    def from_error(cls, index: int, error: BaseException) -> 'AttemptRecord':
        return cls(
            index=index,
            status_code=getattr(error, 'status_code', None),
            reason=str(error),
        )


@dataclass
class Response:
    """
    Result of a successful dispatch.

    Attributes:
        status_code: HTTP status code
        headers: Response headers (case-insensitive)
        body: str for textual content types, bytes otherwise, a parsed value
              once a plugin coerced it, or None if empty
        elapsed_time_ms: Duration of the physical call
        retries: Attempt history collected by the retry engine
    """

    status_code: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: Any = None
    elapsed_time_ms: float = 0.0
    retries: List[AttemptRecord] = field(default_factory=list)


@dataclass(frozen=True)
class RequestDescriptor:
    """Immutable snapshot of a request taken at dispatch time."""

    method: str
    url: str
    headers: httpx.Headers
    query: Tuple[Tuple[str, Any], ...] = ()
    body: Any = None
    timeout_ms: Optional[float] = None
    retries: int = 0
    plugins: Tuple[Callable, ...] = ()


@dataclass
class Context:
    """
    Mutable state of one execution attempt.

    Plugins read the request description, may rewrite it before calling
    ``next_()``, and inspect ``response`` or ``error`` afterwards.
    ``metadata`` is free-form storage for plugins to talk to each other.

    Example:
        >>> ctx = Context('GET', 'https://api.example.com/users')
        >>> ctx.headers['Accept'] = 'application/json'
        >>> ctx.metadata['started'] = time.monotonic()
    """

    method: str
    url: str
    query: List[Tuple[str, Any]] = field(default_factory=list)
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: Any = None
    timeout_ms: Optional[float] = None
    attempt: int = 0
    response: Optional[Response] = None
    error: Optional[BaseException] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_descriptor(cls, descriptor: RequestDescriptor, attempt: int = 0) -> 'Context':
        """Fresh context for one attempt; headers and query are copied."""
        return cls(
            method=descriptor.method,
            url=descriptor.url,
            query=list(descriptor.query),
            headers=httpx.Headers(descriptor.headers),
            body=descriptor.body,
            timeout_ms=descriptor.timeout_ms,
            attempt=attempt,
        )
