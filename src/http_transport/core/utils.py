"""
Utility functions for HTTP transport.

Includes:
- Package version and default User-Agent
- URL/header sanitization for safe logging
"""

from importlib.metadata import PackageNotFoundError, version
from typing import Mapping, Optional, Set
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

DISTRIBUTION_NAME = "http-transport"

# Default sensitive parameter names that should be masked in logs
DEFAULT_SENSITIVE_PARAMS = {
    'api_key',
    'apikey',
    'api-key',
    'token',
    'access_token',
    'refresh_token',
    'key',
    'secret',
    'password',
    'auth',
    'authorization',
    'client_secret',
    'session_id',
}

SENSITIVE_HEADERS = {
    'authorization',
    'proxy-authorization',
    'api-key',
    'x-api-key',
    'x-auth-token',
    'cookie',
    'set-cookie',
}


def package_version() -> str:
    """Version from package metadata (single source of truth in pyproject.toml)."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        # Package is not installed (development mode)
        return "0.0.0-dev"


def default_user_agent() -> str:
    """
    User-Agent sent unless a request overrides it.

    Example:
        >>> default_user_agent()
        'http-transport/1.0.0'
    """
    return f"{DISTRIBUTION_NAME}/{package_version()}"


def sanitize_url(
    url: str,
    extra_params: Optional[Set[str]] = None,
    mask: str = 'REDACTED'
) -> str:
    """
    Mask sensitive query parameters in URL for safe logging.

    Examples:
        >>> sanitize_url('https://api.example.com/data?api_key=secret123')
        'https://api.example.com/data?api_key=REDACTED'
        >>> sanitize_url('https://api.example.com/data?user=john')
        'https://api.example.com/data?user=john'
    """
    if not url:
        return url

    sensitive_params = DEFAULT_SENSITIVE_PARAMS | (
        {p.lower() for p in extra_params} if extra_params else set()
    )

    try:
        parsed = urlparse(url)
    except ValueError:
        return '<URL sanitization failed>'

    if not parsed.query:
        return url

    params = parse_qs(parsed.query, keep_blank_values=True)
    if not any(name.lower() in sensitive_params for name in params):
        return url

    sanitized_params = {
        name: [mask] * len(values) if name.lower() in sensitive_params else values
        for name, values in params.items()
    }
    return urlunparse(parsed._replace(query=urlencode(sanitized_params, doseq=True)))


def sanitize_headers(headers: Mapping[str, str], mask: str = 'REDACTED') -> dict:
    """
    Mask sensitive headers for safe logging.

    Examples:
        >>> sanitize_headers({'Authorization': 'Bearer token123'})
        {'Authorization': 'REDACTED'}
    """
    if not headers:
        return {}

    return {
        key: mask if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }
