"""Environment-based configuration (HTTP_TRANSPORT_* variables, .env files)."""

from .loader import load_from_env
from .validator import TransportSettings

__all__ = [
    "load_from_env",
    "TransportSettings",
]
