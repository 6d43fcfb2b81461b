"""
Configuration loader from environment variables and .env files.
"""

from typing import Optional

from ..config import TransportConfig
from ..logging.config import LoggingConfig
from .validator import TransportSettings


def load_from_env(env_file: Optional[str] = None, **overrides) -> TransportConfig:
    """
    Load TransportConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters
    2. Environment variables (HTTP_TRANSPORT_*)
    3. .env file
    4. Defaults

    Raises:
        pydantic.ValidationError: Invalid environment values

    Example:
        >>> config = load_from_env()
        >>> config = load_from_env(env_file=".env.production", retries=3)
        >>> client = create_client(config)
    """
    if env_file is None:
        settings = TransportSettings()
    else:
        settings = TransportSettings(_env_file=env_file)

    logging_config = None
    if overrides.get('log_enabled', settings.log_enabled):
        logging_config = LoggingConfig.create(
            level=overrides.get('log_level', settings.log_level),
            format=overrides.get('log_format', settings.log_format),
        )

    return TransportConfig(
        headers=overrides.get('headers', {}),
        timeout_ms=overrides.get('timeout_ms', settings.timeout_ms),
        retries=overrides.get('retries', settings.retries),
        fail_on_status=overrides.get('fail_on_status', settings.fail_on_status),
        user_agent=overrides.get('user_agent', settings.user_agent),
        logging=logging_config,
    )
