"""
Pydantic validators for environment configuration.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TransportSettings(BaseSettings):
    """
    Client defaults from environment variables.

    Reads from:
    1. Environment variables (HTTP_TRANSPORT_*)
    2. .env file
    3. Defaults

    Example .env file:
        HTTP_TRANSPORT_TIMEOUT_MS=2000
        HTTP_TRANSPORT_RETRIES=2
        HTTP_TRANSPORT_FAIL_ON_STATUS=400
        HTTP_TRANSPORT_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix='HTTP_TRANSPORT_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    timeout_ms: Optional[float] = Field(default=None, gt=0, description="Per-attempt timeout in ms")
    retries: int = Field(default=0, ge=0, le=10, description="Default retry budget")
    fail_on_status: Optional[int] = Field(
        default=500, ge=400, le=599, description="Lowest status treated as failure (none = off)"
    )
    user_agent: Optional[str] = Field(default=None, description="Override default User-Agent")

    # Logging
    log_enabled: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="text")

    @field_validator('fail_on_status', mode='before')
    @classmethod
    def validate_fail_on_status(cls, v):
        """``none``, ``off``, ``false`` or an empty value disable the policy."""
        if isinstance(v, str) and v.strip().lower() in ("", "none", "off", "false"):
            return None
        return v

    @field_validator('user_agent')
    @classmethod
    def validate_user_agent(cls, v: Optional[str]) -> Optional[str]:
        """Empty string means "use the default"."""
        if v is not None and not v.strip():
            return None
        return v
