"""Client settings with Pydantic validation."""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...constants.defaults import Defaults
from ..environment import Environment


class ABHASettings(BaseSettings):
    """ABHA client settings with validation and environment variable support.

    Every field can be supplied through an ``ABHA_``-prefixed environment
    variable or a ``.env`` file, e.g. ``ABHA_CLIENT_ID``.
    """

    # Gateway credentials
    client_id: str = Field(default="", description="ABDM client ID")
    client_secret: SecretStr = Field(default=SecretStr(""), description="ABDM client secret")

    environment: Environment = Field(
        default=Environment.SANDBOX, description="ABDM environment (sandbox, production)"
    )

    # Networking
    timeout: float = Field(
        default=Defaults.TIMEOUT_SECONDS, gt=0, description="Request timeout in seconds"
    )
    token_refresh_buffer_seconds: int = Field(
        default=Defaults.TOKEN_REFRESH_BUFFER_SECONDS,
        ge=0,
        description="Renew the session token this many seconds before it expires",
    )

    # Logging
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    debug: bool = Field(default=False, description="Log request and response payloads (masked)")

    model_config = SettingsConfigDict(
        env_prefix="ABHA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Accept environment names case-insensitively."""
        if isinstance(v, str):
            normalized = v.strip().lower()
            if normalized not in Environment.values():
                raise ValueError(f'ABHA_ENVIRONMENT must be one of: {", ".join(Environment.values())}')
            return normalized
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f'ABHA_LOG_LEVEL must be one of: {", ".join(allowed)}')
        return v_upper

    def has_credentials(self) -> bool:
        """Check whether both gateway credentials are configured."""
        return bool(self.client_id) and bool(self.client_secret.get_secret_value())


@lru_cache()
def get_settings() -> ABHASettings:
    """
    Get cached settings instance.

    Returns:
        ABHASettings built from the process environment
    """
    return ABHASettings()
