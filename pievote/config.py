"""Runtime settings, read from ``PIEVOTE_*`` environment variables."""

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(ValueError):
    """Missing configuration."""
    pass


DEFAULT_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "WARNING"


class StoreSettings(BaseSettings):
    """Settings the reference store needs.

    Attributes:
        sheet_path: JSON file backing the reference store (None = in memory)
    """
    sheet_path: str | None = None

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="PIEVOTE_",
        env_ignore_empty=True,
        validate_assignment=True,
    )


class Settings(StoreSettings):
    """Settings for the client.

    Every field can be overridden with ``PIEVOTE_<FIELD>``, e.g.
    ``PIEVOTE_ENDPOINT`` or ``PIEVOTE_TIMEOUT``. Invalid values raise
    ``pydantic.ValidationError``, both when loading and on assignment.

    Attributes:
        endpoint: URL of the store's script endpoint ("" if not configured)
        timeout: HTTP timeout in seconds
        log_level: Name of the logging level for the CLI
    """
    endpoint: str = ""
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        return cls()

    @field_validator("endpoint")
    @classmethod
    def strip_endpoint(cls, v: str) -> str:
        return v.strip()

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout must be positive, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level is not a logging level: {v!r}")
        return level

    def require_endpoint(self) -> str:
        """Return the endpoint, or raise ConfigError if none is set."""
        if not self.endpoint:
            raise ConfigError(
                "No store endpoint configured. Set PIEVOTE_ENDPOINT or pass --endpoint."
            )
        return self.endpoint
