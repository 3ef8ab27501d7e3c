"""
Pydantic-based configuration settings for azopenai.

Date: 2026-10-18
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from azopenai.client.client import DEFAULT_API_VERSION, ClientOptions
from azopenai.client.models import BackendKind
from azopenai.client.retry import RetryConfig


class AzOpenAISettings(BaseSettings):
    """
    Client configuration read from the environment.

    Configuration can be provided via:
    - Environment variables with AZOPENAI_ prefix
    - .env file in current directory
    - Direct instantiation with kwargs

    Example:
        ```python
        # From environment
        settings = AzOpenAISettings()

        # Direct configuration
        settings = AzOpenAISettings(
            endpoint="https://api.openai.com/v1",
            backend="openai",
            api_key="sk-..."
        )
        client = Client.from_settings(settings)
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="AZOPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend
    endpoint: str | None = None
    api_key: SecretStr | None = None
    backend: BackendKind = BackendKind.AZURE
    api_version: str = DEFAULT_API_VERSION
    allow_insecure_credential_with_http: bool = False

    # Transport
    connect_timeout: float = Field(default=10.0, gt=0)
    read_timeout: float = Field(default=300.0, gt=0)
    require_stream_sentinel: bool = False

    # Retry
    max_retries: int = Field(default=3, ge=0, le=10)
    retry_initial_delay: float = Field(default=0.8, ge=0)
    retry_max_delay: float = Field(default=60.0, ge=0)

    # Logging
    log_enabled: bool = False
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_file: Path | None = None

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str | None) -> str | None:
        """Require an absolute http(s) URL."""
        if v is None:
            return v
        v = v.strip()
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"Endpoint must be an http(s) URL: {v}")
        return v

    def to_client_options(self) -> ClientOptions:
        """Build client options from these settings."""
        return ClientOptions(
            api_version=self.api_version,
            allow_insecure_credential_with_http=self.allow_insecure_credential_with_http,
            retry=RetryConfig(
                max_retries=self.max_retries,
                initial_delay=self.retry_initial_delay,
                max_delay=self.retry_max_delay
            ),
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            require_stream_sentinel=self.require_stream_sentinel
        )


@lru_cache
def get_settings(env_file: str | None = None) -> AzOpenAISettings:
    """
    Get cached settings instance.

    To reload settings, clear the cache with `get_settings.cache_clear()`.

    Args:
        env_file: Optional path to .env file

    Returns:
        Settings instance
    """
    if env_file:
        return AzOpenAISettings(_env_file=env_file)

    return AzOpenAISettings()
