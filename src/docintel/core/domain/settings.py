"""
Server Settings Schema

Pydantic model for the server configuration. Values come from a YAML file
and/or environment variables (see ``docintel.infrastructure.config``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from docintel.core.domain.analysis import PollingPolicy

DEFAULT_API_VERSION = "2024-11-30"
DEFAULT_ALLOWED_MODELS = ("prebuilt-read", "prebuilt-layout")


class ServerSettings(BaseModel):
    """Endpoint, credential and polling behaviour of the analysis server."""

    model_config = ConfigDict(extra="forbid")

    endpoint: str = Field(
        ...,
        min_length=1,
        description="Document Intelligence resource endpoint",
    )
    api_key: SecretStr = Field(
        ...,
        description="Subscription key sent as Ocp-Apim-Subscription-Key",
    )
    api_version: str = Field(
        DEFAULT_API_VERSION,
        min_length=1,
        description="REST API version used for analyze requests",
    )
    http_timeout: float = Field(
        30.0,
        gt=0,
        description="Total timeout per HTTP request in seconds",
    )
    poll_max_attempts: int = Field(
        10,
        ge=1,
        description="Maximum number of status polls per analysis",
    )
    poll_retry_delay: float = Field(
        5.0,
        ge=0,
        description="Seconds to wait between status polls",
    )
    allowed_models: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_MODELS),
        description="Model ids the analyze_document tool accepts (empty: any)",
    )
    log_level: str = Field(
        "INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level for stderr logging",
    )

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, value: str) -> str:
        """Require an http(s) URL and drop trailing slashes."""
        if not value.startswith(("http://", "https://")):
            raise ValueError("endpoint must start with http:// or https://")
        return value.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    def polling_policy(self) -> PollingPolicy:
        """Build the polling policy handed to the analysis client."""
        return PollingPolicy(
            max_attempts=self.poll_max_attempts,
            retry_delay=self.poll_retry_delay,
        )
