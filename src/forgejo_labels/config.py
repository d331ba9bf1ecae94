"""Configuration for the label tools.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ForgejoSettings(BaseSettings):
    """Settings for talking to a Forgejo instance.

    Environment variables:
    - FORGEJO_ACCESS_TOKEN
    - FORGEJO_URL                       (optional)
    - FORGEJO_REQUEST_TIMEOUT_SECONDS   (optional)
    - LOG_LEVEL                         (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ForgejoSettings(_env_file=path_to_env)`.
    """

    access_token: str = Field(
        default="",
        validation_alias="FORGEJO_ACCESS_TOKEN",
        description="Forgejo access token used for API authentication",
    )
    forgejo_url: str = Field(
        default="https://codeberg.org",
        validation_alias="FORGEJO_URL",
        description="Base URL of the Forgejo instance (without /api/v1)",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="FORGEJO_REQUEST_TIMEOUT_SECONDS",
        description="Timeout applied to each HTTP request",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_access_token(self) -> ForgejoSettings:
        if not self.access_token.strip():
            raise ValueError("FORGEJO_ACCESS_TOKEN is required")
        return self

    @property
    def api_base_url(self) -> str:
        """REST API root, e.g. ``https://codeberg.org/api/v1``."""

        return f"{self.forgejo_url.rstrip('/')}/api/v1"
