"""Pydantic models for CLI configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from easyredir_cli.config.constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT


class Credentials(BaseModel):
    """API key and secret used for HTTP basic auth."""

    model_config = ConfigDict(frozen=True)

    key: str
    secret: str = Field(repr=False)


class CredentialProfile(BaseModel):
    """A named set of API credentials."""

    name: str
    api_key: str | None = Field(default=None, description="API key")
    api_secret: str | None = Field(default=None, description="API secret")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="API base URL")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, le=600, description="Request timeout in seconds",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @property
    def auth_configured(self) -> bool:
        return self.api_key is not None and self.api_secret is not None

    @property
    def credentials(self) -> Credentials | None:
        if self.api_key is None or self.api_secret is None:
            return None
        return Credentials(key=self.api_key, secret=self.api_secret)


class CLIConfig(BaseModel):
    """Root configuration model."""

    default_profile: str | None = None
    default_format: str = "table"
    profiles: dict[str, CredentialProfile] = Field(default_factory=dict)
