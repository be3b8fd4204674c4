"""Configuration models for the motion CLI."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .core import Priority

BASE_URL = "https://api.usemotion.com/v1"


class APIConfig(BaseModel):
    """API configuration."""

    endpoint: str = Field(default=BASE_URL)
    timeout: int = Field(default=30)
    api_key: str | None = Field(default=None, description="Motion API key")

    @field_validator("endpoint")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("endpoint cannot be empty")
        return v.rstrip("/")


class DefaultsConfig(BaseModel):
    """Defaults applied when creating tasks."""

    workspace_id: str | None = None
    project_id: str | None = None
    priority: Priority | None = None
    duration: str | None = Field(
        default=None, description="Minutes, NONE or REMINDER"
    )


class AppConfig(BaseModel):
    """Main motion CLI configuration"""

    api: APIConfig = Field(default_factory=APIConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
