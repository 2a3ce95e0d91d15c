"""Application configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings validated at startup."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    openrouter_api_key: str = Field(..., alias="OPENROUTER_API_KEY")
    openrouter_model: str = Field(..., alias="OPENROUTER_MODEL")
    openrouter_base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        alias="OPENROUTER_BASE_URL",
    )
    max_iterations: int = Field(default=10, ge=1, alias="AGENT_MAX_ITERATIONS")
    courtesy_delay_seconds: float = Field(default=1.0, ge=0, alias="AGENT_COURTESY_DELAY_SECONDS")
    request_timeout_seconds: float = Field(default=30.0, gt=0, alias="REQUEST_TIMEOUT_SECONDS")
    # timeapi.io routinely takes tens of seconds to answer.
    tool_timeout_seconds: float = Field(default=60.0, gt=0, alias="TOOL_TIMEOUT_SECONDS")
    activity_store: Literal["sqlite", "linear"] = Field(default="sqlite", alias="ACTIVITY_STORE")
    database_path: Path = Field(default=Path("activity_agent.db"), alias="DATABASE_PATH")
    linear_access_token: str = Field(default="", alias="LINEAR_ACCESS_TOKEN")
    linear_api_url: str = Field(default="https://api.linear.app/graphql", alias="LINEAR_API_URL")
    nominatim_user_agent: str = Field(default="", alias="NOMINATIM_USER_AGENT")


def load_settings() -> Settings:
    """Load and validate settings."""

    return Settings()
