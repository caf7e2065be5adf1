"""Application configuration."""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-5-mini"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    data_dir: Path = Path(".wellness")
    daily_calorie_goal: int = Field(default=2000, gt=0)
    daily_water_goal_ml: int = Field(default=2500, gt=0)
    chat_history_limit: int = Field(default=40, ge=0)
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
