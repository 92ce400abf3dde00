"""Application settings loaded from the environment."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="METROPOWER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "MetroPower Dashboard"
    environment: str = "dev"

    # "memory" keeps everything in process; "database" goes through SQLModel.
    storage_backend: Literal["memory", "database"] = "memory"
    database_url: str = "sqlite:///./metropower.db"
    database_echo: bool = False
    seed_demo_data: bool = True

    # Reference resolution: strict raises NotFoundError, lenient uses sentinel names.
    strict_references: bool = True
    duplicate_policy: Literal["reject", "ignore"] = "reject"

    manager_token: str = ""
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()

