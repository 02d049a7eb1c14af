from __future__ import annotations

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",
        case_sensitive=False,
    )

    env: str = Field(default="development")
    debug: bool = Field(default=False)
    docs_enabled: bool = Field(default=True)
    log_level: str = Field(default="INFO")

    cors_origins: list[str] = Field(default_factory=list)
    trusted_hosts: list[str] = Field(default_factory=list)

    database_url: str = Field(default="sqlite+aiosqlite:///./data.db", min_length=1)
    database_echo: bool = Field(default=False)

    posts_url: AnyHttpUrl = Field(default="https://jsonplaceholder.typicode.com/posts")
    posts_user_agent: str = Field(
        default="device-usage-service/0.1",
        min_length=3,
        max_length=256,
    )
    posts_timeout_seconds: float = Field(default=10.0, ge=1.0, le=30.0)
    posts_sample_size: int = Field(default=5, ge=1, le=50)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        candidate = v.strip().upper()
        return candidate or "INFO"

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


def load_settings() -> Settings:
    settings = Settings()
    if not settings.cors_origins:
        settings.cors_origins = ["http://localhost:3000", "http://localhost:4000"]
    return settings
