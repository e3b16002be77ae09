from functools import lru_cache
from typing import Annotated, List

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = Field(default="StaffQueue Booking Service")
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    )
    use_mock_data: bool = Field(
        default=True
    )
    backend_base_url: AnyHttpUrl | None = Field(
        default=None
    )
    backend_timeout: float = Field(
        default=10.0
    )
    backend_token: str | None = Field(
        default=None
    )
    default_owner_id: str = Field(
        default="demo-owner"
    )
    activity_log_limit: int = Field(
        default=50, ge=1
    )
    recent_activity_limit: int = Field(
        default=10, ge=1
    )
    auto_drain_queue: bool = Field(
        default=True
    )

    model_config = SettingsConfigDict(env_prefix="STAFFQUEUE_", case_sensitive=False)

    @field_validator("cors_origins", mode="before")
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()
