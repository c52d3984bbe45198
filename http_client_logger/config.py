from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=True, description="Render JSON lines outside of DEBUG")

    # HTTP client logging
    http_log_request_header: bool = Field(
        default=False,
        description="Log outbound request headers at DEBUG level",
    )
    http_log_request_body: bool = Field(
        default=False,
        description="Log outbound request bodies at DEBUG level",
    )
    http_log_response_header: bool = Field(
        default=False,
        description="Log response headers at DEBUG level",
    )
    http_log_response_body: bool = Field(
        default=False,
        description="Log response bodies at DEBUG level",
    )
    http_slow_request_threshold_ms: int = Field(
        default=2000,
        description="Requests taking at least this long are logged as too slow",
    )


@lru_cache()
def get_settings() -> Settings:
    """Cached singleton accessor for settings."""
    return Settings()


settings = get_settings()
