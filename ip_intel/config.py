from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process configuration, read from the environment (or a local .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Address the HTTP server binds to.")
    port: int = Field(default=3000, description="Port the HTTP server listens on.")
    log_level: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR")

    ip_api_base_url: str = Field(default="http://ip-api.com", description="Base URL of the ip-api.com JSON API.")
    ip_api_timeout_seconds: float = Field(default=5.0, gt=0)

    # Unset means bulk items only rely on the HTTP timeout above.
    bulk_item_timeout_seconds: float | None = Field(default=None, gt=0)


@lru_cache
def get_settings() -> Settings:
    return Settings()
