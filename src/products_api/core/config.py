# src/products_api/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_name: str = "Products API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Server
    host: str = "0.0.0.0"
    port: int = 3001

    # API Keys: mapping of API key to a user label (JSON string as env var)
    # Format: '{"test-api-key-123": "user-test (user)"}'
    api_keys: dict[str, str] = Field(
        default_factory=lambda: {
            "test-api-key-123": "user-test (user)",
            "admin-key-456": "admin-user (admin)",
            "user-key-789": "regular-user (user)",
        }
    )

    # CORS
    cors_origins: list[str] = Field(default=["http://localhost:3000"])

    # Logging
    log_level: str = "INFO"

    # Catalog
    seed_demo_data: bool = True
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    # Rate Limiting (slowapi limit string, applied to write endpoints)
    rate_limit_mutations: str = "100/minute"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
