"""Application configuration using pydantic-settings."""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Lodging Manager"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"  # development, staging, production
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Entity store
    store_backend: str = "database"  # database, memory
    database_url: str = "sqlite:///./lodging.db"

    # Listing defaults
    default_page_size: int = 10
    recent_bookings_per_guest: int = 5
    dashboard_list_size: int = 5

    # Frontend
    frontend_url: str = "http://localhost:5173"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    @model_validator(mode="after")
    def _ensure_frontend_in_cors(self) -> "Settings":
        """Ensure the configured frontend_url is always in cors_origins."""
        if self.frontend_url and self.frontend_url not in self.cors_origins:
            self.cors_origins.append(self.frontend_url)
        return self

    @model_validator(mode="after")
    def _validate_store_backend(self) -> "Settings":
        """Reject unknown store backends."""
        if self.store_backend not in ("database", "memory"):
            raise ValueError(
                f"STORE_BACKEND must be 'database' or 'memory', got {self.store_backend!r}"
            )
        return self


settings = Settings()
