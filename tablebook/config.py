"""Configuration management for Tablebook using Pydantic."""

import logging
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_PATHS = {
    "json": "reservations.json",
    "sqlite": "reservations.db",
}


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Restaurant
    restaurant_name: str = Field(
        default="The Golden Table", description="Restaurant display name"
    )
    booking_window_days: int = Field(
        default=90, ge=0, description="How many days ahead guests may book"
    )

    # Storage Configuration
    storage_backend: Literal["json", "sqlite", "memory"] = Field(
        default="json", description="Persistence adapter (json, sqlite, memory)"
    )
    storage_path: str | None = Field(
        default=None,
        description=(
            "File used by the json and sqlite adapters "
            "(defaults to reservations.json or reservations.db)"
        ),
    )
    storage_key: str = Field(
        default="restaurant-reservations",
        description="Key under which the reservation list is stored",
    )

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", description="Server host")
    server_port: int = Field(default=8080, description="Server port")
    server_url: str = Field(
        default="http://localhost:8080",
        description="Server URL for CLI to connect to API",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")

    def model_post_init(self, __context) -> None:
        """Validate configuration after initialization."""
        if self.storage_path is None:
            self.storage_path = DEFAULT_STORAGE_PATHS.get(self.storage_backend)
        if self.storage_backend == "memory":
            logger.warning("STORAGE_BACKEND=memory - reservations will not persist")


# Global config instance
config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global config
    if config is None:
        config = Config()
    return config


def setup_logging(cfg: Config | None = None) -> None:
    """Configure logging for the application."""
    if cfg is None:
        cfg = get_config()

    log_level = getattr(logging, cfg.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
