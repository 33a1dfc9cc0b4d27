"""Configuration settings for the application."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/parking.db"
    STORE_BACKEND: Literal["database", "memory"] = "database"
    DATABASE_ECHO: bool = False

    # Application
    APP_NAME: str = "Parking Reservation System"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Admin credential
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"

    # Demo inventory, seeded only into an empty store
    SEED_SLOT_COUNT: int = 32
    SEED_OCCUPIED_COUNT: int = 8
    SEED_ROW_WIDTH: int = 8

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000


settings = Settings()
