from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Database Configuration
    # SQLite works for local dev; deployments point this at PostgreSQL
    DATABASE_URL: str = "sqlite:///./virtual_labs.db"

    # Storage backend selected by the composition root
    STORAGE_BACKEND: Literal["memory", "sql"] = "memory"

    # Session Engine
    TICK_INTERVAL_SECONDS: float = 1.0  # one logical time unit

    LOG_LEVEL: str = "INFO"

    # Loads from a .env file in the root directory
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()
