"""
Flyer Puzzle - Backend Configuration

Настройки приложения через environment variables.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from functools import lru_cache
from typing import Literal


class Settings(BaseSettings):
    """Настройки приложения."""

    # App
    APP_NAME: str = "Flyer Puzzle"
    DEBUG: bool = False
    API_PREFIX: str = "/api/v1"
    ENVIRONMENT: Literal["development", "production"] = "development"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_GAME: int = 60

    # Engine
    SOLVER_MAX_DEPTH: int = 6
    GENERATOR_MAX_ATTEMPTS: int = 1000
    DEFAULT_DIFFICULTY: str = "easy"

    # Animation pacing (ms на один шаг)
    STEP_DURATION_MS: int = 500

    @field_validator("SOLVER_MAX_DEPTH")
    @classmethod
    def validate_solver_max_depth(cls, value: int) -> int:
        if not 1 <= value <= 10:
            raise ValueError(f"SOLVER_MAX_DEPTH must be within 1..10, got: {value}")
        return value

    @field_validator("GENERATOR_MAX_ATTEMPTS", "STEP_DURATION_MS")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"must be positive, got: {value}")
        return value

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def step_delay_seconds(self) -> float:
        return self.STEP_DURATION_MS / 1000

    @property
    def cors_origins_list(self) -> list[str]:
        """Парсит CORS_ORIGINS в список."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """Получить настройки (кэшируется)."""
    return Settings()


settings = get_settings()
