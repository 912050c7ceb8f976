"""Configuration module using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (prefix TICTACTOE_) and .env file.

    Attributes:
        database_url: Where the games history is persisted.
        history_size: Maximum number of games kept per participant.
        default_board_size: Edge length of a freshly created board.
        log_level: Level handed to configure_logging().
    """

    model_config = SettingsConfigDict(
        env_prefix="TICTACTOE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    database_url: str = Field(
        default="sqlite:///./tictactoe.db",
        description="Database connection URL",
    )
    history_size: int = Field(default=5, ge=1, description="Games kept in history")
    default_board_size: int = Field(default=3, ge=1, description="Board edge length")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v!r}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()
