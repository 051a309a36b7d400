"""Runtime configuration for the Calendar Events API.

Settings are read from environment variables and from a local .env file if
one exists. All variables share the CALENDAR_ prefix:

    CALENDAR_MAX_ITERATIONS   Safety bound for a single recurrence expansion.
    CALENDAR_LOG_LEVEL        Root logging level (DEBUG, INFO, WARNING, ...).
    CALENDAR_SEED_DEFAULTS    Create the default categories at startup.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_MAX_ITERATIONS = 10_000


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Args:
        max_iterations: Maximum stepper iterations per expansion.
        log_level: Logging level name for the root logger.
        seed_defaults: Whether to create default categories on startup.
    """

    model_config = SettingsConfigDict(
        env_prefix="CALENDAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_iterations: int = Field(
        default=DEFAULT_MAX_ITERATIONS, ge=1, description="Expansion safety bound"
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    seed_defaults: bool = Field(
        default=False, description="Create default categories at startup"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, level: str) -> str:
        """Normalize and check the logging level name.

        Args:
            level: Level name from the environment.

        Returns:
            The upper-cased level name.

        Raises:
            ValueError: If the name is not a standard logging level.
        """
        level = level.upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown log level: {level}")
        return level


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings

    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
