import logging

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DIEROLL_", extra="ignore")

    # Fixed seed for reproducible rolls. Leave unset to seed from OS entropy.
    seed: int | None = None

    # Logging goes to stderr so it never mixes with roll output.
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return level


def load_settings() -> Settings:
    """Read settings from the environment, falling back to defaults if any value is invalid."""
    try:
        return Settings()
    except ValidationError as exc:
        logger.warning("Ignoring invalid DIEROLL_* settings: %d error(s)", exc.error_count())
        return Settings.model_construct()


settings = load_settings()
