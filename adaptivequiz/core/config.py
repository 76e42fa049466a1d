"""
Application configuration settings.
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Self


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    # Environment
    ENV: str = "development"

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Activity defaults, applied when an activity does not configure its own value.
    # The standard error is expressed as a percent (0-50) and converted to the
    # logit scale before it is compared with the estimated standard error.
    CAT_DEFAULT_STANDARD_ERROR_PERCENT: float = Field(
        default=5.0,
        gt=0.0,
        lt=50.0,
        description="Standard error (percent) at which an attempt stops",
    )
    CAT_DEFAULT_MIN_QUESTIONS: int = Field(
        default=1,
        ge=1,
        description="Minimum number of questions before the attempt may stop",
    )
    CAT_DEFAULT_MAX_QUESTIONS: int = Field(
        default=20,
        ge=1,
        description="Maximum number of questions administered in one attempt",
    )
    CAT_DEFAULT_LOWEST_LEVEL: int = 1
    CAT_DEFAULT_HIGHEST_LEVEL: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields from .env not defined in Settings
    )

    @model_validator(mode="after")
    def validate_question_limits(self) -> Self:
        """Validate min/max question defaults at startup."""
        if self.CAT_DEFAULT_MIN_QUESTIONS > self.CAT_DEFAULT_MAX_QUESTIONS:
            raise ValueError(
                "CAT_DEFAULT_MIN_QUESTIONS must not exceed CAT_DEFAULT_MAX_QUESTIONS, "
                f"got {self.CAT_DEFAULT_MIN_QUESTIONS} > {self.CAT_DEFAULT_MAX_QUESTIONS}"
            )
        return self

    @model_validator(mode="after")
    def validate_level_defaults(self) -> Self:
        """Validate the default difficulty range."""
        if self.CAT_DEFAULT_LOWEST_LEVEL >= self.CAT_DEFAULT_HIGHEST_LEVEL:
            raise ValueError(
                "CAT_DEFAULT_LOWEST_LEVEL must be below CAT_DEFAULT_HIGHEST_LEVEL, "
                f"got {self.CAT_DEFAULT_LOWEST_LEVEL} >= {self.CAT_DEFAULT_HIGHEST_LEVEL}"
            )
        return self


settings = Settings()
