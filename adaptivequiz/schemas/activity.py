"""
Pydantic schemas for adaptive quiz activity settings and attempts.

These are the shapes the surrounding learning platform hands to the engine.
Only the fields the algorithm reads are modelled.
"""
from typing import Optional, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from adaptivequiz.core.config import settings


class AdaptiveQuizActivity(BaseModel):
    """Configuration of one adaptive quiz activity instance."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., gt=0, description="Activity instance id")
    lowest_level: int = Field(
        default=settings.CAT_DEFAULT_LOWEST_LEVEL,
        description="Lowest difficulty level of the question pool",
    )
    highest_level: int = Field(
        default=settings.CAT_DEFAULT_HIGHEST_LEVEL,
        description="Highest difficulty level of the question pool",
    )
    starting_level: int = Field(
        ..., description="Difficulty level of the first question administered"
    )
    standard_error: float = Field(
        default=settings.CAT_DEFAULT_STANDARD_ERROR_PERCENT,
        gt=0.0,
        lt=50.0,
        description="Standard error (percent) at which the attempt stops",
    )
    minimum_questions: int = Field(
        default=settings.CAT_DEFAULT_MIN_QUESTIONS,
        ge=1,
        description="Questions to administer before the attempt may stop",
    )
    maximum_questions: int = Field(
        default=settings.CAT_DEFAULT_MAX_QUESTIONS,
        ge=1,
        description="Questions after which the attempt stops",
    )
    cat_model: Optional[str] = Field(
        default=None,
        description="Key of a custom CAT model; None uses the built-in algorithm",
    )

    @field_validator("cat_model")
    @classmethod
    def normalize_cat_model(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @model_validator(mode="after")
    def validate_levels(self) -> Self:
        """Validate the difficulty range and the starting level within it."""
        if self.lowest_level >= self.highest_level:
            raise ValueError(
                f"lowest_level ({self.lowest_level}) must be below "
                f"highest_level ({self.highest_level})"
            )
        if not self.lowest_level <= self.starting_level <= self.highest_level:
            raise ValueError(
                f"starting_level ({self.starting_level}) must be within "
                f"[{self.lowest_level}, {self.highest_level}]"
            )
        return self

    @model_validator(mode="after")
    def validate_question_limits(self) -> Self:
        if self.minimum_questions > self.maximum_questions:
            raise ValueError(
                f"minimum_questions ({self.minimum_questions}) must not exceed "
                f"maximum_questions ({self.maximum_questions})"
            )
        return self


class AttemptData(BaseModel):
    """Read-only snapshot of an attempt's progress."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., gt=0, description="Attempt id")
    user_id: int = Field(..., gt=0, description="Test taker")
    questions_attempted: int = Field(
        default=0, ge=0, description="Questions answered so far in this attempt"
    )
