"""
Pydantic schema for the CAT model parameters accumulated over an attempt.

The persistence collaborator stores one CatModelParams per attempt. The engine
reads the previous values and produces an updated copy; it never writes them
itself.
"""
from pydantic import BaseModel, ConfigDict, Field

from adaptivequiz.core.catalgorithm._types import (
    CatCalculationStepsResult,
    DifficultyLogit,
    DifficultyRange,
)
from adaptivequiz.core.catalgorithm.logit import (
    convert_logit_to_percent,
    map_logit_to_scale,
)


class CatModelParams(BaseModel):
    """Running difficulty sum, standard error and measure of an attempt."""

    model_config = ConfigDict(frozen=True)

    attempt_id: int = Field(..., gt=0, description="Attempt the parameters belong to")
    difficulty_sum: float = Field(
        default=0.0,
        description="Sum of the logit difficulties of all answered questions",
    )
    standard_error: float = Field(
        default=0.0, ge=0.0, description="Standard error of the measure (logits)"
    )
    measure: float = Field(
        default=0.0, description="Estimated ability of the taker (logits)"
    )

    @classmethod
    def create_new_for_attempt(cls, attempt_id: int) -> "CatModelParams":
        return cls(attempt_id=attempt_id)

    def update_with_calculation_steps_result(
        self, result: CatCalculationStepsResult
    ) -> "CatModelParams":
        """Accumulate the answered question's logit and take over the new estimates."""
        difficulty_sum = (
            DifficultyLogit.from_float(self.difficulty_sum)
            .summed_with_another_logit(DifficultyLogit.from_float(result.logit))
            .as_float()
        )
        return self.model_copy(
            update={
                "difficulty_sum": difficulty_sum,
                "standard_error": result.standard_error,
                "measure": result.measure,
            }
        )

    def standard_error_as_percent(self) -> float:
        """Standard error as a percent of the scale, as shown in attempt reports."""
        return convert_logit_to_percent(self.standard_error) * 100

    def measure_on_scale(self, difficulty_range: DifficultyRange) -> float:
        """Ability measure mapped onto the activity's difficulty scale."""
        return map_logit_to_scale(self.measure, difficulty_range)
