"""
CAT (Computerized Adaptive Testing) algorithm of the adaptive quiz.

This module provides the logit conversions, the measure/standard error
estimation, the difficulty algorithm driver and the stopping rules.
"""

from ._types import (
    CatCalculationStepsResult,
    DetermineNextDifficultyResult,
    DifficultyLogit,
    DifficultyRange,
)
from .catalgo import (
    ERROR_LAST_ATTEMPTED_QUESTION_NOT_ANSWERED,
    ERROR_NUMBER_OF_QUESTIONS_ATTEMPTED_IS_ZERO,
    ERROR_SUM_OF_RIGHT_WRONG_ANSWERS_MISMATCH,
    CatAlgo,
)
from .logit import (
    convert_linear_to_logit,
    convert_logit_to_percent,
    convert_percent_to_logit,
    map_logit_to_scale,
)
from .measure_estimation import (
    estimate_measure,
    estimate_standard_error,
    standard_error_within_parameters,
)
from .simulation import (
    SimulationConfig,
    SimulationResult,
    generate_report,
    run_simulation,
)
from .stopping_rules import StopReason, StoppingDecision, check_stopping_criteria

__all__ = [
    "CatCalculationStepsResult",
    "DetermineNextDifficultyResult",
    "DifficultyLogit",
    "DifficultyRange",
    "CatAlgo",
    "ERROR_LAST_ATTEMPTED_QUESTION_NOT_ANSWERED",
    "ERROR_NUMBER_OF_QUESTIONS_ATTEMPTED_IS_ZERO",
    "ERROR_SUM_OF_RIGHT_WRONG_ANSWERS_MISMATCH",
    "convert_linear_to_logit",
    "convert_logit_to_percent",
    "convert_percent_to_logit",
    "map_logit_to_scale",
    "estimate_measure",
    "estimate_standard_error",
    "standard_error_within_parameters",
    "SimulationConfig",
    "SimulationResult",
    "generate_report",
    "run_simulation",
    "StopReason",
    "StoppingDecision",
    "check_stopping_criteria",
]
