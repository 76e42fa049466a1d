"""
Ability measure and standard error estimation for the adaptive quiz (Rasch model).

The measure is the mean logit difficulty of the answered items adjusted by the
log-odds of the taker's correct/incorrect tally:

    measure = difficulty_sum / attempted + ln(correct / incorrect)

The standard error shrinks as more items are answered and as the tally
balances out:

    SE = sqrt(attempted / (correct * incorrect))

Both formulas are undefined when either count is zero (all correct or all
incorrect so far), so a 0.5 continuity correction is added to both counts in
that case.

References:
    - Wright, B. D. (1977). Solving measurement problems with the Rasch model.
      Journal of Educational Measurement, 14(2), 97-116.
    - Linacre, J. M. (2000). Computer-adaptive testing: A methodology whose
      time has come. MESA Memorandum No. 69.
"""

import logging
import math
from typing import Tuple

from adaptivequiz.core.catalgorithm.logit import round_half_up

logger = logging.getLogger(__name__)

# Added to both counts when either is zero
CONTINUITY_CORRECTION = 0.5

STANDARD_ERROR_DECIMALS = 5
MEASURE_DECIMALS = 4


def estimate_standard_error(
    questions_attempted: int, num_correct: int, num_incorrect: int
) -> float:
    """
    Estimate the standard error of the ability measure.

    Args:
        questions_attempted: Number of questions answered so far (>= 1).
        num_correct: Number of correct answers (>= 0).
        num_incorrect: Number of incorrect answers (>= 0).

    Returns:
        Standard error rounded to 5 decimals.

    Raises:
        ValueError: If questions_attempted is below 1 or a count is negative.
    """
    _validate_counts(questions_attempted, num_correct, num_incorrect)
    correct, incorrect = _corrected_counts(num_correct, num_incorrect)

    standard_error = math.sqrt(questions_attempted / (correct * incorrect))
    return round_half_up(standard_error, STANDARD_ERROR_DECIMALS)


def estimate_measure(
    difficulty_sum: float,
    questions_attempted: int,
    num_correct: int,
    num_incorrect: int,
) -> float:
    """
    Estimate the taker's ability measure on the logit scale.

    Args:
        difficulty_sum: Sum of the logit difficulties of the answered items.
        questions_attempted: Number of questions answered so far (>= 1).
        num_correct: Number of correct answers (>= 0).
        num_incorrect: Number of incorrect answers (>= 0).

    Returns:
        Ability measure rounded to 4 decimals.

    Raises:
        ValueError: If questions_attempted is below 1 or a count is negative.
    """
    _validate_counts(questions_attempted, num_correct, num_incorrect)
    correct, incorrect = _corrected_counts(num_correct, num_incorrect)

    measure = difficulty_sum / questions_attempted + math.log(correct / incorrect)
    return round_half_up(measure, MEASURE_DECIMALS)


def standard_error_within_parameters(
    standard_error: float, standard_error_threshold: float
) -> bool:
    """Whether the estimate is precise enough to stop the attempt."""
    return standard_error <= standard_error_threshold


def _validate_counts(
    questions_attempted: int, num_correct: int, num_incorrect: int
) -> None:
    if questions_attempted < 1:
        raise ValueError(
            f"Number of questions attempted must be at least 1, got {questions_attempted}"
        )
    if num_correct < 0 or num_incorrect < 0:
        raise ValueError(
            "Answer counts must be non-negative, "
            f"got correct={num_correct}, incorrect={num_incorrect}"
        )


def _corrected_counts(num_correct: int, num_incorrect: int) -> Tuple[float, float]:
    if num_correct == 0 or num_incorrect == 0:
        logger.debug(
            f"Applying continuity correction to extreme tally "
            f"(correct={num_correct}, incorrect={num_incorrect})"
        )
        return (
            num_correct + CONTINUITY_CORRECTION,
            num_incorrect + CONTINUITY_CORRECTION,
        )
    return (float(num_correct), float(num_incorrect))
