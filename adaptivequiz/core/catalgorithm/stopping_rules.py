"""
Stopping rules for the adaptive quiz attempt.

Stopping Rules (evaluated in priority order):
    1. Maximum questions: the attempt stops once max_questions are answered
    2. Minimum questions: the attempt continues until min_questions are answered
    3. Standard error: the attempt stops when SE(measure) <= threshold

The standard error threshold is configured on the activity as a percent and
converted to the logit scale with convert_percent_to_logit() before it reaches
these rules.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from adaptivequiz.core.catalgorithm.measure_estimation import (
    standard_error_within_parameters,
)

logger = logging.getLogger(__name__)


class StopReason(str, enum.Enum):
    """Why an attempt stopped."""

    MAX_QUESTIONS = "max_questions"
    STANDARD_ERROR = "standard_error"


@dataclass
class StoppingDecision:
    """
    Result of evaluating stopping criteria for an attempt.

    Attributes:
        should_stop: Whether the attempt should terminate.
        reason: Reason for stopping (if should_stop=True), or None.
        details: Diagnostic information:
            - standard_error: Current standard error of the measure
            - questions_attempted: Number of questions answered
            - standard_error_threshold: Configured threshold (logit scale)
            - min_questions_met: Whether the minimum has been reached
            - at_max_questions: Whether the maximum has been reached
            - standard_error_met: Whether SE is within the threshold
    """

    should_stop: bool
    reason: Optional[StopReason]
    details: Dict[str, Any]


def check_stopping_criteria(
    standard_error: float,
    questions_attempted: int,
    standard_error_threshold: float,
    min_questions: int,
    max_questions: int,
) -> StoppingDecision:
    """
    Evaluate all stopping criteria and decide whether the attempt should stop.

    Args:
        standard_error: Current standard error of the ability measure.
        questions_attempted: Number of questions answered so far.
        standard_error_threshold: SE (logit scale) at or below which to stop.
        min_questions: Minimum questions before stopping is allowed.
        max_questions: Maximum questions (overrides all other rules).

    Returns:
        StoppingDecision with should_stop flag, reason, and diagnostic details.

    Raises:
        ValueError: If standard_error or questions_attempted is negative, or
            min_questions exceeds max_questions.
    """
    if standard_error < 0:
        raise ValueError(f"Standard error must be non-negative, got {standard_error}")
    if questions_attempted < 0:
        raise ValueError(
            f"Number of questions attempted must be non-negative, got {questions_attempted}"
        )
    if min_questions > max_questions:
        raise ValueError(
            f"min_questions ({min_questions}) must not exceed max_questions ({max_questions})"
        )

    standard_error_met = standard_error_within_parameters(
        standard_error, standard_error_threshold
    )
    details: Dict[str, Any] = {
        "standard_error": standard_error,
        "questions_attempted": questions_attempted,
        "standard_error_threshold": standard_error_threshold,
        "min_questions_met": questions_attempted >= min_questions,
        "at_max_questions": questions_attempted >= max_questions,
        "standard_error_met": standard_error_met,
    }

    # Rule 1: Maximum questions, stop immediately
    if questions_attempted >= max_questions:
        logger.info(
            f"Stopping: reached maximum questions ({questions_attempted}/{max_questions})"
        )
        return StoppingDecision(
            should_stop=True, reason=StopReason.MAX_QUESTIONS, details=details
        )

    # Rule 2: Minimum questions, continue if not met
    if questions_attempted < min_questions:
        logger.debug(
            f"Continuing: {questions_attempted}/{min_questions} questions answered (below minimum)"
        )
        return StoppingDecision(should_stop=False, reason=None, details=details)

    # Rule 3: Standard error threshold
    if standard_error_met:
        logger.info(
            f"Stopping: standard error within parameters "
            f"(SE={standard_error:.5f} <= {standard_error_threshold:.5f}) "
            f"after {questions_attempted} questions"
        )
        return StoppingDecision(
            should_stop=True, reason=StopReason.STANDARD_ERROR, details=details
        )

    logger.debug(
        f"Continuing: SE={standard_error:.5f} (threshold={standard_error_threshold:.5f}), "
        f"questions={questions_attempted}"
    )
    return StoppingDecision(should_stop=False, reason=None, details=details)
