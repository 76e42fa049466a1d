"""
CatAlgo: the adaptive quiz difficulty algorithm.

Given the taker's answers so far, the algorithm moves the target difficulty up
after a correct answer and down after an incorrect one. The move is made on the
logit scale with a step of 2 / questions_attempted, so adjustments shrink as the
attempt progresses and the estimate firms up:

    logit_next = logit(level) ± 2 / questions_attempted
    level_next = low + round(sigmoid(logit_next), 2) * (high - low)

The result is rounded to a whole level and clamped to the activity's range.
The driver holds no state besides its constructor parameters; every call is
independent.
"""

import logging
from typing import Optional

from adaptivequiz.core.catalgorithm._types import (
    DifficultyRange,
    DetermineNextDifficultyResult,
)
from adaptivequiz.core.catalgorithm.logit import (
    convert_linear_to_logit,
    convert_logit_to_percent,
    convert_percent_to_logit,
    map_logit_to_scale,
    round_half_up,
)
from adaptivequiz.core.catalgorithm.measure_estimation import (
    estimate_measure,
    estimate_standard_error,
    standard_error_within_parameters,
)
from adaptivequiz.core.question.answer_evaluation import QuestionAnswerEvaluationResult
from adaptivequiz.core.question.answered_summary import QuestionsAnsweredSummary
from adaptivequiz.core.question.usage import QuestionUsage

logger = logging.getLogger(__name__)

# Numerator of the logit step; the step is STEP_NUMERATOR / questions_attempted
STEP_NUMERATOR = 2.0

# The probability is rounded before it is mapped back onto the linear scale
PROBABILITY_DECIMALS = 2

ERROR_LAST_ATTEMPTED_QUESTION_NOT_ANSWERED = "last attempt question not answered"
ERROR_NUMBER_OF_QUESTIONS_ATTEMPTED_IS_ZERO = "number of questions attempted is zero"
ERROR_SUM_OF_RIGHT_WRONG_ANSWERS_MISMATCH = "sum of right/wrong answers mismatch"


class CatAlgo:
    """
    Driver of the adaptive quiz difficulty algorithm.

    Args:
        return_fraction: When True, an attempt with no administered questions
            reports the lowest level of the range as its current level; when
            False it reports default_fallback_difficulty.
        default_fallback_difficulty: Level the attempt starts from and falls
            back to. Required.

    Raises:
        ValueError: If default_fallback_difficulty is not given.
    """

    convert_percent_to_logit = staticmethod(convert_percent_to_logit)
    convert_logit_to_percent = staticmethod(convert_logit_to_percent)
    map_logit_to_scale = staticmethod(map_logit_to_scale)
    convert_linear_to_logit = staticmethod(convert_linear_to_logit)
    estimate_standard_error = staticmethod(estimate_standard_error)
    estimate_measure = staticmethod(estimate_measure)
    standard_error_within_parameters = staticmethod(standard_error_within_parameters)

    def __init__(
        self,
        return_fraction: bool,
        default_fallback_difficulty: Optional[int] = None,
    ):
        if default_fallback_difficulty is None:
            raise ValueError("A default fallback difficulty level must be provided")

        self._return_fraction = bool(return_fraction)
        self._default_fallback_difficulty = int(default_fallback_difficulty)

    @property
    def return_fraction(self) -> bool:
        return self._return_fraction

    @property
    def default_fallback_difficulty(self) -> int:
        return self._default_fallback_difficulty

    def get_current_diff_level(
        self,
        question_usage: QuestionUsage,
        attempt_id: int,
        difficulty_range: DifficultyRange,
    ) -> int:
        """
        Work out the attempt's current difficulty level from its answer history.

        Replays every graded slot in order, starting from the fallback level,
        and advances the level with compute_next_difficulty() after each one.

        Args:
            question_usage: Question usage of the attempt.
            attempt_id: Attempt the usage belongs to.
            difficulty_range: Difficulty range of the activity.

        Returns:
            The difficulty level the next question should have.
        """
        slots = list(question_usage.get_slots())
        if slots and not question_usage.get_question_state(slots[-1]).is_graded:
            # The last question is still awaiting an answer
            slots = slots[:-1]

        if not slots:
            logger.debug(f"Attempt {attempt_id}: no questions administered yet")
            return self._fallback_level(difficulty_range)

        level = self._default_fallback_difficulty
        for questions_attempted, slot in enumerate(slots, start=1):
            mark = self.get_question_mark(question_usage, slot)
            was_correct = mark is not None and mark > 0
            level = self.compute_next_difficulty(
                level, questions_attempted, was_correct, difficulty_range
            )

        logger.debug(
            f"Attempt {attempt_id}: current difficulty level {level} "
            f"after {len(slots)} questions",
            extra={"difficulty_level": level},
        )
        return level

    def get_question_mark(
        self, question_usage: QuestionUsage, slot: int
    ) -> Optional[float]:
        """Mark of the slot, or None when the usage returns anything but a float."""
        mark = question_usage.get_question_mark(slot)
        if isinstance(mark, float):
            return mark

        logger.debug(f"Slot {slot} has no usable mark: {mark!r}", extra={"slot": slot})
        return None

    def compute_next_difficulty(
        self,
        level: int,
        questions_attempted: int,
        was_correct: bool,
        difficulty_range: DifficultyRange,
    ) -> int:
        """
        Compute the difficulty level of the next question.

        Args:
            level: Difficulty level of the last answered question.
            questions_attempted: Number of questions answered, including it.
            was_correct: Whether it was answered correctly.
            difficulty_range: Difficulty range of the activity.

        Returns:
            Next difficulty level within [low, high].

        Raises:
            ValueError: If questions_attempted is below 1.
        """
        if questions_attempted < 1:
            raise ValueError(
                f"Number of questions attempted must be at least 1, got {questions_attempted}"
            )

        logit = convert_linear_to_logit(level, difficulty_range)
        step = STEP_NUMERATOR / questions_attempted
        next_logit = logit + step if was_correct else logit - step

        # Map back with the rounded probability so levels move in whole percent steps
        probability = round_half_up(
            map_logit_to_scale(next_logit, DifficultyRange(0, 1)), PROBABILITY_DECIMALS
        )
        next_level = int(
            round_half_up(difficulty_range.low + probability * difficulty_range.width)
        )

        return max(difficulty_range.low, min(difficulty_range.high, next_level))

    def determine_next_difficulty_level(
        self,
        current_level: int,
        questions_attempted: int,
        difficulty_range: DifficultyRange,
        standard_error_to_stop: float,
        answer_evaluation: QuestionAnswerEvaluationResult,
        answered_summary: QuestionsAnsweredSummary,
    ) -> DetermineNextDifficultyResult:
        """
        Decide the next difficulty level after the last answered question.

        Returns an error result (not an exception) when the last question was
        not answered or the answer tally does not match the number of
        questions attempted. Otherwise the next level is always computed and
        clamped to the range, even when the standard error is already within
        standard_error_to_stop; callers learn that the attempt should stop from
        check_stopping_criteria(), which evaluates the same standard error.

        Args:
            current_level: Difficulty level of the last answered question.
            questions_attempted: Number of questions answered so far.
            difficulty_range: Difficulty range of the activity.
            standard_error_to_stop: SE threshold on the logit scale.
            answer_evaluation: Evaluation of the last answered question.
            answered_summary: Correct/incorrect tally of the attempt.

        Returns:
            DetermineNextDifficultyResult with either an error or a level.
        """
        if not answer_evaluation.answer_was_given:
            return DetermineNextDifficultyResult.with_error(
                ERROR_LAST_ATTEMPTED_QUESTION_NOT_ANSWERED
            )

        if questions_attempted < 1:
            return DetermineNextDifficultyResult.with_error(
                ERROR_NUMBER_OF_QUESTIONS_ATTEMPTED_IS_ZERO
            )

        if answered_summary.total != questions_attempted:
            logger.warning(
                f"Answer tally ({answered_summary.correct_count} correct, "
                f"{answered_summary.incorrect_count} incorrect) does not match "
                f"{questions_attempted} questions attempted"
            )
            return DetermineNextDifficultyResult.with_error(
                ERROR_SUM_OF_RIGHT_WRONG_ANSWERS_MISMATCH
            )

        standard_error = estimate_standard_error(
            questions_attempted,
            answered_summary.correct_count,
            answered_summary.incorrect_count,
        )
        if standard_error_within_parameters(standard_error, standard_error_to_stop):
            logger.info(
                f"Standard error {standard_error} within {standard_error_to_stop} "
                f"after {questions_attempted} questions",
                extra={"standard_error": standard_error},
            )

        next_level = self.compute_next_difficulty(
            current_level,
            questions_attempted,
            answer_evaluation.answer_is_correct,
            difficulty_range,
        )
        return DetermineNextDifficultyResult.with_next_difficulty_level_determined(
            next_level
        )

    def _fallback_level(self, difficulty_range: DifficultyRange) -> int:
        if self._return_fraction:
            return difficulty_range.low
        return self._default_fallback_difficulty
