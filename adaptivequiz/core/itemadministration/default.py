"""
Item administration backed by the built-in CAT algorithm.
"""

import logging
from typing import Optional, Protocol

from adaptivequiz.core.catalgorithm._types import DifficultyRange
from adaptivequiz.core.catalgorithm.catalgo import CatAlgo
from adaptivequiz.core.catalgorithm.logit import convert_percent_to_logit
from adaptivequiz.core.catalgorithm.measure_estimation import estimate_standard_error
from adaptivequiz.core.catalgorithm.stopping_rules import (
    StopReason,
    check_stopping_criteria,
)
from adaptivequiz.core.itemadministration.base import (
    ItemAdministration,
    ItemAdministrationEvaluation,
    ItemAdministrationFactory,
)
from adaptivequiz.core.question.answer_evaluation import QuestionAnswerEvaluationResult
from adaptivequiz.core.question.answered_summary import QuestionsAnsweredSummaryProvider
from adaptivequiz.core.question.usage import QuestionUsage
from adaptivequiz.schemas.activity import AdaptiveQuizActivity, AttemptData

logger = logging.getLogger(__name__)

ERROR_NO_QUESTION_ADMINISTERED = "no question administered in the attempt"


class DifficultyLevelLookup(Protocol):
    """Resolves the configured difficulty level of the question in a slot."""

    def difficulty_level_of_question(self, slot: int) -> int:
        ...


def standard_error_threshold_in_logits(activity: AdaptiveQuizActivity) -> float:
    """Convert the activity's standard error percent to the logit scale."""
    return convert_percent_to_logit(activity.standard_error / 100)


class DefaultItemAdministration(ItemAdministration):
    """
    Runs the CAT algorithm for an attempt.

    Decision order:
        1. Nothing answered yet: administer the activity's starting level
        2. Maximum questions reached: stop
        3. No administered question to continue from, or the algorithm cannot
           determine a level: stop with the error
        4. Stopping criteria met: stop
        5. Otherwise: administer the determined level
    """

    def __init__(
        self,
        question_usage: QuestionUsage,
        attempt: AttemptData,
        activity: AdaptiveQuizActivity,
        difficulty_lookup: DifficultyLevelLookup,
    ):
        self._question_usage = question_usage
        self._attempt = attempt
        self._activity = activity
        self._difficulty_lookup = difficulty_lookup
        self._algorithm = CatAlgo(
            return_fraction=False, default_fallback_difficulty=activity.starting_level
        )

    def evaluate_ability_to_administer_next_item(
        self,
        previous_answer_evaluation: Optional[QuestionAnswerEvaluationResult],
    ) -> ItemAdministrationEvaluation:
        questions_attempted = self._attempt.questions_attempted

        if previous_answer_evaluation is None or questions_attempted == 0:
            return ItemAdministrationEvaluation.with_next_item(
                self._activity.starting_level
            )

        if questions_attempted >= self._activity.maximum_questions:
            logger.info(
                f"Attempt {self._attempt.id}: maximum of "
                f"{self._activity.maximum_questions} questions reached"
            )
            return ItemAdministrationEvaluation.with_stoppage_reason(
                StopReason.MAX_QUESTIONS.value
            )

        difficulty_range = DifficultyRange.from_activity_instance(self._activity)
        standard_error_to_stop = standard_error_threshold_in_logits(self._activity)
        answered_summary = QuestionsAnsweredSummaryProvider(
            self._question_usage
        ).collect_summary()

        slots = self._question_usage.get_slots()
        if not slots:
            logger.warning(
                f"Attempt {self._attempt.id}: {questions_attempted} questions attempted "
                "but no question has been administered"
            )
            return ItemAdministrationEvaluation.with_stoppage_reason(
                ERROR_NO_QUESTION_ADMINISTERED
            )

        current_level = self._difficulty_lookup.difficulty_level_of_question(slots[-1])

        result = self._algorithm.determine_next_difficulty_level(
            current_level,
            questions_attempted,
            difficulty_range,
            standard_error_to_stop,
            previous_answer_evaluation,
            answered_summary,
        )
        if result.is_with_error:
            logger.warning(
                f"Attempt {self._attempt.id}: next difficulty level not determined: "
                f"{result.message}"
            )
            return ItemAdministrationEvaluation.with_stoppage_reason(result.message)

        standard_error = estimate_standard_error(
            questions_attempted,
            answered_summary.correct_count,
            answered_summary.incorrect_count,
        )
        decision = check_stopping_criteria(
            standard_error=standard_error,
            questions_attempted=questions_attempted,
            standard_error_threshold=standard_error_to_stop,
            min_questions=self._activity.minimum_questions,
            max_questions=self._activity.maximum_questions,
        )
        if decision.should_stop:
            return ItemAdministrationEvaluation.with_stoppage_reason(
                decision.reason.value
            )

        return ItemAdministrationEvaluation.with_next_item(result.next_level)


class DefaultItemAdministrationFactory(ItemAdministrationFactory):
    """Factory of the built-in CAT algorithm's item administration."""

    def __init__(self, difficulty_lookup: DifficultyLevelLookup):
        self._difficulty_lookup = difficulty_lookup

    def item_administration_implementation(
        self,
        question_usage: QuestionUsage,
        attempt: AttemptData,
        activity: AdaptiveQuizActivity,
    ) -> ItemAdministration:
        return DefaultItemAdministration(
            question_usage, attempt, activity, self._difficulty_lookup
        )
