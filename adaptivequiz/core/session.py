"""
AdaptiveQuizSession: entry point service of an adaptive quiz attempt.

Runs after each submitted answer (process_item_result) and before each
question is shown (run_item_administration_evaluation). All persistence and
difficulty lookups go through collaborators; the session itself only computes.
"""

from typing import Optional, Protocol

from adaptivequiz.core.catalgorithm._types import (
    CatCalculationStepsResult,
    DifficultyLogit,
    DifficultyRange,
)
from adaptivequiz.core.catalgorithm.logit import convert_linear_to_logit
from adaptivequiz.core.catalgorithm.measure_estimation import (
    estimate_measure,
    estimate_standard_error,
)
from adaptivequiz.core.itemadministration.base import (
    ItemAdministrationEvaluation,
    ItemAdministrationFactory,
)
from adaptivequiz.core.itemadministration.default import DifficultyLevelLookup
from adaptivequiz.core.itemadministration.registry import (
    ItemAdministrationFactoryRegistry,
)
from adaptivequiz.core.logging_config import attempt_id_context, get_logger
from adaptivequiz.core.question.answer_evaluation import QuestionAnswerEvaluationResult
from adaptivequiz.core.question.answered_summary import QuestionsAnsweredSummaryProvider
from adaptivequiz.core.question.usage import QuestionUsage
from adaptivequiz.schemas.activity import AdaptiveQuizActivity, AttemptData
from adaptivequiz.schemas.cat_model_params import CatModelParams

logger = get_logger(__name__)


class CatModelParamsRepository(Protocol):
    """Stores CatModelParams keyed by attempt id."""

    def get_for_attempt(self, attempt_id: int) -> CatModelParams:
        ...

    def save(self, params: CatModelParams) -> None:
        ...


class AdaptiveQuizSession:
    """
    Coordinates the CAT algorithm for one attempt.

    Use init() rather than the constructor; it resolves the item administration
    factory of the activity's CAT model.
    """

    def __init__(
        self,
        item_administration_factory: ItemAdministrationFactory,
        question_usage: QuestionUsage,
        activity: AdaptiveQuizActivity,
        params_repository: CatModelParamsRepository,
        difficulty_lookup: DifficultyLevelLookup,
    ):
        self._item_administration_factory = item_administration_factory
        self._question_usage = question_usage
        self._activity = activity
        self._params_repository = params_repository
        self._difficulty_lookup = difficulty_lookup

    @classmethod
    def init(
        cls,
        question_usage: QuestionUsage,
        activity: AdaptiveQuizActivity,
        registry: ItemAdministrationFactoryRegistry,
        params_repository: CatModelParamsRepository,
        difficulty_lookup: DifficultyLevelLookup,
    ) -> "AdaptiveQuizSession":
        """
        Build a session for the activity.

        Raises:
            CatModelError: If the activity selects an unregistered CAT model.
        """
        factory = registry.resolve(activity.cat_model)
        return cls(factory, question_usage, activity, params_repository, difficulty_lookup)

    def post_create_attempt(self, attempt: AttemptData) -> None:
        """Initialise a freshly created attempt for the activity's CAT model."""
        if self._activity.cat_model:
            self._item_administration_factory.post_create_attempt(self._activity, attempt)
            return

        self._params_repository.save(CatModelParams.create_new_for_attempt(attempt.id))

    def process_item_result(
        self, attempt: AttemptData, attempted_slot: int
    ) -> Optional[CatModelParams]:
        """
        Update the attempt's CAT model parameters after an answer was submitted.

        The attempt snapshot must already count the answered question in
        questions_attempted. Custom CAT models keep their own parameters, so
        nothing is computed for them.

        Args:
            attempt: The attempt, including the answered question.
            attempted_slot: Slot of the answered question.

        Returns:
            The updated parameters that were saved, or None for custom models.

        Raises:
            ValueError: If the attempt has no answered questions.
        """
        if self._activity.cat_model:
            return None

        token = attempt_id_context.set(attempt.id)
        try:
            attempted_level = self._difficulty_lookup.difficulty_level_of_question(
                attempted_slot
            )
            difficulty_range = DifficultyRange.from_activity_instance(self._activity)
            answered_summary = QuestionsAnsweredSummaryProvider(
                self._question_usage
            ).collect_summary()

            logit = convert_linear_to_logit(attempted_level, difficulty_range)
            params = self._params_repository.get_for_attempt(attempt.id)

            questions_attempted = attempt.questions_attempted
            standard_error = estimate_standard_error(
                questions_attempted,
                answered_summary.correct_count,
                answered_summary.incorrect_count,
            )
            difficulty_sum = DifficultyLogit.from_float(
                params.difficulty_sum
            ).summed_with_another_logit(DifficultyLogit.from_float(logit))
            measure = estimate_measure(
                difficulty_sum.as_float(),
                questions_attempted,
                answered_summary.correct_count,
                answered_summary.incorrect_count,
            )

            updated = params.update_with_calculation_steps_result(
                CatCalculationStepsResult.from_floats(logit, standard_error, measure)
            )
            self._params_repository.save(updated)

            logger.info(
                f"Processed slot {attempted_slot} at level {attempted_level}: "
                f"SE={standard_error}, measure={measure}",
                extra={
                    "slot": attempted_slot,
                    "difficulty_level": attempted_level,
                    "standard_error": standard_error,
                    "measure": measure,
                },
            )
            return updated
        finally:
            attempt_id_context.reset(token)

    def run_item_administration_evaluation(
        self,
        attempt: AttemptData,
        previous_answer_evaluation: Optional[QuestionAnswerEvaluationResult],
    ) -> ItemAdministrationEvaluation:
        """Ask the CAT model whether and at what difficulty to show the next question."""
        token = attempt_id_context.set(attempt.id)
        try:
            item_administration = (
                self._item_administration_factory.item_administration_implementation(
                    self._question_usage, attempt, self._activity
                )
            )
            evaluation = item_administration.evaluate_ability_to_administer_next_item(
                previous_answer_evaluation
            )
            if evaluation.item_administration_is_to_stop:
                logger.info(f"Attempt stops: {evaluation.stoppage_reason}")
            return evaluation
        finally:
            attempt_id_context.reset(token)
