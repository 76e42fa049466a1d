"""
Evaluation of whether an administered question was answered, and correctly.
"""

import enum
import logging

from adaptivequiz.core.question.usage import QuestionUsage

logger = logging.getLogger(__name__)


class QuestionAnswerEvaluationResult(str, enum.Enum):
    """Outcome of evaluating the answer given to one question."""

    NOT_GIVEN = "not_given"
    CORRECT = "correct"
    INCORRECT = "incorrect"

    @classmethod
    def when_answer_was_not_given(cls) -> "QuestionAnswerEvaluationResult":
        return cls.NOT_GIVEN

    @classmethod
    def when_answer_is_correct(cls) -> "QuestionAnswerEvaluationResult":
        return cls.CORRECT

    @classmethod
    def when_answer_is_incorrect(cls) -> "QuestionAnswerEvaluationResult":
        return cls.INCORRECT

    @property
    def answer_was_given(self) -> bool:
        return self is not QuestionAnswerEvaluationResult.NOT_GIVEN

    @property
    def answer_is_correct(self) -> bool:
        return self is QuestionAnswerEvaluationResult.CORRECT


class QuestionAnswerEvaluation:
    """
    Evaluates a slot of the question usage.

    Contract:
        - not graded, or no usable mark -> NOT_GIVEN
        - mark > 0                      -> CORRECT
        - otherwise                     -> INCORRECT
    """

    def __init__(self, question_usage: QuestionUsage):
        self._question_usage = question_usage

    def perform(self, slot: int) -> QuestionAnswerEvaluationResult:
        state = self._question_usage.get_question_state(slot)
        if not state.is_graded:
            return QuestionAnswerEvaluationResult.when_answer_was_not_given()

        mark = self._question_usage.get_question_mark(slot)
        if mark is None:
            logger.debug(f"Slot {slot} is graded but has no mark", extra={"slot": slot})
            return QuestionAnswerEvaluationResult.when_answer_was_not_given()

        if mark > 0.0:
            return QuestionAnswerEvaluationResult.when_answer_is_correct()

        return QuestionAnswerEvaluationResult.when_answer_is_incorrect()
