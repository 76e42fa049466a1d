"""
Tally of correct and incorrect answers across an attempt.
"""

from dataclasses import dataclass

from adaptivequiz.core.question.answer_evaluation import (
    QuestionAnswerEvaluation,
    QuestionAnswerEvaluationResult,
)
from adaptivequiz.core.question.usage import QuestionUsage


@dataclass(frozen=True)
class QuestionsAnsweredSummary:
    """Number of correct and incorrect answers given so far."""

    correct_count: int
    incorrect_count: int

    def __post_init__(self) -> None:
        if self.correct_count < 0 or self.incorrect_count < 0:
            raise ValueError(
                "Answer counts must be non-negative, "
                f"got correct={self.correct_count}, incorrect={self.incorrect_count}"
            )

    @classmethod
    def from_integers(
        cls, correct_count: int, incorrect_count: int
    ) -> "QuestionsAnsweredSummary":
        return cls(correct_count=correct_count, incorrect_count=incorrect_count)

    @property
    def total(self) -> int:
        return self.correct_count + self.incorrect_count


class QuestionsAnsweredSummaryProvider:
    """Collects the answered summary from every administered slot."""

    def __init__(self, question_usage: QuestionUsage):
        self._question_usage = question_usage
        self._evaluation = QuestionAnswerEvaluation(question_usage)

    def collect_summary(self) -> QuestionsAnsweredSummary:
        correct = 0
        incorrect = 0
        for slot in self._question_usage.get_slots():
            result = self._evaluation.perform(slot)
            if result is QuestionAnswerEvaluationResult.CORRECT:
                correct += 1
            elif result is QuestionAnswerEvaluationResult.INCORRECT:
                incorrect += 1

        return QuestionsAnsweredSummary.from_integers(correct, incorrect)
