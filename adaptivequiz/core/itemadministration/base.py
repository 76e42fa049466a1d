"""
Interfaces of item administration.

Item administration decides, after each answer, whether the attempt goes on
and at what difficulty the next question should be. The built-in CAT algorithm
is one implementation; custom CAT models provide their own through an
ItemAdministrationFactory registered under a model key.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from adaptivequiz.core.question.answer_evaluation import QuestionAnswerEvaluationResult
from adaptivequiz.core.question.usage import QuestionUsage
from adaptivequiz.schemas.activity import AdaptiveQuizActivity, AttemptData


@dataclass(frozen=True)
class ItemAdministrationEvaluation:
    """Either the reason the attempt stops, or the next question's difficulty level."""

    stoppage_reason: Optional[str] = None
    next_difficulty_level: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.stoppage_reason is None) == (self.next_difficulty_level is None):
            raise ValueError(
                "Exactly one of stoppage_reason or next_difficulty_level must be set"
            )

    @classmethod
    def with_stoppage_reason(cls, reason: str) -> "ItemAdministrationEvaluation":
        return cls(stoppage_reason=reason)

    @classmethod
    def with_next_item(cls, difficulty_level: int) -> "ItemAdministrationEvaluation":
        return cls(next_difficulty_level=difficulty_level)

    @property
    def item_administration_is_to_stop(self) -> bool:
        return self.stoppage_reason is not None


class ItemAdministration(ABC):
    """Decides whether and how the next item is administered."""

    @abstractmethod
    def evaluate_ability_to_administer_next_item(
        self,
        previous_answer_evaluation: Optional[QuestionAnswerEvaluationResult],
    ) -> ItemAdministrationEvaluation:
        """
        Args:
            previous_answer_evaluation: Evaluation of the last answered
                question, or None when no question has been administered yet.
        """


class ItemAdministrationFactory(ABC):
    """Builds the item administration of one CAT model for an attempt."""

    @abstractmethod
    def item_administration_implementation(
        self,
        question_usage: QuestionUsage,
        attempt: AttemptData,
        activity: AdaptiveQuizActivity,
    ) -> ItemAdministration:
        ...

    def post_create_attempt(
        self, activity: AdaptiveQuizActivity, attempt: AttemptData
    ) -> None:
        """Hook run once when a new attempt is created. No-op by default."""
