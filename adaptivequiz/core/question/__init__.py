"""
Adapters between the question engine and the CAT algorithm.
"""

from .answer_evaluation import QuestionAnswerEvaluation, QuestionAnswerEvaluationResult
from .answered_summary import QuestionsAnsweredSummary, QuestionsAnsweredSummaryProvider
from .usage import QuestionState, QuestionUsage, coerce_mark

__all__ = [
    "QuestionAnswerEvaluation",
    "QuestionAnswerEvaluationResult",
    "QuestionsAnsweredSummary",
    "QuestionsAnsweredSummaryProvider",
    "QuestionState",
    "QuestionUsage",
    "coerce_mark",
]
