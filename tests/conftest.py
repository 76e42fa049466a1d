"""
Pytest configuration and shared fixtures for testing.
"""
import sys
from pathlib import Path

# Add project root to path so the package is importable without installation
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from typing import Dict, List, Optional, Tuple  # noqa: E402

import pytest  # noqa: E402

from adaptivequiz.core.catalgorithm import DifficultyRange  # noqa: E402
from adaptivequiz.core.question.usage import QuestionState  # noqa: E402
from adaptivequiz.schemas import (  # noqa: E402
    AdaptiveQuizActivity,
    AttemptData,
    CatModelParams,
)


class FakeQuestionUsage:
    """In-memory question usage: slot -> (state, mark, difficulty level)."""

    def __init__(self, answers: Optional[List[Tuple[QuestionState, Optional[float], int]]] = None):
        self._slots: Dict[int, Tuple[QuestionState, Optional[float], int]] = {}
        for state, mark, level in answers or []:
            self.add(state, mark, level)

    def add(self, state: QuestionState, mark: Optional[float], level: int) -> int:
        slot = len(self._slots) + 1
        self._slots[slot] = (state, mark, level)
        return slot

    def answer(self, correct: bool, level: int) -> int:
        return self.add(QuestionState.GRADED, 1.0 if correct else 0.0, level)

    def get_slots(self) -> List[int]:
        return list(self._slots)

    def get_question_state(self, slot: int) -> QuestionState:
        return self._slots[slot][0]

    def get_question_mark(self, slot: int) -> Optional[float]:
        return self._slots[slot][1]

    # DifficultyLevelLookup
    def difficulty_level_of_question(self, slot: int) -> int:
        return self._slots[slot][2]


class InMemoryCatModelParamsRepository:
    """CatModelParams keyed by attempt id."""

    def __init__(self):
        self.saved: Dict[int, CatModelParams] = {}
        self.save_calls = 0

    def get_for_attempt(self, attempt_id: int) -> CatModelParams:
        return self.saved[attempt_id]

    def save(self, params: CatModelParams) -> None:
        self.save_calls += 1
        self.saved[params.attempt_id] = params


@pytest.fixture
def zero_to_hundred() -> DifficultyRange:
    return DifficultyRange(0, 100)


@pytest.fixture
def one_to_ten() -> DifficultyRange:
    return DifficultyRange(1, 10)


@pytest.fixture
def question_usage() -> FakeQuestionUsage:
    return FakeQuestionUsage()


@pytest.fixture
def params_repository() -> InMemoryCatModelParamsRepository:
    return InMemoryCatModelParamsRepository()


@pytest.fixture
def activity() -> AdaptiveQuizActivity:
    return AdaptiveQuizActivity(
        id=1,
        lowest_level=1,
        highest_level=10,
        starting_level=5,
        standard_error=5.0,
        minimum_questions=2,
        maximum_questions=10,
    )


@pytest.fixture
def attempt_factory():
    def _make(questions_attempted: int = 0, attempt_id: int = 7) -> AttemptData:
        return AttemptData(id=attempt_id, user_id=3, questions_attempted=questions_attempted)

    return _make
