"""
Tests for the CatAlgo difficulty algorithm driver.
"""
from unittest.mock import Mock, patch

import pytest

from adaptivequiz.core.catalgorithm import (
    ERROR_LAST_ATTEMPTED_QUESTION_NOT_ANSWERED,
    ERROR_NUMBER_OF_QUESTIONS_ATTEMPTED_IS_ZERO,
    ERROR_SUM_OF_RIGHT_WRONG_ANSWERS_MISMATCH,
    CatAlgo,
    DetermineNextDifficultyResult,
    DifficultyRange,
    convert_percent_to_logit,
)
from adaptivequiz.core.question import (
    QuestionAnswerEvaluationResult,
    QuestionsAnsweredSummary,
    QuestionState,
)


@pytest.fixture
def algo() -> CatAlgo:
    return CatAlgo(False, 5)


class TestConstruction:
    def test_missing_default_level_raises(self):
        with pytest.raises(ValueError, match="default fallback difficulty"):
            CatAlgo(True)

    def test_exposes_parameters(self):
        algo = CatAlgo(True, 40)
        assert algo.return_fraction is True
        assert algo.default_fallback_difficulty == 40

    def test_exposes_conversion_functions(self):
        assert CatAlgo.convert_percent_to_logit(0.05) == pytest.approx(
            convert_percent_to_logit(0.05)
        )
        assert CatAlgo.estimate_standard_error(10, 7, 3) == pytest.approx(0.69007)


class TestComputeNextDifficulty:
    @pytest.mark.parametrize(
        "level,attempted,correct,expected",
        [
            (30, 1, False, 5),
            (30, 1, True, 76),
            (80, 2, False, 60),
            (80, 2, True, 92),
        ],
    )
    def test_zero_to_hundred_vectors(
        self, algo, zero_to_hundred, level, attempted, correct, expected
    ):
        assert (
            algo.compute_next_difficulty(level, attempted, correct, zero_to_hundred)
            == expected
        )

    def test_lowest_level_wrong_answer_stays_at_bottom(self, algo, one_to_ten):
        assert algo.compute_next_difficulty(1, 2, False, one_to_ten) == 1

    def test_highest_level_right_answer_stays_at_top(self, algo, one_to_ten):
        assert algo.compute_next_difficulty(10, 2, True, one_to_ten) == 10

    def test_zero_attempted_raises(self, algo, one_to_ten):
        with pytest.raises(ValueError, match="at least 1"):
            algo.compute_next_difficulty(5, 0, True, one_to_ten)

    @pytest.mark.parametrize("attempted", [1, 2, 5, 20])
    @pytest.mark.parametrize("correct", [True, False])
    def test_result_stays_within_range(self, algo, attempted, correct):
        difficulty_range = DifficultyRange(3, 12)
        for level in range(3, 13):
            result = algo.compute_next_difficulty(
                level, attempted, correct, difficulty_range
            )
            assert difficulty_range.is_level_within_range(result)

    def test_steps_shrink_as_attempt_progresses(self, algo, zero_to_hundred):
        early = algo.compute_next_difficulty(50, 1, True, zero_to_hundred) - 50
        late = algo.compute_next_difficulty(50, 10, True, zero_to_hundred) - 50
        assert early > late > 0


class TestGetQuestionMark:
    def test_float_mark_is_returned(self, algo):
        usage = Mock()
        usage.get_question_mark.return_value = 1.0
        assert algo.get_question_mark(usage, 1) == 1.0
        usage.get_question_mark.assert_called_once_with(1)

    def test_integer_mark_is_rejected(self, algo):
        usage = Mock()
        usage.get_question_mark.return_value = 1
        assert algo.get_question_mark(usage, 1) is None

    def test_missing_mark_is_none(self, algo):
        usage = Mock()
        usage.get_question_mark.return_value = None
        assert algo.get_question_mark(usage, 3) is None


class TestGetCurrentDiffLevel:
    def test_no_slots_with_return_fraction_is_lowest_level(
        self, question_usage, zero_to_hundred
    ):
        algo = CatAlgo(True, 50)
        assert algo.get_current_diff_level(question_usage, 1, zero_to_hundred) == 0

    def test_no_slots_without_return_fraction_is_fallback(
        self, question_usage, zero_to_hundred
    ):
        algo = CatAlgo(False, 50)
        assert algo.get_current_diff_level(question_usage, 1, zero_to_hundred) == 50

    def test_only_ungraded_slot_is_fallback(self, algo, question_usage, one_to_ten):
        question_usage.add(QuestionState.UNGRADED, None, 5)
        assert algo.get_current_diff_level(question_usage, 1, one_to_ten) == 5

    def test_replays_answer_history(self, algo, question_usage, one_to_ten):
        question_usage.answer(True, 5)
        question_usage.answer(False, 9)
        # 5 -> 9 after a correct first answer, 9 -> 8 after an incorrect second
        assert algo.get_current_diff_level(question_usage, 1, one_to_ten) == 8

    def test_trailing_ungraded_slot_is_ignored(self, algo, question_usage, one_to_ten):
        question_usage.answer(True, 5)
        question_usage.add(QuestionState.UNGRADED, None, 9)
        assert algo.get_current_diff_level(question_usage, 1, one_to_ten) == 9

    def test_calls_compute_once_per_graded_slot(self, algo, question_usage, zero_to_hundred):
        for correct in (True, False, True, True, False):
            question_usage.answer(correct, 50)

        with patch.object(CatAlgo, "compute_next_difficulty", return_value=50) as mock_compute:
            result = algo.get_current_diff_level(question_usage, 1, zero_to_hundred)

        assert result == 50
        assert mock_compute.call_count == 5
        attempted_counts = [c.args[1] for c in mock_compute.call_args_list]
        assert attempted_counts == [1, 2, 3, 4, 5]

    def test_non_float_mark_counts_as_incorrect(self, algo, question_usage, one_to_ten):
        question_usage.add(QuestionState.GRADED, 1, 5)
        expected = algo.compute_next_difficulty(5, 1, False, one_to_ten)
        assert algo.get_current_diff_level(question_usage, 1, one_to_ten) == expected


class TestDetermineNextDifficultyLevel:
    def _determine(self, algo, **overrides):
        kwargs = dict(
            current_level=5,
            questions_attempted=2,
            difficulty_range=DifficultyRange(1, 10),
            standard_error_to_stop=convert_percent_to_logit(0.05),
            answer_evaluation=QuestionAnswerEvaluationResult.when_answer_is_correct(),
            answered_summary=QuestionsAnsweredSummary.from_integers(1, 1),
        )
        kwargs.update(overrides)
        return algo.determine_next_difficulty_level(**kwargs)

    def test_unanswered_question_is_error(self, algo):
        result = self._determine(
            algo,
            answer_evaluation=QuestionAnswerEvaluationResult.when_answer_was_not_given(),
        )
        assert result.is_with_error
        assert result.message == ERROR_LAST_ATTEMPTED_QUESTION_NOT_ANSWERED

    def test_zero_attempted_is_error(self, algo):
        result = self._determine(
            algo,
            questions_attempted=0,
            answered_summary=QuestionsAnsweredSummary.from_integers(0, 0),
        )
        assert result.message == ERROR_NUMBER_OF_QUESTIONS_ATTEMPTED_IS_ZERO

    def test_tally_mismatch_is_error(self, algo):
        result = self._determine(
            algo, answered_summary=QuestionsAnsweredSummary.from_integers(2, 1)
        )
        assert result.is_with_error
        assert result.message == ERROR_SUM_OF_RIGHT_WRONG_ANSWERS_MISMATCH

    def test_standard_error_reached_still_moves_level(self, algo):
        # SE for one right and one wrong answer is sqrt(2) ~ 1.41421
        result = self._determine(algo, standard_error_to_stop=2.0)
        expected = algo.compute_next_difficulty(5, 2, True, DifficultyRange(1, 10))
        assert result.is_determined
        assert result.next_level == expected
        assert result.next_level != 5

    def test_standard_error_reached_incorrect_answer(self, algo):
        # SE sqrt(3 / 2) ~ 1.22474 is within the threshold of 5 logits
        result = self._determine(
            algo,
            questions_attempted=3,
            standard_error_to_stop=5.0,
            answer_evaluation=QuestionAnswerEvaluationResult.when_answer_is_incorrect(),
            answered_summary=QuestionsAnsweredSummary.from_integers(1, 2),
        )
        assert result == DetermineNextDifficultyResult.with_next_difficulty_level_determined(4)

    @pytest.mark.parametrize(
        "evaluation,expected",
        [
            (QuestionAnswerEvaluationResult.CORRECT, 6),
            (QuestionAnswerEvaluationResult.INCORRECT, 4),
        ],
    )
    def test_standard_error_not_reached_vectors(self, algo, evaluation, expected):
        result = self._determine(
            algo,
            questions_attempted=6,
            answer_evaluation=evaluation,
            answered_summary=QuestionsAnsweredSummary.from_integers(2, 4),
        )
        assert result.next_level == expected

    def test_level_outside_range_is_clamped(self, algo):
        result = self._determine(
            algo,
            current_level=50,
            questions_attempted=3,
            standard_error_to_stop=5.0,
            answer_evaluation=QuestionAnswerEvaluationResult.when_answer_is_incorrect(),
            answered_summary=QuestionsAnsweredSummary.from_integers(1, 2),
        )
        assert DifficultyRange(1, 10).is_level_within_range(result.next_level)

    def test_correct_answer_raises_level(self, algo):
        result = self._determine(algo)
        expected = algo.compute_next_difficulty(5, 2, True, DifficultyRange(1, 10))
        assert result.next_level == expected
        assert result.next_level > 5

    def test_incorrect_answer_lowers_level(self, algo):
        result = self._determine(
            algo,
            answer_evaluation=QuestionAnswerEvaluationResult.when_answer_is_incorrect(),
        )
        assert result.is_determined
        assert result.next_level < 5

    def test_does_not_raise_for_bad_input(self, algo):
        result = self._determine(
            algo,
            questions_attempted=-3,
            answered_summary=QuestionsAnsweredSummary.from_integers(0, 0),
        )
        assert result.is_with_error
