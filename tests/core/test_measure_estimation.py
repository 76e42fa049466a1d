"""
Tests for ability measure and standard error estimation.
"""
import math

import pytest

from adaptivequiz.core.catalgorithm import (
    estimate_measure,
    estimate_standard_error,
    standard_error_within_parameters,
)


class TestEstimateStandardError:
    def test_known_value(self):
        assert estimate_standard_error(10, 7, 3) == pytest.approx(0.69007)

    def test_shrinks_with_more_answers(self):
        assert estimate_standard_error(20, 10, 10) < estimate_standard_error(10, 5, 5)

    def test_all_correct_uses_continuity_correction(self):
        expected = round(math.sqrt(4 / (4.5 * 0.5)), 5)
        assert estimate_standard_error(4, 4, 0) == pytest.approx(expected)

    def test_all_incorrect_is_finite(self):
        assert math.isfinite(estimate_standard_error(3, 0, 3))

    def test_zero_attempted_raises(self):
        with pytest.raises(ValueError, match="at least 1"):
            estimate_standard_error(0, 0, 0)

    def test_negative_count_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            estimate_standard_error(2, -1, 3)


class TestEstimateMeasure:
    def test_known_value(self):
        assert estimate_measure(20, 10, 7, 3) == pytest.approx(2.8473)

    def test_balanced_tally_is_mean_difficulty(self):
        assert estimate_measure(3.0, 6, 3, 3) == pytest.approx(0.5)

    def test_more_correct_means_higher_measure(self):
        assert estimate_measure(0.0, 10, 8, 2) > estimate_measure(0.0, 10, 2, 8)

    def test_all_correct_uses_continuity_correction(self):
        expected = round(0.0 / 2 + math.log(2.5 / 0.5), 4)
        assert estimate_measure(0.0, 2, 2, 0) == pytest.approx(expected)

    def test_all_incorrect_is_negative(self):
        assert estimate_measure(0.0, 3, 0, 3) < 0

    def test_zero_attempted_raises(self):
        with pytest.raises(ValueError):
            estimate_measure(1.0, 0, 0, 0)


class TestStandardErrorWithinParameters:
    def test_below_threshold(self):
        assert standard_error_within_parameters(0.02, 0.1) is True

    def test_above_threshold(self):
        assert standard_error_within_parameters(0.01, 0.002) is False

    def test_equal_to_threshold(self):
        assert standard_error_within_parameters(0.2, 0.2) is True
