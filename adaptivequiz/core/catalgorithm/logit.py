"""
Conversions between the linear difficulty scale and the logit scale.

The linear scale is the activity's configured difficulty range (for example
1-10). Item difficulty and taker ability are combined additively on the logit
scale and mapped back onto the linear scale when a concrete level is needed.

Formulas:
    percent -> logit:  ln((0.5 + p) / (0.5 - p)),   0 <= p <= 0.5
    logit -> percent:  1 / (1 + exp(-logit)) - 0.5,  logit >= 0
    logit -> level:    low + sigmoid(logit) * (high - low)
    level -> logit:    ln(p / (1 - p)),  p = (level - low) / (high - low)
"""

import math
from decimal import ROUND_HALF_UP, Decimal

from adaptivequiz.core.catalgorithm._types import DifficultyRange

# Substitutes for the range endpoints, which would otherwise produce an
# infinite logit when a level sits exactly on the lowest or highest bound.
LOWEST_LEVEL_PERCENT = 0.0000001
HIGHEST_LEVEL_PERCENT = 0.999999


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round half away from zero.

    Python's round() uses banker's rounding, which would pull values such as
    0.125 down to 0.12; difficulty levels and reported estimates round 0.5 up.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def convert_percent_to_logit(percent: float) -> float:
    """
    Convert a percent (fraction of the range around the midpoint) to a logit.

    Args:
        percent: Value in [0, 0.5].

    Returns:
        Non-negative logit.

    Raises:
        ValueError: If percent is outside [0, 0.5].
    """
    if percent < 0 or percent > 0.5:
        raise ValueError(f"Percent must be between 0 and 0.5, got {percent}")

    return math.log((0.5 + percent) / (0.5 - percent))


def convert_logit_to_percent(logit: float) -> float:
    """
    Convert a non-negative logit back to a percent in [0, 0.5).

    Raises:
        ValueError: If logit is negative.
    """
    if logit < 0:
        raise ValueError(f"Logit must be non-negative, got {logit}")

    return 1.0 / (1.0 + math.exp(-logit)) - 0.5


def map_logit_to_scale(logit: float, difficulty_range: DifficultyRange) -> float:
    """
    Map a logit onto the linear difficulty scale of the range.

    A logit of 0 lands on the range midpoint; the range width scales the
    sigmoid of the logit.
    """
    probability = sigmoid(logit)
    return difficulty_range.low + probability * difficulty_range.width


def convert_linear_to_logit(level: float, difficulty_range: DifficultyRange) -> float:
    """
    Convert a linear difficulty level to a logit relative to the range.

    The level is first expressed as its position within the range (0 at the
    lowest level, 1 at the highest) and then log-odds transformed.
    """
    percent = (level - difficulty_range.low) / difficulty_range.width

    if percent <= 0:
        percent = LOWEST_LEVEL_PERCENT
    elif percent >= 1:
        percent = HIGHEST_LEVEL_PERCENT

    return math.log(percent / (1.0 - percent))


def sigmoid(logit: float) -> float:
    """Logistic function, stable for large negative and positive logits."""
    if logit >= 0:
        return 1.0 / (1.0 + math.exp(-logit))
    exp_logit = math.exp(logit)
    return exp_logit / (1.0 + exp_logit)
