"""
Value types carried in and out of the CAT algorithm.

All types are immutable and created per evaluation call.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class DifficultyRange:
    """
    Configured [low, high] difficulty bounds of an adaptive quiz activity.

    Attributes:
        low: Lowest difficulty level an item can have.
        high: Highest difficulty level an item can have.

    Raises:
        ValueError: If low is not strictly below high.
    """

    low: int
    high: int

    def __post_init__(self) -> None:
        if self.low >= self.high:
            raise ValueError(
                f"Lowest difficulty level must be below the highest, got [{self.low}, {self.high}]"
            )

    @classmethod
    def from_activity_instance(cls, activity: Any) -> "DifficultyRange":
        """Build the range from an activity's lowest_level/highest_level settings."""
        return cls(low=int(activity.lowest_level), high=int(activity.highest_level))

    @property
    def width(self) -> int:
        return self.high - self.low

    def is_level_within_range(self, level: int) -> bool:
        return self.low <= level <= self.high


@dataclass(frozen=True)
class DifficultyLogit:
    """Difficulty (or ability) expressed on the logit scale."""

    value: float

    @classmethod
    def from_float(cls, value: float) -> "DifficultyLogit":
        return cls(float(value))

    def summed_with_another_logit(self, other: "DifficultyLogit") -> "DifficultyLogit":
        return DifficultyLogit(self.value + other.value)

    def __add__(self, other: "DifficultyLogit") -> "DifficultyLogit":
        if not isinstance(other, DifficultyLogit):
            return NotImplemented
        return self.summed_with_another_logit(other)

    def as_float(self) -> float:
        return self.value


@dataclass(frozen=True)
class CatCalculationStepsResult:
    """Logit of the answered item plus the re-estimated standard error and measure."""

    logit: float
    standard_error: float
    measure: float

    @classmethod
    def from_floats(
        cls, logit: float, standard_error: float, measure: float
    ) -> "CatCalculationStepsResult":
        return cls(logit=logit, standard_error=standard_error, measure=measure)


@dataclass(frozen=True)
class DetermineNextDifficultyResult:
    """
    Outcome of determining the next difficulty level.

    Exactly one of the two payloads is populated:
        - message: error message when the level could not be determined
        - next_level: the determined difficulty level

    Use the factory class methods rather than the constructor.
    """

    message: Optional[str] = None
    next_level: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.message is None) == (self.next_level is None):
            raise ValueError(
                "Exactly one of message or next_level must be set, "
                f"got message={self.message!r}, next_level={self.next_level!r}"
            )

    @classmethod
    def with_error(cls, message: str) -> "DetermineNextDifficultyResult":
        return cls(message=message)

    @classmethod
    def with_next_difficulty_level_determined(
        cls, next_level: int
    ) -> "DetermineNextDifficultyResult":
        return cls(next_level=next_level)

    @property
    def is_with_error(self) -> bool:
        return self.message is not None

    @property
    def is_determined(self) -> bool:
        return self.next_level is not None
