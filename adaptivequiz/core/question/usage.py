"""
Question-usage collaborator interface.

The question engine owns the live state of the questions administered in an
attempt. The CAT algorithm only reads from it through this protocol: the
ordered list of administered slots, and per slot the grading state and mark.
"""

import enum
import logging
import math
from typing import Any, List, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class QuestionState(str, enum.Enum):
    """Grading state of an administered question."""

    GRADED = "graded"
    UNGRADED = "ungraded"

    @property
    def is_graded(self) -> bool:
        return self is QuestionState.GRADED


@runtime_checkable
class QuestionUsage(Protocol):
    """Read-only view over the questions administered in one attempt."""

    def get_slots(self) -> List[int]:
        """Ordered slot numbers of the administered questions."""
        ...

    def get_question_state(self, slot: int) -> QuestionState:
        ...

    def get_question_mark(self, slot: int) -> Optional[float]:
        ...


def coerce_mark(raw_mark: Any) -> Optional[float]:
    """
    Convert a raw mark coming from the question engine into an optional float.

    Question engines store marks loosely (1, 1.0, "1.0", None). Adapters call
    this at the boundary so the algorithm only ever sees a float or None.

    Returns:
        The mark as a finite float, or None if it is missing or malformed.
    """
    if raw_mark is None:
        return None

    # bool is an int subclass; True is not a mark
    if isinstance(raw_mark, bool):
        logger.warning(f"Rejecting boolean question mark: {raw_mark!r}")
        return None

    if isinstance(raw_mark, (int, float)):
        mark = float(raw_mark)
    elif isinstance(raw_mark, str):
        try:
            mark = float(raw_mark.strip())
        except ValueError:
            logger.warning(f"Rejecting non-numeric question mark: {raw_mark!r}")
            return None
    else:
        logger.warning(
            f"Rejecting question mark of unsupported type {type(raw_mark).__name__}"
        )
        return None

    if not math.isfinite(mark):
        logger.warning(f"Rejecting non-finite question mark: {raw_mark!r}")
        return None

    return mark
