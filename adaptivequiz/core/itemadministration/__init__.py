"""
Item administration: whether and at what difficulty the next question is shown.
"""

from .base import (
    ItemAdministration,
    ItemAdministrationEvaluation,
    ItemAdministrationFactory,
)
from .default import (
    DefaultItemAdministration,
    DefaultItemAdministrationFactory,
    DifficultyLevelLookup,
    standard_error_threshold_in_logits,
)
from .registry import CatModelError, ItemAdministrationFactoryRegistry

__all__ = [
    "ItemAdministration",
    "ItemAdministrationEvaluation",
    "ItemAdministrationFactory",
    "DefaultItemAdministration",
    "DefaultItemAdministrationFactory",
    "DifficultyLevelLookup",
    "standard_error_threshold_in_logits",
    "CatModelError",
    "ItemAdministrationFactoryRegistry",
]
