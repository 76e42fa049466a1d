"""
Pydantic schemas exchanged with the learning platform.
"""

from .activity import AdaptiveQuizActivity, AttemptData
from .cat_model_params import CatModelParams

__all__ = [
    "AdaptiveQuizActivity",
    "AttemptData",
    "CatModelParams",
]
