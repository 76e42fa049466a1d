"""Computerized Adaptive Testing engine for adaptive quiz activities.

Usage:
    from adaptivequiz.core.catalgorithm import CatAlgo, DifficultyRange
"""

__version__ = "0.1.0"
