"""Grader module for technique-based difficulty scoring."""

from .grader import DifficultyGrader, GradingResult, grade_puzzle

__all__ = ["DifficultyGrader", "GradingResult", "grade_puzzle"]
