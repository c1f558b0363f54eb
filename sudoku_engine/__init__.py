"""Sudoku puzzle generation, grading and solving engine."""

from .core import SudokuBoard, is_valid_placement, count_solutions, has_unique_solution
from .generator import SudokuGenerator, Difficulty, PuzzleRecord
from .grader import DifficultyGrader, GradingResult
from .solvers import solve

__version__ = "1.0.0"

__all__ = [
    "SudokuBoard",
    "is_valid_placement",
    "count_solutions",
    "has_unique_solution",
    "SudokuGenerator",
    "Difficulty",
    "PuzzleRecord",
    "DifficultyGrader",
    "GradingResult",
    "solve",
]
