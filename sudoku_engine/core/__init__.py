"""Core module for Sudoku board representation and validation."""

from .board import SudokuBoard
from .candidates import CandidateGrid
from .errors import SudokuError, InvalidBoardShape, SearchBudgetExceeded, GenerationError
from .validator import is_valid_placement, is_valid_board, count_solutions, has_unique_solution

__all__ = [
    "SudokuBoard",
    "CandidateGrid",
    "SudokuError",
    "InvalidBoardShape",
    "SearchBudgetExceeded",
    "GenerationError",
    "is_valid_placement",
    "is_valid_board",
    "count_solutions",
    "has_unique_solution",
]
