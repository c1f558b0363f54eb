"""Exception types raised by the Sudoku engine."""


class SudokuError(Exception):
    """Base class for all engine errors."""


class InvalidBoardShape(SudokuError, ValueError):
    """Raised when a grid is not 9x9 or holds values outside 0-9."""


class SearchBudgetExceeded(SudokuError):
    """Raised when a backtracking search visits more nodes than allowed."""

    def __init__(self, max_steps: int):
        super().__init__(f"Search budget of {max_steps} steps exhausted")
        self.max_steps = max_steps


class GenerationError(SudokuError):
    """Raised when a complete solution could not be built from an empty board."""
