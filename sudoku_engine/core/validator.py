"""Validation utilities for Sudoku puzzles."""

from __future__ import annotations
from typing import Optional, TYPE_CHECKING

from .board import SIZE, BOX_SIZE
from .search import SearchBudget, count_completions

if TYPE_CHECKING:
    from .board import SudokuBoard


def is_valid_placement(board: SudokuBoard, row: int, col: int, value: int) -> bool:
    """
    Check if placing a value at (row, col) is legal.

    The cell itself is ignored, so a filled cell can be re-checked against
    its own value.

    Args:
        board: The Sudoku board.
        row: Row index (0-8).
        col: Column index (0-8).
        value: Value to check (1-9).

    Returns:
        True if value does not already appear in the row, column or box.
    """
    if value < 1 or value > SIZE:
        return False

    grid = board.grid

    # Check row
    for c in range(SIZE):
        if c != col and grid[row, c] == value:
            return False

    # Check column
    for r in range(SIZE):
        if r != row and grid[r, col] == value:
            return False

    # Check box
    box_row = (row // BOX_SIZE) * BOX_SIZE
    box_col = (col // BOX_SIZE) * BOX_SIZE
    for r in range(box_row, box_row + BOX_SIZE):
        for c in range(box_col, box_col + BOX_SIZE):
            if (r != row or c != col) and grid[r, c] == value:
                return False

    return True


def is_valid_board(board: SudokuBoard) -> bool:
    """Check if the board has no row, column or box conflicts."""
    return board.is_valid()


def count_solutions(board: SudokuBoard, limit: int = 2,
                    max_steps: Optional[int] = None) -> int:
    """
    Count the number of solutions for a puzzle (up to limit).

    Works on a private copy; the caller's board is never touched. Once limit
    solutions are found the search stops, so a result equal to limit means
    "at least limit".

    Args:
        board: The puzzle board.
        limit: Maximum solutions to count before stopping.
        max_steps: Optional cap on visited search nodes.

    Returns:
        Number of solutions found (up to limit), 0 if unsolvable.

    Raises:
        SearchBudgetExceeded: If max_steps is given and exhausted.
    """
    values = board.grid.flatten().tolist()
    return count_completions(values, limit, SearchBudget(max_steps))


def has_unique_solution(board: SudokuBoard, max_steps: Optional[int] = None) -> bool:
    """Check if a puzzle has exactly one solution."""
    return count_solutions(board, limit=2, max_steps=max_steps) == 1


def validate_solution(puzzle: SudokuBoard, solution: SudokuBoard) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Returns:
        True if solution is complete, conflict-free and keeps every clue.
    """
    for row, col in zip(*puzzle.grid.nonzero()):
        if puzzle.get(row, col) != solution.get(row, col):
            return False

    return solution.is_solved()
