"""Generator module for creating Sudoku puzzles."""

from .generator import SudokuGenerator, Difficulty, fill_board, remove_clues
from .puzzle import PuzzleRecord

__all__ = ["SudokuGenerator", "Difficulty", "PuzzleRecord", "fill_board", "remove_clues"]
