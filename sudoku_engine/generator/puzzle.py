"""Immutable record of a generated puzzle."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any, Union, TYPE_CHECKING

from ..core.board import SudokuBoard

if TYPE_CHECKING:
    from .generator import Difficulty


@dataclass(frozen=True)
class PuzzleRecord:
    """
    A puzzle together with its unique solution.

    Both boards are read-only copies. clue_count is the number of filled
    cells in the puzzle after reduction, which may be above the target the
    generator aimed for.
    """
    puzzle: SudokuBoard
    solution: SudokuBoard
    difficulty: Difficulty
    clue_count: int

    @classmethod
    def create(cls, puzzle: SudokuBoard, solution: SudokuBoard,
               difficulty: Difficulty) -> PuzzleRecord:
        """Freeze both boards and count the clues."""
        return cls(
            puzzle=puzzle.freeze(),
            solution=solution.freeze(),
            difficulty=difficulty,
            clue_count=puzzle.count_filled(),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the bulk output form."""
        return {
            "puzzle": self.puzzle.to_list(),
            "solution": self.solution.to_list(),
            "clueCount": self.clue_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any],
                  difficulty: Union[Difficulty, str]) -> PuzzleRecord:
        """
        Build a record from its bulk output form.

        Raises:
            InvalidBoardShape: If either grid is malformed.
        """
        from .generator import Difficulty

        puzzle = SudokuBoard.from_2d_list(data["puzzle"])
        solution = SudokuBoard.from_2d_list(data["solution"])
        record = cls.create(puzzle, solution, Difficulty.parse(difficulty))
        if "clueCount" in data and data["clueCount"] != record.clue_count:
            raise ValueError(
                f"clueCount {data['clueCount']} does not match the puzzle ({record.clue_count} clues)"
            )
        return record
