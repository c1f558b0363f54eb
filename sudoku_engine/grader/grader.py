"""Difficulty grading by simulated human solving techniques."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any, List, Tuple

from ..core.board import SudokuBoard, SIZE, BOX_SIZE
from ..core.candidates import CandidateGrid
from ..generator.generator import Difficulty


@dataclass(frozen=True)
class GradingResult:
    """Outcome of a grading pass."""
    difficulty: Difficulty
    score: int
    naked_singles: int
    hidden_singles: int
    solved: bool = False  # singles alone completed the grid

    def to_dict(self) -> Dict[str, Any]:
        return {
            "difficulty": self.difficulty.value,
            "score": self.score,
            "nakedSingles": self.naked_singles,
            "hiddenSingles": self.hidden_singles,
            "solved": self.solved,
        }


class DifficultyGrader:
    """
    Estimates how hard a puzzle feels to a human solver.

    The grader only knows two techniques:
    - Naked singles: an empty cell with exactly one candidate (+1 each)
    - Hidden singles: a candidate no other empty cell of the row, column or
      box still allows (+2 each)

    Passes repeat until one makes no placement. The score is then mapped to
    a Difficulty with fixed thresholds. The result is advisory; a generated
    puzzle's difficulty is its clue band.
    """

    NAKED_SINGLE_WEIGHT = 1
    HIDDEN_SINGLE_WEIGHT = 2
    HARD_THRESHOLD = 50
    EXPERT_THRESHOLD = 100

    def grade(self, board: SudokuBoard) -> GradingResult:
        """
        Grade a puzzle.

        Args:
            board: The puzzle. It is not modified.

        Returns:
            GradingResult with technique counts and classification.
        """
        work = board.copy()
        candidates = CandidateGrid(work)
        naked = 0
        hidden = 0

        progress = True
        while progress:
            found_naked = self._naked_singles_pass(work, candidates)
            found_hidden = self._hidden_singles_pass(work, candidates)
            naked += found_naked
            hidden += found_hidden
            progress = found_naked > 0 or found_hidden > 0

        score = naked * self.NAKED_SINGLE_WEIGHT + hidden * self.HIDDEN_SINGLE_WEIGHT
        return GradingResult(
            difficulty=self.classify(score, naked, hidden),
            score=score,
            naked_singles=naked,
            hidden_singles=hidden,
            solved=work.is_complete(),
        )

    def classify(self, score: int, naked_singles: int, hidden_singles: int) -> Difficulty:
        """Map technique counts to a difficulty, first matching rule wins."""
        if hidden_singles == 0 and naked_singles > 0:
            return Difficulty.INTERMEDIATE
        if score < self.HARD_THRESHOLD:
            return Difficulty.INTERMEDIATE
        if score < self.EXPERT_THRESHOLD:
            return Difficulty.HARD
        return Difficulty.EXPERT

    def _naked_singles_pass(self, work: SudokuBoard, candidates: CandidateGrid) -> int:
        found = 0
        for row, col in work.get_empty_cells():
            value = candidates.single(row, col)
            if value:
                work.set(row, col, value)
                candidates.eliminate(row, col, value)
                found += 1
        return found

    def _hidden_singles_pass(self, work: SudokuBoard, candidates: CandidateGrid) -> int:
        found = 0
        for row, col in work.get_empty_cells():
            for value in candidates.digits(row, col):
                if any(self._only_spot(work, candidates, unit, row, col, value)
                       for unit in _units(row, col)):
                    work.set(row, col, value)
                    candidates.fix(row, col, value)
                    candidates.eliminate(row, col, value)
                    found += 1
                    break
        return found

    @staticmethod
    def _only_spot(work: SudokuBoard, candidates: CandidateGrid,
                   unit: List[Tuple[int, int]], row: int, col: int, value: int) -> bool:
        """True if no other empty cell of the unit still allows value."""
        for r, c in unit:
            if (r, c) != (row, col) and work.is_empty(r, c) and candidates.has(r, c, value):
                return False
        return True


def _units(row: int, col: int) -> List[List[Tuple[int, int]]]:
    """Row, column and box of a cell, in that order."""
    box_row = (row // BOX_SIZE) * BOX_SIZE
    box_col = (col // BOX_SIZE) * BOX_SIZE
    return [
        [(row, c) for c in range(SIZE)],
        [(r, col) for r in range(SIZE)],
        [(box_row + i, box_col + j) for i in range(BOX_SIZE) for j in range(BOX_SIZE)],
    ]


def grade_puzzle(board: SudokuBoard) -> GradingResult:
    """Grade a puzzle with the default grader."""
    return DifficultyGrader().grade(board)
