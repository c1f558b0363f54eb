"""Sudoku puzzle generator with clue-count difficulty bands."""

from __future__ import annotations
import random
from enum import Enum
from typing import List, Tuple, Optional, Union

import numpy as np

from ..core.board import SudokuBoard, SIZE, CELLS
from ..core.errors import GenerationError, SearchBudgetExceeded
from ..core.search import SearchBudget, random_fill
from ..core.validator import count_solutions
from ..solvers.backtracking_solver import solve as backtracking_solve
from .puzzle import PuzzleRecord


class Difficulty(Enum):
    """Difficulty levels for Sudoku puzzles."""
    INTERMEDIATE = "intermediate"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def clue_range(self) -> Tuple[int, int]:
        """Get the range of clues for this difficulty (min, max)."""
        ranges = {
            Difficulty.INTERMEDIATE: (36, 42),
            Difficulty.HARD: (30, 35),
            Difficulty.EXPERT: (24, 29),
        }
        return ranges[self]

    @classmethod
    def parse(cls, value: Union[Difficulty, str]) -> Difficulty:
        """Accept a Difficulty or its name in any case."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r}, expected one of: {choices}") from None


def fill_board(board: SudokuBoard, rng: Optional[random.Random] = None,
               max_steps: Optional[int] = None) -> bool:
    """
    Complete a board in place using randomized backtracking.

    Empty cells are filled in row-major order, each trying a freshly shuffled
    1-9. Returns False, leaving the board unchanged, only if the given
    partial board cannot be completed.

    Raises:
        SearchBudgetExceeded: If max_steps is given and exhausted.
    """
    rng = rng or random.Random()
    values = board.grid.flatten().tolist()
    if not random_fill(values, rng, SearchBudget(max_steps)):
        return False
    board.grid[:, :] = np.array(values, dtype=np.int32).reshape(SIZE, SIZE)
    return True


def remove_clues(solution: SudokuBoard, target_clues: int,
                 rng: Optional[random.Random] = None,
                 max_steps: Optional[int] = None) -> SudokuBoard:
    """
    Remove clues from a complete solution while keeping the solution unique.

    Cells are tried once each in a random order. A removal that leaves more
    than one solution is rolled back. Stops as soon as target_clues remain;
    if every cell has been tried first, the puzzle keeps more clues than
    requested.

    Args:
        solution: A complete board. It is not modified.
        target_clues: Number of clues to stop at.
        rng: Random source for the removal order.
        max_steps: Optional cap on each uniqueness check. A check that runs
            out of steps counts as "not unique" and the clue is kept.

    Returns:
        The puzzle board.
    """
    rng = rng or random.Random()
    puzzle = solution.copy()

    positions = list(range(CELLS))
    rng.shuffle(positions)

    clues = puzzle.count_filled()

    for pos in positions:
        if clues <= target_clues:
            break

        row, col = divmod(pos, SIZE)
        backup = puzzle.get(row, col)
        if backup == 0:
            continue

        puzzle.clear(row, col)

        try:
            unique = count_solutions(puzzle, limit=2, max_steps=max_steps) == 1
        except SearchBudgetExceeded:
            unique = False

        if unique:
            clues -= 1
        else:
            puzzle.set(row, col, backup)

    return puzzle


class SudokuGenerator:
    """
    Generator for Sudoku puzzles with uniquely determined solutions.

    Algorithm:
    1. Fill an empty board with a random complete solution
    2. Pick a clue target uniformly inside the difficulty's band
    3. Remove clues in random order while the solution stays unique

    Difficulty is asserted by the clue band only; grading by solving
    technique is a separate pass (see sudoku_engine.grader).
    """

    def __init__(self, seed: Optional[int] = None, max_steps: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
            max_steps: Optional cap on nodes visited by each backtracking search.
        """
        self.rng = random.Random(seed)
        self.max_steps = max_steps

    def generate(self, difficulty: Union[Difficulty, str] = Difficulty.INTERMEDIATE) -> PuzzleRecord:
        """
        Generate a puzzle with the specified difficulty.

        Args:
            difficulty: Desired difficulty level.

        Returns:
            A PuzzleRecord; read clue_count rather than assuming the band
            minimum was reached.
        """
        difficulty = Difficulty.parse(difficulty)
        min_clues, max_clues = difficulty.clue_range
        target_clues = self.rng.randint(min_clues, max_clues)

        solution = self.generate_solution()
        puzzle = self.remove_clues(solution, target_clues)

        return PuzzleRecord.create(puzzle, solution, difficulty)

    def generate_batch(self, count: int,
                       difficulty: Union[Difficulty, str] = Difficulty.INTERMEDIATE) -> List[PuzzleRecord]:
        """Generate multiple puzzles of the same difficulty."""
        return [self.generate(difficulty) for _ in range(count)]

    def generate_solution(self) -> SudokuBoard:
        """
        Build a random complete board.

        Raises:
            GenerationError: If the empty board could not be filled.
        """
        board = SudokuBoard()
        if not self.fill_board(board):
            raise GenerationError("Failed to fill an empty board")
        return board

    def fill_board(self, board: SudokuBoard) -> bool:
        return fill_board(board, rng=self.rng, max_steps=self.max_steps)

    def remove_clues(self, solution: SudokuBoard, target_clues: int) -> SudokuBoard:
        return remove_clues(solution, target_clues, rng=self.rng, max_steps=self.max_steps)

    def solve(self, puzzle: SudokuBoard) -> Optional[SudokuBoard]:
        """Solve a puzzle deterministically; None if it has no solution."""
        return backtracking_solve(puzzle, max_steps=self.max_steps)
