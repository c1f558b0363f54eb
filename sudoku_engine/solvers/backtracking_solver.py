"""Plain depth-first backtracking solver."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Tuple
import time
import tracemalloc

import numpy as np

from ..core.board import SudokuBoard, SIZE
from ..core.errors import SearchBudgetExceeded
from ..core.search import SearchBudget, first_completion


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    solved: bool = False
    time_seconds: float = 0.0
    iterations: int = 0
    backtracks: int = 0
    # Peak traced memory; None unless the solver was asked to track it.
    memory_bytes: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "memory_bytes": self.memory_bytes,
            **self.extra
        }


class BacktrackingSolver:
    """
    Depth-first search over empty cells in row-major order.

    Digits are tried in ascending order, so the result is deterministic: for
    a puzzle with several solutions the first one in that order is returned.
    This is the utility solver, not the generation path.
    """

    def __init__(self, max_steps: Optional[int] = None, track_memory: bool = False):
        """
        Args:
            max_steps: Optional cap on visited search nodes.
            track_memory: Record peak memory with tracemalloc. If the caller
                is already tracing, its session is left alone and no peak is
                recorded.
        """
        self.max_steps = max_steps
        self.track_memory = track_memory

    def solve(self, board: SudokuBoard) -> Tuple[Optional[SudokuBoard], SolverStats]:
        """
        Solve a puzzle.

        An unsolvable puzzle yields (None, stats) rather than an exception.
        A step budget overrun also yields None, with the reason in
        stats.extra["error"].

        Args:
            board: The puzzle to solve. It is not modified.

        Returns:
            Tuple of (solution or None, stats).
        """
        stats = SolverStats()
        budget = SearchBudget(self.max_steps)

        start_tracing = self.track_memory and not tracemalloc.is_tracing()
        if start_tracing:
            tracemalloc.start()
        start_time = time.perf_counter()

        try:
            values = first_completion(board.grid.flatten().tolist(), budget)
        except SearchBudgetExceeded as e:
            stats.extra["error"] = str(e)
            values = None
        finally:
            stats.time_seconds = time.perf_counter() - start_time
            stats.iterations = budget.steps
            stats.backtracks = budget.backtracks
            if start_tracing:
                _, stats.memory_bytes = tracemalloc.get_traced_memory()
                tracemalloc.stop()

        if values is None:
            return None, stats

        solution = SudokuBoard(np.array(values, dtype=np.int32).reshape(SIZE, SIZE))
        stats.solved = solution.is_solved()
        return solution, stats


def solve(puzzle: SudokuBoard, max_steps: Optional[int] = None) -> Optional[SudokuBoard]:
    """
    Solve a puzzle, returning the first solution found or None.

    Callers must check for None; unsolvable input is not an error.
    """
    solution, _ = BacktrackingSolver(max_steps=max_steps).solve(puzzle)
    return solution
