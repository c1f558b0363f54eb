"""Unit tests for the backtracking solver."""

import tracemalloc

import pytest
from sudoku_engine.core.board import SudokuBoard
from sudoku_engine.solvers import BacktrackingSolver, solve

from known_puzzles import TEST_PUZZLE, TEST_SOLUTION, CONFLICTING_PUZZLE, DEAD_END_PUZZLE


class TestBacktrackingSolver:
    """Tests for the plain solver."""

    def test_solve_puzzle(self):
        """Test solving a known puzzle."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        solver = BacktrackingSolver()

        solution, stats = solver.solve(board)

        assert stats.solved
        assert solution is not None
        assert solution.is_solved()
        assert solution.to_string() == TEST_SOLUTION

    def test_input_not_modified(self):
        board = SudokuBoard.from_string(TEST_PUZZLE)
        BacktrackingSolver().solve(board)
        assert board.to_string() == TEST_PUZZLE

    def test_stats_collected(self):
        """Test that stats are collected."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        solution, stats = BacktrackingSolver().solve(board)

        assert stats.time_seconds > 0
        assert stats.iterations > 0
        assert stats.to_dict()["solved"] is True
        assert stats.memory_bytes is None

    def test_unsolvable_returns_none(self):
        """Unsolvable puzzles give None, not an exception."""
        assert solve(SudokuBoard.from_string(DEAD_END_PUZZLE)) is None
        assert solve(SudokuBoard.from_string(CONFLICTING_PUZZLE)) is None

    def test_deterministic_first_solution(self):
        """An empty board gives the ascending row-major solution every time."""
        first = solve(SudokuBoard())
        second = solve(SudokuBoard())

        assert first is not None
        assert first == second
        assert first.is_solved()
        assert first.to_list()[0] == [1, 2, 3, 4, 5, 6, 7, 8, 9]
        assert first.to_list()[1] == [4, 5, 6, 7, 8, 9, 1, 2, 3]

    def test_step_budget(self):
        """A tiny budget gives up and records why."""
        solver = BacktrackingSolver(max_steps=3)
        solution, stats = solver.solve(SudokuBoard.from_string(TEST_PUZZLE))

        assert solution is None
        assert not stats.solved
        assert "error" in stats.extra

    def test_track_memory(self):
        """Peak memory is recorded on request and tracing is switched off again."""
        if tracemalloc.is_tracing():
            pytest.skip("tracemalloc already running")
        solver = BacktrackingSolver(track_memory=True)
        solution, stats = solver.solve(SudokuBoard.from_string(TEST_PUZZLE))

        assert solution is not None
        assert stats.memory_bytes is not None
        assert stats.memory_bytes > 0
        assert not tracemalloc.is_tracing()

    def test_caller_tracing_left_running(self):
        """A tracemalloc session started by the caller survives a solve."""
        was_tracing = tracemalloc.is_tracing()
        tracemalloc.start()
        try:
            solver = BacktrackingSolver(track_memory=True)
            solution, stats = solver.solve(SudokuBoard.from_string(TEST_PUZZLE))
            assert solve(SudokuBoard.from_string(TEST_PUZZLE)) is not None

            assert solution is not None
            assert tracemalloc.is_tracing()
            assert stats.memory_bytes is None
        finally:
            if not was_tracing:
                tracemalloc.stop()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
