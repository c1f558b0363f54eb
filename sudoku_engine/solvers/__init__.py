"""Solvers module for Sudoku puzzles."""

from .backtracking_solver import BacktrackingSolver, SolverStats, solve

__all__ = [
    "BacktrackingSolver",
    "SolverStats",
    "solve",
]
