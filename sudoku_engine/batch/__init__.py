"""Batch module for generating and charting puzzle sets."""

from .batch import BatchGenerator, BatchEntry, load_puzzle_set
from .visualizer import Visualizer

__all__ = ["BatchGenerator", "BatchEntry", "load_puzzle_set", "Visualizer"]
