"""Offline generation of puzzle sets for the interactive app."""

from __future__ import annotations
import json
import os
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import List, Dict, Any, Optional, Tuple

import numpy as np
from tqdm import tqdm

from ..config import GenerationConfig
from ..generator import SudokuGenerator, Difficulty, PuzzleRecord
from ..grader import DifficultyGrader, GradingResult


@dataclass(frozen=True)
class BatchEntry:
    """A generated puzzle and, when grading was requested, its grade."""
    record: PuzzleRecord
    grading: Optional[GradingResult] = None

    def to_dict(self) -> Dict[str, Any]:
        data = self.record.to_dict()
        if self.grading is not None:
            data["grading"] = self.grading.to_dict()
        return data


def _generate_one(task: Tuple[str, Optional[int], Optional[int], bool]) -> Tuple[Dict[str, Any], Optional[GradingResult]]:
    """Worker entry point: one puzzle per task, nothing shared between tasks."""
    difficulty, seed, max_steps, grade = task
    record = SudokuGenerator(seed=seed, max_steps=max_steps).generate(difficulty)
    grading = DifficultyGrader().grade(record.puzzle) if grade else None
    return record.to_dict(), grading


class BatchGenerator:
    """
    Generates puzzle sets keyed by difficulty.

    Every puzzle is an independent task with its own seed, so a batch can be
    spread over worker processes without changing its output. Grading, when
    enabled, is advisory: it never moves a puzzle to another difficulty.
    """

    def __init__(self, config: Optional[GenerationConfig] = None, verbose: bool = True):
        """
        Args:
            config: Batch settings (default: GenerationConfig()).
            verbose: Print progress messages and show progress bars.
        """
        self.config = config or GenerationConfig()
        self.verbose = verbose
        self.entries: Dict[str, List[BatchEntry]] = {}

    def _tasks(self, difficulty: Difficulty, offset: int) -> List[Tuple[str, Optional[int], Optional[int], bool]]:
        count = self.config.counts.get(difficulty.value, 0)
        tasks = []
        for i in range(count):
            seed = None if self.config.seed is None else self.config.seed + offset + i
            tasks.append((difficulty.value, seed, self.config.max_steps, self.config.grade))
        return tasks

    def run(self) -> Dict[str, List[BatchEntry]]:
        """
        Generate every configured puzzle.

        Returns:
            Mapping of difficulty name to entries, in generation order.
        """
        self.entries = {}
        offset = 0

        executor = None
        if self.config.workers > 1:
            executor = ProcessPoolExecutor(max_workers=self.config.workers)

        try:
            for difficulty in self.config.difficulties:
                tasks = self._tasks(difficulty, offset)
                offset += len(tasks)

                if self.verbose:
                    print(f"Generating {len(tasks)} {difficulty.value} puzzles...")

                if executor is None:
                    results = map(_generate_one, tasks)
                else:
                    results = executor.map(_generate_one, tasks)

                entries = []
                for data, grading in tqdm(results, total=len(tasks),
                                          desc=difficulty.value.capitalize(),
                                          disable=not self.verbose):
                    record = PuzzleRecord.from_dict(data, difficulty)
                    entries.append(BatchEntry(record=record, grading=grading))
                self.entries[difficulty.value] = entries
        finally:
            if executor is not None:
                executor.shutdown()

        return self.entries

    def summary(self) -> Dict[str, Any]:
        """Per-difficulty clue statistics and, if graded, grader agreement."""
        summary: Dict[str, Any] = {
            "total_puzzles": sum(len(e) for e in self.entries.values()),
            "by_difficulty": {},
        }

        for name, entries in self.entries.items():
            if not entries:
                continue
            difficulty = Difficulty.parse(name)
            min_clues, max_clues = difficulty.clue_range
            clues = np.array([e.record.clue_count for e in entries])

            stats: Dict[str, Any] = {
                "count": len(entries),
                "min_clues": int(clues.min()),
                "max_clues": int(clues.max()),
                "avg_clues": float(clues.mean()),
                "above_band": int(np.sum(clues > max_clues)),
            }

            graded = [e.grading for e in entries if e.grading is not None]
            if graded:
                stats["avg_score"] = float(np.mean([g.score for g in graded]))
                stats["grade_agreement"] = (
                    sum(g.difficulty is difficulty for g in graded) / len(graded) * 100
                )
                stats["solved_by_singles"] = sum(g.solved for g in graded)

            summary["by_difficulty"][name] = stats

        return summary

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        """The bulk output form: difficulty name to ordered puzzle records."""
        return {name: [e.to_dict() for e in entries] for name, entries in self.entries.items()}

    def save(self, path: Optional[str] = None) -> str:
        """Write the puzzle set as JSON and return its path."""
        path = path or self.config.output
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

        if self.verbose:
            print(f"Puzzle set saved to {path}")
        return path


def load_puzzle_set(path: str) -> Dict[str, List[PuzzleRecord]]:
    """
    Read a puzzle set written by BatchGenerator.save or `generate --output`.

    Raises:
        InvalidBoardShape: If a stored grid is malformed.
        ValueError: If a difficulty name is unknown or a clue count is wrong.
    """
    with open(path, "r") as f:
        data = json.load(f)

    return {
        Difficulty.parse(name).value: [PuzzleRecord.from_dict(item, name) for item in items]
        for name, items in data.items()
    }
