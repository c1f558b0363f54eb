"""Settings for offline puzzle-set generation."""

from __future__ import annotations
import json
from dataclasses import dataclass, field, asdict, fields
from typing import Dict, Any, Optional

from .generator import Difficulty


def _default_counts() -> Dict[str, int]:
    return {d.value: 100 for d in Difficulty}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class GenerationConfig:
    """
    Settings for a batch run.

    Attributes:
        counts: Puzzles to generate per difficulty name.
        seed: Batch seed; each puzzle gets its own seed derived from it.
        workers: Worker processes; 1 generates in-process.
        grade: Run the difficulty grader over every generated puzzle.
        max_steps: Optional cap on nodes visited by each backtracking search.
        output: Path of the JSON puzzle set to write.
    """
    counts: Dict[str, int] = field(default_factory=_default_counts)
    seed: Optional[int] = None
    workers: int = 1
    grade: bool = False
    max_steps: Optional[int] = None
    output: str = "puzzles.json"

    def __post_init__(self):
        if not isinstance(self.counts, dict):
            raise ValueError(f"counts must map difficulty names to integers, got {self.counts!r}")
        counts = {}
        for name, count in self.counts.items():
            difficulty = Difficulty.parse(name)
            if not _is_int(count):
                raise ValueError(f"Puzzle count for {difficulty.value} must be an integer, got {count!r}")
            if count < 0:
                raise ValueError(f"Puzzle count for {difficulty.value} must be >= 0, got {count}")
            counts[difficulty.value] = count
        self.counts = counts

        if self.seed is not None and not _is_int(self.seed):
            raise ValueError(f"seed must be an integer, got {self.seed!r}")
        if not _is_int(self.workers):
            raise ValueError(f"workers must be an integer, got {self.workers!r}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if not isinstance(self.grade, bool):
            raise ValueError(f"grade must be true or false, got {self.grade!r}")
        if self.max_steps is not None:
            if not _is_int(self.max_steps):
                raise ValueError(f"max_steps must be an integer, got {self.max_steps!r}")
            if self.max_steps < 1:
                raise ValueError(f"max_steps must be >= 1, got {self.max_steps}")
        if not isinstance(self.output, str):
            raise ValueError(f"output must be a path string, got {self.output!r}")

    @property
    def difficulties(self):
        """Difficulties with a non-zero count, in declaration order."""
        return [d for d in Difficulty if self.counts.get(d.value, 0) > 0]

    def with_overrides(self, **overrides: Any) -> GenerationConfig:
        """Return a copy with every non-None override applied."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return GenerationConfig.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GenerationConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def from_json(cls, path: str) -> GenerationConfig:
        """Load a config file; keys left out keep their defaults."""
        with open(path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must hold a JSON object")
        return cls.from_dict(data)
