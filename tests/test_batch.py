"""Tests for batch generation, config loading and charts."""

import json
import os

import matplotlib
matplotlib.use("Agg")

import pytest
from sudoku_engine.batch import BatchGenerator, Visualizer, load_puzzle_set
from sudoku_engine.config import GenerationConfig
from sudoku_engine.core.errors import InvalidBoardShape
from sudoku_engine.core.validator import count_solutions
from sudoku_engine.generator import Difficulty


SMALL_COUNTS = {"intermediate": 2, "hard": 1, "expert": 1}


class TestGenerationConfig:
    """Tests for GenerationConfig."""

    def test_defaults(self):
        config = GenerationConfig()
        assert config.counts == {"intermediate": 100, "hard": 100, "expert": 100}
        assert config.workers == 1
        assert not config.grade

    def test_from_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"counts": {"Hard": 3}, "seed": 5, "grade": True}))

        config = GenerationConfig.from_json(str(path))

        assert config.counts == {"hard": 3}
        assert config.seed == 5
        assert config.grade
        assert config.difficulties == [Difficulty.HARD]

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"puzzles": 3}))
        with pytest.raises(ValueError):
            GenerationConfig.from_json(str(path))

    def test_rejects_bad_values(self):
        with pytest.raises(ValueError):
            GenerationConfig(counts={"easy": 1})
        with pytest.raises(ValueError):
            GenerationConfig(workers=0)
        with pytest.raises(ValueError):
            GenerationConfig(counts={"hard": -1})

    def test_rejects_wrong_types(self, tmp_path):
        """Wrongly typed config values are a ValueError, not a crash later on."""
        bad_configs = [
            {"counts": ["hard", 3]},
            {"counts": {"hard": "3"}},
            {"counts": {"hard": 2.5}},
            {"workers": "2"},
            {"workers": True},
            {"seed": "7"},
            {"grade": "yes"},
            {"max_steps": 10.0},
            {"output": 5},
        ]
        for i, data in enumerate(bad_configs):
            path = tmp_path / f"config{i}.json"
            path.write_text(json.dumps(data))
            with pytest.raises(ValueError):
                GenerationConfig.from_json(str(path))

    def test_overrides(self):
        config = GenerationConfig(seed=1).with_overrides(seed=None, workers=2)
        assert config.seed == 1
        assert config.workers == 2


class TestBatchGenerator:
    """Tests for BatchGenerator."""

    def test_run(self):
        config = GenerationConfig(counts=SMALL_COUNTS, seed=100)
        entries = BatchGenerator(config, verbose=False).run()

        assert {name: len(items) for name, items in entries.items()} == SMALL_COUNTS
        for name, items in entries.items():
            min_clues, _ = Difficulty.parse(name).clue_range
            for entry in items:
                assert entry.grading is None
                assert entry.record.clue_count >= min_clues
                assert count_solutions(entry.record.puzzle, 2) == 1

    def test_seeded_batches_repeat(self):
        config = GenerationConfig(counts={"hard": 2}, seed=8)
        first = BatchGenerator(config, verbose=False)
        second = BatchGenerator(config, verbose=False)
        first.run()
        second.run()
        assert first.to_dict() == second.to_dict()

    def test_parallel_matches_sequential(self):
        """Spreading puzzles over workers does not change them."""
        sequential = BatchGenerator(GenerationConfig(counts=SMALL_COUNTS, seed=3), verbose=False)
        parallel = BatchGenerator(GenerationConfig(counts=SMALL_COUNTS, seed=3, workers=2), verbose=False)
        sequential.run()
        parallel.run()
        assert sequential.to_dict() == parallel.to_dict()

    def test_grading_and_summary(self):
        config = GenerationConfig(counts={"intermediate": 2, "expert": 1}, seed=4, grade=True)
        batch = BatchGenerator(config, verbose=False)
        batch.run()

        for items in batch.entries.values():
            for entry in items:
                assert entry.grading is not None
                assert "grading" in entry.to_dict()

        summary = batch.summary()
        assert summary["total_puzzles"] == 3
        stats = summary["by_difficulty"]["intermediate"]
        assert stats["count"] == 2
        assert 36 <= stats["min_clues"] <= stats["max_clues"]
        assert 0 <= stats["grade_agreement"] <= 100
        assert "avg_score" in summary["by_difficulty"]["expert"]

    def test_save_and_load(self, tmp_path):
        config = GenerationConfig(counts={"intermediate": 1, "hard": 1}, seed=2,
                                  output=str(tmp_path / "out" / "puzzles.json"))
        batch = BatchGenerator(config, verbose=False)
        batch.run()
        path = batch.save()

        assert os.path.exists(path)
        with open(path) as f:
            data = json.load(f)
        assert list(data) == ["intermediate", "hard"]
        assert set(data["hard"][0]) == {"puzzle", "solution", "clueCount"}

        loaded = load_puzzle_set(path)
        assert loaded["hard"][0] == batch.entries["hard"][0].record
        assert loaded["intermediate"][0] == batch.entries["intermediate"][0].record

    def test_load_rejects_corrupt_cells(self, tmp_path):
        """A float or null cell in a stored grid is an error, not a new puzzle."""
        config = GenerationConfig(counts={"hard": 1}, seed=6, output=str(tmp_path / "set.json"))
        batch = BatchGenerator(config, verbose=False)
        batch.run()
        data = batch.to_dict()

        for bad in (5.7, None):
            data["hard"][0]["puzzle"][0][0] = bad
            path = tmp_path / "corrupt.json"
            path.write_text(json.dumps(data))
            with pytest.raises(InvalidBoardShape):
                load_puzzle_set(str(path))


class TestVisualizer:
    """Tests for batch charts."""

    def test_generate_all(self, tmp_path):
        config = GenerationConfig(counts={"intermediate": 2, "hard": 2}, seed=6, grade=True)
        batch = BatchGenerator(config, verbose=False)
        batch.run()

        charts = Visualizer(batch.entries, str(tmp_path)).generate_all()

        assert len(charts) == 3
        for chart in charts:
            assert os.path.exists(chart)

    def test_ungraded_batch(self, tmp_path):
        config = GenerationConfig(counts={"hard": 1}, seed=6)
        batch = BatchGenerator(config, verbose=False)
        batch.run()

        charts = Visualizer(batch.entries, str(tmp_path)).generate_all()

        assert [os.path.basename(c) for c in charts] == ["clue_distribution.png"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
