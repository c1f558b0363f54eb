"""Charts for generated puzzle sets."""

from __future__ import annotations
import os
from typing import List, Dict

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .batch import BatchEntry
from ..generator import Difficulty


class Visualizer:
    """
    Chart generator for a batch of puzzles.

    Shows how realized clue counts sit against each difficulty band and,
    for graded batches, how the technique score spreads.
    """

    COLORS = {
        "intermediate": "#2ecc71",  # Green
        "hard": "#f39c12",          # Orange
        "expert": "#e74c3c",        # Red
    }

    def __init__(self, entries: Dict[str, List[BatchEntry]], output_dir: str = "results"):
        """
        Args:
            entries: Batch entries keyed by difficulty name.
            output_dir: Directory to save generated charts.
        """
        self.entries = {name: items for name, items in entries.items() if items}
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    @property
    def graded(self) -> bool:
        return any(e.grading is not None for items in self.entries.values() for e in items)

    def generate_all(self) -> List[str]:
        """
        Generate all charts that apply to the batch.

        Returns:
            List of paths to generated chart files.
        """
        charts = [self.plot_clue_distribution()]
        if self.graded:
            charts.append(self.plot_score_distribution())
            charts.append(self.plot_technique_counts())
        return charts

    def plot_clue_distribution(self) -> str:
        """Histogram of clue counts per difficulty with the band shaded."""
        fig, ax = plt.subplots(figsize=(10, 6))

        for name, items in self.entries.items():
            color = self.COLORS.get(name, "#95a5a6")
            clues = [e.record.clue_count for e in items]
            bins = np.arange(min(clues), max(clues) + 2) - 0.5
            ax.hist(clues, bins=bins, alpha=0.7, color=color,
                    edgecolor='black', linewidth=0.5, label=name.capitalize())

            min_clues, max_clues = Difficulty.parse(name).clue_range
            ax.axvspan(min_clues - 0.5, max_clues + 0.5, color=color, alpha=0.1)

        ax.set_xlabel('Clues', fontsize=12)
        ax.set_ylabel('Puzzles', fontsize=12)
        ax.set_title('Clue Count by Difficulty', fontsize=14, fontweight='bold')
        ax.legend(title='Difficulty')

        plt.tight_layout()
        path = os.path.join(self.output_dir, "clue_distribution.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def plot_score_distribution(self) -> str:
        """Box plot of grader scores per difficulty with the thresholds marked."""
        from ..grader import DifficultyGrader

        fig, ax = plt.subplots(figsize=(10, 6))

        labels = []
        scores = []
        for name, items in self.entries.items():
            for e in items:
                if e.grading is not None:
                    labels.append(name.capitalize())
                    scores.append(e.grading.score)

        sns.boxplot(x=labels, y=scores, ax=ax, color="#ecf0f1")
        sns.stripplot(x=labels, y=scores, ax=ax, color="#34495e", size=3, alpha=0.6)

        ax.axhline(DifficultyGrader.HARD_THRESHOLD, color='gray', linestyle='--', linewidth=1)
        ax.axhline(DifficultyGrader.EXPERT_THRESHOLD, color='gray', linestyle=':', linewidth=1)

        ax.set_xlabel('Difficulty (clue band)', fontsize=12)
        ax.set_ylabel('Grader Score', fontsize=12)
        ax.set_title('Technique Score by Difficulty', fontsize=14, fontweight='bold')

        plt.tight_layout()
        path = os.path.join(self.output_dir, "score_distribution.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def plot_technique_counts(self) -> str:
        """Grouped bars of average naked and hidden singles per difficulty."""
        fig, ax = plt.subplots(figsize=(10, 6))

        names = list(self.entries)
        naked = []
        hidden = []
        for name in names:
            graded = [e.grading for e in self.entries[name] if e.grading]
            naked.append(np.mean([g.naked_singles for g in graded]) if graded else 0)
            hidden.append(np.mean([g.hidden_singles for g in graded]) if graded else 0)

        x = np.arange(len(names))
        width = 0.35
        ax.bar(x - width / 2, naked, width, label='Naked singles',
               color="#3498db", edgecolor='black', linewidth=0.5)
        ax.bar(x + width / 2, hidden, width, label='Hidden singles',
               color="#9b59b6", edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Average Placements', fontsize=12)
        ax.set_title('Solving Techniques by Difficulty', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([n.capitalize() for n in names])
        ax.legend(title='Technique')
        ax.set_ylim(bottom=0)

        plt.tight_layout()
        path = os.path.join(self.output_dir, "technique_counts.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path
