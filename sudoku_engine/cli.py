"""Command-line interface for the Sudoku generation engine."""

import argparse
import sys
import json

from .core import SudokuError
from .core.board import SudokuBoard
from .config import GenerationConfig
from .generator import SudokuGenerator, Difficulty
from .grader import DifficultyGrader
from .solvers import BacktrackingSolver

DIFFICULTY_CHOICES = [d.value for d in Difficulty]


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku Puzzle Generator, Grader & Solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 hard puzzles
  sudoku-engine generate --count 5 --difficulty hard

  # Solve a puzzle
  sudoku-engine solve --puzzle "530070000600195000..."

  # Build the puzzle set for the app, 100 per difficulty, graded
  sudoku-engine batch --grade --workers 4 --output puzzles.json
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate Sudoku puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=1,
        help="Number of puzzles to generate (default: 1)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES + ["all"],
        default="intermediate",
        help="Difficulty level (default: intermediate)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--grade", action="store_true",
        help="Also grade each puzzle by solving technique"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )

    # Grade command
    grade_parser = subparsers.add_parser("grade", help="Grade a puzzle by solving technique")
    grade_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Generate a puzzle set for the app")
    batch_parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON config file (see GenerationConfig)"
    )
    batch_parser.add_argument(
        "--count", "-n", type=int, default=None,
        help="Puzzles per difficulty (default: 100)"
    )
    batch_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Batch seed for reproducibility"
    )
    batch_parser.add_argument(
        "--workers", "-w", type=int, default=None,
        help="Worker processes (default: 1)"
    )
    batch_parser.add_argument(
        "--max-steps", type=int, default=None,
        help="Cap on nodes visited by each backtracking search"
    )
    batch_parser.add_argument(
        "--grade", action="store_true", default=None,
        help="Grade every puzzle and include the result"
    )
    batch_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output JSON file (default: puzzles.json)"
    )
    batch_parser.add_argument(
        "--charts", type=str, default=None,
        help="Directory to write charts to"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    commands = {
        "generate": cmd_generate,
        "solve": cmd_solve,
        "grade": cmd_grade,
        "batch": cmd_batch,
    }

    try:
        commands[args.command](args)
    except (SudokuError, ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)


def _parse_puzzle(text):
    board = SudokuBoard.from_string(text)
    print("Input puzzle:")
    print(board)
    print()
    return board


def cmd_generate(args):
    """Handle the generate command."""
    generator = SudokuGenerator(seed=args.seed)
    grader = DifficultyGrader()

    if args.difficulty == "all":
        difficulties = list(Difficulty)
    else:
        difficulties = [Difficulty(args.difficulty)]

    # Same shape as a batch puzzle set, so load_puzzle_set reads it back.
    puzzle_set = {}
    total = 0

    for difficulty in difficulties:
        print(f"\nGenerating {args.count} {difficulty.value} puzzles...")
        records = generator.generate_batch(args.count, difficulty)
        items = puzzle_set.setdefault(difficulty.value, [])

        for i, record in enumerate(records, 1):
            puzzle_data = record.to_dict()

            print(f"\n--- {difficulty.value.capitalize()} Puzzle {i} ({record.clue_count} clues) ---")
            print(record.puzzle)

            if args.grade:
                grading = grader.grade(record.puzzle)
                puzzle_data["grading"] = grading.to_dict()
                print(f"Grade: {grading.difficulty.value} (score {grading.score}, "
                      f"{grading.naked_singles} naked / {grading.hidden_singles} hidden singles)")

            items.append(puzzle_data)
            total += 1

    if args.output:
        with open(args.output, "w") as f:
            json.dump(puzzle_set, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")

    print(f"\nTotal puzzles generated: {total}")


def cmd_solve(args):
    """Handle the solve command."""
    board = _parse_puzzle(args.puzzle)

    solver = BacktrackingSolver(track_memory=args.verbose)
    solution, stats = solver.solve(board)

    if stats.solved:
        print(f"✓ Solved in {stats.time_seconds:.4f}s")
        if args.verbose:
            print(f"  Iterations: {stats.iterations:,}")
            print(f"  Backtracks: {stats.backtracks:,}")
            if stats.memory_bytes is not None:
                print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")
        print(solution)
    else:
        print("✗ No solution")
        if args.verbose:
            print(f"  Time: {stats.time_seconds:.4f}s")
            print(f"  Iterations: {stats.iterations:,}")
        sys.exit(1)


def cmd_grade(args):
    """Handle the grade command."""
    board = _parse_puzzle(args.puzzle)
    grading = DifficultyGrader().grade(board)

    print(f"Difficulty: {grading.difficulty.value}")
    print(f"  Score: {grading.score}")
    print(f"  Naked singles: {grading.naked_singles}")
    print(f"  Hidden singles: {grading.hidden_singles}")
    print(f"  Solved by singles: {'yes' if grading.solved else 'no'}")


def cmd_batch(args):
    """Handle the batch command."""
    from .batch import BatchGenerator, Visualizer

    config = GenerationConfig.from_json(args.config) if args.config else GenerationConfig()
    counts = None
    if args.count is not None:
        counts = {d.value: args.count for d in Difficulty}
    config = config.with_overrides(
        counts=counts,
        seed=args.seed,
        workers=args.workers,
        max_steps=args.max_steps,
        grade=args.grade,
        output=args.output,
    )

    print("=" * 60)
    print("SUDOKU PUZZLE SET GENERATION")
    print("=" * 60)
    print(f"Counts: {config.counts}")
    print(f"Workers: {config.workers}")
    print(f"Grading: {'on' if config.grade else 'off'}")
    print("=" * 60)

    batch = BatchGenerator(config)
    batch.run()
    batch.save()

    summary = batch.summary()
    print("\nBy Difficulty:")
    print("-" * 50)
    for name, stats in summary["by_difficulty"].items():
        print(f"\n{name}:")
        print(f"  Puzzles: {stats['count']}")
        print(f"  Clues: {stats['min_clues']}-{stats['max_clues']} (avg {stats['avg_clues']:.1f})")
        print(f"  Above band: {stats['above_band']}")
        if "avg_score" in stats:
            print(f"  Avg score: {stats['avg_score']:.1f}")
            print(f"  Grader agrees: {stats['grade_agreement']:.1f}%")

    if args.charts:
        print("\nGenerating charts...")
        charts = Visualizer(batch.entries, args.charts).generate_all()
        for chart in charts:
            print(f"  - {chart}")

    print(f"\nTotal puzzles generated: {summary['total_puzzles']}")


if __name__ == "__main__":
    main()
