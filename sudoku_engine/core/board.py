"""Sudoku board representation for the standard 9x9 grid."""

from __future__ import annotations
import numpy as np
from typing import List, Tuple, Optional, Set, Sequence

from .errors import InvalidBoardShape

SIZE = 9
BOX_SIZE = 3
CELLS = SIZE * SIZE


class SudokuBoard:
    """
    Represents a 9x9 Sudoku board.

    Cells hold digits 1-9, with 0 meaning empty. A board is owned by whichever
    operation is currently mutating it; use copy() before handing it to
    another mutator.
    """

    size = SIZE
    box_size = BOX_SIZE

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a Sudoku board.

        Args:
            grid: Optional initial 9x9 grid. If None, creates an empty board.

        Raises:
            InvalidBoardShape: If the grid is not 9x9 or has values outside 0-9.
        """
        if grid is None:
            self.grid = np.zeros((SIZE, SIZE), dtype=np.int32)
            return

        grid = np.asarray(grid)
        if grid.shape != (SIZE, SIZE):
            raise InvalidBoardShape(f"Grid shape must be ({SIZE}, {SIZE}), got {grid.shape}")
        if not np.issubdtype(grid.dtype, np.integer):
            raise InvalidBoardShape(f"Grid must hold integers, got dtype {grid.dtype}")
        if grid.min() < 0 or grid.max() > SIZE:
            raise InvalidBoardShape(f"Grid values must be 0-{SIZE}")
        self.grid = grid.astype(np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep, writable copy of the board."""
        new_board = SudokuBoard()
        new_board.grid = self.grid.copy()
        return new_board

    def freeze(self) -> SudokuBoard:
        """Return a read-only copy of the board."""
        frozen = self.copy()
        frozen.grid.setflags(write=False)
        return frozen

    @property
    def frozen(self) -> bool:
        return not self.grid.flags.writeable

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        if value < 0 or value > SIZE:
            raise InvalidBoardShape(f"Value must be 0-{SIZE}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.grid[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.grid[row, col] == 0

    def get_row(self, row: int) -> np.ndarray:
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        return self.grid[:, col]

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row = (row // BOX_SIZE) * BOX_SIZE
        box_col = (col // BOX_SIZE) * BOX_SIZE
        return self.grid[box_row:box_row + BOX_SIZE,
                         box_col:box_col + BOX_SIZE].flatten()

    def get_candidates(self, row: int, col: int) -> Set[int]:
        """
        Get all valid candidate values for an empty cell.

        Returns:
            Set of digits that can be placed at (row, col).
            Returns empty set if cell is not empty.
        """
        if not self.is_empty(row, col):
            return set()

        used = set(self.get_row(row).tolist())
        used |= set(self.get_col(col).tolist())
        used |= set(self.get_box(row, col).tolist())

        return set(range(1, SIZE + 1)) - used

    def get_peers(self, row: int, col: int) -> Set[Tuple[int, int]]:
        """
        Get all peer cell positions (those in same row, column, or box).

        Returns:
            Set of (r, c) tuples, excluding (row, col) itself.
        """
        return set(PEERS[row * SIZE + col])

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions in row-major order."""
        rows, cols = np.nonzero(self.grid == 0)
        return list(zip(rows.tolist(), cols.tolist()))

    def count_empty(self) -> int:
        return int(np.sum(self.grid == 0))

    def count_filled(self) -> int:
        """Count the number of filled cells (the clues of a puzzle)."""
        return int(np.sum(self.grid != 0))

    def is_complete(self) -> bool:
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        Check if the current board state has no conflicts.
        Does not check if the board is complete.
        """
        units = [self.get_row(i) for i in range(SIZE)]
        units += [self.get_col(j) for j in range(SIZE)]
        units += [self.get_box(r, c)
                  for r in range(0, SIZE, BOX_SIZE)
                  for c in range(0, SIZE, BOX_SIZE)]

        for unit in units:
            non_zero = unit[unit != 0]
            if len(non_zero) != len(set(non_zero.tolist())):
                return False
        return True

    def is_solved(self) -> bool:
        """Check if every row, column and box is a permutation of 1-9."""
        return self.is_complete() and self.is_valid()

    def to_string(self) -> str:
        """Convert board to an 81-character string, 0 for empty cells."""
        return ''.join(str(v) for v in self.grid.flatten().tolist())

    def to_list(self) -> List[List[int]]:
        """Convert board to a list of 9 rows of plain ints."""
        return self.grid.tolist()

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from a string representation.

        Args:
            s: String of 81 characters; 0 or . for empty, 1-9 for values.
               Whitespace is ignored.
        """
        s = ''.join(s.split())
        if len(s) != CELLS:
            raise InvalidBoardShape(f"String length must be {CELLS}, got {len(s)}")

        values = []
        for c in s:
            if c == '.':
                values.append(0)
            elif c.isdigit():
                values.append(int(c))
            else:
                raise InvalidBoardShape(f"Invalid character {c!r} in puzzle string")

        return cls(np.array(values, dtype=np.int32).reshape(SIZE, SIZE))

    @classmethod
    def from_2d_list(cls, data: Sequence[Sequence[int]]) -> SudokuBoard:
        """
        Create a board from a 2D list.

        Cells are taken as given: floats, None or other non-integers are
        rejected rather than truncated.

        Raises:
            InvalidBoardShape: If the data is not 9 rows of 9 integers in 0-9.
        """
        try:
            rows_ok = len(data) == SIZE and all(len(row) == SIZE for row in data)
            grid = np.asarray(data)
        except (TypeError, ValueError) as e:
            raise InvalidBoardShape(f"Expected {SIZE} rows of {SIZE} integers: {e}") from e
        if not rows_ok:
            raise InvalidBoardShape(f"Expected {SIZE} rows of {SIZE} values")
        return cls(grid)

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(SIZE):
                val = self.grid[i, j]
                row_str += ' .' if val == 0 else f' {val}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())


def _build_peers() -> List[Tuple[Tuple[int, int], ...]]:
    peers = []
    for row in range(SIZE):
        for col in range(SIZE):
            cells = set()
            for i in range(SIZE):
                cells.add((row, i))
                cells.add((i, col))
            box_row = (row // BOX_SIZE) * BOX_SIZE
            box_col = (col // BOX_SIZE) * BOX_SIZE
            for i in range(BOX_SIZE):
                for j in range(BOX_SIZE):
                    cells.add((box_row + i, box_col + j))
            cells.remove((row, col))
            peers.append(tuple(sorted(cells)))
    return peers


# Peer positions of every cell, indexed by row * 9 + col.
PEERS = _build_peers()
