"""Per-cell candidate sets stored as 9-bit masks."""

from __future__ import annotations
from typing import List

from .board import SudokuBoard, SIZE, PEERS

# Bit (d - 1) is set when digit d is still possible.
ALL_DIGITS = (1 << SIZE) - 1

# Number of set bits for every 9-bit mask.
POPCOUNT = [bin(mask).count("1") for mask in range(ALL_DIGITS + 1)]


def digit_bit(digit: int) -> int:
    return 1 << (digit - 1)


def mask_digits(mask: int) -> List[int]:
    """Digits present in a mask, ascending."""
    return [d for d in range(1, SIZE + 1) if mask & (1 << (d - 1))]


class CandidateGrid:
    """
    Candidate sets for all 81 cells of a board snapshot.

    Filled cells hold the singleton of their value; empty cells hold every
    digit not already placed in a peer. Masks only ever shrink.
    """

    def __init__(self, board: SudokuBoard):
        self.masks = [ALL_DIGITS] * (SIZE * SIZE)
        values = board.grid.flatten().tolist()
        for index, value in enumerate(values):
            if value != 0:
                self.masks[index] = digit_bit(value)
                self._eliminate_index(index, value)

    def mask(self, row: int, col: int) -> int:
        return self.masks[row * SIZE + col]

    def count(self, row: int, col: int) -> int:
        return POPCOUNT[self.masks[row * SIZE + col]]

    def has(self, row: int, col: int, digit: int) -> bool:
        return bool(self.masks[row * SIZE + col] & digit_bit(digit))

    def digits(self, row: int, col: int) -> List[int]:
        return mask_digits(self.masks[row * SIZE + col])

    def single(self, row: int, col: int) -> int:
        """Return the only candidate of a cell, or 0 if it has several or none."""
        mask = self.masks[row * SIZE + col]
        if POPCOUNT[mask] != 1:
            return 0
        return mask.bit_length()

    def fix(self, row: int, col: int, digit: int) -> None:
        """Narrow a cell to a single digit."""
        index = row * SIZE + col
        self.masks[index] &= digit_bit(digit)

    def eliminate(self, row: int, col: int, digit: int) -> None:
        """Remove digit from every peer of (row, col), not from the cell itself."""
        self._eliminate_index(row * SIZE + col, digit)

    def _eliminate_index(self, index: int, digit: int) -> None:
        keep = ~digit_bit(digit)
        for r, c in PEERS[index]:
            self.masks[r * SIZE + c] &= keep
