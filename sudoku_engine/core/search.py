"""Backtracking primitives shared by the filler, the solution counter and the solver."""

from __future__ import annotations
import random
from typing import List, Optional

from .board import SIZE, BOX_SIZE, CELLS
from .candidates import ALL_DIGITS, POPCOUNT, digit_bit, mask_digits
from .errors import SearchBudgetExceeded

ROW_OF = [i // SIZE for i in range(CELLS)]
COL_OF = [i % SIZE for i in range(CELLS)]
BOX_OF = [(i // SIZE // BOX_SIZE) * BOX_SIZE + (i % SIZE) // BOX_SIZE for i in range(CELLS)]


class SearchBudget:
    """
    Step counter for a backtracking search.

    Every visited node calls step(); once more than max_steps nodes have been
    visited SearchBudgetExceeded is raised. A max_steps of None never runs out.
    """

    def __init__(self, max_steps: Optional[int] = None):
        self.max_steps = max_steps
        self.steps = 0
        self.backtracks = 0

    def step(self) -> None:
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            raise SearchBudgetExceeded(self.max_steps)


class ConstraintMasks:
    """
    Digits already used by every row, column and box of a flat 81-cell grid.

    free(index) gives the digits that may legally go in an empty cell, and
    allows(index, digit) answers the same question as
    validator.is_valid_placement in O(1) instead of scanning 27 peers.
    Callers must keep the masks current with place/remove as the grid
    changes.
    """

    def __init__(self, values: List[int]):
        self.rows = [0] * SIZE
        self.cols = [0] * SIZE
        self.boxes = [0] * SIZE
        for index, value in enumerate(values):
            if value:
                self.place(index, value)

    def free(self, index: int) -> int:
        used = self.rows[ROW_OF[index]] | self.cols[COL_OF[index]] | self.boxes[BOX_OF[index]]
        return ALL_DIGITS & ~used

    def allows(self, index: int, digit: int) -> bool:
        return bool(self.free(index) & digit_bit(digit))

    def place(self, index: int, digit: int) -> None:
        bit = digit_bit(digit)
        self.rows[ROW_OF[index]] |= bit
        self.cols[COL_OF[index]] |= bit
        self.boxes[BOX_OF[index]] |= bit

    def remove(self, index: int, digit: int) -> None:
        bit = ~digit_bit(digit)
        self.rows[ROW_OF[index]] &= bit
        self.cols[COL_OF[index]] &= bit
        self.boxes[BOX_OF[index]] &= bit


def has_conflicts(values: List[int]) -> bool:
    """True if some digit repeats within a row, column or box."""
    masks = ConstraintMasks([0] * CELLS)
    for index, value in enumerate(values):
        if value:
            if not masks.allows(index, value):
                return True
            masks.place(index, value)
    return False


def random_fill(values: List[int], rng: random.Random, budget: SearchBudget) -> bool:
    """
    Complete values in place with a random valid solution.

    Cells are visited in row-major order. Each empty cell tries a freshly
    shuffled 1-9; when no digit fits the cell is reset to 0 and False is
    returned so the caller backtracks.
    """
    if has_conflicts(values):
        return False
    masks = ConstraintMasks(values)

    def fill(start: int) -> bool:
        budget.step()
        index = start
        while index < CELLS and values[index]:
            index += 1
        if index == CELLS:
            return True

        digits = list(range(1, SIZE + 1))
        rng.shuffle(digits)
        for digit in digits:
            if masks.allows(index, digit):
                values[index] = digit
                masks.place(index, digit)
                if fill(index + 1):
                    return True
                masks.remove(index, digit)
                values[index] = 0

        values[index] = 0
        return False

    return fill(0)


def count_completions(values: List[int], limit: int, budget: SearchBudget) -> int:
    """
    Count solutions of values up to limit.

    values is used as scratch space and is restored before returning.
    Branches on the empty cell with the fewest legal digits; the count does
    not depend on cell order.
    """
    if limit <= 0 or has_conflicts(values):
        return 0
    masks = ConstraintMasks(values)
    empty = [i for i in range(CELLS) if not values[i]]
    count = 0

    def search(remaining: int) -> bool:
        """Returns True once limit is reached."""
        nonlocal count
        budget.step()
        if remaining == 0:
            count += 1
            return count >= limit

        best_pos = -1
        best_free = 0
        best_size = SIZE + 1
        for pos in range(remaining):
            free = masks.free(empty[pos])
            size = POPCOUNT[free]
            if size < best_size:
                best_pos, best_free, best_size = pos, free, size
                if size <= 1:
                    break
        if best_size == 0:
            return False

        # Swap the chosen cell to the end of the active region.
        last = remaining - 1
        empty[best_pos], empty[last] = empty[last], empty[best_pos]
        index = empty[last]

        done = False
        for digit in mask_digits(best_free):
            values[index] = digit
            masks.place(index, digit)
            done = search(last)
            masks.remove(index, digit)
            values[index] = 0
            if done:
                break

        empty[best_pos], empty[last] = empty[last], empty[best_pos]
        return done

    search(len(empty))
    return count


def first_completion(values: List[int], budget: SearchBudget) -> Optional[List[int]]:
    """
    Find the first solution in row-major order with ascending digits.

    Returns a new list, or None when no solution exists. Undone placements
    are counted in budget.backtracks.
    """
    if has_conflicts(values):
        return None
    work = list(values)
    masks = ConstraintMasks(work)

    def solve(start: int) -> bool:
        budget.step()
        index = start
        while index < CELLS and work[index]:
            index += 1
        if index == CELLS:
            return True

        for digit in mask_digits(masks.free(index)):
            work[index] = digit
            masks.place(index, digit)
            if solve(index + 1):
                return True
            masks.remove(index, digit)
            work[index] = 0
            budget.backtracks += 1
        return False

    return work if solve(0) else None
