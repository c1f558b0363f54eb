"""Unit tests for Sudoku board and validation."""

import pytest
import numpy as np
from sudoku_engine.core.board import SudokuBoard
from sudoku_engine.core.errors import InvalidBoardShape

from known_puzzles import TEST_PUZZLE, TEST_SOLUTION


class TestSudokuBoard:
    """Tests for SudokuBoard class."""

    def test_create_empty_board(self):
        """Test creating an empty 9x9 board."""
        board = SudokuBoard()
        assert board.size == 9
        assert board.box_size == 3
        assert board.count_empty() == 81
        assert board.count_filled() == 0

    def test_rejects_wrong_shape(self):
        """Only 9x9 grids are accepted."""
        with pytest.raises(InvalidBoardShape):
            SudokuBoard(np.zeros((16, 16), dtype=np.int32))
        with pytest.raises(InvalidBoardShape):
            SudokuBoard.from_2d_list([[0] * 9] * 8)

    def test_rejects_out_of_range_values(self):
        """Values outside 0-9 are a malformed board."""
        grid = np.zeros((9, 9), dtype=np.int32)
        grid[4, 4] = 10
        with pytest.raises(InvalidBoardShape):
            SudokuBoard(grid)

        board = SudokuBoard()
        with pytest.raises(InvalidBoardShape):
            board.set(0, 0, -1)

    def test_from_2d_list_rejects_floats(self):
        """Float cells are rejected, not truncated to an integer."""
        rows = [[0] * 9 for _ in range(9)]
        rows[0][0] = 5.7
        with pytest.raises(InvalidBoardShape):
            SudokuBoard.from_2d_list(rows)

    def test_from_2d_list_rejects_none(self):
        """None cells and non-sequence rows raise InvalidBoardShape."""
        rows = [[0] * 9 for _ in range(9)]
        rows[3][3] = None
        with pytest.raises(InvalidBoardShape):
            SudokuBoard.from_2d_list(rows)
        with pytest.raises(InvalidBoardShape):
            SudokuBoard.from_2d_list(None)
        with pytest.raises(InvalidBoardShape):
            SudokuBoard.from_2d_list([0] * 9)

    def test_invalid_board_shape_is_value_error(self):
        """Callers catching ValueError still see shape errors."""
        with pytest.raises(ValueError):
            SudokuBoard.from_string("123")

    def test_set_and_get(self):
        """Test setting and getting values."""
        board = SudokuBoard()
        board.set(0, 0, 5)
        assert board.get(0, 0) == 5
        assert not board.is_empty(0, 0)

        board.clear(0, 0)
        assert board.is_empty(0, 0)

    def test_get_candidates(self):
        """Test getting valid candidates for a cell."""
        board = SudokuBoard()
        board.set(0, 0, 5)
        board.set(0, 1, 3)

        candidates = board.get_candidates(0, 2)
        assert 5 not in candidates
        assert 3 not in candidates
        assert len(candidates) == 7

    def test_get_peers(self):
        """Every cell has 20 peers, never itself."""
        board = SudokuBoard()
        peers = board.get_peers(4, 4)
        assert len(peers) == 20
        assert (4, 4) not in peers
        assert (3, 3) in peers
        assert (4, 0) in peers
        assert (0, 4) in peers

    def test_is_valid(self):
        """Test board validation."""
        board = SudokuBoard()
        assert board.is_valid()

        board.set(0, 0, 5)
        board.set(0, 1, 5)
        assert not board.is_valid()

    def test_is_solved(self):
        """A complete conflict-free board is solved, a puzzle is not."""
        assert SudokuBoard.from_string(TEST_SOLUTION).is_solved()
        assert not SudokuBoard.from_string(TEST_PUZZLE).is_solved()

    def test_from_string(self):
        """Test creating board from string."""
        puzzle_str = "." * 80 + "9"
        board = SudokuBoard.from_string(puzzle_str)
        assert board.get(8, 8) == 9
        assert board.count_filled() == 1

    def test_from_string_rejects_letters(self):
        """Letters are not digits of a 9x9 puzzle."""
        with pytest.raises(InvalidBoardShape):
            SudokuBoard.from_string("A" + "0" * 80)

    def test_to_string_and_list(self):
        """Test converting board to string and nested lists."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        assert board.to_string() == TEST_PUZZLE
        rows = board.to_list()
        assert rows[0] == [5, 3, 0, 0, 7, 0, 0, 0, 0]
        assert all(isinstance(v, int) for v in rows[0])

    def test_copy(self):
        """Test board copy."""
        board = SudokuBoard()
        board.set(4, 4, 7)
        copy = board.copy()

        assert copy.get(4, 4) == 7

        copy.set(4, 4, 8)
        assert board.get(4, 4) == 7

    def test_freeze(self):
        """A frozen board cannot be written to; its copy can."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        frozen = board.freeze()

        assert frozen.frozen
        assert frozen == board
        with pytest.raises(ValueError):
            frozen.set(0, 2, 4)

        thawed = frozen.copy()
        thawed.set(0, 2, 4)
        assert thawed.get(0, 2) == 4

    def test_pretty_print(self):
        """The pretty form shows 9 rows between box separators."""
        text = str(SudokuBoard.from_string(TEST_PUZZLE))
        lines = text.splitlines()
        assert len(lines) == 13
        assert lines[1].startswith("| 5 3 .")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
