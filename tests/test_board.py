"""Unit tests for the board model and line-win detection."""

import pytest

from mindspark.board import (
    GRID_SIZES,
    empty_cells,
    find_winner,
    is_full,
    new_board,
    winning_lines,
)


class TestWinningLines:
    @pytest.mark.parametrize("size", GRID_SIZES)
    def test_line_counts(self, size):
        lines = winning_lines(size)
        assert len(lines) == 2 * size + 2

    @pytest.mark.parametrize("size", GRID_SIZES)
    def test_lines_are_unique_in_bounds(self, size):
        for line in winning_lines(size):
            assert len(line) == size
            assert len(set(line)) == size
            assert all(0 <= i < size * size for i in line)

    def test_enumeration_order_3x3(self):
        assert winning_lines(3) == (
            (0, 1, 2),
            (3, 4, 5),
            (6, 7, 8),
            (0, 3, 6),
            (1, 4, 7),
            (2, 5, 8),
            (0, 4, 8),
            (2, 4, 6),
        )

    def test_diagonals_4x4(self):
        lines = winning_lines(4)
        assert lines[-2] == (0, 5, 10, 15)
        assert lines[-1] == (3, 6, 9, 12)


class TestFindWinner:
    def test_empty_board(self):
        assert find_winner(new_board(3), 3) is None

    def test_row_win(self):
        board = new_board(3)
        board[3:6] = ["O", "O", "O"]
        result = find_winner(board, 3)
        assert result.symbol == "O"
        assert result.line == (3, 4, 5)

    def test_column_win_5x5(self):
        board = new_board(5)
        for r in range(5):
            board[r * 5 + 2] = "Δ"
        result = find_winner(board, 5)
        assert result.symbol == "Δ"
        assert result.line == (2, 7, 12, 17, 22)

    def test_anti_diagonal_win(self):
        board = new_board(3)
        for i in (2, 4, 6):
            board[i] = "X"
        assert find_winner(board, 3).line == (2, 4, 6)

    def test_mixed_line_is_not_a_win(self):
        board = ["X", "O", "X", None, None, None, None, None, None]
        assert find_winner(board, 3) is None

    def test_row_reported_before_column(self):
        # The last X at 0 completes both the top row and the left column.
        board = ["X", "X", "X", "X", "O", "O", "X", "O", None]
        assert find_winner(board, 3).line == (0, 1, 2)

    def test_2x2_diagonal(self):
        board = ["X", None, None, "X"]
        assert find_winner(board, 2).line == (0, 3)


class TestBoardHelpers:
    def test_new_board_rejects_bad_size(self):
        with pytest.raises(ValueError):
            new_board(6)

    def test_empty_cells_and_full(self):
        board = ["X", None, "O", None]
        assert empty_cells(board) == [1, 3]
        assert is_full(board) is False
        assert is_full(["X", "O", "O", "X"]) is True
