"""Unit tests for the tic-tac-toe turn coordinator."""

import random

import pytest

from mindspark.search import NO_MOVE
from mindspark.tictactoe import TICTACTOE_XP, GameStatus, TicTacToeGame


def scripted_search(moves):
    """A move search that replays fixed computer moves."""
    queue = list(moves)

    def search(board, size, **kwargs):
        return queue.pop(0) if queue else NO_MOVE

    return search


def play(game, moves):
    for index in moves:
        assert game.attempt_move(index) is True


class TestMultiPlayer:
    def test_top_row_win(self):
        bonuses = []
        game = TicTacToeGame(3, 2, on_bonus=bonuses.append)
        play(game, [0, 3, 1, 4, 2])
        assert game.status is GameStatus.WON
        assert game.winner == "X"
        assert game.winning_line == [0, 1, 2]
        assert bonuses == [TICTACTOE_XP]

    def test_second_player_win_is_still_won(self):
        bonuses = []
        game = TicTacToeGame(3, 2, on_bonus=bonuses.append)
        play(game, [0, 3, 1, 4, 8, 5])
        assert game.status is GameStatus.WON
        assert game.winner == "O"
        assert game.winning_line == [3, 4, 5]
        assert bonuses == [TICTACTOE_XP]

    def test_no_moves_after_game_over(self):
        bonuses = []
        game = TicTacToeGame(3, 2, on_bonus=bonuses.append)
        play(game, [0, 3, 1, 4, 2])
        assert game.attempt_move(5) is False
        assert game.board[5] is None
        assert bonuses == [TICTACTOE_XP]

    def test_draw(self):
        bonuses = []
        game = TicTacToeGame(3, 2, on_bonus=bonuses.append)
        play(game, [0, 1, 2, 4, 3, 5, 7, 6, 8])
        assert game.status is GameStatus.DRAW
        assert game.winner is None
        assert game.winning_line is None
        assert bonuses == []

    def test_three_players_rotate(self):
        game = TicTacToeGame(4, 3)
        assert game.roster == ("X", "O", "Δ")
        symbols = []
        for index in range(4):
            symbols.append(game.current_symbol)
            game.attempt_move(index)
        assert symbols == ["X", "O", "Δ", "X"]
        assert game.board[:4] == ["X", "O", "Δ", "X"]

    def test_alternating_turns(self):
        game = TicTacToeGame(3, 2)
        game.attempt_move(0)
        assert game.current_player_index == 1
        game.attempt_move(1)
        assert game.current_player_index == 0


class TestMoveValidation:
    def test_occupied_cell_ignored(self):
        game = TicTacToeGame(3, 2)
        game.attempt_move(4)
        assert game.attempt_move(4) is False
        assert game.board[4] == "X"
        assert game.current_player_index == 1

    def test_out_of_range_ignored(self):
        game = TicTacToeGame(3, 2)
        assert game.attempt_move(-1) is False
        assert game.attempt_move(9) is False
        assert game.board == [None] * 9


class TestSinglePlayer:
    def test_human_blocked_on_computer_turn(self):
        game = TicTacToeGame(3, 1, search=scripted_search([4]))
        assert game.attempt_move(0) is True
        assert game.is_computer_turn is True
        assert game.attempt_move(1) is False

    def test_computer_moves_once(self):
        game = TicTacToeGame(3, 1, search=scripted_search([4, 8]))
        game.attempt_move(0)
        assert game.play_computer_move() == 4
        assert game.board[4] == "O"
        assert game.current_player_index == 0
        assert game.play_computer_move() is None

    def test_human_win(self):
        bonuses, sounds = [], []
        game = TicTacToeGame(
            3, 1, on_bonus=bonuses.append, on_sound=sounds.append, search=scripted_search([3, 4])
        )
        game.attempt_move(0)
        game.play_computer_move()
        game.attempt_move(1)
        game.play_computer_move()
        game.attempt_move(2)
        assert game.status is GameStatus.WON
        assert game.winning_line == [0, 1, 2]
        assert bonuses == [TICTACTOE_XP]
        assert sounds[-2:] == ["success", "success"]

    def test_computer_win_is_lost(self):
        bonuses, sounds = [], []
        game = TicTacToeGame(
            3, 1, on_bonus=bonuses.append, on_sound=sounds.append, search=scripted_search([3, 4, 5])
        )
        for human in (0, 1, 8):
            game.attempt_move(human)
            game.play_computer_move()
        assert game.status is GameStatus.LOST
        assert game.winner == "O"
        assert game.winning_line == [3, 4, 5]
        assert bonuses == []
        assert sounds[-2:] == ["error", "error"]

    def test_real_search_opens_in_center(self):
        game = TicTacToeGame(3, 1, rng=random.Random(0))
        game.attempt_move(0)
        assert game.play_computer_move() == 4

    def test_snapshot(self):
        game = TicTacToeGame(3, 1, search=scripted_search([4]))
        game.attempt_move(0)
        snap = game.snapshot()
        assert snap.board[0] == "X"
        assert snap.roster == ["X", "O"]
        assert snap.status == "playing"
        assert snap.computer_turn is True


class TestReset:
    def test_reset_twice_equals_once(self):
        game = TicTacToeGame(3, 2)
        play(game, [0, 3, 1, 4, 2])
        game.reset()
        once = game.snapshot()
        game.reset()
        assert game.snapshot() == once
        assert once.board == [None] * 9
        assert once.status == "playing"
        assert once.current_player_index == 0
        assert once.winning_line is None
        assert game.bonus_awarded is False

    def test_bonus_awarded_again_after_reset(self):
        bonuses = []
        game = TicTacToeGame(3, 2, on_bonus=bonuses.append)
        play(game, [0, 3, 1, 4, 2])
        game.reset()
        play(game, [0, 3, 1, 4, 2])
        assert bonuses == [TICTACTOE_XP, TICTACTOE_XP]

    def test_configure_resets_board(self):
        game = TicTacToeGame(3, 2)
        game.attempt_move(0)
        game.configure(grid_size=5)
        assert game.board == [None] * 25
        assert game.current_player_index == 0
        game.configure(num_players=3)
        assert game.grid_size == 5
        assert game.roster == ("X", "O", "Δ")

    @pytest.mark.parametrize("grid_size,num_players", [(1, 2), (6, 2), (3, 0), (3, 4)])
    def test_configure_rejects_bad_values(self, grid_size, num_players):
        game = TicTacToeGame(3, 2)
        with pytest.raises(ValueError):
            game.configure(grid_size=grid_size, num_players=num_players)
        assert game.grid_size == 3
        assert game.num_players == 2
