"""Tic-tac-toe turn coordinator: move application, outcome and bonus."""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable

from mindspark.board import SYMBOLS, Board, find_winner, is_full, new_board
from mindspark.models import GameSnapshot
from mindspark.search import NO_MOVE, best_move

logger = logging.getLogger(__name__)

TICTACTOE_XP = 50
PLAYER_COUNTS = (1, 2, 3)

HUMAN = "X"
COMPUTER = "O"


class GameStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"
    DRAW = "draw"


SoundHook = Callable[[str], None]
BonusHook = Callable[[int], None]
MoveSearch = Callable[..., int]


class TicTacToeGame:
    def __init__(
        self,
        grid_size: int = 3,
        num_players: int = 1,
        *,
        on_bonus: BonusHook | None = None,
        on_sound: SoundHook | None = None,
        rng: random.Random | None = None,
        search: MoveSearch = best_move,
    ):
        self._validate(grid_size, num_players)
        self.grid_size = grid_size
        self.num_players = num_players
        self.on_bonus = on_bonus
        self.on_sound = on_sound
        self.rng = rng or random.Random()
        self.search = search
        self.board: Board = new_board(grid_size)
        self.current_player_index: int = 0
        self.status: GameStatus = GameStatus.PLAYING
        self.winner: str | None = None
        self.winning_line: list[int] | None = None
        self.bonus_awarded: bool = False

    @staticmethod
    def _validate(grid_size: int, num_players: int) -> None:
        new_board(grid_size)
        if num_players not in PLAYER_COUNTS:
            raise ValueError(f"Unsupported player count: {num_players}")

    @property
    def roster(self) -> tuple[str, ...]:
        # Single-player games seat the computer as the second participant.
        if self.num_players == 1:
            return (HUMAN, COMPUTER)
        return SYMBOLS[: self.num_players]

    @property
    def current_symbol(self) -> str:
        return self.roster[self.current_player_index]

    @property
    def is_computer_turn(self) -> bool:
        return (
            self.num_players == 1
            and self.status is GameStatus.PLAYING
            and self.current_symbol == COMPUTER
        )

    def attempt_move(self, index: int) -> bool:
        """Apply a human move. Returns False if the move was ignored."""
        if self.status is not GameStatus.PLAYING:
            return False
        if self.is_computer_turn:
            return False
        if index < 0 or index >= len(self.board):
            return False
        if self.board[index] is not None:
            return False
        self._apply_move(index)
        return True

    def play_computer_move(self) -> int | None:
        """Let the computer move once. Returns the chosen index, if any."""
        if not self.is_computer_turn:
            return None
        move = self.search(
            self.board,
            self.grid_size,
            computer=COMPUTER,
            opponent=HUMAN,
            rng=self.rng,
        )
        if move == NO_MOVE or self.board[move] is not None:
            return None
        self._apply_move(move)
        return move

    def _apply_move(self, index: int) -> None:
        symbol = self.current_symbol
        self.board[index] = symbol
        self._sound("success" if symbol == HUMAN else "error")

        result = find_winner(self.board, self.grid_size)
        if result is not None:
            self.winner = result.symbol
            self.winning_line = list(result.line)
            if self.num_players == 1 and result.symbol != HUMAN:
                self.status = GameStatus.LOST
                self._sound("error")
            else:
                self.status = GameStatus.WON
                self._sound("success")
                self._award_bonus()
            logger.info("Tic-tac-toe %dx%d finished: %s (%s)", self.grid_size, self.grid_size, self.status.value, self.winner)
            return

        if is_full(self.board):
            self.status = GameStatus.DRAW
            logger.info("Tic-tac-toe %dx%d finished: draw", self.grid_size, self.grid_size)
            return

        self.current_player_index = (self.current_player_index + 1) % len(self.roster)

    def _award_bonus(self) -> None:
        if self.bonus_awarded:
            return
        self.bonus_awarded = True
        if self.on_bonus is not None:
            self.on_bonus(TICTACTOE_XP)

    def _sound(self, name: str) -> None:
        if self.on_sound is not None:
            self.on_sound(name)

    def reset(self) -> None:
        self.board = new_board(self.grid_size)
        self.current_player_index = 0
        self.status = GameStatus.PLAYING
        self.winner = None
        self.winning_line = None
        self.bonus_awarded = False

    def configure(self, grid_size: int | None = None, num_players: int | None = None) -> None:
        """Change grid size and/or player count; always starts a new game."""
        grid_size = self.grid_size if grid_size is None else grid_size
        num_players = self.num_players if num_players is None else num_players
        self._validate(grid_size, num_players)
        self.grid_size = grid_size
        self.num_players = num_players
        self.reset()

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            board=list(self.board),
            grid_size=self.grid_size,
            num_players=self.num_players,
            roster=list(self.roster),
            current_player_index=self.current_player_index,
            status=self.status.value,
            winner=self.winner,
            winning_line=self.winning_line,
            computer_turn=self.is_computer_turn,
        )
