"""Computer opponent: depth-bounded minimax with alpha-beta pruning."""

from __future__ import annotations

import math
import random

from mindspark.board import Board, empty_cells, find_winner, is_full

NO_MOVE = -1

WIN_SCORE = 1000
STATIC_WIN_SCORE = 10000


def search_depth(size: int) -> int:
    """Look-ahead bound; larger boards trade strength for latency."""
    if size <= 3:
        return size * size
    if size == 4:
        return 4
    return 3


def evaluate(board: Board, size: int, computer: str, opponent: str) -> int:
    # Only immediate results are scored at the depth bound.
    result = find_winner(board, size)
    if result is None:
        return 0
    if result.symbol == computer:
        return STATIC_WIN_SCORE
    if result.symbol == opponent:
        return -STATIC_WIN_SCORE
    return 0


def minimax(
    board: Board,
    size: int,
    depth: int,
    maximizing: bool,
    alpha: float,
    beta: float,
    max_depth: int,
    computer: str = "O",
    opponent: str = "X",
) -> float:
    result = find_winner(board, size)
    if result is not None:
        if result.symbol == computer:
            return WIN_SCORE - depth
        if result.symbol == opponent:
            return depth - WIN_SCORE
    if is_full(board):
        return 0
    if depth >= max_depth:
        return evaluate(board, size, computer, opponent)

    if maximizing:
        best = -math.inf
        for i in empty_cells(board):
            board[i] = computer
            score = minimax(board, size, depth + 1, False, alpha, beta, max_depth, computer, opponent)
            board[i] = None
            best = max(best, score)
            alpha = max(alpha, score)
            if beta <= alpha:
                break
        return best

    best = math.inf
    for i in empty_cells(board):
        board[i] = opponent
        score = minimax(board, size, depth + 1, True, alpha, beta, max_depth, computer, opponent)
        board[i] = None
        best = min(best, score)
        beta = min(beta, score)
        if beta <= alpha:
            break
    return best


def best_move(
    board: Board,
    size: int,
    *,
    computer: str = "O",
    opponent: str = "X",
    rng: random.Random | None = None,
) -> int:
    """Pick the computer's move, or NO_MOVE if the board is full.

    Candidates are explored in a shuffled order and the first one with the
    highest score wins, so equally good moves are chosen at random.
    """
    squares = list(board)
    empty = empty_cells(squares)
    if not empty:
        return NO_MOVE

    center = len(squares) // 2
    if len(empty) == len(squares):
        return center
    if len(empty) == len(squares) - 1 and squares[center] is None:
        return center

    rng = rng or random.Random()
    rng.shuffle(empty)
    max_depth = search_depth(size)

    best_score = -math.inf
    move = NO_MOVE
    for i in empty:
        squares[i] = computer
        score = minimax(squares, size, 0, False, -math.inf, math.inf, max_depth, computer, opponent)
        squares[i] = None
        if score > best_score:
            best_score = score
            move = i
    return move
