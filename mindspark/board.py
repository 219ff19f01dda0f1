"""Board model and line-win detection for N×N tic-tac-toe."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

GRID_SIZES = (2, 3, 4, 5)
SYMBOLS = ("X", "O", "Δ")

Board = list[str | None]
Line = tuple[int, ...]


@dataclass(frozen=True)
class WinResult:
    symbol: str
    line: Line


def new_board(size: int) -> Board:
    if size not in GRID_SIZES:
        raise ValueError(f"Unsupported grid size: {size}")
    return [None] * (size * size)


@lru_cache(maxsize=None)
def winning_lines(size: int) -> tuple[Line, ...]:
    """All lines for a grid: rows top to bottom, columns left to right,
    then the main diagonal and the anti-diagonal."""
    rows = [tuple(r * size + c for c in range(size)) for r in range(size)]
    cols = [tuple(r * size + c for r in range(size)) for c in range(size)]
    main_diag = tuple(i * size + i for i in range(size))
    anti_diag = tuple((i + 1) * size - (i + 1) for i in range(size))
    return tuple(rows + cols + [main_diag, anti_diag])


def check_line(board: Board, line: Line) -> str | None:
    first = board[line[0]]
    if first is None:
        return None
    for idx in line[1:]:
        if board[idx] != first:
            return None
    return first


def find_winner(board: Board, size: int) -> WinResult | None:
    """Return the first fully-owned line, or None if nobody has won."""
    for line in winning_lines(size):
        symbol = check_line(board, line)
        if symbol is not None:
            return WinResult(symbol=symbol, line=line)
    return None


def empty_cells(board: Board) -> list[int]:
    return [i for i, cell in enumerate(board) if cell is None]


def is_full(board: Board) -> bool:
    return None not in board
