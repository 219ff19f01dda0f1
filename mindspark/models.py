"""Pydantic models for the WebSocket and HTTP message protocol."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------

class GameSnapshot(BaseModel):
    board: list[str | None]
    grid_size: int
    num_players: int
    roster: list[str]
    current_player_index: int
    status: str  # "playing" | "won" | "lost" | "draw"
    winner: str | None = None
    winning_line: list[int] | None = None
    computer_turn: bool = False


class CardView(BaseModel):
    id: int
    symbol: str | None  # hidden while face down
    is_flipped: bool
    is_matched: bool


class MemorySnapshot(BaseModel):
    cards: list[CardView]
    moves: int
    elapsed: str
    is_won: bool


class UserStatsView(BaseModel):
    level: int
    current_xp: int
    next_level_xp: int
    total_games_played: int
    total_wins: int


# ---------------------------------------------------------------------------
# Client → Server (tic-tac-toe)
# ---------------------------------------------------------------------------

class ConfigureMsg(BaseModel):
    type: Literal["configure"] = "configure"
    grid_size: int | None = None
    num_players: int | None = None


class MoveMsg(BaseModel):
    type: Literal["move"] = "move"
    index: int


class ResetMsg(BaseModel):
    type: Literal["reset"] = "reset"


TicTacToeMessage = ConfigureMsg | MoveMsg | ResetMsg


# ---------------------------------------------------------------------------
# Client → Server (memory)
# ---------------------------------------------------------------------------

class FlipMsg(BaseModel):
    type: Literal["flip"] = "flip"
    index: int


class RestartMsg(BaseModel):
    type: Literal["restart"] = "restart"


MemoryMessage = FlipMsg | RestartMsg


# ---------------------------------------------------------------------------
# Server → Client
# ---------------------------------------------------------------------------

class GameStateMsg(BaseModel):
    type: Literal["state"] = "state"
    game: GameSnapshot
    sounds: list[str] = Field(default_factory=list)


class MemoryStateMsg(BaseModel):
    type: Literal["state"] = "state"
    game: MemorySnapshot
    sounds: list[str] = Field(default_factory=list)


class ErrorMsg(BaseModel):
    type: Literal["error"] = "error"
    message: str


# ---------------------------------------------------------------------------
# HTTP bodies
# ---------------------------------------------------------------------------

class QuizRequest(BaseModel):
    topic: str
    difficulty: Literal["Easy", "Medium", "Hard", "Expert"] = "Medium"
    language: Literal["en", "hi", "ne"] = "en"


class AnswerRequest(BaseModel):
    option_index: int


class ChatGameRequest(BaseModel):
    game_type: Literal["mystery", "emoji", "truth", "riddle", "odd", "custom"]
    language: Literal["en", "hi", "ne"] = "en"
    custom_prompt: str | None = None


class ChatMessageRequest(BaseModel):
    text: str


class SpeechRequest(BaseModel):
    text: str
    voice: Literal["Puck", "Charon", "Kore", "Fenrir", "Zephyr"] = "Kore"


def _parse(data, mapping: dict[str, type[BaseModel]]) -> BaseModel | None:
    if not isinstance(data, dict):
        return None
    model = mapping.get(data.get("type"))  # type: ignore[arg-type]
    if model is None:
        return None
    try:
        return model.model_validate(data)
    except Exception:
        return None


def parse_tictactoe_message(data: dict) -> TicTacToeMessage | None:
    """Parse a raw dict into a typed tic-tac-toe message, or None if invalid."""
    return _parse(data, {"configure": ConfigureMsg, "move": MoveMsg, "reset": ResetMsg})  # type: ignore[return-value]


def parse_memory_message(data: dict) -> MemoryMessage | None:
    return _parse(data, {"flip": FlipMsg, "restart": RestartMsg})  # type: ignore[return-value]
