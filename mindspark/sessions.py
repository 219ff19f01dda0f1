"""Per-connection game sessions and the registries behind the HTTP games."""

from __future__ import annotations

import asyncio
import logging
import secrets
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, TypeVar

from mindspark.memory import MemoryGame
from mindspark.models import GameStateMsg, MemoryStateMsg
from mindspark.tictactoe import TicTacToeGame

logger = logging.getLogger(__name__)

COMPUTER_MOVE_DELAY = 0.5  # seconds
MATCH_DELAY = 0.5
MISMATCH_DELAY = 1.0

Push = Callable[[dict], Awaitable[None]]


@dataclass
class TicTacToeSession:
    push: Push
    game: TicTacToeGame = field(default_factory=TicTacToeGame)
    computer_delay: float = COMPUTER_MOVE_DELAY
    computer_task: asyncio.Task | None = field(default=None, repr=False)
    generation: int = 0
    sounds: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.game.on_sound = self.sounds.append

    def state_message(self) -> dict:
        msg = GameStateMsg(game=self.game.snapshot(), sounds=list(self.sounds)).model_dump()
        self.sounds.clear()
        return msg

    async def send_state(self):
        await self.push(self.state_message())

    async def move(self, index: int) -> bool:
        applied = self.game.attempt_move(index)
        if applied:
            self._schedule_computer_move()
        return applied

    async def configure(self, grid_size: int | None = None, num_players: int | None = None):
        self._cancel_computer_move()
        self.game.configure(grid_size=grid_size, num_players=num_players)

    async def reset(self):
        self._cancel_computer_move()
        self.game.reset()

    def close(self):
        self._cancel_computer_move()

    def _cancel_computer_move(self):
        self.generation += 1
        if self.computer_task and not self.computer_task.done():
            self.computer_task.cancel()
        self.computer_task = None

    def _schedule_computer_move(self):
        """Play the computer's reply after a short pause, if it is its turn."""
        if not self.game.is_computer_turn:
            return
        self._cancel_computer_move()
        generation = self.generation

        async def delayed_move():
            await asyncio.sleep(self.computer_delay)
            if generation != self.generation or not self.game.is_computer_turn:
                return
            self.game.play_computer_move()
            await self.send_state()

        self.computer_task = asyncio.create_task(delayed_move())


@dataclass
class MemorySession:
    push: Push
    game: MemoryGame = field(default_factory=MemoryGame)
    resolve_task: asyncio.Task | None = field(default=None, repr=False)
    sounds: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.game.on_sound = self.sounds.append

    def state_message(self) -> dict:
        msg = MemoryStateMsg(game=self.game.snapshot(), sounds=list(self.sounds)).model_dump()
        self.sounds.clear()
        return msg

    async def send_state(self):
        await self.push(self.state_message())

    async def flip(self, index: int) -> bool:
        flipped = self.game.flip(index)
        if flipped and self.game.has_pending_pair:
            self._schedule_resolution()
        return flipped

    async def restart(self):
        self.close()
        self.game.start()

    def close(self):
        if self.resolve_task and not self.resolve_task.done():
            self.resolve_task.cancel()
        self.resolve_task = None

    def _schedule_resolution(self):
        delay = MATCH_DELAY if self.game.pending_is_match() else MISMATCH_DELAY

        async def resolve_later():
            await asyncio.sleep(delay)
            if self.game.resolve_pending() is not None:
                await self.send_state()

        self.resolve_task = asyncio.create_task(resolve_later())


T = TypeVar("T")


class SessionRegistry(Generic[T]):
    """In-memory sessions keyed by short random ids."""

    def __init__(self):
        self.sessions: dict[str, T] = {}

    def _generate_id(self) -> str:
        while True:
            session_id = secrets.token_hex(3)  # 6-char hex
            if session_id not in self.sessions:
                return session_id

    def add(self, session: T) -> str:
        session_id = self._generate_id()
        self.sessions[session_id] = session
        return session_id

    def get(self, session_id: str) -> T:
        """Raises KeyError for unknown ids."""
        return self.sessions[session_id]

    def remove(self, session_id: str) -> T | None:
        return self.sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self.sessions)
