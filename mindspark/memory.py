"""Memory matching game: eight face-down pairs, two flips per move."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable

from mindspark.models import CardView, MemorySnapshot

logger = logging.getLogger(__name__)

MEMORY_XP = 75
CARD_SYMBOLS = ("brain", "zap", "game", "trophy", "sparkles", "lock", "globe", "target")


@dataclass
class Card:
    id: int
    symbol: str
    is_flipped: bool = False
    is_matched: bool = False


def format_time(seconds: int) -> str:
    mins, secs = divmod(int(seconds), 60)
    return f"{mins}:{secs:02d}"


class MemoryGame:
    def __init__(
        self,
        *,
        on_bonus: Callable[[int], None] | None = None,
        on_sound: Callable[[str], None] | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.on_bonus = on_bonus
        self.on_sound = on_sound
        self.rng = rng or random.Random()
        self.clock = clock
        self.start()

    def start(self) -> None:
        deck = []
        for i, symbol in enumerate(CARD_SYMBOLS):
            deck.append(Card(id=i * 2, symbol=symbol))
            deck.append(Card(id=i * 2 + 1, symbol=symbol))
        self.rng.shuffle(deck)
        self.cards: list[Card] = deck
        self.flipped: list[int] = []
        self.moves: int = 0
        self.is_won: bool = False
        self.bonus_awarded: bool = False
        self.started_at: float = self.clock()
        self.finished_at: float | None = None

    @property
    def has_pending_pair(self) -> bool:
        return len(self.flipped) == 2

    @property
    def elapsed_seconds(self) -> int:
        end = self.finished_at if self.finished_at is not None else self.clock()
        return int(end - self.started_at)

    def pending_is_match(self) -> bool:
        if not self.has_pending_pair:
            return False
        first, second = self.flipped
        return self.cards[first].symbol == self.cards[second].symbol

    def flip(self, index: int) -> bool:
        if self.is_won or index < 0 or index >= len(self.cards):
            return False
        card = self.cards[index]
        if card.is_flipped or card.is_matched or len(self.flipped) >= 2:
            return False

        card.is_flipped = True
        self.flipped.append(index)
        if len(self.flipped) == 2:
            self.moves += 1
        return True

    def resolve_pending(self) -> bool | None:
        """Settle a face-up pair. Returns whether it matched, or None if no pair."""
        if not self.has_pending_pair:
            return None
        matched = self.pending_is_match()
        for i in self.flipped:
            if matched:
                self.cards[i].is_matched = True
            else:
                self.cards[i].is_flipped = False
        self.flipped = []
        self._sound("success" if matched else "error")

        if matched and all(c.is_matched for c in self.cards):
            self.is_won = True
            self.finished_at = self.clock()
            if not self.bonus_awarded:
                self.bonus_awarded = True
                if self.on_bonus is not None:
                    self.on_bonus(MEMORY_XP)
            self._sound("success")
            logger.info("Memory game won in %d moves (%s)", self.moves, format_time(self.elapsed_seconds))
        return matched

    def _sound(self, name: str) -> None:
        if self.on_sound is not None:
            self.on_sound(name)

    def snapshot(self) -> MemorySnapshot:
        return MemorySnapshot(
            cards=[
                CardView(
                    id=c.id,
                    symbol=c.symbol if (c.is_flipped or c.is_matched) else None,
                    is_flipped=c.is_flipped,
                    is_matched=c.is_matched,
                )
                for c in self.cards
            ],
            moves=self.moves,
            elapsed=format_time(self.elapsed_seconds),
            is_won=self.is_won,
        )
