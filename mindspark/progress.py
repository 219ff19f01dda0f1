"""Experience points, levels and their on-disk persistence."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

XP_PER_LEVEL = 100


class UserStats(BaseModel):
    level: int = 1
    current_xp: int = 0
    next_level_xp: int = XP_PER_LEVEL
    total_games_played: int = 0
    total_wins: int = 0


def award_xp(stats: UserStats, amount: int) -> UserStats:
    """Credit a won game. Levels up at most once per award."""
    xp = stats.current_xp + amount
    level = stats.level
    next_xp = stats.next_level_xp

    if xp >= stats.next_level_xp:
        level += 1
        xp -= stats.next_level_xp
        next_xp = level * XP_PER_LEVEL

    return stats.model_copy(
        update={
            "level": level,
            "current_xp": xp,
            "next_level_xp": next_xp,
            "total_games_played": stats.total_games_played + 1,
            "total_wins": stats.total_wins + 1,
        }
    )


class ProgressTracker:
    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path is not None else None
        self.stats = self._load()

    def _load(self) -> UserStats:
        if self.path is None or not self.path.exists():
            return UserStats()
        try:
            return UserStats.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as exc:
            logger.warning("Ignoring unreadable stats file %s: %s", self.path, exc)
            return UserStats()

    def save(self) -> None:
        if self.path is None:
            return
        self.path.write_text(self.stats.model_dump_json(), encoding="utf-8")

    def award(self, amount: int) -> UserStats:
        previous_level = self.stats.level
        self.stats = award_xp(self.stats, amount)
        self.save()
        logger.info("Awarded %d XP (level %d, %d/%d)", amount, self.stats.level, self.stats.current_xp, self.stats.next_level_xp)
        if self.stats.level > previous_level:
            logger.info("Level up: %d -> %d", previous_level, self.stats.level)
        return self.stats
