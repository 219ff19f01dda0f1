"""Environment-driven configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


def _origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:5174")
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass
class Settings:
    cors_origins: list[str] = field(default_factory=_origins)
    gemini_api_key: str | None = field(default_factory=lambda: os.getenv("GEMINI_API_KEY"))
    gemini_model: str = field(default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-flash"))
    gemini_tts_model: str = field(
        default_factory=lambda: os.getenv("GEMINI_TTS_MODEL", "gemini-2.5-flash-preview-tts")
    )
    stats_path: str = field(default_factory=lambda: os.getenv("MINDSPARK_STATS_PATH", "mindspark_stats.json"))
    computer_move_delay: float = field(
        default_factory=lambda: float(os.getenv("MINDSPARK_COMPUTER_DELAY", "0.5"))
    )
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))


def get_settings() -> Settings:
    load_dotenv()
    return Settings()
