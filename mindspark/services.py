"""Shared collaborators wired into the application at startup."""

from __future__ import annotations

from dataclasses import dataclass, field

from mindspark.chat_games import ChatGameSession
from mindspark.genai import GeminiClient, SpeechSynthesizer, TextGenerator
from mindspark.progress import ProgressTracker
from mindspark.quiz import QuizSession
from mindspark.sessions import COMPUTER_MOVE_DELAY, SessionRegistry
from mindspark.settings import Settings
from mindspark.speech import SpeechCache


@dataclass
class Services:
    tracker: ProgressTracker
    generator: TextGenerator
    speech: SpeechCache
    computer_delay: float = COMPUTER_MOVE_DELAY
    quizzes: SessionRegistry[QuizSession] = field(default_factory=SessionRegistry)
    chats: SessionRegistry[ChatGameSession] = field(default_factory=SessionRegistry)


def build_services(settings: Settings) -> Services:
    client = GeminiClient(
        settings.gemini_api_key,
        model=settings.gemini_model,
        tts_model=settings.gemini_tts_model,
    )
    synthesizer: SpeechSynthesizer = client
    return Services(
        tracker=ProgressTracker(settings.stats_path),
        generator=client,
        speech=SpeechCache(synthesizer),
        computer_delay=settings.computer_move_delay,
    )
