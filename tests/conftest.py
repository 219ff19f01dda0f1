"""Shared fakes for the external generative service."""

import pytest

from mindspark.genai import GenerationError
from mindspark.progress import ProgressTracker
from mindspark.services import Services
from mindspark.speech import SpeechCache


class FakeGenerator:
    """Returns queued replies in order; an Exception in the queue is raised."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []

    async def generate(self, prompt, *, system_instruction=None, history=None, json_output=False):
        self.calls.append(
            {
                "prompt": prompt,
                "system_instruction": system_instruction,
                "history": list(history or []),
                "json_output": json_output,
            }
        )
        if not self.replies:
            raise GenerationError("no reply queued")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeSynthesizer:
    def __init__(self, audio=b"\x01\x02", fail=False):
        self.audio = audio
        self.fail = fail
        self.calls = []

    async def synthesize_speech(self, text, voice):
        self.calls.append((text, voice))
        if self.fail:
            raise GenerationError("tts down")
        return self.audio


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def synthesizer():
    return FakeSynthesizer()


@pytest.fixture
def services(generator, synthesizer, tmp_path):
    return Services(
        tracker=ProgressTracker(tmp_path / "stats.json"),
        generator=generator,
        speech=SpeechCache(synthesizer),
        computer_delay=0,
    )
