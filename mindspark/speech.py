"""Spoken narration with a request de-duplicating audio cache."""

from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict

from mindspark.genai import GenerationError, SpeechSynthesizer

logger = logging.getLogger(__name__)

DEFAULT_VOICE = "Kore"
CACHE_CAPACITY = 50


class SpeechCache:
    """Caches synthesized audio by voice and text.

    Requests for a key that is already being synthesized await the same
    task instead of calling the service again. Only successful results are
    cached; the oldest entry is evicted once the capacity is exceeded.
    """

    def __init__(self, synthesizer: SpeechSynthesizer, capacity: int = CACHE_CAPACITY):
        self.synthesizer = synthesizer
        self.capacity = capacity
        self._audio: OrderedDict[str, bytes] = OrderedDict()
        self._inflight: dict[str, asyncio.Task] = {}

    @staticmethod
    def cache_key(text: str, voice: str) -> str:
        return f"{voice}:{text}"

    def __contains__(self, key: str) -> bool:
        return key in self._audio

    def __len__(self) -> int:
        return len(self._audio)

    async def get(self, text: str, voice: str = DEFAULT_VOICE) -> bytes | None:
        if not text:
            return None
        key = self.cache_key(text, voice)
        cached = self._audio.get(key)
        if cached is not None:
            return cached

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._fetch(key, text, voice))
            self._inflight[key] = task
        return await asyncio.shield(task)

    def prefetch(self, text: str, voice: str = DEFAULT_VOICE) -> asyncio.Task | None:
        """Start filling the cache in the background (fire-and-forget)."""
        if not text:
            return None
        key = self.cache_key(text, voice)
        if key in self._audio:
            return None
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._fetch(key, text, voice))
            self._inflight[key] = task
        return task

    async def _fetch(self, key: str, text: str, voice: str) -> bytes | None:
        try:
            audio = await self.synthesizer.synthesize_speech(text, voice)
        except GenerationError as exc:
            logger.warning("Speech synthesis failed: %s", exc)
            return None
        finally:
            self._inflight.pop(key, None)

        if audio:
            self._audio[key] = audio
            while len(self._audio) > self.capacity:
                self._audio.popitem(last=False)
        return audio or None
