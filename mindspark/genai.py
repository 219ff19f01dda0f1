"""Adapter for the external generative-language and speech service."""

from __future__ import annotations

import base64
import logging
from typing import Any, Literal, Protocol, TypedDict

import httpx

logger = logging.getLogger(__name__)

Language = Literal["en", "hi", "ne"]

API_ROOT = "https://generativelanguage.googleapis.com/v1beta/models"


class GenerationError(RuntimeError):
    """The generative service failed or returned something unusable."""


class ChatTurn(TypedDict):
    role: str  # "user" | "model"
    text: str


class TextGenerator(Protocol):
    async def generate(
        self,
        prompt: str,
        *,
        system_instruction: str | None = None,
        history: list[ChatTurn] | None = None,
        json_output: bool = False,
    ) -> str: ...


class SpeechSynthesizer(Protocol):
    async def synthesize_speech(self, text: str, voice: str) -> bytes: ...


def language_instruction(lang: str) -> str:
    if lang == "hi":
        return "Respond strictly in Hindi language."
    if lang == "ne":
        return "Respond strictly in Nepali language."
    return "Respond in English."


class GeminiClient:
    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = "gemini-2.5-flash",
        tts_model: str = "gemini-2.5-flash-preview-tts",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.tts_model = tts_model
        self._client = httpx.AsyncClient(timeout=30, transport=transport)

    async def generate(
        self,
        prompt: str,
        *,
        system_instruction: str | None = None,
        history: list[ChatTurn] | None = None,
        json_output: bool = False,
    ) -> str:
        contents = [{"role": t["role"], "parts": [{"text": t["text"]}]} for t in history or []]
        contents.append({"role": "user", "parts": [{"text": prompt}]})
        payload: dict[str, Any] = {"contents": contents}
        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}
        if json_output:
            payload["generationConfig"] = {"responseMimeType": "application/json"}

        data = await self._post(self.model, payload)
        try:
            return "".join(p.get("text", "") for p in data["candidates"][0]["content"]["parts"])
        except (KeyError, IndexError, TypeError) as exc:
            raise GenerationError(f"Unexpected Gemini response: {data}") from exc

    async def synthesize_speech(self, text: str, voice: str = "Kore") -> bytes:
        payload: dict[str, Any] = {
            "contents": [{"parts": [{"text": text}]}],
            "generationConfig": {
                "responseModalities": ["AUDIO"],
                "speechConfig": {"voiceConfig": {"prebuiltVoiceConfig": {"voiceName": voice}}},
            },
        }
        data = await self._post(self.tts_model, payload)
        try:
            encoded = data["candidates"][0]["content"]["parts"][0]["inlineData"]["data"]
        except (KeyError, IndexError, TypeError) as exc:
            raise GenerationError("No audio data received from Gemini TTS") from exc
        return base64.b64decode(encoded)

    async def _post(self, model: str, payload: dict[str, Any]) -> dict[str, Any]:
        if not self.api_key:
            raise GenerationError("GEMINI_API_KEY is not configured")
        url = f"{API_ROOT}/{model}:generateContent"
        try:
            r = await self._client.post(url, params={"key": self.api_key}, json=payload)
            r.raise_for_status()
            return r.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Gemini call to %s failed with status %s", model, exc.response.status_code)
            raise GenerationError(f"Gemini returned HTTP {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            logger.error("Gemini call to %s failed: %s", model, exc)
            raise GenerationError(f"Gemini request failed: {exc}") from exc
        except ValueError as exc:
            raise GenerationError("Gemini returned invalid JSON") from exc

    async def aclose(self) -> None:
        await self._client.aclose()
