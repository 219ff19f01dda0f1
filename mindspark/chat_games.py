"""Open-ended guessing games hosted by the generative service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from mindspark.genai import ChatTurn, GenerationError, TextGenerator, language_instruction

logger = logging.getLogger(__name__)

CHAT_XP = 30
WIN_MARKER = "GAME_OVER_WIN"

START_PROMPT = "Let's start the game!"
GIVE_UP_PROMPT = "I give up. What was the answer?"
ERROR_GAME = "Could not start the game. Please try again later."
CONNECTION_ERROR = "Connection error."

HOST_RULES = {
    "mystery": """You are the host of a "20 Questions" style guessing game called Mystery Object.
1. Pick a random, common object (e.g., a toaster, the moon, a pencil, a cat). Do NOT reveal it yet.
2. Briefly describe the object in a cryptic but solvable riddle (max 2 sentences).
3. The user will try to guess what it is.
4. If they guess correctly, congratulate them and briefly explain the object, then say "GAME_OVER_WIN".
5. If they are wrong, give a subtle hint related to their guess.
6. Keep your responses concise and fun.""",
    "emoji": """You are the host of the "Emoji Cinema" game.
1. Pick a very famous movie (global or Bollywood/regional if Hindi/Nepali requested). Do NOT reveal the title.
2. Output ONLY a string of 3-5 emojis that represent the plot of that movie.
3. The user will guess the movie title.
4. If they are correct, say "Correct! It was [Movie Title]. GAME_OVER_WIN".
5. If they are wrong, give them a text hint about the genre or a lead actor, but do not use the title.
6. Be encouraging.""",
    "truth": """You are the host of 'Two Truths and a Lie'.
1. Generate 3 interesting statements about a specific topic (e.g., Biology, Space, History).
2. Two must be true, one must be false. Do NOT reveal which is which yet.
3. The user will guess which one is the lie.
4. If they guess correctly, say "Correct! The lie was [Statement]. [Brief explanation]. GAME_OVER_WIN".
5. If they are wrong, say "Not quite. That was actually true." and give a hint.""",
    "riddle": """You are the Riddle Master.
1. Present a clever riddle (rhyming if possible).
2. The user will try to guess the answer.
3. If they are correct, say "Brilliant! The answer is [Answer]. GAME_OVER_WIN".
4. If they are wrong, give a subtle hint.
5. Keep the riddle solvable.""",
    "odd": """You are the host of 'Odd One Out'.
1. Generate a list of 4 items/words. Three share a subtle commonality, one does not.
2. Output ONLY the list of 4 items.
3. The user will guess which one is the odd one out.
4. If they guess correctly, explain why and say "GAME_OVER_WIN".
5. If they are wrong, give a hint about the common thread of the others.""",
}

CUSTOM_RULES = """You are an AI Game Host. The user wants to play a game described as: "{description}".
1. Adapt your role, personality, and game rules to fit the user's description exactly.
2. Start the game immediately with an introductory message or the first challenge.
3. If the user's request is a game with a win condition (like guessing something), append "GAME_OVER_WIN" to your response when they win.
4. Keep the interaction engaging and immersive.
5. If the user's prompt is unclear, ask for clarification before starting."""

GAME_TYPES = tuple(HOST_RULES) + ("custom",)


class ChatStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass
class ChatMessage:
    sender: str  # "user" | "ai" | "system"
    text: str


def system_instruction(game_type: str, lang: str, custom_prompt: str | None = None) -> str:
    if game_type == "custom":
        if not custom_prompt or not custom_prompt.strip():
            raise ValueError("A custom game needs a description")
        rules = CUSTOM_RULES.format(description=custom_prompt.strip())
    elif game_type in HOST_RULES:
        rules = HOST_RULES[game_type]
    else:
        raise ValueError(f"Unknown game type: {game_type}")
    head, _, tail = rules.partition("\n")
    return f"{head}\n{language_instruction(lang)}\n{tail}"


class ChatGameSession:
    def __init__(
        self,
        generator: TextGenerator,
        game_type: str,
        lang: str = "en",
        custom_prompt: str | None = None,
        *,
        on_bonus: Callable[[int], None] | None = None,
        on_reply: Callable[[str], None] | None = None,
    ):
        self.generator = generator
        self.game_type = game_type
        self.instruction = system_instruction(game_type, lang, custom_prompt)
        self.on_bonus = on_bonus
        self.on_reply = on_reply
        self.messages: list[ChatMessage] = []
        self.history: list[ChatTurn] = []
        self.status = ChatStatus.IDLE
        self.bonus_awarded = False
        self.busy = False

    async def _ask(self, text: str) -> str:
        reply = await self.generator.generate(
            text,
            system_instruction=self.instruction,
            history=list(self.history),
        )
        self.history.append({"role": "user", "text": text})
        self.history.append({"role": "model", "text": reply})
        return reply

    def _add_ai(self, text: str) -> None:
        self.messages.append(ChatMessage("ai", text))
        if self.on_reply is not None:
            self.on_reply(text)

    async def start(self) -> None:
        if self.status is not ChatStatus.IDLE or self.messages:
            return
        self.busy = True
        try:
            reply = await self._ask(START_PROMPT)
        except GenerationError as exc:
            # The session stays idle, which rejects any further input.
            logger.error("Could not start %s game: %s", self.game_type, exc)
            self.messages.append(ChatMessage("system", ERROR_GAME))
            return
        finally:
            self.busy = False
        self._add_ai(reply)
        self.status = ChatStatus.PLAYING
        logger.info("Started %s chat game", self.game_type)

    async def send(self, text: str) -> bool:
        text = text.strip()
        if not text or self.busy or self.status is not ChatStatus.PLAYING:
            return False
        self.messages.append(ChatMessage("user", text))
        self.busy = True
        try:
            reply = await self._ask(text)
        except GenerationError as exc:
            logger.warning("Chat game %s message failed: %s", self.game_type, exc)
            self.messages.append(ChatMessage("system", CONNECTION_ERROR))
            return True
        finally:
            self.busy = False

        if WIN_MARKER in reply:
            self._add_ai(reply.replace(WIN_MARKER, "").strip())
            self.status = ChatStatus.WON
            if not self.bonus_awarded:
                self.bonus_awarded = True
                if self.on_bonus is not None:
                    self.on_bonus(CHAT_XP)
        else:
            self._add_ai(reply)
        return True

    async def give_up(self) -> bool:
        if self.busy or self.status is not ChatStatus.PLAYING:
            return False
        self.messages.append(ChatMessage("user", GIVE_UP_PROMPT))
        self.busy = True
        try:
            reply = await self._ask(GIVE_UP_PROMPT)
        except GenerationError as exc:
            logger.warning("Chat game %s give-up failed: %s", self.game_type, exc)
            self.messages.append(ChatMessage("system", ERROR_GAME))
            return True
        finally:
            self.busy = False
        self._add_ai(reply.replace(WIN_MARKER, "").strip())
        self.status = ChatStatus.LOST
        return True
