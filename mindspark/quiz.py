"""AI-generated multiple-choice quiz."""

from __future__ import annotations

import json
import logging
from typing import Callable, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from mindspark.genai import GenerationError, TextGenerator, language_instruction

logger = logging.getLogger(__name__)

QUESTION_COUNT = 5

Difficulty = Literal["Easy", "Medium", "Hard", "Expert"]


class QuizConfig(BaseModel):
    topic: str
    difficulty: Difficulty = "Medium"


class QuizQuestion(BaseModel):
    question: str
    options: list[str] = Field(min_length=4, max_length=4)
    correct_answer_index: int = Field(alias="correctAnswerIndex", ge=0, le=3)
    explanation: str

    model_config = {"populate_by_name": True}


_questions = TypeAdapter(list[QuizQuestion])


def build_quiz_prompt(config: QuizConfig, lang: str) -> str:
    return (
        f'Generate {QUESTION_COUNT} multiple-choice questions about "{config.topic}" '
        f'at a "{config.difficulty}" difficulty level. {language_instruction(lang)}\n'
        "Ensure the 'options' and 'explanation' are in the target language. "
        "The keys of the JSON object must remain in English.\n"
        "Return a JSON array of objects with keys: question (string), options "
        "(array of 4 strings), correctAnswerIndex (integer 0-3), explanation (string)."
    )


async def generate_quiz(generator: TextGenerator, config: QuizConfig, lang: str = "en") -> list[QuizQuestion]:
    if not config.topic.strip():
        raise ValueError("Quiz topic must not be empty")
    text = await generator.generate(build_quiz_prompt(config, lang), json_output=True)
    if not text:
        raise GenerationError("No data returned from Gemini")
    try:
        questions = _questions.validate_python(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.error("Error parsing quiz for topic %r: %s", config.topic, exc)
        raise GenerationError("Quiz response was not valid") from exc
    if not questions:
        raise GenerationError("Quiz response contained no questions")
    return questions


class QuizSession:
    def __init__(
        self,
        questions: list[QuizQuestion],
        *,
        on_sound: Callable[[str], None] | None = None,
    ):
        self.questions = questions
        self.on_sound = on_sound
        self.answers: list[int | None] = [None] * len(questions)
        self.current_index = 0
        self.score = 0
        self.finished = False

    @property
    def current(self) -> QuizQuestion | None:
        if self.finished:
            return None
        return self.questions[self.current_index]

    def answer(self, option_index: int) -> bool | None:
        """Record an answer for the current question. None if already answered."""
        question = self.current
        if question is None or self.answers[self.current_index] is not None:
            return None
        if option_index < 0 or option_index >= len(question.options):
            return None

        self.answers[self.current_index] = option_index
        correct = option_index == question.correct_answer_index
        if correct:
            self.score += 1
        if self.on_sound is not None:
            self.on_sound("success" if correct else "error")
        return correct

    def next_question(self) -> QuizQuestion | None:
        if self.finished:
            return None
        if self.current_index < len(self.questions) - 1:
            self.current_index += 1
            return self.current
        self.finished = True
        logger.info("Quiz finished: %d/%d", self.score, len(self.questions))
        return None

    def narration_text(self) -> str:
        q = self.current
        if q is None:
            return ""
        return f"Question {self.current_index + 1}. {q.question}. Options: {', '.join(q.options)}."
