"""Tests for quiz generation and scoring."""

import json

import pytest

from mindspark.genai import GenerationError
from mindspark.quiz import QuizConfig, QuizQuestion, QuizSession, generate_quiz

from conftest import FakeGenerator


def make_questions(n=3):
    return [
        {
            "question": f"Question {i}?",
            "options": ["a", "b", "c", "d"],
            "correctAnswerIndex": i % 4,
            "explanation": f"Because {i}.",
        }
        for i in range(n)
    ]


class TestGenerateQuiz:
    @pytest.mark.asyncio
    async def test_parses_questions(self):
        generator = FakeGenerator([json.dumps(make_questions(5))])
        questions = await generate_quiz(generator, QuizConfig(topic="Space", difficulty="Hard"), "hi")
        assert len(questions) == 5
        assert questions[1].correct_answer_index == 1
        call = generator.calls[0]
        assert call["json_output"] is True
        assert '"Space"' in call["prompt"]
        assert '"Hard"' in call["prompt"]
        assert "Hindi" in call["prompt"]

    @pytest.mark.asyncio
    async def test_blank_topic_rejected(self):
        generator = FakeGenerator()
        with pytest.raises(ValueError):
            await generate_quiz(generator, QuizConfig(topic="   "))
        assert generator.calls == []

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        generator = FakeGenerator(["not json"])
        with pytest.raises(GenerationError):
            await generate_quiz(generator, QuizConfig(topic="History"))

    @pytest.mark.asyncio
    async def test_wrong_option_count(self):
        bad = make_questions(1)
        bad[0]["options"] = ["only", "three", "options"]
        generator = FakeGenerator([json.dumps(bad)])
        with pytest.raises(GenerationError):
            await generate_quiz(generator, QuizConfig(topic="History"))

    @pytest.mark.asyncio
    async def test_empty_response(self):
        generator = FakeGenerator([""])
        with pytest.raises(GenerationError):
            await generate_quiz(generator, QuizConfig(topic="History"))


class TestQuizSession:
    def make_session(self, sounds=None):
        questions = [QuizQuestion.model_validate(q) for q in make_questions(3)]
        return QuizSession(questions, on_sound=sounds.append if sounds is not None else None)

    def test_correct_and_wrong_answers(self):
        sounds = []
        quiz = self.make_session(sounds)
        assert quiz.answer(0) is True
        quiz.next_question()
        assert quiz.answer(3) is False
        assert quiz.score == 1
        assert sounds == ["success", "error"]

    def test_answer_only_once(self):
        quiz = self.make_session()
        quiz.answer(0)
        assert quiz.answer(1) is None
        assert quiz.answers[0] == 0

    def test_invalid_option(self):
        quiz = self.make_session()
        assert quiz.answer(4) is None
        assert quiz.answers[0] is None

    def test_finishes_after_last_question(self):
        quiz = self.make_session()
        quiz.next_question()
        quiz.next_question()
        assert quiz.finished is False
        assert quiz.next_question() is None
        assert quiz.finished is True
        assert quiz.current is None
        assert quiz.answer(0) is None
        assert quiz.narration_text() == ""

    def test_narration_text(self):
        quiz = self.make_session()
        text = quiz.narration_text()
        assert text.startswith("Question 1. Question 0?")
        assert "a, b, c, d" in text
