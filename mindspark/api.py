"""HTTP routes: progress, quiz, chat games and narration."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from mindspark.chat_games import ChatGameSession, ChatStatus
from mindspark.genai import GenerationError
from mindspark.models import (
    AnswerRequest,
    ChatGameRequest,
    ChatMessageRequest,
    QuizRequest,
    SpeechRequest,
    UserStatsView,
)
from mindspark.quiz import QuizConfig, QuizSession, generate_quiz
from mindspark.services import Services

router = APIRouter()

PCM_MEDIA_TYPE = "audio/L16;rate=24000;channels=1"


def _services(request: Request) -> Services:
    return request.app.state.services


def _quiz_view(session_id: str, quiz: QuizSession) -> dict:
    current = quiz.current
    return {
        "id": session_id,
        "index": quiz.current_index,
        "total": len(quiz.questions),
        "score": quiz.score,
        "finished": quiz.finished,
        "answers": quiz.answers,
        "question": current.model_dump() if current else None,
    }


def _chat_view(session_id: str | None, chat: ChatGameSession) -> dict:
    return {
        "id": session_id,
        "game_type": chat.game_type,
        "status": chat.status.value,
        "messages": [{"sender": m.sender, "text": m.text} for m in chat.messages],
    }


@router.get("/stats", response_model=UserStatsView)
async def get_stats(request: Request):
    return _services(request).tracker.stats.model_dump()


# ---------------------------------------------------------------------------
# Quiz
# ---------------------------------------------------------------------------

@router.post("/quiz")
async def create_quiz(req: QuizRequest, request: Request):
    services = _services(request)
    config = QuizConfig(topic=req.topic, difficulty=req.difficulty)
    try:
        questions = await generate_quiz(services.generator, config, req.language)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except GenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))
    quiz = QuizSession(questions)
    session_id = services.quizzes.add(quiz)
    services.speech.prefetch(quiz.narration_text())
    return _quiz_view(session_id, quiz)


def _get_quiz(services: Services, session_id: str) -> QuizSession:
    try:
        return services.quizzes.get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Quiz not found")


@router.post("/quiz/{session_id}/answer")
async def answer_quiz(session_id: str, req: AnswerRequest, request: Request):
    services = _services(request)
    quiz = _get_quiz(services, session_id)
    question = quiz.current
    correct = quiz.answer(req.option_index)
    if correct is None:
        raise HTTPException(status_code=400, detail="Answer not accepted")
    view = _quiz_view(session_id, quiz)
    view["correct"] = correct
    view["explanation"] = question.explanation
    return view


@router.post("/quiz/{session_id}/next")
async def next_question(session_id: str, request: Request):
    services = _services(request)
    quiz = _get_quiz(services, session_id)
    quiz.next_question()
    if quiz.finished:
        services.quizzes.remove(session_id)
    else:
        services.speech.prefetch(quiz.narration_text())
    return _quiz_view(session_id, quiz)


@router.delete("/quiz/{session_id}")
async def end_quiz(session_id: str, request: Request):
    if _services(request).quizzes.remove(session_id) is None:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return {"status": "ended"}


# ---------------------------------------------------------------------------
# Chat games
# ---------------------------------------------------------------------------

@router.post("/games/chat")
async def create_chat_game(req: ChatGameRequest, request: Request):
    services = _services(request)
    try:
        chat = ChatGameSession(
            services.generator,
            req.game_type,
            req.language,
            req.custom_prompt,
            on_bonus=services.tracker.award,
            on_reply=services.speech.prefetch,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    await chat.start()
    if chat.status is ChatStatus.IDLE:
        # A game that could not start is never registered.
        return _chat_view(None, chat)
    session_id = services.chats.add(chat)
    return _chat_view(session_id, chat)


def _get_chat(services: Services, session_id: str) -> ChatGameSession:
    try:
        return services.chats.get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Game not found")


@router.post("/games/chat/{session_id}/messages")
async def send_chat_message(session_id: str, req: ChatMessageRequest, request: Request):
    chat = _get_chat(_services(request), session_id)
    if not await chat.send(req.text):
        raise HTTPException(status_code=409, detail="Game is not accepting messages")
    return _chat_view(session_id, chat)


@router.post("/games/chat/{session_id}/give-up")
async def give_up_chat_game(session_id: str, request: Request):
    chat = _get_chat(_services(request), session_id)
    if not await chat.give_up():
        raise HTTPException(status_code=409, detail="Game is not in progress")
    return _chat_view(session_id, chat)


@router.delete("/games/chat/{session_id}")
async def end_chat_game(session_id: str, request: Request):
    if _services(request).chats.remove(session_id) is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return {"status": "ended"}


# ---------------------------------------------------------------------------
# Narration
# ---------------------------------------------------------------------------

@router.post("/tts")
async def speak(req: SpeechRequest, request: Request):
    audio = await _services(request).speech.get(req.text, req.voice)
    if not audio:
        raise HTTPException(status_code=502, detail="No audio data received")
    return Response(content=audio, media_type=PCM_MEDIA_TYPE)
