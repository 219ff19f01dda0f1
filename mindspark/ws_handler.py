"""WebSocket endpoints and message routing for the board games."""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from mindspark.memory import MemoryGame
from mindspark.models import (
    ConfigureMsg,
    ErrorMsg,
    FlipMsg,
    MoveMsg,
    ResetMsg,
    RestartMsg,
    parse_memory_message,
    parse_tictactoe_message,
)
from mindspark.sessions import MemorySession, TicTacToeSession
from mindspark.tictactoe import TicTacToeGame

router = APIRouter()


def make_push(ws: WebSocket):
    async def push(msg_dict: dict):
        try:
            await ws.send_json(msg_dict)
        except Exception:
            pass

    return push


@router.websocket("/ws/tictactoe")
async def tictactoe_endpoint(ws: WebSocket):
    await ws.accept()
    services = ws.app.state.services
    session = TicTacToeSession(
        push=make_push(ws),
        game=TicTacToeGame(on_bonus=services.tracker.award),
        computer_delay=services.computer_delay,
    )
    await session.send_state()
    try:
        while True:
            data = await ws.receive_json()
            msg = parse_tictactoe_message(data)
            if msg is None:
                await ws.send_json(ErrorMsg(message="Unknown or invalid message").model_dump())
                continue

            if isinstance(msg, MoveMsg):
                if not await session.move(msg.index):
                    await ws.send_json(ErrorMsg(message="Move not accepted").model_dump())
                    continue

            elif isinstance(msg, ConfigureMsg):
                try:
                    await session.configure(msg.grid_size, msg.num_players)
                except ValueError as exc:
                    await ws.send_json(ErrorMsg(message=str(exc)).model_dump())
                    continue

            elif isinstance(msg, ResetMsg):
                await session.reset()

            await session.send_state()
    except WebSocketDisconnect:
        pass
    finally:
        session.close()


@router.websocket("/ws/memory")
async def memory_endpoint(ws: WebSocket):
    await ws.accept()
    services = ws.app.state.services
    session = MemorySession(push=make_push(ws), game=MemoryGame(on_bonus=services.tracker.award))
    await session.send_state()
    try:
        while True:
            data = await ws.receive_json()
            msg = parse_memory_message(data)
            if msg is None:
                await ws.send_json(ErrorMsg(message="Unknown or invalid message").model_dump())
                continue

            if isinstance(msg, FlipMsg):
                if not await session.flip(msg.index):
                    await ws.send_json(ErrorMsg(message="Card cannot be flipped").model_dump())
                    continue

            elif isinstance(msg, RestartMsg):
                await session.restart()

            await session.send_state()
    except WebSocketDisconnect:
        pass
    finally:
        session.close()
