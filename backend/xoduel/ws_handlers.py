"""
Обработка сообщений WebSocket: search_player, leave_queue, make_move, restart_game.
При отключении игрок убирается из очереди, его партия закрывается с уведомлением соперника.
"""
import json
import logging
import uuid

from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect

from .constants import (
    EV_LEAVE_QUEUE,
    EV_MAKE_MOVE,
    EV_RESTART_GAME,
    EV_SEARCH_PLAYER,
)
from .errors import GameError
from .matchmaker import matchmaker
from .ws_manager import manager

logger = logging.getLogger(__name__)


async def handle_ws_message(raw: str, identity_id: str) -> bool:
    """
    Обрабатывает одно сообщение от клиента.
    Возвращает False если соединение нужно закрыть.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("WS: invalid JSON from %s: %s", identity_id, e)
        return True
    if not isinstance(data, dict):
        logger.warning("WS: unexpected message from %s: %r", identity_id, data)
        return True
    t = data.get("type")
    logger.info("WS: msg from %s type=%s", identity_id, t)
    try:
        if t == EV_SEARCH_PLAYER:
            out = matchmaker.request_match(identity_id, data.get("name"))
        elif t == EV_LEAVE_QUEUE:
            matchmaker.leave_queue(identity_id)
            out = []
        elif t == EV_MAKE_MOVE:
            out = matchmaker.route_move(identity_id, data.get("session_id"), data.get("position"))
        elif t == EV_RESTART_GAME:
            out = matchmaker.route_restart(identity_id, data.get("session_id"))
        else:
            logger.warning("WS: unknown message type %r from %s", t, identity_id)
            return True
    except GameError as e:
        logger.info("WS: %s for %s: %s", e.event, identity_id, e)
        await manager.send_to_user(identity_id, e.payload())
        return True
    await manager.dispatch(out)
    return True


async def ws_loop(ws: WebSocket) -> None:
    """
    Соединение анонимное: id выдаётся при подключении. Дальше цикл приёма сообщений.
    """
    identity_id = uuid.uuid4().hex
    try:
        await ws.accept()
        manager.connect(ws, identity_id)
        matchmaker.connect(identity_id)
        logger.info("WS: accepted identity_id=%s", identity_id)
        while True:
            msg = await ws.receive_text()
            if not await handle_ws_message(msg, identity_id):
                break
    except WebSocketDisconnect as e:
        logger.info("WS: client disconnected code=%s reason=%s identity_id=%s", e.code, e.reason or "", identity_id)
    except Exception as e:
        logger.exception("WS: error identity_id=%s: %s", identity_id, e)
    finally:
        manager.disconnect(identity_id)
        await manager.dispatch(matchmaker.handle_disconnect(identity_id))
        logger.info("WS: disconnected identity_id=%s", identity_id)
