"""
Менеджер WebSocket: подключения по id соединения, адресная отправка событий.
"""
import logging
from collections.abc import Iterable
from typing import Any

from fastapi import WebSocket

from .matchmaker import Outbound

logger = logging.getLogger(__name__)


class Connection:
    def __init__(self, ws: WebSocket, identity_id: str):
        self.ws = ws
        self.identity_id = identity_id


class WSManager:
    def __init__(self):
        self._by_identity: dict[str, Connection] = {}

    def connect(self, ws: WebSocket, identity_id: str) -> None:
        self._by_identity[identity_id] = Connection(ws, identity_id)

    def disconnect(self, identity_id: str) -> None:
        self._by_identity.pop(identity_id, None)

    async def send_to_user(self, identity_id: str, payload: dict[str, Any]) -> bool:
        conn = self._by_identity.get(identity_id)
        if not conn:
            return False
        try:
            await conn.ws.send_json(payload)
            return True
        except Exception as e:
            logger.warning("send_to_user %s: %s", identity_id, e)
            return False

    async def dispatch(self, messages: Iterable[Outbound]) -> None:
        # Ошибка отправки одному игроку не мешает отправке другому
        for msg in messages:
            await self.send_to_user(msg.recipient_id, msg.payload)


manager = WSManager()
