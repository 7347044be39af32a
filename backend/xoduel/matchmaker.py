"""
Очередь поиска соперника и реестр партий (in-memory).
Все операции синхронные: состояние меняется целиком до того, как
обработчик отдаст управление event loop, поэтому события не перемешиваются.
Операции возвращают список исходящих сообщений, рассылает их ws_handlers.
"""
import logging
from collections import deque
from dataclasses import dataclass

from .constants import (
    EV_MATCH_FOUND,
    EV_OPPONENT_DISCONNECTED,
    EV_STATE_UPDATE,
    EV_WAITING,
    MSG_NOT_A_PARTICIPANT,
    MSG_SESSION_NOT_FOUND,
)
from .errors import InvalidMoveError, SessionError
from .session import Session

logger = logging.getLogger(__name__)


@dataclass
class Identity:
    id: str
    name: str = ""
    symbol: str | None = None
    session_id: str | None = None  # id партии, а не ссылка на объект


@dataclass(frozen=True)
class Outbound:
    recipient_id: str
    payload: dict


def display_name_for(identity_id: str, name) -> str:
    name = name.strip() if isinstance(name, str) else ""
    return name or f"player_{identity_id[:8]}"


class Matchmaker:
    def __init__(self):
        self._identities: dict[str, Identity] = {}
        self._queue: deque[str] = deque()
        self._sessions: dict[str, Session] = {}

    def clear(self) -> None:
        self._identities.clear()
        self._queue.clear()
        self._sessions.clear()

    def connect(self, identity_id: str) -> Identity:
        ident = self._identities.get(identity_id)
        if ident is None:
            ident = Identity(id=identity_id)
            self._identities[identity_id] = ident
        return ident

    def get_identity(self, identity_id: str) -> Identity | None:
        return self._identities.get(identity_id)

    def get_session(self, session_id) -> Session | None:
        if not isinstance(session_id, str):
            return None
        return self._sessions.get(session_id)

    def is_waiting(self, identity_id: str) -> bool:
        return identity_id in self._queue

    def stats(self) -> dict[str, int]:
        """Сколько игроков ждут соперника и сколько партий в реестре."""
        return {"waiting": len(self._queue), "sessions": len(self._sessions)}

    def request_match(self, identity_id: str, display_name) -> list[Outbound]:
        """
        Встать в очередь или сразу создать партию с первым ждущим.
        Повторный поиск из очереди не создаёт дубль, поиск из партии
        сначала закрывает старую партию.
        """
        me = self.connect(identity_id)
        me.name = display_name_for(identity_id, display_name)
        if self.is_waiting(identity_id):
            return [Outbound(identity_id, {"type": EV_WAITING})]
        out: list[Outbound] = []
        if self._session_of(identity_id) is not None:
            out.extend(self._close_session_of(identity_id))
        opponent = self._pop_waiting()
        if opponent is None:
            self._queue.append(identity_id)
            logger.info("Match: %s (%s) is waiting", me.name, identity_id)
            out.append(Outbound(identity_id, {"type": EV_WAITING}))
            return out
        session = Session.create(opponent.id, opponent.name, me.id, me.name)
        self._sessions[session.id] = session
        state = session.snapshot().as_payload()
        for index, slot in enumerate(session.players):
            ident = self._identities[slot.identity_id]
            ident.session_id = session.id
            ident.symbol = slot.symbol
            out.append(Outbound(slot.identity_id, {
                "type": EV_MATCH_FOUND,
                "session_id": session.id,
                "player_index": index,
                "opponent_name": session.players[1 - index].name,
                "symbol": slot.symbol,
                "state": state,
            }))
        logger.info("Match: session %s created, %s vs %s", session.id, opponent.name, me.name)
        return out

    def leave_queue(self, identity_id: str) -> bool:
        """Убрать из очереди. Возвращает True если был в очереди."""
        try:
            self._queue.remove(identity_id)
        except ValueError:
            return False
        logger.info("Match: %s left the queue", identity_id)
        return True

    def route_move(self, identity_id: str, session_id, position) -> list[Outbound]:
        session = self.get_session(session_id)
        if session is None:
            raise SessionError(MSG_SESSION_NOT_FOUND)
        index = session.index_of(identity_id)
        if index is None:
            raise SessionError(MSG_NOT_A_PARTICIPANT)
        if not session.attempt_move(index, position):
            raise InvalidMoveError()
        if session.is_finished:
            logger.info("Match: session %s finished, winner=%s", session.id, session.winner)
        return self._state_update(session)

    def route_restart(self, identity_id: str, session_id) -> list[Outbound]:
        session = self.get_session(session_id)
        if session is None or session.index_of(identity_id) is None:
            return []
        session.restart()
        logger.info("Match: session %s restarted by %s", session.id, identity_id)
        return self._state_update(session)

    def handle_disconnect(self, identity_id: str) -> list[Outbound]:
        """Убрать игрока из очереди и закрыть его партию. Никогда не бросает исключений."""
        self.leave_queue(identity_id)
        out = self._close_session_of(identity_id)
        self._identities.pop(identity_id, None)
        return out

    def _pop_waiting(self) -> Identity | None:
        while self._queue:
            ident = self._identities.get(self._queue.popleft())
            if ident is not None and ident.session_id is None:
                return ident
        return None

    def _session_of(self, identity_id: str) -> Session | None:
        # По инварианту игрок состоит не более чем в одной партии
        for session in self._sessions.values():
            if session.index_of(identity_id) is not None:
                return session
        return None

    def _close_session_of(self, identity_id: str) -> list[Outbound]:
        session = self._session_of(identity_id)
        if session is None:
            return []
        del self._sessions[session.id]
        for slot in session.players:
            ident = self._identities.get(slot.identity_id)
            if ident is not None:
                ident.session_id = None
                ident.symbol = None
        logger.info("Match: session %s removed, %s left", session.id, identity_id)
        opponent = session.opponent_of(identity_id)
        return [Outbound(opponent.identity_id, {"type": EV_OPPONENT_DISCONNECTED})]

    def _state_update(self, session: Session) -> list[Outbound]:
        payload = {"type": EV_STATE_UPDATE, "state": session.snapshot().as_payload()}
        return [Outbound(slot.identity_id, payload) for slot in session.players]


matchmaker = Matchmaker()
