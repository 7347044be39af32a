"""Ошибки обработки игровых событий. Доходят только до игрока, отправившего событие."""
from .constants import (
    EV_INVALID_MOVE,
    EV_SESSION_ERROR,
    MSG_INVALID_MOVE,
    MSG_SESSION_NOT_FOUND,
)


class GameError(Exception):
    event = EV_SESSION_ERROR

    def payload(self) -> dict:
        return {"type": self.event, "message": str(self)}


class InvalidMoveError(GameError):
    """Ход отклонён: не твоя очередь, клетка занята, позиция вне поля или партия окончена."""

    event = EV_INVALID_MOVE

    def __init__(self, message: str = MSG_INVALID_MOVE):
        super().__init__(message)


class SessionError(GameError):
    """Партия не найдена или игрок в ней не участвует."""

    event = EV_SESSION_ERROR

    def __init__(self, message: str = MSG_SESSION_NOT_FOUND):
        super().__init__(message)
