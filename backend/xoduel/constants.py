"""Константы игры и протокола обмена сообщениями."""
from typing import TypedDict

SYMBOLS = ("X", "O")
BOARD_SIZE = 9

# Строки, столбцы, диагонали
WIN_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

STATUS_PLAYING = "playing"
STATUS_FINISHED = "finished"
DRAW = "draw"

# Входящие события (клиент -> сервер)
EV_SEARCH_PLAYER = "search_player"
EV_LEAVE_QUEUE = "leave_queue"
EV_MAKE_MOVE = "make_move"
EV_RESTART_GAME = "restart_game"

# Исходящие события (сервер -> клиент)
EV_WAITING = "waiting"
EV_MATCH_FOUND = "match_found"
EV_STATE_UPDATE = "state_update"
EV_INVALID_MOVE = "invalid_move"
EV_SESSION_ERROR = "session_error"
EV_OPPONENT_DISCONNECTED = "opponent_disconnected"

MSG_INVALID_MOVE = "Invalid move"
MSG_SESSION_NOT_FOUND = "Game not found"
MSG_NOT_A_PARTICIPANT = "You are not in this game"


class PlayerSummary(TypedDict):
    name: str
    symbol: str


class StatePayload(TypedDict):
    board: list[str | None]
    turn: int
    status: str
    winner: int | str | None
    players: list[PlayerSummary]
