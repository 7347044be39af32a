"""
Партия крестики-нолики между двумя игроками (in-memory).
Сессия хранит только id игроков, живые соединения ищутся через ws_manager.
"""
import uuid
from dataclasses import dataclass, field

from .constants import (
    BOARD_SIZE,
    DRAW,
    STATUS_FINISHED,
    STATUS_PLAYING,
    SYMBOLS,
    WIN_LINES,
    StatePayload,
)


@dataclass(frozen=True)
class PlayerSlot:
    identity_id: str
    name: str
    symbol: str


@dataclass(frozen=True)
class Snapshot:
    board: tuple[str | None, ...]
    turn: int
    status: str
    winner: int | str | None
    players: tuple[PlayerSlot, ...]

    def as_payload(self) -> StatePayload:
        """Собрать state для отправки клиенту (без внутренних id игроков)."""
        return {
            "board": list(self.board),
            "turn": self.turn,
            "status": self.status,
            "winner": self.winner,
            "players": [{"name": p.name, "symbol": p.symbol} for p in self.players],
        }


def _empty_board() -> list[str | None]:
    return [None] * BOARD_SIZE


@dataclass
class Session:
    id: str
    players: tuple[PlayerSlot, PlayerSlot]
    board: list[str | None] = field(default_factory=_empty_board)
    turn: int = 0
    status: str = STATUS_PLAYING
    winner: int | str | None = None  # None | 0 | 1 | "draw"

    @classmethod
    def create(cls, a_id: str, a_name: str, b_id: str, b_name: str) -> "Session":
        """Первый игрок получает X и ходит первым, второй получает O."""
        return cls(
            id=uuid.uuid4().hex[:12],
            players=(
                PlayerSlot(identity_id=a_id, name=a_name, symbol=SYMBOLS[0]),
                PlayerSlot(identity_id=b_id, name=b_name, symbol=SYMBOLS[1]),
            ),
        )

    @property
    def is_finished(self) -> bool:
        return self.status == STATUS_FINISHED

    def index_of(self, identity_id: str) -> int | None:
        for i, p in enumerate(self.players):
            if p.identity_id == identity_id:
                return i
        return None

    def opponent_of(self, identity_id: str) -> PlayerSlot | None:
        i = self.index_of(identity_id)
        if i is None:
            return None
        return self.players[1 - i]

    def attempt_move(self, player_index: int, position) -> bool:
        """
        Сделать ход. Возвращает False и ничего не меняет, если ход нелегален.
        """
        if self.status != STATUS_PLAYING or player_index != self.turn:
            return False
        # True не должен считаться клеткой 1 (bool является подклассом int)
        if isinstance(position, bool) or not isinstance(position, int):
            return False
        if not 0 <= position < BOARD_SIZE or self.board[position] is not None:
            return False
        self.board[position] = self.players[player_index].symbol
        if self._has_winning_line():
            self.status = STATUS_FINISHED
            self.winner = player_index
        elif all(cell is not None for cell in self.board):
            self.status = STATUS_FINISHED
            self.winner = DRAW
        else:
            self.turn = 1 - self.turn
        return True

    def _has_winning_line(self) -> bool:
        b = self.board
        return any(
            b[i] is not None and b[i] == b[j] == b[k]
            for i, j, k in WIN_LINES
        )

    def restart(self) -> None:
        # Разрешено в любом статусе, в том числе посреди партии
        self.board = _empty_board()
        self.turn = 0
        self.status = STATUS_PLAYING
        self.winner = None

    def snapshot(self) -> Snapshot:
        return Snapshot(
            board=tuple(self.board),
            turn=self.turn,
            status=self.status,
            winner=self.winner,
            players=self.players,
        )

