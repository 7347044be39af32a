import pytest

from xoduel.session import Session


def _session() -> Session:
    return Session.create("a", "Alice", "b", "Bob")


def _play(s: Session, *positions: int) -> None:
    for pos in positions:
        assert s.attempt_move(s.turn, pos)


def _state(s: Session):
    return list(s.board), s.turn, s.status, s.winner


def test_create_assigns_symbols_and_initial_state() -> None:
    s = _session()
    assert [p.symbol for p in s.players] == ["X", "O"]
    assert [p.name for p in s.players] == ["Alice", "Bob"]
    assert s.board == [None] * 9
    assert s.turn == 0
    assert s.status == "playing"
    assert s.winner is None


def test_session_ids_are_unique() -> None:
    assert _session().id != _session().id


def test_turn_alternates_on_successful_moves() -> None:
    s = _session()
    turns = []
    for pos in (4, 0, 8, 2):
        turns.append(s.turn)
        assert s.attempt_move(s.turn, pos)
    assert turns == [0, 1, 0, 1]
    assert s.turn == 0


def test_row_win_example() -> None:
    s = _session()
    _play(s, 0, 4, 1, 7, 2)
    assert s.board[:3] == ["X", "X", "X"]
    assert s.status == "finished"
    assert s.winner == 0


@pytest.mark.parametrize(
    "moves, winner",
    [
        ((0, 1, 3, 2, 6), 0),  # столбец 0,3,6
        ((0, 2, 1, 4, 8, 6), 1),  # диагональ 2,4,6 у O
        ((4, 1, 0, 2, 8), 0),  # диагональ 0,4,8
        ((0, 3, 1, 4, 8, 5), 1),  # строка 3,4,5
    ],
)
def test_win_lines(moves, winner) -> None:
    s = _session()
    _play(s, *moves)
    assert s.status == "finished"
    assert s.winner == winner


def test_full_board_without_line_is_draw() -> None:
    s = _session()
    # X O X / X O O / O X X
    _play(s, 0, 1, 2, 4, 3, 5, 7, 6, 8)
    assert all(cell is not None for cell in s.board)
    assert s.status == "finished"
    assert s.winner == "draw"


def test_win_on_last_cell_beats_draw() -> None:
    s = _session()
    # X O X / O X O / O X X: последний ход X в 8 замыкает диагональ
    _play(s, 0, 1, 2, 3, 4, 5, 7, 6, 8)
    assert s.winner == 0


@pytest.mark.parametrize(
    "player_index, position",
    [
        (1, 0),  # не его ход
        (0, -1),
        (0, 9),
        (0, "4"),
        (0, None),
        (0, True),
        (0, 2.0),
    ],
)
def test_rejected_moves_leave_state_unchanged(player_index, position) -> None:
    s = _session()
    before = _state(s)
    assert not s.attempt_move(player_index, position)
    assert _state(s) == before


def test_occupied_cell_is_rejected() -> None:
    s = _session()
    _play(s, 4)
    before = _state(s)
    assert not s.attempt_move(1, 4)
    assert _state(s) == before


def test_no_moves_after_finish() -> None:
    s = _session()
    _play(s, 0, 4, 1, 7, 2)
    before = _state(s)
    assert not s.attempt_move(1, 8)
    assert not s.attempt_move(0, 8)
    assert _state(s) == before


def test_restart_after_finish() -> None:
    s = _session()
    players = s.players
    session_id = s.id
    _play(s, 0, 4, 1, 7, 2)
    s.restart()
    assert _state(s) == ([None] * 9, 0, "playing", None)
    assert s.id == session_id
    assert s.players == players


def test_restart_mid_game_is_allowed() -> None:
    s = _session()
    _play(s, 0, 4, 1)
    s.restart()
    assert _state(s) == ([None] * 9, 0, "playing", None)
    assert s.attempt_move(0, 4)


def test_snapshot_is_detached_from_session() -> None:
    s = _session()
    snap = s.snapshot()
    _play(s, 0)
    assert snap.board == (None,) * 9
    assert snap.turn == 0
    with pytest.raises(AttributeError):
        snap.turn = 1


def test_snapshot_payload_hides_identity_ids() -> None:
    s = _session()
    _play(s, 0, 4, 1, 7, 2)
    assert s.snapshot().as_payload() == {
        "board": ["X", "X", "X", None, "O", None, None, "O", None],
        "turn": 0,
        "status": "finished",
        "winner": 0,
        "players": [{"name": "Alice", "symbol": "X"}, {"name": "Bob", "symbol": "O"}],
    }


def test_index_and_opponent_lookup() -> None:
    s = _session()
    assert s.index_of("a") == 0
    assert s.index_of("b") == 1
    assert s.index_of("c") is None
    assert s.opponent_of("a").identity_id == "b"
    assert s.opponent_of("c") is None
