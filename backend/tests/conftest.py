import pytest

from xoduel.matchmaker import matchmaker


@pytest.fixture(autouse=True)
def clear_matchmaker() -> None:
    """Изоляция тестов: общий in-memory matchmaker очищается до и после."""
    matchmaker.clear()
    yield
    matchmaker.clear()
