"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Generator

import pytest

from src.core.shared_types import PlayerType
from src.db.memory_repository import InMemoryEventRepository
from src.dotgame.player import Player

START_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def alice() -> Player:
    return Player(id="player1", type=PlayerType.HUMAN, name="Alice")


@pytest.fixture
def bob() -> Player:
    return Player(id="player2", type=PlayerType.AGENT, name="Bob", model="model-1")


@pytest.fixture
def ticking_clock() -> Callable[[], datetime]:
    """Deterministic clock: every call is one second after the previous one."""
    ticks = iter(range(1_000_000))

    def clock() -> datetime:
        return START_TIME + timedelta(seconds=next(ticks))

    return clock


@pytest.fixture
def event_repository() -> Generator[InMemoryEventRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = InMemoryEventRepository()
    try:
        yield repo
    finally:
        repo.clear()
