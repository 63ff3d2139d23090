from __future__ import annotations

from collections.abc import Generator

import fakeredis
import pytest
from fastapi.testclient import TestClient

from pebbles_game.api.deps import get_random_source, get_redis
from pebbles_game.api.models import Difficulty, GameState, Player
from pebbles_game.main import app
from pebbles_game.random_source import RandomSource, SequenceRandomSource


@pytest.fixture()
def user_first_rng() -> SequenceRandomSource:
    # Even draws: the user moves first and every random take is 1.
    return SequenceRandomSource([0])


def _make_state(
    *,
    pebbles_remaining: int,
    max_pebbles_per_turn: int = 3,
    pebbles_count: int = 15,
    difficulty: Difficulty = Difficulty.hard,
    current_turn: Player = Player.user,
    winner: Player | None = None,
) -> GameState:
    return GameState(
        pebbles_count=pebbles_count,
        max_pebbles_per_turn=max_pebbles_per_turn,
        difficulty=difficulty,
        pebbles_remaining=pebbles_remaining,
        first_player=Player.user,
        current_turn=current_turn,
        winner=winner,
    )


@pytest.fixture()
def make_state():
    return _make_state


@pytest.fixture()
def client_and_redis() -> Generator[tuple[TestClient, fakeredis.FakeRedis], None, None]:
    """FastAPI TestClient backed by fakeredis and a user-first random source."""

    r = fakeredis.FakeRedis(decode_responses=True)

    def _override_redis() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    def _override_rng() -> RandomSource:
        return SequenceRandomSource([0])

    app.dependency_overrides[get_redis] = _override_redis
    app.dependency_overrides[get_random_source] = _override_rng
    with TestClient(app) as c:
        yield c, r
    app.dependency_overrides.clear()
