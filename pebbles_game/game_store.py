from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

import redis

from pebbles_game.api.models import PebblesInit, StoredGame
from pebbles_game.random_source import RandomSource
from pebbles_game.session import start_game
from pebbles_game.streams import publish_events

logger = logging.getLogger(__name__)

GAMES_SET_KEY = "pebbles:games"
GAME_KEY_PREFIX = "pebbles:game:"  # + {uuid}


class GameNotFound(LookupError):
    pass


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _game_key(game_id: UUID) -> str:
    return f"{GAME_KEY_PREFIX}{game_id}"


def save_game(*, r: redis.Redis, game: StoredGame) -> None:
    game.last_updated_at = _now()
    r.set(_game_key(game.game_id), game.model_dump_json())


def get_game(*, r: redis.Redis, game_id: UUID) -> StoredGame | None:
    raw = r.get(_game_key(game_id))
    if not raw:
        return None
    return StoredGame.model_validate_json(raw)


def require_game(*, r: redis.Redis, game_id: UUID) -> StoredGame:
    game = get_game(r=r, game_id=game_id)
    if game is None:
        raise GameNotFound("Game not found")
    return game


def create_game(*, r: redis.Redis, config: PebblesInit | Mapping[str, Any], rng: RandomSource) -> StoredGame:
    """Start a game, persist it and publish whatever the opening produced."""

    result = start_game(config, rng)

    now = _now()
    game = StoredGame(game_id=uuid4(), created_at=now, last_updated_at=now, state=result.state)

    r.set(_game_key(game.game_id), game.model_dump_json())
    r.sadd(GAMES_SET_KEY, str(game.game_id))
    publish_events(r=r, game_id=str(game.game_id), events=result.events)

    logger.info("created game %s", game.game_id)
    return game


def list_games(*, r: redis.Redis) -> list[StoredGame]:
    ids = sorted(r.smembers(GAMES_SET_KEY))
    out: list[StoredGame] = []
    for sid in ids:
        try:
            gid = UUID(sid)
        except ValueError:
            continue
        game = get_game(r=r, game_id=gid)
        if game is not None:
            out.append(game)
    out.sort(key=lambda g: g.created_at, reverse=True)
    return out
