from __future__ import annotations

from typing import Any
from uuid import UUID

import redis
from fastapi import APIRouter, Body, Depends, HTTPException, status

from pebbles_game.actions import dispatch_action
from pebbles_game.api.deps import get_random_source, get_redis
from pebbles_game.api.models import (
    GameEventOut,
    GameEventsResponse,
    GameListResponse,
    PebblesInit,
    StateView,
    StoredGame,
)
from pebbles_game.errors import PebblesError
from pebbles_game.game_store import GameNotFound, create_game, get_game, list_games
from pebbles_game.lock import GameBusy
from pebbles_game.random_source import RandomSource
from pebbles_game.session import query
from pebbles_game.streams import events_stream_key, read_events

router = APIRouter()


def _require_game(r: redis.Redis, game_id: UUID) -> StoredGame:
    game = get_game(r=r, game_id=game_id)
    if game is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    return game


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/game", response_model=StoredGame, status_code=status.HTTP_201_CREATED)
async def create_game_route(
    payload: PebblesInit,
    r: redis.Redis = Depends(get_redis),
    rng: RandomSource = Depends(get_random_source),
) -> StoredGame:
    try:
        return create_game(r=r, config=payload, rng=rng)
    except PebblesError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e


@router.get("/game", response_model=GameListResponse)
async def list_games_route(r: redis.Redis = Depends(get_redis)) -> GameListResponse:
    return GameListResponse(games=list_games(r=r))


@router.get("/game/{game_id}", response_model=StoredGame)
async def get_game_route(game_id: UUID, r: redis.Redis = Depends(get_redis)) -> StoredGame:
    return _require_game(r, game_id)


@router.get("/game/{game_id}/view", response_model=StateView)
async def view_game_route(game_id: UUID, r: redis.Redis = Depends(get_redis)) -> StateView:
    return query(_require_game(r, game_id).state)


@router.post("/game/{game_id}/actions", response_model=StoredGame)
async def action_route(
    game_id: UUID,
    body: dict[str, Any] = Body(...),
    r: redis.Redis = Depends(get_redis),
    rng: RandomSource = Depends(get_random_source),
) -> StoredGame:
    try:
        result = dispatch_action(r=r, game_id=game_id, action=body, rng=rng)
    except GameNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except GameBusy as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except ValueError as e:
        # Domain errors and malformed action bodies alike.
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    return result.game


@router.get("/game/{game_id}/events", response_model=GameEventsResponse)
async def game_events_route(
    game_id: UUID,
    count: int = 50,
    r: redis.Redis = Depends(get_redis),
) -> GameEventsResponse:
    if count < 1 or count > 500:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="count must be between 1 and 500")

    _require_game(r, game_id)

    entries = read_events(r=r, game_id=str(game_id), count=count)
    events = [
        GameEventOut(
            id=mid,
            type=fields["type"],
            player=fields.get("player"),
            pebbles=int(fields["pebbles"]) if "pebbles" in fields else None,
            ts=fields["ts"],
        )
        for mid, fields in entries
    ]
    return GameEventsResponse(game_id=game_id, stream=events_stream_key(str(game_id)), events=events)
