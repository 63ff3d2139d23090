from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID

import redis

from pebbles_game.api.models import Action, StoredGame
from pebbles_game.core.events import GameEvent
from pebbles_game.game_store import require_game, save_game
from pebbles_game.lock import game_lock
from pebbles_game.random_source import RandomSource
from pebbles_game.session import handle
from pebbles_game.streams import publish_events


@dataclass(frozen=True, slots=True)
class DispatchResult:
    game: StoredGame
    events: list[GameEvent]
    stream_entry_ids: list[str]


def dispatch_action(
    *,
    r: redis.Redis,
    game_id: UUID,
    action: Action | Mapping[str, Any],
    rng: RandomSource,
) -> DispatchResult:
    """Entry point for HTTP clients.

    Applies an action by:
    - acquiring a per-game lock
    - loading the stored state
    - applying the action (including the program's answer)
    - persisting the new state
    - appending the resulting events to the game's stream

    A failing action raises before anything is saved or published.
    """

    gid_str = str(game_id)

    with game_lock(r=r, game_id=gid_str):
        game = require_game(r=r, game_id=game_id)

        result = handle(game.state, action, rng)
        game.state = result.state

        save_game(r=r, game=game)
        ids = publish_events(r=r, game_id=gid_str, events=result.events)

        return DispatchResult(game=game, events=result.events, stream_entry_ids=ids)
