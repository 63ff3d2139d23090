from __future__ import annotations

from collections.abc import Sequence
from typing import cast

import redis

from pebbles_game.core.events import GameEvent


def events_stream_key(game_id: str) -> str:
    return f"events:{game_id}"


def publish_events(*, r: redis.Redis, game_id: str, events: Sequence[GameEvent]) -> list[str]:
    """Append game events to the game's stream; returns the stream entry ids."""

    key = events_stream_key(game_id)
    ids: list[str] = []
    for event in events:
        stream_id = r.xadd(key, event.to_fields())
        ids.append(cast(str, stream_id))
    return ids


def read_events(*, r: redis.Redis, game_id: str, count: int = 50, start: str = "-", end: str = "+") -> list[tuple[str, dict[str, str]]]:
    entries = r.xrange(events_stream_key(game_id), min=start, max=end, count=count)
    return [(cast(str, mid), cast(dict[str, str], fields)) for mid, fields in entries]
