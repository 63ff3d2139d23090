from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

from pebbles_game.api.models import Player

EventType = Literal[
    "COUNTER_TURN",
    "WON",
]


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Something the caller should be told about after an action.

    - `COUNTER_TURN`: the program took `pebbles` and the game goes on.
    - `WON`: the game finished; `player` is the winner.
    """

    type: EventType
    player: Player | None
    pebbles: int | None
    ts: datetime

    @staticmethod
    def counter_turn(*, pebbles: int) -> "GameEvent":
        return GameEvent(type="COUNTER_TURN", player=Player.program, pebbles=pebbles, ts=datetime.now(timezone.utc))

    @staticmethod
    def won(*, player: Player) -> "GameEvent":
        return GameEvent(type="WON", player=player, pebbles=None, ts=datetime.now(timezone.utc))

    def to_fields(self) -> dict[str, str]:
        fields = {"type": self.type, "ts": self.ts.isoformat()}
        if self.player is not None:
            fields["player"] = self.player.value
        if self.pebbles is not None:
            fields["pebbles"] = str(self.pebbles)
        return fields
