from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Difficulty(StrEnum):
    easy = "easy"
    hard = "hard"


class Player(StrEnum):
    user = "user"
    program = "program"


class GameStatus(StrEnum):
    in_progress = "in_progress"
    finished = "finished"


class PebblesInit(BaseModel):
    """Game parameters, fixed for the lifetime of one game.

    Only the shape is checked here; the range rule (1 <= max < count) is
    enforced by `validate_config` so it always surfaces as `InvalidConfig`.
    """

    model_config = ConfigDict(frozen=True)

    difficulty: Difficulty
    pebbles_count: int = Field(..., ge=0)
    max_pebbles_per_turn: int = Field(..., ge=0)


class GameState(BaseModel):
    pebbles_count: int
    max_pebbles_per_turn: int
    difficulty: Difficulty

    pebbles_remaining: int
    first_player: Player

    # Whose move is awaited. Only ever `program` inside a single call.
    current_turn: Player

    # Set once, when the game is finished.
    winner: Player | None = None

    @property
    def status(self) -> GameStatus:
        return GameStatus.finished if self.winner is not None else GameStatus.in_progress

    @property
    def is_finished(self) -> bool:
        return self.winner is not None

    @property
    def config(self) -> PebblesInit:
        return PebblesInit(
            difficulty=self.difficulty,
            pebbles_count=self.pebbles_count,
            max_pebbles_per_turn=self.max_pebbles_per_turn,
        )


class StateView(BaseModel):
    pebbles_remaining: int
    difficulty: Difficulty
    winner: Player | None = None


class TurnAction(BaseModel):
    kind: Literal["turn"] = "turn"
    # Range is checked by the move validator, not here, so 0 is reported as InvalidAmount.
    pebbles: int


class GiveUpAction(BaseModel):
    kind: Literal["give_up"] = "give_up"


class RestartAction(BaseModel):
    kind: Literal["restart"] = "restart"
    config: PebblesInit | None = None


Action = Annotated[TurnAction | GiveUpAction | RestartAction, Field(discriminator="kind")]

action_adapter: TypeAdapter[Action] = TypeAdapter(Action)


class StoredGame(BaseModel):
    """A game as persisted by the host: identity plus the current state."""

    game_id: UUID
    created_at: datetime
    last_updated_at: datetime
    state: GameState


class GameListResponse(BaseModel):
    games: list[StoredGame]


class GameEventOut(BaseModel):
    id: str
    type: str
    player: Player | None = None
    pebbles: int | None = None
    ts: str


class GameEventsResponse(BaseModel):
    game_id: UUID
    stream: str
    events: list[GameEventOut]
