"""Entry points for one game session: initialize, apply an action, query.

The session is an explicit `GameState` value owned by the caller; nothing
here keeps state between calls. Hosts persist the returned state themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from pebbles_game.api.models import (
    Action,
    GameState,
    GiveUpAction,
    PebblesInit,
    Player,
    RestartAction,
    StateView,
    TurnAction,
    action_adapter,
)
from pebbles_game.core.events import GameEvent
from pebbles_game.errors import InvalidConfig, NotInitialized
from pebbles_game.random_source import RandomSource
from pebbles_game.turn_processing.turns import give_up, play_opening_move, process_turn
from pebbles_game.turn_processing.validators import validate_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActionResult:
    state: GameState
    events: list[GameEvent]


def parse_config(data: PebblesInit | Mapping[str, Any]) -> PebblesInit:
    if isinstance(data, PebblesInit):
        return data
    try:
        return PebblesInit.model_validate(data)
    except ValidationError as e:
        raise InvalidConfig(str(e)) from e


def parse_action(data: Action | Mapping[str, Any]) -> Action:
    if isinstance(data, (TurnAction, GiveUpAction, RestartAction)):
        return data
    try:
        return action_adapter.validate_python(data)
    except ValidationError as e:
        # A bad restart config is a config error, not a malformed action.
        if any(err["loc"][:2] == ("restart", "config") for err in e.errors()):
            raise InvalidConfig(str(e)) from e
        raise


def _first_player(rng: RandomSource) -> Player:
    return Player.user if rng.next() % 2 == 0 else Player.program


def start_game(config: PebblesInit | Mapping[str, Any], rng: RandomSource) -> ActionResult:
    config = parse_config(config)
    validate_config(config)

    first = _first_player(rng)
    state = GameState(
        pebbles_count=config.pebbles_count,
        max_pebbles_per_turn=config.max_pebbles_per_turn,
        difficulty=config.difficulty,
        pebbles_remaining=config.pebbles_count,
        first_player=first,
        current_turn=first,
        winner=None,
    )
    events = play_opening_move(state=state, rng=rng)
    logger.info(
        "game started: difficulty=%s pebbles=%s max=%s first=%s",
        config.difficulty.value,
        config.pebbles_count,
        config.max_pebbles_per_turn,
        first.value,
    )
    return ActionResult(state=state, events=events)


def initialize(config: PebblesInit | Mapping[str, Any], rng: RandomSource) -> GameState:
    return start_game(config, rng).state


def handle(state: GameState | None, action: Action | Mapping[str, Any], rng: RandomSource) -> ActionResult:
    """Apply one action and report what happened.

    Turn and give-up mutate `state` in place; restart returns a new state and
    leaves the old one untouched.
    """

    if state is None:
        raise NotInitialized()

    action = parse_action(action)

    if isinstance(action, TurnAction):
        events = process_turn(state=state, pebbles=action.pebbles, rng=rng)
        return ActionResult(state=state, events=events)

    if isinstance(action, GiveUpAction):
        events = give_up(state=state)
        return ActionResult(state=state, events=events)

    if isinstance(action, RestartAction):
        config = action.config if action.config is not None else state.config
        logger.info("restarting game (new config: %s)", action.config is not None)
        return start_game(config, rng)

    raise ValueError(f"Unknown action: {action!r}")


def apply_action(state: GameState | None, action: Action | Mapping[str, Any], rng: RandomSource) -> GameState:
    return handle(state, action, rng).state


def query(state: GameState | None) -> StateView:
    if state is None:
        raise NotInitialized()
    return StateView(
        pebbles_remaining=state.pebbles_remaining,
        difficulty=state.difficulty,
        winner=state.winner,
    )
