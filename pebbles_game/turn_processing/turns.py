from __future__ import annotations

import logging

from pebbles_game.api.models import GameState, Player
from pebbles_game.core.events import GameEvent
from pebbles_game.fsm import PebblesFSM
from pebbles_game.random_source import RandomSource
from pebbles_game.strategy import choose_move
from pebbles_game.turn_processing.validators import ValidationContext, pipeline_for_action

logger = logging.getLogger(__name__)


def _program_reply(*, fsm: PebblesFSM, rng: RandomSource) -> list[GameEvent]:
    """Let the program move. Expects the FSM to be in `program_turn`."""

    state = fsm.game
    taken = choose_move(state.pebbles_remaining, state.max_pebbles_per_turn, state.difficulty, rng)
    state.pebbles_remaining -= taken
    logger.debug("program took %s (difficulty=%s), %s left", taken, state.difficulty.value, state.pebbles_remaining)

    if state.pebbles_remaining == 0:
        fsm.program_took_last()
        return [GameEvent.won(player=Player.program)]

    fsm.program_moved()
    return [GameEvent.counter_turn(pebbles=taken)]


def play_opening_move(*, state: GameState, rng: RandomSource) -> list[GameEvent]:
    """Resolve the program's move when it was drawn to go first."""

    fsm = PebblesFSM(state)
    if fsm.current_state != fsm.program_turn:
        return []

    events = _program_reply(fsm=fsm, rng=rng)
    fsm.sync_phase_to_model()
    return events


def process_turn(*, state: GameState, pebbles: int, rng: RandomSource) -> list[GameEvent]:
    """Apply the user's take and, unless it emptied the pile, the program's answer.

    Raises before touching `state` if the take is not allowed.
    """

    pipeline_for_action("turn").validate(ctx=ValidationContext(action="turn", pebbles=pebbles), state=state)

    fsm = PebblesFSM(state)
    state.pebbles_remaining -= pebbles

    if state.pebbles_remaining == 0:
        fsm.user_took_last()
        events = [GameEvent.won(player=Player.user)]
    else:
        fsm.user_moved()
        fsm.sync_phase_to_model()
        events = _program_reply(fsm=fsm, rng=rng)

    fsm.sync_phase_to_model()
    if state.is_finished:
        logger.info("game finished: winner=%s", state.winner.value)
    return events


def give_up(*, state: GameState) -> list[GameEvent]:
    pipeline_for_action("give_up").validate(ctx=ValidationContext(action="give_up"), state=state)

    fsm = PebblesFSM(state)
    fsm.gave_up()
    fsm.sync_phase_to_model()
    logger.info("user gave up with %s pebbles left", state.pebbles_remaining)
    return [GameEvent.won(player=Player.program)]
