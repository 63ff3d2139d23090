from __future__ import annotations

import pytest
from statemachine.exceptions import TransitionNotAllowed

from pebbles_game.api.models import Player
from pebbles_game.fsm import PebblesFSM


def test_fsm_starts_from_model_turn(make_state) -> None:
    assert PebblesFSM(make_state(pebbles_remaining=5)).current_state.value == "user_turn"
    fsm = PebblesFSM(make_state(pebbles_remaining=5, current_turn=Player.program))
    assert fsm.current_state.value == "program_turn"


def test_user_then_program_move_round_trips_turn(make_state) -> None:
    state = make_state(pebbles_remaining=5)
    fsm = PebblesFSM(state)

    fsm.user_moved()
    fsm.sync_phase_to_model()
    assert state.current_turn == Player.program

    fsm.program_moved()
    fsm.sync_phase_to_model()
    assert state.current_turn == Player.user
    assert state.winner is None


def test_user_took_last_sets_winner(make_state) -> None:
    state = make_state(pebbles_remaining=0)
    fsm = PebblesFSM(state)
    fsm.user_took_last()
    fsm.sync_phase_to_model()
    assert state.winner == Player.user


def test_give_up_from_either_turn(make_state) -> None:
    for turn in (Player.user, Player.program):
        state = make_state(pebbles_remaining=5, current_turn=turn)
        fsm = PebblesFSM(state)
        fsm.gave_up()
        fsm.sync_phase_to_model()
        assert state.winner == Player.program


def test_program_cannot_move_on_users_turn(make_state) -> None:
    fsm = PebblesFSM(make_state(pebbles_remaining=5))
    with pytest.raises(TransitionNotAllowed):
        fsm.program_moved()


def test_no_moves_after_a_win(make_state) -> None:
    fsm = PebblesFSM(make_state(pebbles_remaining=1))
    fsm.user_took_last()
    with pytest.raises(TransitionNotAllowed):
        fsm.user_moved()
