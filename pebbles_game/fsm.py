from __future__ import annotations

from statemachine import State, StateMachine

from pebbles_game.api.models import GameState, Player

USER_TURN = "user_turn"
PROGRAM_TURN = "program_turn"
USER_WON = "user_won"
PROGRAM_WON = "program_won"


def phase_of(game: GameState) -> str:
    if game.winner == Player.user:
        return USER_WON
    if game.winner == Player.program:
        return PROGRAM_WON
    if game.current_turn == Player.program:
        return PROGRAM_TURN
    return USER_TURN


class PebblesFSM(StateMachine):
    """FSM wrapper around GameState.

    The pile arithmetic lives in the turn processor; the FSM only guards which
    transition may follow which, and writes the resulting turn/winner back.
    """

    user_turn = State(USER_TURN, value=USER_TURN, initial=True)
    program_turn = State(PROGRAM_TURN, value=PROGRAM_TURN)
    user_won = State(USER_WON, value=USER_WON, final=True)
    program_won = State(PROGRAM_WON, value=PROGRAM_WON, final=True)

    user_moved = user_turn.to(program_turn)
    user_took_last = user_turn.to(user_won)
    program_moved = program_turn.to(user_turn)
    program_took_last = program_turn.to(program_won)
    gave_up = user_turn.to(program_won) | program_turn.to(program_won)

    def __init__(self, game: GameState):
        self.game = game
        super().__init__(start_value=phase_of(game))

    def sync_phase_to_model(self) -> None:
        value = str(self.current_state.value)
        if value == USER_WON:
            self.game.winner = Player.user
        elif value == PROGRAM_WON:
            self.game.winner = Player.program
        elif value == PROGRAM_TURN:
            self.game.current_turn = Player.program
        else:
            self.game.current_turn = Player.user
