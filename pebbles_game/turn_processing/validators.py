from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from pebbles_game.api.models import GameState, PebblesInit, Player
from pebbles_game.errors import GameOver, InvalidAmount, InvalidConfig, PebblesError


def validate_config(config: PebblesInit) -> None:
    if config.pebbles_count <= 0:
        raise InvalidConfig("pebbles_count must be positive")
    if config.max_pebbles_per_turn <= 0:
        raise InvalidConfig("max_pebbles_per_turn must be positive")
    if config.max_pebbles_per_turn >= config.pebbles_count:
        raise InvalidConfig(
            f"max_pebbles_per_turn ({config.max_pebbles_per_turn}) must be less than "
            f"pebbles_count ({config.pebbles_count})"
        )


def validate_amount(amount: int, pebbles_remaining: int, max_pebbles_per_turn: int) -> None:
    """Accept `amount` iff 1 <= amount <= min(max_pebbles_per_turn, pebbles_remaining)."""

    if amount < 1 or amount > max_pebbles_per_turn:
        raise InvalidAmount(f"Invalid number of pebbles taken: {amount} (allowed: 1..{max_pebbles_per_turn})")
    if amount > pebbles_remaining:
        raise InvalidAmount(f"Not enough pebbles remaining: {pebbles_remaining} < {amount}")


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Inputs available to validators.

    Keep this tight and serializable-ish so we can safely log it.
    """

    action: str
    pebbles: int | None = None


class TurnValidator(ABC):
    """A small, composable validation unit for an incoming action."""

    @abstractmethod
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class FinishedGameValidator(TurnValidator):
    """Deny actions that need a game in progress."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if state.is_finished:
            raise GameOver(f"Action '{ctx.action}' not allowed: game is over (winner: {state.winner.value})")


@dataclass(frozen=True, slots=True)
class UserTurnValidator(TurnValidator):
    """The program always answers within the same call, so a resting state awaits the user."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if state.current_turn != Player.user:
            raise PebblesError(f"Action '{ctx.action}' not allowed: awaiting {state.current_turn.value}")


@dataclass(frozen=True, slots=True)
class AmountValidator(TurnValidator):
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if ctx.pebbles is None:
            raise InvalidAmount("pebbles is required")
        validate_amount(ctx.pebbles, state.pebbles_remaining, state.max_pebbles_per_turn)


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[TurnValidator, ...]

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        for v in self.validators:
            v.validate(ctx=ctx, state=state)


DEFAULT_ACTION_PIPELINES: dict[str, ValidatorPipeline] = {
    "turn": ValidatorPipeline(
        validators=(
            FinishedGameValidator(),
            UserTurnValidator(),
            AmountValidator(),
        )
    ),
    "give_up": ValidatorPipeline(validators=(FinishedGameValidator(),)),
    # Restart is allowed from any state.
    "restart": ValidatorPipeline(validators=()),
}


def pipeline_for_action(action: str) -> ValidatorPipeline:
    pipe = DEFAULT_ACTION_PIPELINES.get(action)
    if pipe is None:
        raise ValueError(f"Unknown action: {action}")
    return pipe
