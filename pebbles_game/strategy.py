"""How the program picks its move.

The pile game here is the bounded subtraction game: each move removes 1..k
pebbles and whoever takes the last one wins. A pile that is a multiple of
k + 1 is lost for the player to move, because any take t leaves a pile the
opponent can bring back to a multiple of k + 1 by taking (k + 1 - t). Hard
play therefore always hands over such a pile when it can.
"""

from __future__ import annotations

import logging

from pebbles_game.api.models import Difficulty
from pebbles_game.random_source import RandomSource

logger = logging.getLogger(__name__)


def is_losing_position(pebbles_remaining: int, max_pebbles_per_turn: int) -> bool:
    """True if the player to move loses against perfect play."""

    return pebbles_remaining % (max_pebbles_per_turn + 1) == 0


def winning_move(pebbles_remaining: int, max_pebbles_per_turn: int) -> int | None:
    """Return the take that leaves a multiple of max + 1, or None if there is none."""

    remainder = pebbles_remaining % (max_pebbles_per_turn + 1)
    return remainder or None


def random_move(pebbles_remaining: int, max_pebbles_per_turn: int, rng: RandomSource) -> int:
    bound = min(max_pebbles_per_turn, pebbles_remaining)
    return 1 + rng.next() % bound


def choose_move(
    pebbles_remaining: int,
    max_pebbles_per_turn: int,
    difficulty: Difficulty,
    rng: RandomSource,
) -> int:
    if pebbles_remaining <= 0:
        raise ValueError("No pebbles left to take")
    if max_pebbles_per_turn <= 0:
        raise ValueError("max_pebbles_per_turn must be positive")

    if difficulty == Difficulty.easy:
        return random_move(pebbles_remaining, max_pebbles_per_turn, rng)

    if difficulty == Difficulty.hard:
        move = winning_move(pebbles_remaining, max_pebbles_per_turn)
        if move is not None:
            return move
        # Lost position: nothing forces a win, so stall with a random take.
        logger.debug("no winning move from pile=%s max=%s; falling back to random", pebbles_remaining, max_pebbles_per_turn)
        return random_move(pebbles_remaining, max_pebbles_per_turn, rng)

    raise ValueError(f"Unknown difficulty: {difficulty}")
