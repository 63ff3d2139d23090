from __future__ import annotations


class PebblesError(ValueError):
    """Base class for every error a game call can fail with.

    Subclasses ValueError so host code can keep mapping domain failures the
    same way it maps other bad input.
    """


class InvalidConfig(PebblesError):
    pass


class InvalidAmount(PebblesError):
    pass


class GameOver(PebblesError):
    def __init__(self, message: str = "Game is over") -> None:
        super().__init__(message)


class NotInitialized(PebblesError):
    def __init__(self, message: str = "Game state is not initialized") -> None:
        super().__init__(message)
