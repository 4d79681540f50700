"""Errors raised by the blackjack engine."""


class BlackjackError(Exception):
    """Base class for all game errors."""


class EmptyDeckError(BlackjackError, IndexError):
    """Raised when dealing from a deck with no cards left."""

    def __init__(self, message: str = "Cannot deal from an empty deck") -> None:
        super().__init__(message)


class InvalidShuffleError(BlackjackError, ValueError):
    """Raised when a shuffle function does not return a permutation of its input."""


class InvalidBetError(BlackjackError, ValueError):
    """Raised when a bet is negative, not a whole number, or exceeds the credit."""

    def __init__(self, bet: object, credit: int, reason: str) -> None:
        self.bet = bet
        self.credit = credit
        self.reason = reason
        super().__init__(f"Invalid bet {bet!r} (credit: {credit}): {reason}")


class GameOverError(BlackjackError):
    """Raised when asking a finished game to keep playing."""
