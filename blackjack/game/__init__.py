"""Round engine, game loop and state management."""

from blackjack.game.events import GameEvent, EventType, EventEmitter
from blackjack.game.state import GameState, GamePhase, RoundPhase, EndReason
from blackjack.game.round import (
    RoundEngine,
    RoundOutcome,
    RoundResult,
    dealer_play,
    hit_or_stand,
    play_round,
    silent_display,
)
from blackjack.game.engine import BlackjackGame, GameResult, validate_bet

__all__ = [
    "GameEvent",
    "EventType",
    "EventEmitter",
    "GameState",
    "GamePhase",
    "RoundPhase",
    "EndReason",
    "RoundEngine",
    "RoundOutcome",
    "RoundResult",
    "dealer_play",
    "hit_or_stand",
    "play_round",
    "silent_display",
    "BlackjackGame",
    "GameResult",
    "validate_bet",
]
