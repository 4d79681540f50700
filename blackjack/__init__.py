"""Console blackjack engine - card model, scoring and game loop."""

from blackjack.cards import (
    Card,
    Deck,
    Rank,
    Suit,
    build_deck,
    deal_card,
    identity_shuffle,
    random_shuffle,
    seeded_shuffle,
)
from blackjack.exceptions import (
    BlackjackError,
    EmptyDeckError,
    GameOverError,
    InvalidBetError,
    InvalidShuffleError,
)
from blackjack.hand import Hand, Hands, deal_initial_hands
from blackjack.rules import HouseRules

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "build_deck",
    "deal_card",
    "identity_shuffle",
    "random_shuffle",
    "seeded_shuffle",
    "BlackjackError",
    "EmptyDeckError",
    "GameOverError",
    "InvalidBetError",
    "InvalidShuffleError",
    "Hand",
    "Hands",
    "deal_initial_hands",
    "HouseRules",
]
