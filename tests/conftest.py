"""Pytest fixtures for blackjack tests."""

from typing import Callable, Sequence

import pytest

from blackjack.cards import Card, Deck
from blackjack.hand import Hand, Hands
from blackjack.game.events import EventEmitter


def _cards(codes: Sequence[str]) -> list[Card]:
    return [Card.from_string(code) for code in codes]


@pytest.fixture
def make_hand() -> Callable[..., Hand]:
    """Build a hand from card codes, e.g. make_hand("AS", "KH")."""

    def factory(*codes: str) -> Hand:
        return Hand(tuple(_cards(codes)))

    return factory


@pytest.fixture
def make_deck() -> Callable[..., Deck]:
    """Build a short deck holding exactly the given cards, top card first."""

    def factory(*codes: str) -> Deck:
        return Deck(tuple(_cards(codes)))

    return factory


@pytest.fixture
def stacked_shuffle() -> Callable[..., Callable[[Sequence[Card]], list[Card]]]:
    """
    Build a shuffle that puts the given cards on top.

    The remaining cards follow in their original order, so the result is
    still a permutation of the full deck.
    """

    def factory(*codes: str) -> Callable[[Sequence[Card]], list[Card]]:
        top = _cards(codes)

        def shuffle(cards: Sequence[Card]) -> list[Card]:
            return top + [card for card in cards if card not in top]

        return shuffle

    return factory


@pytest.fixture
def make_hands(make_hand, make_deck) -> Callable[..., Hands]:
    """Build Hands from player codes, dealer codes and the deck codes."""

    def factory(player: Sequence[str], dealer: Sequence[str], deck: Sequence[str] = ()) -> Hands:
        return Hands(make_hand(*player), make_hand(*dealer), make_deck(*deck))

    return factory


@pytest.fixture
def answers() -> Callable[..., Callable[..., object]]:
    """
    Build a scripted capability that returns the given values in order.

    The returned callable accepts and ignores any arguments and records how
    many times it was called in ``.calls``.
    """

    def factory(*values: object) -> Callable[..., object]:
        remaining = list(values)

        def capability(*args: object) -> object:
            capability.calls.append(args)
            if not remaining:
                raise AssertionError("capability called more often than scripted")
            return remaining.pop(0)

        capability.calls = []
        return capability

    return factory


@pytest.fixture
def display() -> list[str]:
    """A list that collects displayed lines; pass ``display.append``."""
    return []


@pytest.fixture
def events() -> EventEmitter:
    return EventEmitter()


@pytest.fixture
def blackjack_hand(make_hand):
    """Ace and King: raw 11, 21 with the ace bonus."""
    return make_hand("AS", "KH")


@pytest.fixture
def hard_16_hand(make_hand):
    """A hard 16 hand (10-6)."""
    return make_hand("10S", "6H")


@pytest.fixture
def bust_hand(make_hand):
    """A busted hand (10-6-K)."""
    return make_hand("10S", "6H", "KC")
