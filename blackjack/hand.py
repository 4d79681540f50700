"""Hand evaluation for blackjack."""

from dataclasses import dataclass, replace
from typing import Iterator

from blackjack.cards import Card, Deck
from blackjack.rules import DEFAULT_RULES


@dataclass(frozen=True)
class Hand:
    """
    An immutable blackjack hand.

    All scores are derived from the cards. A hand is never changed in place;
    ``add_card`` returns a new hand.
    """

    cards: tuple[Card, ...] = ()

    def add_card(self, card: Card) -> "Hand":
        """Return a new hand with the card appended."""
        return replace(self, cards=self.cards + (card,))

    @property
    def value(self) -> int:
        """Raw hand value, every ace counted as 1."""
        return sum(card.points for card in self.cards)

    @property
    def contains_ace(self) -> bool:
        """Check if any card is an Ace."""
        return any(card.is_ace for card in self.cards)

    @property
    def special_value(self) -> int:
        """
        Hand value with one ace counted as 11.

        Only a single ace is promoted, however many the hand holds.
        """
        if self.contains_ace:
            return self.value + DEFAULT_RULES.ace_bonus
        return self.value

    @property
    def is_blackjack(self) -> bool:
        """Check if either scoring of the hand is exactly 21."""
        target = DEFAULT_RULES.winning_value
        return self.value == target or self.special_value == target

    @property
    def is_bust(self) -> bool:
        """Check if the raw value is over 21."""
        return self.value > DEFAULT_RULES.winning_value

    @property
    def best_value(self) -> int:
        """
        Highest scoring that does not bust.

        Returns 0 when both the raw and the ace-adjusted values are over 21.
        """
        candidates = [
            v for v in (self.value, self.special_value)
            if v <= DEFAULT_RULES.winning_value
        ]
        return max(candidates, default=0)

    def wins_over(self, other: "Hand") -> bool:
        """Check if this hand strictly beats another on best value."""
        return self.best_value > other.best_value

    def show_cards(self, hide_first: bool = False) -> str:
        """
        Render the card points for display.

        Args:
            hide_first: Show only the first card followed by a mask, as for
                the dealer's hand while the player is still deciding
        """
        if not self.cards:
            return ""
        if hide_first:
            return f"{self.cards[0].points} X"
        return ", ".join(str(card.points) for card in self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        if self.is_bust:
            return f"{cards_str} (BUST)"
        if self.is_blackjack:
            return f"{cards_str} (BLACKJACK)"
        if self.special_value != self.value:
            return f"{cards_str} ({self.value}/{self.special_value})"
        return f"{cards_str} ({self.value})"

    def __repr__(self) -> str:
        return f"Hand({list(self.cards)!r}, value={self.value})"


@dataclass(frozen=True)
class Hands:
    """Player hand, dealer hand and the deck left after dealing them."""

    player_hand: Hand
    dealer_hand: Hand
    deck: Deck


def deal_initial_hands(deck: Deck) -> Hands:
    """
    Deal the opening two cards each.

    The first two cards go to the player and the next two to the dealer.

    Raises:
        EmptyDeckError: If the deck holds fewer than four cards
    """
    first, deck = deck.deal()
    second, deck = deck.deal()
    third, deck = deck.deal()
    fourth, deck = deck.deal()
    return Hands(
        player_hand=Hand((first, second)),
        dealer_hand=Hand((third, fourth)),
        deck=deck,
    )
