"""Card and Deck classes - immutable card representations."""

from collections import Counter
from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Callable, Iterator, Sequence

from blackjack.exceptions import EmptyDeckError, InvalidShuffleError


class Suit(Enum):
    """Card suits."""

    HEARTS = auto()
    DIAMONDS = auto()
    SPADES = auto()
    CLUBS = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.SPADES: "♠",
            Suit.CLUBS: "♣",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks, highest first."""

    KING = auto()
    QUEEN = auto()
    JACK = auto()
    TEN = auto()
    NINE = auto()
    EIGHT = auto()
    SEVEN = auto()
    SIX = auto()
    FIVE = auto()
    FOUR = auto()
    THREE = auto()
    TWO = auto()
    ACE = auto()

    def __str__(self) -> str:
        return {
            Rank.KING: "K",
            Rank.QUEEN: "Q",
            Rank.JACK: "J",
            Rank.ACE: "A",
        }.get(self, str(self.points))

    @property
    def points(self) -> int:
        """Return the point value (Ace = 1, face cards = 10)."""
        return _RANK_POINTS[self]

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


_RANK_POINTS: dict[Rank, int] = {
    Rank.KING: 10,
    Rank.QUEEN: 10,
    Rank.JACK: 10,
    Rank.TEN: 10,
    Rank.NINE: 9,
    Rank.EIGHT: 8,
    Rank.SEVEN: 7,
    Rank.SIX: 6,
    Rank.FIVE: 5,
    Rank.FOUR: 4,
    Rank.THREE: 3,
    Rank.TWO: 2,
    Rank.ACE: 1,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def points(self) -> int:
        """Return the point value of the card's rank."""
        return self.rank.points

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like 'AS', 'Kh', '10♦'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {
            "2": Rank.TWO,
            "3": Rank.THREE,
            "4": Rank.FOUR,
            "5": Rank.FIVE,
            "6": Rank.SIX,
            "7": Rank.SEVEN,
            "8": Rank.EIGHT,
            "9": Rank.NINE,
            "10": Rank.TEN,
            "T": Rank.TEN,
            "J": Rank.JACK,
            "Q": Rank.QUEEN,
            "K": Rank.KING,
            "A": Rank.ACE,
        }

        suit_map = {
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


# A shuffle takes the ordered cards and returns a permutation of them
Shuffler = Callable[[Sequence[Card]], Sequence[Card]]


def random_shuffle(cards: Sequence[Card]) -> list[Card]:
    """Return a shuffled copy of the cards using the module RNG."""
    return seeded_shuffle(Random())(cards)


def seeded_shuffle(rng: Random) -> Shuffler:
    """
    Build a shuffler bound to a random number generator.

    Args:
        rng: Generator used for every shuffle, e.g. ``Random(42)`` for
            reproducible games

    Returns:
        A shuffle function that leaves its input untouched
    """

    def shuffle(cards: Sequence[Card]) -> list[Card]:
        shuffled = list(cards)
        rng.shuffle(shuffled)
        return shuffled

    return shuffle


def identity_shuffle(cards: Sequence[Card]) -> list[Card]:
    """Return the cards in their original order."""
    return list(cards)


@dataclass(frozen=True)
class Deck:
    """
    An immutable, ordered deck of cards.

    Dealing never modifies a deck; it returns the dealt card together with a
    new deck holding the rest.
    """

    cards: tuple[Card, ...] = ()

    @staticmethod
    def ordered_cards() -> list[Card]:
        """Return all 52 cards, suit by suit."""
        return [Card(rank, suit) for suit in Suit for rank in Rank]

    @classmethod
    def ordered(cls) -> "Deck":
        """Return a full deck in suit-major order."""
        return cls(tuple(cls.ordered_cards()))

    @classmethod
    def build(cls, shuffle: Shuffler = random_shuffle) -> "Deck":
        """
        Build a full 52-card deck and apply a shuffle to it.

        Args:
            shuffle: Permutation applied to the ordered cards

        Raises:
            InvalidShuffleError: If the shuffle adds, drops or repeats cards
        """
        ordered = cls.ordered_cards()
        shuffled = tuple(shuffle(list(ordered)))
        if Counter(shuffled) != Counter(ordered):
            raise InvalidShuffleError(
                f"Shuffle returned {len(shuffled)} cards that are not a permutation of the deck"
            )
        return cls(shuffled)

    def deal(self) -> tuple[Card, "Deck"]:
        """
        Deal the top card.

        Returns:
            The first card and a new deck with the remaining cards in order

        Raises:
            EmptyDeckError: If there are no cards left
        """
        if not self.cards:
            raise EmptyDeckError()
        return self.cards[0], Deck(self.cards[1:])

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        """Check if the deck has run out."""
        return not self.cards


def build_deck(shuffle: Shuffler = random_shuffle) -> Deck:
    """Build a shuffled 52-card deck."""
    return Deck.build(shuffle)


def deal_card(deck: Deck) -> tuple[Card, Deck]:
    """Deal the top card of a deck."""
    return deck.deal()
