"""Round engine: player decisions, dealer auto-play and the outcome."""

import logging
from dataclasses import dataclass
from typing import Callable

from transitions import Machine

from blackjack.cards import Deck
from blackjack.exceptions import EmptyDeckError
from blackjack.hand import Hand, Hands
from blackjack.rules import DEFAULT_RULES
from blackjack.game.events import EventEmitter, EventType
from blackjack.game.state import RoundPhase, machine_transitions

logger = logging.getLogger(__name__)

# Capabilities supplied by the caller
StandDecision = Callable[[], bool]
Display = Callable[[str], None]


def silent_display(text: str) -> None:
    pass


@dataclass(frozen=True)
class RoundResult:
    """State after one hit-or-stand decision."""

    player_hand: Hand
    dealer_hand: Hand
    deck: Deck
    stand: bool


@dataclass(frozen=True)
class RoundOutcome:
    """Final result of a round, with both hands fully dealt."""

    player_won: bool
    player_hand: Hand
    dealer_hand: Hand
    deck: Deck


def show_hands(
    player_hand: Hand,
    dealer_hand: Hand,
    hide_dealer: bool,
    display: Display,
) -> None:
    """Display the dealer's hand, then the player's."""
    display("Dealer hand: " + dealer_hand.show_cards(hide_first=hide_dealer))
    display("Player hand: " + player_hand.show_cards())


def dealer_play(
    dealer_hand: Hand,
    deck: Deck,
    events: EventEmitter | None = None,
) -> tuple[Hand, Deck]:
    """
    Draw for the dealer until the raw value reaches the stand threshold.

    Aces count as 1 here: a dealer holding A-6 (raw 7) keeps drawing.

    Raises:
        EmptyDeckError: If the deck runs out while the dealer must draw
    """
    while dealer_hand.value < DEFAULT_RULES.dealer_stand_threshold:
        card, deck = deck.deal()
        dealer_hand = dealer_hand.add_card(card)
        if events is not None:
            events.emit_new(EventType.CARD_DEALT, card=str(card), hand="dealer")
            events.emit_new(EventType.DEALER_HITS, hand_value=dealer_hand.value)

    if events is not None:
        if dealer_hand.is_bust:
            events.emit_new(EventType.DEALER_BUSTS, hand_value=dealer_hand.value)
        else:
            events.emit_new(EventType.DEALER_STANDS, hand_value=dealer_hand.value)
    return dealer_hand, deck


def hit_or_stand(
    player_hand: Hand,
    dealer_hand: Hand,
    deck: Deck,
    should_stand: StandDecision,
    events: EventEmitter | None = None,
) -> RoundResult:
    """
    Ask the player for one decision and apply it.

    Standing lets the dealer play out its hand; hitting deals one card to the
    player and leaves the dealer untouched.
    """
    if should_stand():
        if events is not None:
            events.emit_new(EventType.PLAYER_STAND, hand_value=player_hand.value)
        dealer_hand, deck = dealer_play(dealer_hand, deck, events)
        return RoundResult(player_hand, dealer_hand, deck, stand=True)

    card, deck = deck.deal()
    player_hand = player_hand.add_card(card)
    if events is not None:
        events.emit_new(EventType.CARD_DEALT, card=str(card), hand="player")
        events.emit_new(EventType.PLAYER_HIT, hand_value=player_hand.value)
    return RoundResult(player_hand, dealer_hand, deck, stand=False)


class RoundEngine:
    """
    Plays one round from the initial deal to a result.

    Each ``step`` shows the hands with the dealer's hole card hidden, then
    either resolves a bust or asks the player to hit or stand. ``play`` keeps
    stepping until the round is resolved.
    """

    STATES = [p.name.lower() for p in RoundPhase]

    TRANSITIONS = machine_transitions(
        {
            (RoundPhase.PLAYER_TURN, RoundPhase.PLAYER_TURN): "player_hits",
            (RoundPhase.PLAYER_TURN, RoundPhase.DEALER_TURN): "player_stands",
            (RoundPhase.PLAYER_TURN, RoundPhase.RESOLVED): "player_busts",
            (RoundPhase.DEALER_TURN, RoundPhase.RESOLVED): "dealer_done",
        },
    )

    def __init__(
        self,
        hands: Hands,
        should_stand: StandDecision,
        display: Display = silent_display,
        events: EventEmitter | None = None,
    ) -> None:
        """
        Initialize a round from freshly dealt hands.

        Args:
            hands: Player hand, dealer hand and the remaining deck
            should_stand: Returns True to stand, False to hit
            display: Sink for hand summaries
            events: Emitter to publish round events on
        """
        self.player_hand = hands.player_hand
        self.dealer_hand = hands.dealer_hand
        self.deck = hands.deck
        self.should_stand = should_stand
        self.display = display
        self.events = events or EventEmitter()
        self.outcome: RoundOutcome | None = None

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=RoundPhase.PLAYER_TURN.name.lower(),
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> RoundPhase:
        """Get current round phase as enum."""
        return RoundPhase[self._machine_state.upper()]  # type: ignore

    def play(self) -> RoundOutcome:
        """
        Run the round to completion.

        Raises:
            EmptyDeckError: If the deck runs out mid-round
        """
        while self.outcome is None:
            self.step()
        return self.outcome

    def step(self) -> RoundOutcome | None:
        """
        Advance the round by one player decision.

        Returns:
            The outcome once the round is resolved, otherwise None
        """
        if self.outcome is not None:
            return self.outcome

        show_hands(self.player_hand, self.dealer_hand, True, self.display)

        if self.player_hand.is_bust:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=self.player_hand.value)
            self.player_busts()
            return self._resolve(False)

        try:
            result = hit_or_stand(
                self.player_hand,
                self.dealer_hand,
                self.deck,
                self.should_stand,
                self.events,
            )
        except EmptyDeckError:
            logger.warning("deck ran out during the round; aborting")
            self.events.emit_new(EventType.ROUND_ABORTED, reason="empty deck")
            raise

        self.player_hand = result.player_hand
        self.dealer_hand = result.dealer_hand
        self.deck = result.deck

        if not result.stand:
            self.player_hits()
            return None

        self.player_stands()
        won = self.dealer_hand.is_bust or self.player_hand.wins_over(self.dealer_hand)
        self.dealer_done()
        return self._resolve(won)

    def _resolve(self, won: bool) -> RoundOutcome:
        """Announce the result and reveal both hands."""
        self.display("*** You " + ("win" if won else "lose!") + " ***")
        show_hands(self.player_hand, self.dealer_hand, False, self.display)

        self.events.emit_new(
            EventType.PLAYER_WINS if won else EventType.PLAYER_LOSES,
            player_value=self.player_hand.best_value,
            dealer_value=self.dealer_hand.best_value,
        )
        logger.debug(
            "round resolved: player %s, dealer %s, won=%s",
            self.player_hand, self.dealer_hand, won,
        )

        self.outcome = RoundOutcome(
            player_won=won,
            player_hand=self.player_hand,
            dealer_hand=self.dealer_hand,
            deck=self.deck,
        )
        return self.outcome


def play_round(
    hands: Hands,
    should_stand: StandDecision,
    display: Display = silent_display,
    events: EventEmitter | None = None,
) -> RoundOutcome:
    """Play a round from dealt hands and return its outcome."""
    return RoundEngine(hands, should_stand, display, events).play()
