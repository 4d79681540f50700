"""Blackjack game loop with state machine."""

import logging
from dataclasses import dataclass
from typing import Callable

from transitions import Machine, MachineError

from blackjack.cards import Deck, Shuffler, random_shuffle
from blackjack.exceptions import (
    BlackjackError,
    EmptyDeckError,
    GameOverError,
    InvalidBetError,
    InvalidShuffleError,
)
from blackjack.hand import deal_initial_hands
from blackjack.game.events import EventEmitter, EventType, GameEvent
from blackjack.game.round import (
    Display,
    RoundEngine,
    RoundOutcome,
    StandDecision,
    silent_display,
)
from blackjack.game.state import (
    EndReason,
    GamePhase,
    GameState,
    machine_transitions,
)
from config import config

logger = logging.getLogger(__name__)

BetPrompt = Callable[[int], int]
ContinuePrompt = Callable[[], bool]


def validate_bet(bet: object, credit: int) -> int:
    """
    Check a bet against the current credit.

    Returns:
        The bet, unchanged

    Raises:
        InvalidBetError: If the bet is not a whole number, is negative or
            exceeds the credit
    """
    if isinstance(bet, bool) or not isinstance(bet, int):
        raise InvalidBetError(bet, credit, "bet must be a whole number")
    if bet < 0:
        raise InvalidBetError(bet, credit, "bet cannot be negative")
    if bet > credit:
        raise InvalidBetError(bet, credit, "bet exceeds credit")
    return bet


@dataclass(frozen=True)
class GameResult:
    """Summary of a finished game."""

    state: GameState
    reason: EndReason
    rounds_played: int
    rounds_won: int


class BlackjackGame:
    """
    Blackjack game loop using a state machine.

    Every round builds a fresh deck, takes a bet, plays the round and settles
    the credit. The game ends when the player declines to continue or has no
    credit left. All console interaction goes through the capabilities passed
    in, so the loop runs unchanged against scripted answers.
    """

    STATES = [p.name.lower() for p in GamePhase]

    TRANSITIONS = machine_transitions(
        {
            (GamePhase.BETTING, GamePhase.PLAYING_ROUND): "place_bet",
            (GamePhase.PLAYING_ROUND, GamePhase.SETTLING_CREDIT): "round_over",
            (GamePhase.SETTLING_CREDIT, GamePhase.ASKING_CONTINUE): "credit_left",
            (GamePhase.ASKING_CONTINUE, GamePhase.BETTING): "new_round",
            (GamePhase.BETTING, GamePhase.DONE): "end_game",
            (GamePhase.PLAYING_ROUND, GamePhase.DONE): "end_game",
            (GamePhase.SETTLING_CREDIT, GamePhase.DONE): "end_game",
            (GamePhase.ASKING_CONTINUE, GamePhase.DONE): "end_game",
        },
    )

    def __init__(
        self,
        prompt_bet: BetPrompt,
        prompt_continue: ContinuePrompt,
        prompt_stand: StandDecision,
        shuffle: Shuffler = random_shuffle,
        display: Display = silent_display,
        state: GameState | None = None,
    ) -> None:
        """
        Initialize a new game.

        Args:
            prompt_bet: Given the current credit, returns the bet
            prompt_continue: Returns True to play another round
            prompt_stand: Returns True to stand, False to hit
            shuffle: Permutation applied to each fresh deck
            display: Sink for hand summaries and messages
            state: Starting credit (defaults to the configured starting credit)
        """
        self.prompt_bet = prompt_bet
        self.prompt_continue = prompt_continue
        self.prompt_stand = prompt_stand
        self.shuffle = shuffle
        self.display = display

        self.game_state = state if state is not None else GameState(config.game.starting_credit)
        self.events = EventEmitter()
        self.reason: EndReason | None = None
        self.rounds_played = 0
        self.rounds_won = 0

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=GamePhase.BETTING.name.lower(),
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def phase(self) -> GamePhase:
        """Get current game phase as enum."""
        return GamePhase[self._machine_state.upper()]  # type: ignore

    @property
    def credit(self) -> int:
        """Get the player's current credit."""
        return self.game_state.credit

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def run(self) -> GameResult:
        """
        Play rounds until the player stops or runs out of credit.

        Raises:
            InvalidBetError: If the bet prompt returns an invalid bet
            InvalidShuffleError: If the shuffle does not return a full deck
            EmptyDeckError: If a round runs out of cards

            In each case the game ends with the credit it had before the
            failed round.
        """
        if self.phase == GamePhase.DONE:
            raise GameOverError("This game has already ended")

        self.events.emit_new(EventType.GAME_STARTED, credit=self.credit)
        logger.info("game started with credit %d", self.credit)

        while self.phase != GamePhase.DONE:
            self.play_round()

            if self.game_state.is_broke:
                self._finish(EndReason.OUT_OF_MONEY)
                break

            self.credit_left()
            if self.prompt_continue():
                self.new_round()
            else:
                self._finish(EndReason.EXITING)

        if self.reason is None:
            raise BlackjackError("Game loop stopped without an end reason")
        return GameResult(
            state=self.game_state,
            reason=self.reason,
            rounds_played=self.rounds_played,
            rounds_won=self.rounds_won,
        )

    def play_round(self) -> RoundOutcome:
        """
        Play a single round and settle the credit.

        Leaves the game in the SETTLING_CREDIT phase.

        Raises:
            GameOverError: If the game has already ended
            MachineError: If the previous round has not been followed by
                a new_round transition
        """
        if self.phase == GamePhase.DONE:
            raise GameOverError("This game has already ended")
        if self.phase != GamePhase.BETTING:
            raise MachineError(f"Cannot start a round in phase {self.phase.name}")

        try:
            deck = Deck.build(self.shuffle)
        except InvalidShuffleError:
            self.end_game()
            raise
        self.events.emit_new(EventType.DECK_SHUFFLED, cards=len(deck))

        bet = self._take_bet()
        self.place_bet()
        self.events.emit_new(EventType.BET_PLACED, amount=bet, credit=self.credit)

        hands = deal_initial_hands(deck)
        self.events.emit_new(
            EventType.ROUND_STARTED,
            round=self.rounds_played + 1,
            player_value=hands.player_hand.value,
        )

        try:
            outcome = RoundEngine(hands, self.prompt_stand, self.display, self.events).play()
        except EmptyDeckError:
            self.end_game()
            raise

        self.round_over()
        self._settle(bet, outcome.player_won)
        return outcome

    def _take_bet(self) -> int:
        """Ask for a bet and check it against the credit."""
        bet = self.prompt_bet(self.credit)
        try:
            return validate_bet(bet, self.credit)
        except InvalidBetError as e:
            logger.warning("rejected bet: %s", e)
            self.events.emit_new(EventType.INVALID_BET, bet=bet, credit=self.credit, reason=e.reason)
            self.end_game()
            raise

    def _settle(self, bet: int, won: bool) -> None:
        """Apply the round result to the credit."""
        previous = self.credit
        self.game_state = self.game_state.settle(bet, won)
        self.rounds_played += 1
        if won:
            self.rounds_won += 1

        self.events.emit_new(
            EventType.CREDIT_UPDATED,
            previous=previous,
            credit=self.credit,
            change=self.credit - previous,
        )
        self.events.emit_new(EventType.ROUND_ENDED, won=won, credit=self.credit)
        logger.info(
            "round %d %s, credit %d -> %d",
            self.rounds_played, "won" if won else "lost", previous, self.credit,
        )

    def _finish(self, reason: EndReason) -> None:
        """End the game and tell the player why."""
        self.reason = reason
        self.end_game()
        self.display(reason.message)
        self.events.emit_new(
            EventType.GAME_ENDED,
            reason=reason.name.lower(),
            credit=self.credit,
            rounds_played=self.rounds_played,
        )
