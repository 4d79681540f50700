"""Game state: credit value and state machine phases."""

from dataclasses import dataclass
from enum import Enum, auto


@dataclass(frozen=True)
class GameState:
    """The player's credit between rounds."""

    credit: int

    def settle(self, bet: int, won: bool) -> "GameState":
        """Return the state after a round: the bet is won or lost in full."""
        return GameState(self.credit + bet if won else self.credit - bet)

    @property
    def is_broke(self) -> bool:
        """Check if the player has no credit left to play with."""
        return self.credit <= 0


class RoundPhase(Enum):
    """
    Round state machine states.

    Flow: PLAYER_TURN (→ PLAYER_TURN on hit) → DEALER_TURN → RESOLVED
    """

    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    RESOLVED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class GamePhase(Enum):
    """
    Game loop state machine states.

    Flow: BETTING → PLAYING_ROUND → SETTLING_CREDIT → ASKING_CONTINUE → BETTING,
    ending in DONE.
    """

    BETTING = auto()
    PLAYING_ROUND = auto()
    SETTLING_CREDIT = auto()
    ASKING_CONTINUE = auto()

    # Terminal: player quit, ran out of credit, or a round failed
    DONE = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class EndReason(Enum):
    """Why the game loop stopped."""

    EXITING = "Exiting"
    OUT_OF_MONEY = "You have no money left"

    @property
    def message(self) -> str:
        return self.value


ROUND_TRANSITIONS: dict[RoundPhase, list[RoundPhase]] = {
    RoundPhase.PLAYER_TURN: [RoundPhase.PLAYER_TURN, RoundPhase.DEALER_TURN, RoundPhase.RESOLVED],
    RoundPhase.DEALER_TURN: [RoundPhase.RESOLVED],
    RoundPhase.RESOLVED: [],
}

GAME_TRANSITIONS: dict[GamePhase, list[GamePhase]] = {
    GamePhase.BETTING: [GamePhase.PLAYING_ROUND, GamePhase.DONE],
    GamePhase.PLAYING_ROUND: [GamePhase.SETTLING_CREDIT, GamePhase.DONE],
    GamePhase.SETTLING_CREDIT: [GamePhase.ASKING_CONTINUE, GamePhase.DONE],
    GamePhase.ASKING_CONTINUE: [GamePhase.BETTING, GamePhase.DONE],
    GamePhase.DONE: [],
}


def is_valid_transition(from_state: Enum, to_state: Enum) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current round or game phase
        to_state: Desired phase of the same kind

    Returns:
        True if the transition is allowed
    """
    if isinstance(from_state, RoundPhase):
        return to_state in ROUND_TRANSITIONS.get(from_state, [])
    if isinstance(from_state, GamePhase):
        return to_state in GAME_TRANSITIONS.get(from_state, [])
    return False


def machine_transitions(triggers: dict[tuple, str]) -> list[dict[str, str]]:
    """
    Build ``transitions.Machine`` transition dicts from phase moves.

    Args:
        triggers: (source, dest) → trigger name

    Raises:
        ValueError: If a trigger names a move the phase tables do not allow
    """
    result = []
    for (source, dest), trigger in triggers.items():
        if not is_valid_transition(source, dest):
            raise ValueError(f"{trigger}: {source} → {dest} is not a valid transition")
        result.append(
            {"trigger": trigger, "source": source.name.lower(), "dest": dest.name.lower()}
        )
    return result
