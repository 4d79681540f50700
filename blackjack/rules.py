"""House rules for the console game."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HouseRules:
    """
    Fixed table rules.

    The dealer compares against the raw hand value (aces as 1), so a soft
    hand never stops the dealer early.
    """

    # Target total; anything above busts
    winning_value: int = 21

    # Dealer keeps drawing while the raw value is below this
    dealer_stand_threshold: int = 17

    # Extra points for counting a single ace as 11
    ace_bonus: int = 10


DEFAULT_RULES = HouseRules()
