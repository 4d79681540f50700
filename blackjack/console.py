"""Console front end: prompts, output and the command line entry point."""

import argparse
import logging
from functools import partial
from random import Random
from typing import Callable, Sequence

from blackjack.cards import random_shuffle, seeded_shuffle
from blackjack.exceptions import BlackjackError
from blackjack.game.engine import BlackjackGame
from blackjack.game.state import GameState
from config import config

logger = logging.getLogger(__name__)

InputFn = Callable[[], str]
OutputFn = Callable[[str], None]


def prompt_bet(credit: int, input_fn: InputFn = input, output: OutputFn = print) -> int:
    """
    Ask for a bet until the player enters one between 0 and the credit.

    Args:
        credit: Current credit, the highest accepted bet
        input_fn: Reads one line of player input
        output: Writes one line of text
    """
    prompt = f"Please enter bet (credit: {credit}) "
    output(prompt)
    while True:
        raw = input_fn().strip()
        try:
            bet = int(raw)
        except ValueError:
            output("Not a whole number. " + prompt)
            continue
        if bet < 0:
            output("Cannot be negative. " + prompt)
        elif bet > credit:
            output("Too high. " + prompt)
        else:
            return bet


def prompt_continue(input_fn: InputFn = input, output: OutputFn = print) -> bool:
    """Ask whether to play another round; only 'y' means yes."""
    output("Do you want to continue?")
    return input_fn().strip().lower() == "y"


def prompt_stand(input_fn: InputFn = input, output: OutputFn = print) -> bool:
    """Ask hit or stand; 's' stands and anything else hits."""
    output("Hit or Stand?")
    return input_fn().strip().lower() == "s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blackjack",
        description="Play blackjack against the dealer from the console",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed the shuffle for a reproducible game",
    )
    parser.add_argument(
        "--credit", type=int, default=config.game.starting_credit,
        help=f"Starting credit (default: {config.game.starting_credit})",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Log game events to stderr",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    input_fn: InputFn = input,
    output: OutputFn = print,
) -> int:
    """
    Run a console game.

    Returns:
        Process exit code: 0 when the game ends normally, 1 when it is
        aborted by a game error, 130 when input is interrupted
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.credit <= 0:
        parser.error("--credit must be positive")

    logging.basicConfig(
        level=logging.DEBUG if args.debug else config.effective_log_level,
        format=config.log_format,
    )

    shuffle = random_shuffle if args.seed is None else seeded_shuffle(Random(args.seed))
    game = BlackjackGame(
        prompt_bet=partial(prompt_bet, input_fn=input_fn, output=output),
        prompt_continue=partial(prompt_continue, input_fn=input_fn, output=output),
        prompt_stand=partial(prompt_stand, input_fn=input_fn, output=output),
        shuffle=shuffle,
        display=output,
        state=GameState(args.credit),
    )

    try:
        result = game.run()
    except BlackjackError as e:
        logger.error("game aborted: %s", e)
        output(f"Game aborted: {e}")
        return 1
    except (KeyboardInterrupt, EOFError):
        output("")
        return 130

    logger.info(
        "game over (%s) after %d rounds, %d won, credit %d",
        result.reason.name.lower(), result.rounds_played, result.rounds_won,
        result.state.credit,
    )
    return 0
