"""Tests for the console prompts and entry point."""

import pytest

from blackjack.console import build_parser, main, prompt_bet, prompt_continue, prompt_stand


@pytest.fixture
def lines():
    """Build a scripted input function from lines of text."""

    def factory(*values: str):
        remaining = list(values)

        def input_fn() -> str:
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        return input_fn

    return factory


class TestPromptBet:
    def test_accepts_valid_bet(self, lines, display):
        assert prompt_bet(100, lines("20"), display.append) == 20
        assert display == ["Please enter bet (credit: 100) "]

    def test_reprompts_until_valid(self, lines, display):
        bet = prompt_bet(100, lines("abc", "-1", "150", " 100 "), display.append)

        assert bet == 100
        assert display == [
            "Please enter bet (credit: 100) ",
            "Not a whole number. Please enter bet (credit: 100) ",
            "Cannot be negative. Please enter bet (credit: 100) ",
            "Too high. Please enter bet (credit: 100) ",
        ]

    def test_end_of_input_propagates(self, lines, display):
        with pytest.raises(EOFError):
            prompt_bet(100, lines("500"), display.append)


class TestYesNoPrompts:
    @pytest.mark.parametrize("answer,expected", [("y", True), ("Y", True), ("n", False), ("", False), ("yes", False)])
    def test_continue(self, lines, display, answer, expected):
        assert prompt_continue(lines(answer), display.append) is expected
        assert display == ["Do you want to continue?"]

    @pytest.mark.parametrize("answer,expected", [("s", True), ("S ", True), ("h", False), ("stand", False)])
    def test_stand(self, lines, display, answer, expected):
        assert prompt_stand(lines(answer), display.append) is expected
        assert display == ["Hit or Stand?"]


class TestMain:
    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.seed is None
        assert args.credit == 100
        assert not args.debug

    def test_play_one_round_and_quit(self, lines, display):
        # A two-card hand can never be bust, so standing at once is always asked
        code = main(["--seed", "3"], lines("0", "s", "n"), display.append)

        assert code == 0
        assert display[0] == "Please enter bet (credit: 100) "
        assert "Hit or Stand?" in display
        assert "Do you want to continue?" in display
        assert display[-1] == "Exiting"

    def test_seeded_games_repeat(self, lines):
        first, second = [], []
        main(["--seed", "11", "--credit", "40"], lines("0", "s", "n"), first.append)
        main(["--seed", "11", "--credit", "40"], lines("0", "s", "n"), second.append)

        assert first == second
        assert "Please enter bet (credit: 40) " in first

    def test_interrupted_input(self, lines, display):
        assert main([], lines(), display.append) == 130

    def test_rejects_non_positive_credit(self, lines, display):
        with pytest.raises(SystemExit):
            main(["--credit", "0"], lines(), display.append)
