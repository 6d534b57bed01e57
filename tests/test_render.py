from colorama import Fore

from tttgame.game_basics import DRAW, Outcome, Player, Status, empty_board
from tttgame.render import (
    color_enabled,
    render_board,
    render_menu,
    render_outcome,
    render_scoreboard,
    render_welcome,
)
from tttgame.scoreboard import Scoreboard


def test_empty_board_shows_positions():
    text = render_board(empty_board(), color=False)
    assert text.splitlines() == [
        " 1 | 2 | 3 ",
        "---+---+---",
        " 4 | 5 | 6 ",
        "---+---+---",
        " 7 | 8 | 9 ",
    ]


def test_plain_highlight_uses_brackets():
    board = (1, 1, 1, 2, 2, 0, 0, 0, 0)
    text = render_board(board, highlight=(0, 1, 2), color=False)
    assert text.splitlines()[0] == "[X]|[X]|[X]"
    assert text.splitlines()[2] == " O | O | 6 "
    assert "\x1b[" not in text


def test_color_highlight_marks_only_the_line():
    board = (1, 1, 1, 2, 2, 0, 0, 0, 0)
    text = render_board(board, highlight=(0, 1, 2), color=True)
    first, _, second = text.splitlines()[:3]
    assert first.count(Fore.GREEN) == 3
    assert Fore.GREEN not in second


def test_outcome_messages():
    names = {Player.X: "You", Player.O: "AI"}
    assert render_outcome(Outcome(Status.WIN, Player.O, (2, 4, 6)), names) == "AI (O) wins!"
    assert render_outcome(DRAW, names) == "It's a draw!"


def test_scoreboard_and_menu_text():
    sb = Scoreboard(player1_wins=2, player2_or_ai_wins=1, draws=4)
    assert render_scoreboard(sb, "You", "AI") == "Score  You: 2  AI: 1  Draws: 4"
    menu = render_menu({"1": "Player vs Player"})
    assert "1) Player vs Player" in menu
    assert "q) Quit" in menu
    assert "1-9" in render_welcome()


def test_color_enabled_respects_env(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("TTT_NO_COLOR", raising=False)
    assert color_enabled() is True
    monkeypatch.setenv("NO_COLOR", "1")
    assert color_enabled() is False
