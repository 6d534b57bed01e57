"""
Text rendering for the terminal game.

Everything here returns strings; the session decides where they are written.
Colour comes from colorama and can be switched off, in which case winning
cells are bracketed instead of highlighted.
"""
from __future__ import annotations

import os
from typing import Dict, Iterable, Optional

from colorama import Fore, Style

from .game_basics import Board, EMPTY, Outcome, Player, Status
from .scoreboard import Scoreboard

MARK_COLORS = {Player.X: Fore.CYAN, Player.O: Fore.YELLOW}
HIGHLIGHT = Fore.GREEN + Style.BRIGHT
DIVIDER = "---+---+---"


def color_enabled(stream=None) -> bool:
    if os.getenv("NO_COLOR") or os.getenv("TTT_NO_COLOR"):
        return False
    if stream is None:
        return True
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _cell(board: Board, i: int, highlighted: bool, color: bool) -> str:
    v = board[i]
    text = str(i + 1) if v == EMPTY else Player(v).symbol
    if not color:
        return f"[{text}]" if highlighted else f" {text} "
    if highlighted:
        return f" {HIGHLIGHT}{text}{Style.RESET_ALL} "
    if v == EMPTY:
        return f" {Style.DIM}{text}{Style.RESET_ALL} "
    return f" {MARK_COLORS[Player(v)]}{text}{Style.RESET_ALL} "


def render_board(board: Board, highlight: Optional[Iterable[int]] = None, color: bool = True) -> str:
    marked = set(highlight or ())
    rows = []
    for r in range(3):
        rows.append("|".join(_cell(board, 3 * r + c, 3 * r + c in marked, color) for c in range(3)))
    return f"\n{DIVIDER}\n".join(rows)


def render_outcome(result: Outcome, names: Dict[Player, str]) -> str:
    if result.status is Status.WIN:
        return f"{names[result.winner]} ({result.winner.symbol}) wins!"
    if result.status is Status.DRAW:
        return "It's a draw!"
    return ""


def render_scoreboard(scoreboard: Scoreboard, player1: str = "Player 1", player2: str = "Player 2") -> str:
    return (
        f"Score  {player1}: {scoreboard.player1_wins}  "
        f"{player2}: {scoreboard.player2_or_ai_wins}  "
        f"Draws: {scoreboard.draws}"
    )


def render_welcome() -> str:
    return "\n".join([
        "==== Welcome to Tic Tac Toe ====",
        "",
        "X always moves first.",
        "Select cells by typing numbers 1-9:",
        "",
        render_board((EMPTY,) * 9, color=False),
        "",
        "Type q at any prompt to quit.",
    ])


def render_menu(options: Dict[str, str]) -> str:
    lines = ["", "Choose a mode:"]
    lines.extend(f"  {key}) {label}" for key, label in options.items())
    lines.append("  q) Quit")
    return "\n".join(lines)
