"""
Input parsing for the interactive game.

Parsers are pure; the `ask_*` helpers loop on a `read` callable (normally
`input`) until they get something usable. `q` quits from any prompt.
"""
from __future__ import annotations

from typing import Callable, Dict, TypeVar

from .game_basics import OutOfRange

QUIT_WORDS = {"q", "quit", "exit"}

T = TypeVar("T")


class QuitRequested(Exception):
    """The player asked to leave the game."""


def is_quit(text: str) -> bool:
    return text.strip().lower() in QUIT_WORDS


def parse_position(text: str) -> int:
    """Map a typed position 1-9 to a board index 0-8.

    Malformed input is reported the same way as an out-of-range number.
    """
    raw = text.strip()
    try:
        pos = int(raw)
    except ValueError:
        raise OutOfRange(f"{raw!r} is not a number between 1 and 9.") from None
    if not 1 <= pos <= 9:
        raise OutOfRange(f"{pos} is out of range (expected 1-9).")
    return pos - 1


def read_line(read: Callable[[str], str], prompt: str) -> str:
    try:
        text = read(prompt)
    except EOFError:
        raise QuitRequested() from None
    if is_quit(text):
        raise QuitRequested()
    return text


def ask_choice(
    read: Callable[[str], str],
    write: Callable[[str], None],
    prompt: str,
    choices: Dict[str, T],
) -> T:
    while True:
        raw = read_line(read, prompt).strip().lower()
        if raw in choices:
            return choices[raw]
        write(f"Invalid input. Type one of: {', '.join(choices)}")
