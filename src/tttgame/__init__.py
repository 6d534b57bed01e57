"""tttgame package.

Terminal Tic-Tac-Toe: board model, a perfect minimax opponent, the
interactive session, and an AI-vs-AI arena.

Convenience imports are exposed for common workflows.
"""

from .game_basics import (
    CellOccupied,
    MoveError,
    Outcome,
    OutOfRange,
    Player,
    Status,
    apply_move,
    legal_moves,
    outcome,
)
from .scoreboard import Scoreboard
from .strategies import Strategy, choose_move

__all__ = [
    "apply_move",
    "legal_moves",
    "outcome",
    "choose_move",
    "Player",
    "Outcome",
    "Status",
    "Strategy",
    "Scoreboard",
    "MoveError",
    "OutOfRange",
    "CellOccupied",
]
