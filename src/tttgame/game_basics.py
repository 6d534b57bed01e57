"""
Game basics: board representation, move application, winner/draw checks, validity.
Teaching notes:
- A board is an immutable tuple of 9 cells: 0=empty, 1=X, 2=O. X always starts.
- Cells are indexed 0-8 row-major; the user sees positions 1-9.
- A "ply" is a half-move (one player's turn).
- Valid states have counts either equal (X to move) or X has one more (O to move).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional, Tuple

EMPTY = 0

Board = Tuple[int, ...]
Line = Tuple[int, int, int]

WIN_PATTERNS: Tuple[Line, ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class Player(IntEnum):
    X = 1
    O = 2

    def opponent(self) -> "Player":
        return Player.O if self is Player.X else Player.X

    @property
    def symbol(self) -> str:
        return self.name


class MoveError(ValueError):
    """A move that cannot be applied to the board."""


class OutOfRange(MoveError):
    pass


class CellOccupied(MoveError):
    pass


class Status(Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    status: Status
    winner: Optional[Player] = None
    line: Optional[Line] = None

    @property
    def is_over(self) -> bool:
        return self.status is not Status.IN_PROGRESS


IN_PROGRESS = Outcome(Status.IN_PROGRESS)
DRAW = Outcome(Status.DRAW)


def empty_board() -> Board:
    return (EMPTY,) * 9


def apply_move(board: Board, index: int, player: Player) -> Board:
    """Return a new board with `player` placed at `index`.

    Raises OutOfRange for anything that is not an int in 0-8 and
    CellOccupied when the cell already holds a mark.
    """
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= 8:
        raise OutOfRange(f"Position {index!r} is out of range (expected 0-8).")
    if board[index] != EMPTY:
        raise CellOccupied(
            f"Position {index + 1} is already taken by {Player(board[index]).symbol}."
        )
    lst = list(board)
    lst[index] = int(player)
    return tuple(lst)


def legal_moves(board: Board) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def winning_line(board: Board) -> Optional[Line]:
    for pattern in WIN_PATTERNS:
        a, b, c = pattern
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return pattern
    return None


def get_winner(board: Board) -> int:
    line = winning_line(board)
    return board[line[0]] if line is not None else 0


def is_draw(board: Board) -> bool:
    return EMPTY not in board and get_winner(board) == 0


def outcome(board: Board) -> Outcome:
    line = winning_line(board)
    if line is not None:
        return Outcome(Status.WIN, Player(board[line[0]]), line)
    if EMPTY not in board:
        return DRAW
    return IN_PROGRESS


def piece_counts(board: Board) -> Tuple[int, int]:
    return board.count(Player.X), board.count(Player.O)


def current_player(board: Board) -> Player:
    x, o = piece_counts(board)
    return Player.X if x == o else Player.O


def is_valid_state(board: Board) -> bool:
    if len(board) != 9 or any(v not in (0, 1, 2) for v in board):
        return False
    x_count, o_count = piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False
    w = get_winner(board)
    if w == Player.X and x_count != o_count + 1:
        return False
    if w == Player.O and x_count != o_count:
        return False

    # no double winners
    def count_wins(p: int) -> int:
        return sum(1 for pat in WIN_PATTERNS if all(board[i] == p for i in pat))

    if count_wins(Player.X) > 0 and count_wins(Player.O) > 0:
        return False
    return True


def serialize_board(board: Board) -> str:
    return ''.join(str(cell) for cell in board)


def deserialize_board(board_str: str) -> Board:
    raw = board_str.strip()
    if len(raw) != 9 or any(c not in "012" for c in raw):
        raise ValueError("Invalid board string. Must be 9 chars of 0/1/2.")
    return tuple(int(c) for c in raw)
