"""
Tactics and simple motifs: immediate wins, blocks and forks.
Teaching notes:
- These are one- and two-ply lookups; the Easy opponent is built from them.
- Every helper returns indices in ascending order.
"""
from typing import List

from .game_basics import Board, Player, apply_move, get_winner, legal_moves


def immediate_winning_moves(board: Board, player: Player) -> List[int]:
    return [i for i in legal_moves(board) if get_winner(apply_move(board, i, player)) == player]


def blocking_moves(board: Board, player: Player) -> List[int]:
    """Cells `player` must take to stop the opponent winning next turn."""
    return immediate_winning_moves(board, player.opponent())


def fork_moves(board: Board, player: Player) -> List[int]:
    forks: List[int] = []
    for i in legal_moves(board):
        b = apply_move(board, i, player)
        if get_winner(b) == 0 and len(immediate_winning_moves(b, player)) >= 2:
            forks.append(i)
    return forks
