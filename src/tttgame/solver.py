"""
Exact game-theoretic solver (depth-scored minimax with memoization).
Scoring, from the perspective of the side choosing the move:
- Win = +10 - depth, Loss = -10 + depth, Draw = 0.
- Depth counts plies from the decision root; the candidate move itself is depth 1.
- Faster wins and slower losses score higher.
Tie-break policy: among equally scored moves, the lowest board index.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Optional

from .game_basics import (
    Board,
    Player,
    Status,
    apply_move,
    current_player,
    legal_moves,
    outcome,
)

WIN_SCORE = 10


@lru_cache(maxsize=None)
def _minimax(board: Board, ai: Player, depth: int) -> int:
    res = outcome(board)
    if res.status is Status.WIN:
        return WIN_SCORE - depth if res.winner == ai else -WIN_SCORE + depth
    if res.status is Status.DRAW:
        return 0
    # odd depth: the AI has just moved, so the opponent is on ply
    to_move = ai.opponent() if depth % 2 == 1 else ai
    scores = [_minimax(apply_move(board, mv, to_move), ai, depth + 1) for mv in legal_moves(board)]
    return max(scores) if to_move == ai else min(scores)


def score_moves(board: Board, player: Player) -> Dict[int, int]:
    """Minimax score of every legal move for `player`, keyed by index."""
    return {mv: _minimax(apply_move(board, mv, player), player, 1) for mv in legal_moves(board)}


def best_move(board: Board, player: Player) -> Optional[int]:
    scores = score_moves(board, player)
    if not scores:
        return None
    top = max(scores.values())
    return min(mv for mv, s in scores.items() if s == top)


def analyze(board: Board) -> Dict:
    """Solve `board` for the side to move.

    `value` is +1/0/-1 (win/draw/loss under perfect play); `scores` holds one
    entry per cell with None for occupied cells.
    """
    p = current_player(board)
    scores = {} if outcome(board).is_over else score_moves(board, p)
    cells: List[Optional[int]] = [scores.get(i) for i in range(9)]
    if not scores:
        return {
            'to_move': p,
            'value': None,
            'best_score': None,
            'optimal_moves': tuple(),
            'scores': tuple(cells),
        }
    top = max(scores.values())
    return {
        'to_move': p,
        'value': (top > 0) - (top < 0),
        'best_score': top,
        'optimal_moves': tuple(sorted(mv for mv, s in scores.items() if s == top)),
        'scores': tuple(cells),
    }
