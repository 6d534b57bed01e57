"""
AI move selection: the three opponent strengths behind one entry point.
Teaching notes:
- RANDOM plays any legal cell uniformly.
- EASY takes a win if one is available, otherwise blocks the opponent's win,
  otherwise plays randomly.
- HARD is the exhaustive minimax solver and never loses.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

import numpy as np

from .game_basics import Board, Player, legal_moves
from .solver import best_move, score_moves
from .tactics import blocking_moves, immediate_winning_moves


class Strategy(Enum):
    RANDOM = "random"
    EASY = "easy"
    HARD = "hard"


class NoLegalMovesError(RuntimeError):
    """The AI was asked to move on a board with no empty cell."""


def random_move(board: Board, rng: np.random.Generator) -> int:
    return int(rng.choice(legal_moves(board)))


def easy_move(board: Board, player: Player, rng: np.random.Generator) -> int:
    wins = immediate_winning_moves(board, player)
    if wins:
        return wins[0]
    blocks = blocking_moves(board, player)
    if blocks:
        return blocks[0]
    return random_move(board, rng)


def hard_move(board: Board, player: Player) -> int:
    mv = best_move(board, player)
    if logging.getLogger().isEnabledFor(logging.DEBUG):
        logging.debug("minimax scores for %s: %s", player.symbol, score_moves(board, player))
    assert mv is not None
    return mv


def choose_move(
    board: Board,
    player: Player,
    strategy: Strategy,
    rng: Optional[np.random.Generator] = None,
) -> int:
    if not legal_moves(board):
        raise NoLegalMovesError("choose_move called on a full board")
    if rng is None:
        rng = np.random.default_rng()
    if strategy is Strategy.RANDOM:
        mv = random_move(board, rng)
    elif strategy is Strategy.EASY:
        mv = easy_move(board, player, rng)
    elif strategy is Strategy.HARD:
        mv = hard_move(board, player)
    else:
        raise ValueError(f"Unknown strategy: {strategy}")
    logging.debug("%s (%s) chose %d", player.symbol, strategy.value, mv + 1)
    return mv
