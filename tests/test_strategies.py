import numpy as np
import pytest

from tttgame.game_basics import Player, Status, apply_move, empty_board, legal_moves, outcome
from tttgame.session import AIMoveSource, play_round
from tttgame.strategies import NoLegalMovesError, Strategy, choose_move, easy_move


def _rng(seed=0):
    return np.random.default_rng(seed)


def test_random_returns_legal_moves_and_is_seedable():
    b = (1, 0, 2, 0, 1, 0, 0, 0, 2)
    picks = [choose_move(b, Player.O, Strategy.RANDOM, _rng(7)) for _ in range(3)]
    assert len(set(picks)) == 1
    assert picks[0] in legal_moves(b)


def test_random_covers_every_cell():
    rng = _rng(1)
    seen = {choose_move(empty_board(), Player.X, Strategy.RANDOM, rng) for _ in range(500)}
    assert seen == set(range(9))


def test_easy_takes_win_before_block():
    # X can win at 2 while O threatens 5
    b = (1, 1, 0, 2, 2, 0, 0, 0, 0)
    assert easy_move(b, Player.X, _rng()) == 2


def test_easy_blocks_single_threat():
    b = (1, 1, 0, 0, 2, 0, 0, 0, 0)
    assert choose_move(b, Player.O, Strategy.EASY, _rng()) == 2


def test_easy_blocks_lowest_of_several_threats():
    # X threatens 2 (top row) and 6 (left column)
    b = (1, 1, 0, 1, 2, 0, 0, 0, 2)
    assert choose_move(b, Player.O, Strategy.EASY, _rng()) == 2


def test_easy_falls_back_to_random():
    b = (1, 0, 0, 0, 0, 0, 0, 0, 0)
    assert choose_move(b, Player.O, Strategy.EASY, _rng(3)) in legal_moves(b)


def test_hard_blocks_and_wins():
    assert choose_move((1, 1, 0, 0, 2, 0, 0, 0, 0), Player.O, Strategy.HARD) == 2
    assert choose_move((1, 1, 0, 2, 2, 0, 0, 0, 0), Player.X, Strategy.HARD) == 2


@pytest.mark.parametrize("strategy", list(Strategy))
def test_full_board_is_a_precondition_violation(strategy):
    full = (1, 2, 1, 1, 2, 2, 2, 1, 1)
    with pytest.raises(NoLegalMovesError):
        choose_move(full, Player.X, strategy, _rng())


def test_hard_vs_hard_always_draws():
    hard = AIMoveSource(Strategy.HARD)
    _, res = play_round({Player.X: hard, Player.O: hard})
    assert res.status is Status.DRAW


@pytest.mark.parametrize("hard_side", list(Player))
@pytest.mark.parametrize("other", [Strategy.RANDOM, Strategy.EASY])
def test_hard_never_loses_to_weaker_strategies(hard_side, other):
    rng = _rng(2024)
    for _ in range(25):
        sources = {
            hard_side: AIMoveSource(Strategy.HARD, rng),
            hard_side.opponent(): AIMoveSource(other, rng),
        }
        _, res = play_round(sources)
        assert res.winner != hard_side.opponent()


def _explore(board, to_move, hard_side, leaves):
    res = outcome(board)
    if res.is_over:
        assert res.winner != hard_side.opponent(), board
        leaves.append(res)
        return
    if to_move == hard_side:
        mv = choose_move(board, to_move, Strategy.HARD)
        _explore(apply_move(board, mv, to_move), to_move.opponent(), hard_side, leaves)
        return
    for mv in legal_moves(board):
        _explore(apply_move(board, mv, to_move), to_move.opponent(), hard_side, leaves)


@pytest.mark.parametrize("hard_side", list(Player))
def test_hard_never_loses_against_any_line_of_play(hard_side):
    leaves = []
    _explore(empty_board(), Player.X, hard_side, leaves)
    assert leaves
