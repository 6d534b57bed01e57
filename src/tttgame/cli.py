from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

import numpy as np

from .arena import ArenaArgs, run_arena
from .game_basics import Board, Player, current_player, deserialize_board, is_valid_state
from .paths import arena_dir, default_seed
from .render import color_enabled
from .session import GameConfig, Mode, Session
from .solver import analyze
from .strategies import Strategy
from .tactics import blocking_moves, fork_moves, immediate_winning_moves

STRATEGY_NAMES = [s.value for s in Strategy]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Terminal Tic-Tac-Toe")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument(
        "--seed", type=int, default=None, help="Seed for the AI's random choices (default: $TTT_SEED)"
    )

    p_play = sub.add_parser("play", help="Play interactively (default command)")
    p_play.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        default=None,
        help="Skip the menu and start in this mode",
    )
    p_play.add_argument(
        "--human",
        choices=["x", "o"],
        default="x",
        help="Side the human plays against the AI (default: x)",
    )
    p_play.add_argument("--no-color", action="store_true", help="Disable coloured output")

    p_arena = sub.add_parser("arena", help="Play AI-vs-AI games and report the results")
    p_arena.add_argument("--x", choices=STRATEGY_NAMES, default="hard", help="Strategy playing X")
    p_arena.add_argument("--o", choices=STRATEGY_NAMES, default="random", help="Strategy playing O")
    p_arena.add_argument("--games", type=int, default=100, help="Number of games (default: 100)")
    p_arena.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Directory for game records and manifest (default: no export; "
             "pass --out with no value for $TTT_ARENA_DIR)",
        nargs="?",
        const=arena_dir(),
    )
    p_arena.add_argument(
        "--format",
        choices=["csv", "parquet", "both"],
        default="csv",
        help="Export format: csv (default), parquet, both",
    )
    p_arena.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_arena.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )

    p_sol = sub.add_parser("solve", help="Solve a board via perfect play from side-to-move")
    p_sol.add_argument("--board", help="Board string, e.g., 100020000 (omit with --stdin)")
    p_sol.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    p_tac = sub.add_parser("tactics", help="List immediate wins, blocks and forks for side-to-move")
    p_tac.add_argument("--board", required=True, help="Board string, e.g., 100020000")

    return p


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "colorama", "pandas", "pyarrow", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _parse_board(raw: Optional[str]) -> Optional[Board]:
    try:
        b = deserialize_board(raw or "")
    except ValueError as e:
        logging.error("%s", e)
        return None
    if not is_valid_state(b):
        logging.error("Board is not a valid reachable state.")
        return None
    return b


def _cmd_play(ns: argparse.Namespace, seed: Optional[int]) -> int:
    import sys

    import colorama

    color = not ns.no_color and color_enabled(sys.stdout)
    if color:
        colorama.just_fix_windows_console()
    human = Player.X if ns.human == "x" else Player.O
    config = GameConfig(Mode(ns.mode), human) if ns.mode else None
    session = Session(
        color=color,
        rng=np.random.default_rng(seed),
        config=config,
        human_side=human,
    )
    try:
        session.run()
    except KeyboardInterrupt:
        print()
        return 130
    return 0


def _cmd_arena(ns: argparse.Namespace, seed: Optional[int]) -> int:
    if ns.games < 1:
        logging.error("--games must be at least 1")
        return 2
    args = ArenaArgs(
        x_strategy=Strategy(ns.x),
        o_strategy=Strategy(ns.o),
        games=ns.games,
        seed=seed,
        out=ns.out,
        format=ns.format,
        tracking=ns.tracking,
        log_dir=ns.log_dir,
    )
    try:
        res = run_arena(args)
    except RuntimeError as e:
        logging.error("%s", e)
        return 2
    logging.info(
        "x_wins=%d o_wins=%d draws=%d",
        res.x_wins,
        res.o_wins,
        res.draws,
    )
    return 0


def _cmd_solve(ns: argparse.Namespace) -> int:
    import sys as _sys

    if ns.stdin:
        import csv as _csv

        w = _csv.writer(_sys.stdout)
        w.writerow(["board", "to_move", "value", "best_score", "optimal_moves"])
        for line in _sys.stdin:
            raw = line.strip()
            if not raw:
                continue
            try:
                b = deserialize_board(raw)
            except ValueError:
                continue
            if not is_valid_state(b):
                continue
            res = analyze(b)
            w.writerow([
                raw,
                res['to_move'].symbol,
                "" if res['value'] is None else res['value'],
                "" if res['best_score'] is None else res['best_score'],
                ' '.join(str(m + 1) for m in res['optimal_moves']),
            ])
        return 0

    b = _parse_board(ns.board)
    if b is None:
        return 2
    res = analyze(b)
    logging.info(
        "to_move=%s value=%s best_score=%s optimal=%s",
        res['to_move'].symbol,
        res['value'],
        res['best_score'],
        [m + 1 for m in res['optimal_moves']],
    )
    return 0


def _cmd_tactics(ns: argparse.Namespace) -> int:
    b = _parse_board(ns.board)
    if b is None:
        return 2
    p = current_player(b)
    logging.info(
        "to_move=%s wins=%s blocks=%s forks=%s",
        p.symbol,
        [m + 1 for m in immediate_winning_moves(b, p)],
        [m + 1 for m in blocking_moves(b, p)],
        [m + 1 for m in fork_moves(b, p)],
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if ns.version:
        try:
            from importlib.metadata import PackageNotFoundError, version as _ver

            print(_ver("tttgame"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if ns.info:
        _print_info()
        return 0

    try:
        seed = ns.seed if ns.seed is not None else default_seed()
    except ValueError:
        logging.error("TTT_SEED must be an integer")
        return 2

    if ns.cmd == "arena":
        return _cmd_arena(ns, seed)
    if ns.cmd == "solve":
        return _cmd_solve(ns)
    if ns.cmd == "tactics":
        return _cmd_tactics(ns)
    if ns.cmd is None:
        ns = parser.parse_args(["play"])
    return _cmd_play(ns, seed)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
