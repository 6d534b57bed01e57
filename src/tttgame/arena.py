"""
Arena: batch AI-vs-AI games with reproducible exports.

Games are played with the same round loop as the interactive session and a
single seeded numpy generator, so a fixed seed reproduces the CSV byte for
byte. Parquet output is optional and needs pandas + pyarrow.
"""
from __future__ import annotations

import csv
import importlib.util
import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from .game_basics import Player, Status
from .paths import get_git_commit
from .session import AIMoveSource, play_round
from .strategies import Strategy
from .tracking import log_arena, maybe_mlflow_run

ARENA_VERSION = "1.0.0"
FIELDNAMES = ["game", "x_strategy", "o_strategy", "moves", "winner", "line", "plies"]


@dataclass
class ArenaArgs:
    x_strategy: Strategy = Strategy.HARD
    o_strategy: Strategy = Strategy.RANDOM
    games: int = 100
    seed: Optional[int] = None
    out: Optional[Path] = None
    format: str = "csv"  # one of: "csv", "parquet", "both"
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = Path("runs")


@dataclass
class ArenaResult:
    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0
    records: List[Dict[str, Any]] = field(default_factory=list)
    out: Optional[Path] = None

    @property
    def games(self) -> int:
        return self.x_wins + self.o_wins + self.draws

    def summary(self) -> Dict[str, int]:
        return {"games": self.games, "x_wins": self.x_wins, "o_wins": self.o_wins, "draws": self.draws}


def play_game(x: AIMoveSource, o: AIMoveSource) -> Dict[str, Any]:
    moves: List[int] = []
    board, res = play_round(
        {Player.X: x, Player.O: o},
        on_move=lambda _b, _p, idx: moves.append(idx),
    )
    return {
        "moves": " ".join(str(m + 1) for m in moves),
        "winner": res.winner.symbol if res.status is Status.WIN else "",
        "line": " ".join(str(i + 1) for i in res.line) if res.line else "",
        "plies": len(moves),
    }


def _package_versions() -> Dict[str, str]:
    versions: Dict[str, str] = {}
    for pkg in ["numpy", "colorama", "pandas", "pyarrow"]:
        if importlib.util.find_spec(pkg) is None:
            continue
        mod = __import__(pkg)
        ver = getattr(mod, "__version__", None)
        if ver:
            versions[pkg] = ver
    return versions


def _write_csv(path: Path, rows: List[Dict[str, Any]]) -> None:
    with path.open("w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=FIELDNAMES)
        w.writeheader()
        for r in rows:
            w.writerow(r)


def write_outputs(args: ArenaArgs, result: ArenaResult) -> Dict[str, Any]:
    assert args.out is not None
    fmt = (args.format or "csv").lower()
    if fmt not in {"csv", "parquet", "both"}:
        raise ValueError(f"Unknown export format: {args.format}")
    have_parquet = (
        importlib.util.find_spec("pandas") is not None
        and importlib.util.find_spec("pyarrow") is not None
    )
    msg = (
        "Parquet dependencies not available (install pandas and pyarrow). "
        "Use pip install .[parquet] to enable parquet support."
    )
    if fmt == "parquet" and not have_parquet:
        # user asked only for parquet; fail before writing anything
        raise RuntimeError(msg)

    args.out.mkdir(parents=True, exist_ok=True)
    files: List[str] = []
    if fmt in {"csv", "both"}:
        _write_csv(args.out / "arena_games.csv", result.records)
        files.append("arena_games.csv")
        logging.info("Wrote %s (%d rows)", args.out / "arena_games.csv", len(result.records))

    wrote_parquet = False
    if fmt in {"parquet", "both"}:
        if have_parquet:
            import pandas as pd  # type: ignore

            pd.DataFrame(result.records, columns=FIELDNAMES).to_parquet(args.out / "arena_games.parquet")
            files.append("arena_games.parquet")
            wrote_parquet = True
            logging.info("Wrote Parquet file to %s", args.out)
        else:
            logging.warning("%s Proceeding with CSV only; manifest will record parquet_written=false.", msg)

    manifest = {
        "arena_version": ARENA_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "x_strategy": args.x_strategy.value,
        "o_strategy": args.o_strategy.value,
        "seed": args.seed,
        "results": result.summary(),
        "files": files,
        "parquet_written": wrote_parquet,
        "git_commit": get_git_commit(),
        "python_version": sys.version.split(" ")[0],
        "packages": _package_versions(),
    }
    (args.out / "manifest.json").write_text(json.dumps(manifest, indent=2, sort_keys=True))
    return manifest


def run_arena(args: ArenaArgs) -> ArenaResult:
    if args.games < 1:
        raise ValueError("games must be at least 1")
    rng = np.random.default_rng(args.seed)
    x = AIMoveSource(args.x_strategy, rng)
    o = AIMoveSource(args.o_strategy, rng)
    result = ArenaResult(out=args.out)

    with maybe_mlflow_run(args.tracking == "mlflow", run_name="arena", log_dir=args.log_dir) as tracking:
        logging.info(
            "Playing %d games: X=%s vs O=%s (seed=%s)",
            args.games, args.x_strategy.value, args.o_strategy.value, args.seed,
        )
        for g in range(args.games):
            rec = play_game(x, o)
            if rec["winner"] == "X":
                result.x_wins += 1
            elif rec["winner"] == "O":
                result.o_wins += 1
            else:
                result.draws += 1
            result.records.append({
                "game": g,
                "x_strategy": args.x_strategy.value,
                "o_strategy": args.o_strategy.value,
                **rec,
            })
        logging.info("Results: %s", result.summary())

        artifacts: tuple = ()
        if args.out is not None:
            manifest = write_outputs(args, result)
            artifacts = tuple(args.out / name for name in manifest["files"] + ["manifest.json"])
        if tracking:
            log_arena(
                {"x_strategy": args.x_strategy.value, "o_strategy": args.o_strategy.value,
                 "games": args.games, "seed": args.seed},
                {k: float(v) for k, v in result.summary().items()},
                artifacts,
            )
    return result
