import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from tttgame.cli import main

SRC = Path(__file__).resolve().parents[1] / "src"


def _run_cli(args: list[str], cwd: Path, stdin: str = "") -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    exe = [sys.executable, "-m", "tttgame.cli"]
    return subprocess.run(exe + args, cwd=cwd, capture_output=True, text=True, input=stdin, env=env)


def test_cli_solve_and_tactics(tmp_path: Path):
    # X at 1 and 2, O at 4 and 5: X to move and wins at 3
    r = _run_cli(["solve", "--board", "110220000"], cwd=tmp_path)
    assert r.returncode == 0
    s = r.stdout + r.stderr
    assert "to_move=X" in s and "value=1" in s and "optimal=[3]" in s

    r = _run_cli(["tactics", "--board", "110220000"], cwd=tmp_path)
    assert r.returncode == 0
    assert "wins=[3]" in r.stdout + r.stderr


def test_cli_solve_stdin_streams_csv(tmp_path: Path):
    r = _run_cli(["solve", "--stdin"], cwd=tmp_path, stdin="000000000\nnot-a-board\n100000000\n")
    assert r.returncode == 0
    lines = r.stdout.strip().splitlines()
    assert lines[0] == "board,to_move,value,best_score,optimal_moves"
    assert lines[1].startswith("000000000,X,0,0,")
    assert lines[2] == "100000000,O,0,0,5"
    assert len(lines) == 3


def test_cli_play_scripted_game(tmp_path: Path):
    r = _run_cli(["play", "--mode", "pvp", "--no-color"], cwd=tmp_path, stdin="1\n4\n2\n5\n3\nn\n")
    assert r.returncode == 0
    assert "Player 1 (X) wins!" in r.stdout
    assert "Goodbye!" in r.stdout


def test_cli_arena_export(tmp_path: Path):
    out = tmp_path / "arena"
    r = _run_cli(["--seed", "3", "arena", "--x", "hard", "--o", "random", "--games", "5",
                  "--out", str(out)], cwd=tmp_path)
    assert r.returncode == 0
    manifest = json.loads((out / "manifest.json").read_text())
    assert manifest["results"]["o_wins"] == 0
    assert manifest["seed"] == 3


@pytest.mark.parametrize("bad", ["abc", "012345678", "0123456789", "12345678x"])
def test_cli_error_invalid_boards(bad: str):
    assert main(["solve", "--board", bad]) == 2
    assert main(["tactics", "--board", bad]) == 2


def test_cli_error_unreachable_state():
    bad = "111222111"
    assert main(["solve", "--board", bad]) == 2


def test_cli_rejects_bad_game_count():
    assert main(["arena", "--games", "0"]) == 2


def test_cli_version_and_info(capsys):
    assert main(["--version"]) == 0
    assert main(["--info"]) == 0
    assert "numpy=" in capsys.readouterr().out
