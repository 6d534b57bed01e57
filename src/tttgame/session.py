"""
Game loop and mode controller for the terminal game.

Teaching notes:
- A round alternates between two move sources, X first. A move source is any
  callable `(board, player) -> index`; humans and AIs share that shape.
- The outcome is checked after every move and the round ends the instant it
  is decided; the other side is never asked for another move.
- The session is a small state machine: MENU -> IN_GAME -> ROUND_OVER ->
  {IN_GAME | MENU | EXIT}. The scoreboard is owned by the session and kept
  for the life of the process.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .game_basics import (
    Board,
    MoveError,
    Outcome,
    Player,
    apply_move,
    empty_board,
    outcome,
)
from .prompts import QuitRequested, ask_choice, parse_position, read_line
from .render import render_board, render_menu, render_outcome, render_scoreboard, render_welcome
from .scoreboard import Scoreboard
from .strategies import Strategy, choose_move

MoveSource = Callable[[Board, Player], int]
MoveCallback = Callable[[Board, Player, int], None]


class Mode(Enum):
    PVP = "pvp"
    PVAI_RANDOM = "random"
    PVAI_EASY = "easy"
    PVAI_HARD = "hard"

    @property
    def strategy(self) -> Optional[Strategy]:
        return None if self is Mode.PVP else Strategy(self.value)


MODE_LABELS = {
    Mode.PVP: "Player vs Player",
    Mode.PVAI_RANDOM: "Player vs AI (Random)",
    Mode.PVAI_EASY: "Player vs AI (Easy)",
    Mode.PVAI_HARD: "Player vs AI (Hard)",
}
MENU_OPTIONS = {"1": Mode.PVP, "2": Mode.PVAI_RANDOM, "3": Mode.PVAI_EASY, "4": Mode.PVAI_HARD}


class Phase(Enum):
    MENU = "menu"
    IN_GAME = "in_game"
    ROUND_OVER = "round_over"
    EXIT = "exit"


REPLAY_CHOICES = {
    "y": Phase.IN_GAME,
    "yes": Phase.IN_GAME,
    "n": Phase.EXIT,
    "no": Phase.EXIT,
    "m": Phase.MENU,
    "menu": Phase.MENU,
}


@dataclass(frozen=True)
class GameConfig:
    mode: Mode
    human_side: Player = Player.X

    @property
    def player1(self) -> Player:
        """Side whose wins count as player 1 wins."""
        return Player.X if self.mode is Mode.PVP else self.human_side

    def names(self) -> Dict[Player, str]:
        if self.mode is Mode.PVP:
            return {Player.X: "Player 1", Player.O: "Player 2"}
        return {self.human_side: "You", self.human_side.opponent(): "AI"}


class HumanMoveSource:
    def __init__(self, read: Callable[[str], str], write: Callable[[str], None], name: str):
        self.read = read
        self.write = write
        self.name = name

    def __call__(self, board: Board, player: Player) -> int:
        prompt = f"{self.name} ({player.symbol}), enter position (1-9): "
        while True:
            text = read_line(self.read, prompt)
            try:
                idx = parse_position(text)
                apply_move(board, idx, player)
            except MoveError as e:
                self.write(f"Invalid move: {e} Try again.")
                continue
            return idx


class AIMoveSource:
    def __init__(self, strategy: Strategy, rng: Optional[np.random.Generator] = None):
        self.strategy = strategy
        self.rng = rng if rng is not None else np.random.default_rng()

    def __call__(self, board: Board, player: Player) -> int:
        return choose_move(board, player, self.strategy, self.rng)


def play_round(
    sources: Dict[Player, MoveSource],
    on_move: Optional[MoveCallback] = None,
) -> Tuple[Board, Outcome]:
    board = empty_board()
    player = Player.X
    while True:
        idx = sources[player](board, player)
        board = apply_move(board, idx, player)
        if on_move is not None:
            on_move(board, player, idx)
        res = outcome(board)
        if res.is_over:
            return board, res
        player = player.opponent()


class Session:
    def __init__(
        self,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
        color: bool = True,
        rng: Optional[np.random.Generator] = None,
        scoreboard: Optional[Scoreboard] = None,
        config: Optional[GameConfig] = None,
        human_side: Player = Player.X,
    ):
        self.read = read
        self.write = write
        self.color = color
        self.rng = rng if rng is not None else np.random.default_rng()
        self.scoreboard = scoreboard if scoreboard is not None else Scoreboard()
        self.config = config
        self.human_side = config.human_side if config is not None else human_side
        self.phase = Phase.IN_GAME if config is not None else Phase.MENU

    def run(self) -> Scoreboard:
        self.write(render_welcome())
        handlers = {
            Phase.MENU: self._menu,
            Phase.IN_GAME: self._in_game,
            Phase.ROUND_OVER: self._round_over,
        }
        while self.phase is not Phase.EXIT:
            try:
                nxt = handlers[self.phase]()
            except QuitRequested:
                nxt = Phase.EXIT
            logging.debug("phase %s -> %s", self.phase.value, nxt.value)
            self.phase = nxt
        self.write("Goodbye!")
        return self.scoreboard

    def _menu(self) -> Phase:
        self.write(render_menu({key: MODE_LABELS[mode] for key, mode in MENU_OPTIONS.items()}))
        mode = ask_choice(self.read, self.write, "Select mode: ", MENU_OPTIONS)
        self.config = GameConfig(mode, self.human_side)
        return Phase.IN_GAME

    def _sources(self, cfg: GameConfig) -> Dict[Player, MoveSource]:
        names = cfg.names()
        sources: Dict[Player, MoveSource] = {}
        for p in Player:
            if cfg.mode is Mode.PVP or p == cfg.human_side:
                sources[p] = HumanMoveSource(self.read, self.write, names[p])
            else:
                sources[p] = AIMoveSource(cfg.mode.strategy, self.rng)
        return sources

    def _in_game(self) -> Phase:
        cfg = self.config
        assert cfg is not None
        names = cfg.names()

        def show(board: Board, player: Player, idx: int) -> None:
            if names[player] == "AI":
                self.write(f"AI ({player.symbol}) plays {idx + 1}")
            if not outcome(board).is_over:
                self.write(render_board(board, color=self.color))

        self.write(f"\n{MODE_LABELS[cfg.mode]}")
        self.write(render_board(empty_board(), color=self.color))
        board, res = play_round(self._sources(cfg), on_move=show)
        self.scoreboard.record(res, cfg.player1)

        self.write(render_board(board, highlight=res.line, color=self.color))
        self.write(render_outcome(res, names))
        p1 = cfg.player1
        self.write(render_scoreboard(self.scoreboard, names[p1], names[p1.opponent()]))
        return Phase.ROUND_OVER

    def _round_over(self) -> Phase:
        return ask_choice(self.read, self.write, "Play again? (y/n, m for menu): ", REPLAY_CHOICES)
