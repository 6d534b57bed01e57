"""Session scoreboard: lives as long as the process, never persisted."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict

from .game_basics import Outcome, Player, Status


@dataclass
class Scoreboard:
    player1_wins: int = 0
    player2_or_ai_wins: int = 0
    draws: int = 0

    @property
    def games_played(self) -> int:
        return self.player1_wins + self.player2_or_ai_wins + self.draws

    def record(self, result: Outcome, player1: Player = Player.X) -> None:
        """Count one finished game; `player1` is the side the first player held."""
        if result.status is Status.IN_PROGRESS:
            raise ValueError("Cannot record a game that is still in progress")
        if result.status is Status.DRAW:
            self.draws += 1
        elif result.winner == player1:
            self.player1_wins += 1
        else:
            self.player2_or_ai_wins += 1
        logging.debug("scoreboard: %s", self.as_dict())

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)
