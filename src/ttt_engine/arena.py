"""
Seeded bot-vs-AI matches for comparing difficulty tiers.

The bot plays X through the same session the human would use, so the
adversarial tier cheats against it exactly as it does against a person.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Optional

import numpy as np

from .difficulty import EASY, parse_difficulty, select_ai_move
from .game_basics import DRAW, HUMAN, WIN, O, X
from .orchestrator import VS_AI, GameSession
from .rng import make_rng

RANDOM = "random"


@dataclass
class ArenaResult:
    games: int
    ai_difficulty: str
    opponent: str
    ai_wins: int = 0
    opponent_wins: int = 0
    draws: int = 0
    cheats: int = 0
    mean_score: float = 0.0

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    def metrics(self) -> Dict[str, float]:
        n = max(self.games, 1)
        return {
            "ai_win_rate": self.ai_wins / n,
            "opponent_win_rate": self.opponent_wins / n,
            "draw_rate": self.draws / n,
            "cheats_per_game": self.cheats / n,
            "mean_score": self.mean_score,
        }


def _opponent_tier(opponent: str) -> str:
    if opponent.strip().lower() == RANDOM:
        return EASY
    return parse_difficulty(opponent)


def run_arena(games: int, ai_difficulty: str, opponent: str = RANDOM, seed: Optional[int] = None) -> ArenaResult:
    """Play ``games`` rounds of ``opponent`` (as X) against the AI tier (as O).

    ``mean_score`` averages +1 for an AI win, -1 for a loss, 0 for a draw.
    """
    if games < 1:
        raise ValueError(f"games must be >= 1, got {games}")
    rng = make_rng(seed)
    bot_tier = _opponent_tier(opponent)
    session = GameSession(mode=VS_AI, difficulty=ai_difficulty, rng=rng)
    res = ArenaResult(games=games, ai_difficulty=session.difficulty, opponent=opponent)
    outcomes = np.zeros(games, dtype=int)

    for g in range(games):
        session.restart()
        while not session.is_over:
            mv = select_ai_move(session.board, bot_tier, rng, player=HUMAN)
            report = session.turn(mv)
            res.cheats += int(report.human.cheated)
        result = session.result
        if result.status == WIN and result.winner == O:
            res.ai_wins += 1
            outcomes[g] = 1
        elif result.status == WIN and result.winner == X:
            res.opponent_wins += 1
            outcomes[g] = -1
        elif result.status == DRAW:
            res.draws += 1

    res.mean_score = float(outcomes.mean())
    logging.info(
        "arena ai=%s opponent=%s games=%d ai_wins=%d opponent_wins=%d draws=%d",
        res.ai_difficulty, opponent, games, res.ai_wins, res.opponent_wins, res.draws,
    )
    return res
