"""ttt_engine package.

Board rules, minimax search, difficulty tiers, the cheating adversary, and a
session state machine for driving a game. Presentation layers call in through
the names exported here.
"""

from .adversary import CheatDecision, cheat_decision, impossible_move, should_cheat, worst_position
from .difficulty import DIFFICULTIES, select_ai_move
from .errors import GameError, IllegalMove, NoMoveAvailable, NoRelocationTarget, OutOfTurn
from .game_basics import AI, HUMAN, GameResult, apply_move, available_moves, evaluate
from .orchestrator import GameSession
from .rng import SequenceRandom, make_rng
from .solver import best_move

__all__ = [
    "AI",
    "HUMAN",
    "DIFFICULTIES",
    "GameResult",
    "GameSession",
    "CheatDecision",
    "apply_move",
    "available_moves",
    "evaluate",
    "best_move",
    "select_ai_move",
    "cheat_decision",
    "should_cheat",
    "worst_position",
    "impossible_move",
    "make_rng",
    "SequenceRandom",
    "GameError",
    "IllegalMove",
    "NoMoveAvailable",
    "NoRelocationTarget",
    "OutOfTurn",
]
