"""
Difficulty tiers and the move each one picks.

- easy: uniform random legal move
- medium: optimal move 70% of the time, random otherwise
- hard: always optimal
- adversarial: win-in-one first, then optimal (and it cheats, see adversary.py)
"""
from __future__ import annotations

from typing import List

from .adversary import impossible_move
from .errors import NoMoveAvailable
from .game_basics import AI, available_moves
from .rng import RandomSource, pick
from .solver import best_move

EASY = "easy"
MEDIUM = "medium"
HARD = "hard"
ADVERSARIAL = "adversarial"
DIFFICULTIES = (EASY, MEDIUM, HARD, ADVERSARIAL)

MEDIUM_OPTIMAL_PROB = 0.7

_ALIASES = {"impossible": ADVERSARIAL, "cheat": ADVERSARIAL, "cheating": ADVERSARIAL}


def parse_difficulty(name: str) -> str:
    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    if key not in DIFFICULTIES:
        raise ValueError(f"Unknown difficulty {name!r}; choose one of {', '.join(DIFFICULTIES)}")
    return key


def easy_move(board: List[int], rng: RandomSource) -> int:
    moves = available_moves(board)
    if not moves:
        raise NoMoveAvailable("No empty cell left to play")
    return pick(rng, moves)


def medium_move(board: List[int], rng: RandomSource, player: int = AI) -> int:
    if rng.random() < MEDIUM_OPTIMAL_PROB:
        return best_move(board, player)
    return easy_move(board, rng)


def select_ai_move(board: List[int], difficulty: str, rng: RandomSource, player: int = AI) -> int:
    """Pick ``player``'s next move for the given tier. Never mutates ``board``."""
    if not available_moves(board):
        raise NoMoveAvailable("No empty cell left to play")
    if difficulty == EASY:
        return easy_move(board, rng)
    if difficulty == MEDIUM:
        return medium_move(board, rng, player)
    if difficulty == HARD:
        return best_move(board, player)
    if difficulty == ADVERSARIAL:
        return impossible_move(board, player)
    raise ValueError(f"Unknown difficulty: {difficulty!r}")
