"""
Adversarial tier: the AI that moves the human's mark after the fact.

Two stages run after each human move:
1. ``should_cheat`` decides whether to interfere, from a fixed list of rules.
2. ``worst_position`` picks the cell where the human mark does the least good.
The AI's own move (``impossible_move``) takes any win-in-one before searching.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .errors import NoRelocationTarget
from .game_basics import AI, EMPTY, HUMAN, apply_move, available_moves, clear_cell
from .rng import RandomSource
from .solver import best_move
from .tactics import completing_cell, has_live_threat, open_line_pressure

CORNERS_AND_CENTER = frozenset({0, 2, 4, 6, 8})

FEW_MARKS_LIMIT = 2
FEW_MARKS_PROB = 0.6
STRONG_CELL_PROB = 0.7
WEAK_CELL_PROB = 0.4


@dataclass(frozen=True)
class CheatDecision:
    triggered: bool
    relocate_to: Optional[int] = None

    @property
    def relocates(self) -> bool:
        return self.triggered and self.relocate_to is not None


def should_cheat(board: List[int], just_played: int, rng: RandomSource, human: int = HUMAN) -> bool:
    """Decide whether to tamper with the human move just played at ``just_played``.

    Rules are checked in order and the first one that fires wins; a rule
    that misses falls through to the next. Each probabilistic rule draws its
    own number, so the count of draws depends on which rules are reached.
    """
    if board.count(human) <= FEW_MARKS_LIMIT and rng.random() < FEW_MARKS_PROB:
        return True
    if has_live_threat(board, human):
        return True
    if just_played in CORNERS_AND_CENTER and rng.random() < STRONG_CELL_PROB:
        return True
    return rng.random() < WEAK_CELL_PROB


def worst_position(board: List[int], exclude: int, human: int = HUMAN) -> int:
    """Empty cell (other than ``exclude``) least useful to ``human``.

    A candidate scores the human marks on every line through it that the AI
    has not blocked, counting the candidate itself. Lowest score wins; ties
    go to the lowest index.
    """
    candidates = [m for m in available_moves(board) if m != exclude]
    if not candidates:
        raise NoRelocationTarget("No empty cell to relocate the human move to")
    scratch = board[:]
    worst = candidates[0]
    worst_score = None
    for m in candidates:
        scratch[m] = human
        score = open_line_pressure(scratch, m, human)
        scratch[m] = EMPTY
        if worst_score is None or score < worst_score:
            worst_score = score
            worst = m
    return worst


def cheat_decision(board: List[int], human_index: int, rng: RandomSource, human: int = HUMAN) -> CheatDecision:
    if not should_cheat(board, human_index, rng, human):
        return CheatDecision(False)
    try:
        target = worst_position(board, human_index, human)
    except NoRelocationTarget:
        logging.debug("cheat triggered on %d but nowhere to move it; aborted", human_index)
        return CheatDecision(True, None)
    logging.debug("cheat triggered: moving human mark %d -> %d", human_index, target)
    return CheatDecision(True, target)


def relocate(board: List[int], from_index: int, to_index: int, player: int = HUMAN) -> List[int]:
    """Move ``player``'s mark from ``from_index`` to ``to_index`` in place."""
    if board[from_index] != player:
        raise ValueError(f"Cell {from_index} does not hold the mark being relocated")
    clear_cell(board, from_index)
    return apply_move(board, to_index, player)


def impossible_move(board: List[int], player: int = AI) -> int:
    """Take a win-in-one if one exists, otherwise play the optimal move."""
    cell = completing_cell(board, player)
    if cell is not None:
        return cell
    return best_move(board, player)
