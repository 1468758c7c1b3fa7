"""
Exact game-tree search (minimax with alpha-beta pruning), scored from one player's perspective.
Scoring at search depth d (root children are depth 0):
- player wins: 10 - d (prefer faster wins)
- opponent wins: d - 10 (prefer slower losses)
- board full: 0
Moves are tried in ascending index order and strict comparisons keep the first
best score found, so ties resolve to the lowest index.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from .errors import NoMoveAvailable
from .game_basics import AI, EMPTY, available_moves, get_winner, opponent


@dataclass
class SearchStats:
    nodes: int = 0


def _terminal_score(board: List[int], depth: int, player: int) -> Optional[int]:
    w = get_winner(board)
    if w == player:
        return 10 - depth
    if w != EMPTY:
        return depth - 10
    if EMPTY not in board:
        return 0
    return None


def minimax(
    board: List[int],
    depth: int,
    maximizing: bool,
    alpha: float = -math.inf,
    beta: float = math.inf,
    player: int = AI,
    stats: Optional[SearchStats] = None,
) -> float:
    """Minimax with alpha-beta pruning.

    Mutates ``board`` while exploring and restores every cell before returning.
    """
    if stats is not None:
        stats.nodes += 1
    terminal = _terminal_score(board, depth, player)
    if terminal is not None:
        return terminal

    if maximizing:
        max_score = -math.inf
        for mv in available_moves(board):
            board[mv] = player
            score = minimax(board, depth + 1, False, alpha, beta, player, stats)
            board[mv] = EMPTY
            max_score = max(score, max_score)
            alpha = max(alpha, score)
            if beta <= alpha:
                break
        return max_score

    opp = opponent(player)
    min_score = math.inf
    for mv in available_moves(board):
        board[mv] = opp
        score = minimax(board, depth + 1, True, alpha, beta, player, stats)
        board[mv] = EMPTY
        min_score = min(score, min_score)
        beta = min(beta, score)
        if beta <= alpha:
            break
    return min_score


def minimax_plain(
    board: List[int],
    depth: int,
    maximizing: bool,
    player: int = AI,
    stats: Optional[SearchStats] = None,
) -> float:
    """Full-width minimax, no pruning. Reference for :func:`minimax`."""
    if stats is not None:
        stats.nodes += 1
    terminal = _terminal_score(board, depth, player)
    if terminal is not None:
        return terminal

    mark = player if maximizing else opponent(player)
    scores = []
    for mv in available_moves(board):
        board[mv] = mark
        scores.append(minimax_plain(board, depth + 1, not maximizing, player, stats))
        board[mv] = EMPTY
    return max(scores) if maximizing else min(scores)


def score_moves(board: List[int], player: int = AI, stats: Optional[SearchStats] = None) -> Dict[int, float]:
    """Root score of every available move for ``player``."""
    scratch = board[:]
    scores: Dict[int, float] = {}
    for mv in available_moves(scratch):
        scratch[mv] = player
        scores[mv] = minimax(scratch, 0, False, -math.inf, math.inf, player, stats)
        scratch[mv] = EMPTY
    return scores


def pick_best(scores: Dict[int, float]) -> int:
    """Highest-scoring move; ties go to the lowest index."""
    if not scores:
        raise NoMoveAvailable("No empty cell left to play")
    best_score = -math.inf
    best = -1
    for mv, score in scores.items():
        if score > best_score:
            best_score = score
            best = mv
    return best


def best_move(board: List[int], player: int = AI, stats: Optional[SearchStats] = None) -> int:
    """Optimal move for ``player`` assuming the opponent replies optimally.

    Works on a scratch copy; ``board`` is never modified.
    """
    if stats is None:
        stats = SearchStats()
    scores = score_moves(board, player, stats)
    best = pick_best(scores)
    best_score = scores[best]
    logging.debug("best_move player=%d move=%d score=%s nodes=%d", player, best, best_score, stats.nodes)
    return best
