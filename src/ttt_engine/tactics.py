"""
Tactics and simple motifs: live threats, completing cells, open-line pressure.
Notes:
- A live threat is a win line holding two of a player's marks and one empty cell.
- These scans are cheap and run before any deep search.
"""
from typing import List, Optional, Tuple

from .game_basics import EMPTY, WIN_LINES, opponent


def live_threats(board: List[int], player: int) -> List[Tuple[Tuple[int, int, int], int]]:
    """Return ``(line, empty_cell)`` for every line ``player`` can complete next move."""
    threats = []
    for line in WIN_LINES:
        cells = [board[i] for i in line]
        if cells.count(player) == 2 and cells.count(EMPTY) == 1:
            threats.append((line, line[cells.index(EMPTY)]))
    return threats


def has_live_threat(board: List[int], player: int) -> bool:
    return bool(live_threats(board, player))


def completing_cell(board: List[int], player: int) -> Optional[int]:
    """First empty cell (in win-line order) that wins immediately for ``player``."""
    for _, cell in live_threats(board, player):
        return cell
    return None


def open_line_pressure(board: List[int], cell: int, player: int) -> int:
    """Sum of ``player`` marks over the lines through ``cell`` that the opponent has not touched."""
    opp = opponent(player)
    score = 0
    for line in WIN_LINES:
        if cell not in line:
            continue
        if any(board[i] == opp for i in line):
            continue
        score += sum(1 for i in line if board[i] == player)
    return score
