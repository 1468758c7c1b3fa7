"""
Game basics: board representation, serialization, rules, winner/draw checks, validity.
Notes:
- State is a list of 9 cells: 0=empty, 1=X, 2=O, row-major over the 3x3 grid.
- The human always plays X and the AI plays O.
- Valid states have counts either equal (X to move) or X has one more (O to move).
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .errors import IllegalMove

EMPTY = 0
X = 1
O = 2
HUMAN = X
AI = O

MARKS = {EMPTY: ".", X: "X", O: "O"}

WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

IN_PROGRESS = "in_progress"
WIN = "win"
DRAW = "draw"


@dataclass(frozen=True)
class GameResult:
    status: str
    winner: int = EMPTY
    line: Tuple[int, ...] = ()

    @property
    def is_over(self) -> bool:
        return self.status != IN_PROGRESS

    def describe(self) -> str:
        if self.status == WIN:
            return f"{MARKS[self.winner]} wins"
        if self.status == DRAW:
            return "draw"
        return "in progress"


def new_board() -> List[int]:
    return [EMPTY] * 9


def opponent(player: int) -> int:
    return O if player == X else X


def available_moves(board: List[int]) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def get_winner(board: List[int]) -> int:
    return winning_line(board)[0]


def winning_line(board: List[int]) -> Tuple[int, Optional[Tuple[int, int, int]]]:
    for line in WIN_LINES:
        a, b, c = line
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return v, line
    return EMPTY, None


def evaluate(board: List[int]) -> GameResult:
    """Classify the board as a win, a draw, or still in progress.

    The first winning line in ``WIN_LINES`` order is reported, so a derived
    board with two completed lines still yields a single answer.
    """
    winner, line = winning_line(board)
    if line is not None:
        return GameResult(WIN, winner, line)
    if EMPTY not in board:
        return GameResult(DRAW)
    return GameResult(IN_PROGRESS)


def apply_move(board: List[int], index: int, player: int) -> List[int]:
    """Place ``player`` at ``index`` in place and return the same board."""
    if player not in (X, O):
        raise IllegalMove(f"Unknown mark: {player!r}")
    if not isinstance(index, int) or not 0 <= index < 9:
        raise IllegalMove(f"Cell index out of range: {index!r}")
    if board[index] != EMPTY:
        raise IllegalMove(f"Cell {index} is already taken by {MARKS[board[index]]}")
    board[index] = player
    return board


def clear_cell(board: List[int], index: int) -> List[int]:
    if not isinstance(index, int) or not 0 <= index < 9:
        raise IllegalMove(f"Cell index out of range: {index!r}")
    if board[index] == EMPTY:
        raise IllegalMove(f"Cell {index} is already empty")
    board[index] = EMPTY
    return board


def get_piece_counts(board: List[int]) -> Tuple[int, int]:
    return board.count(X), board.count(O)


def current_player(board: List[int]) -> int:
    x, o = get_piece_counts(board)
    return X if x == o else O


def is_valid_state(board: List[int]) -> bool:
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False
    w = get_winner(board)
    if w == X and x_count != o_count + 1:
        return False
    if w == O and x_count != o_count:
        return False

    def count_wins(p: int) -> int:
        return sum(1 for line in WIN_LINES if all(board[i] == p for i in line))

    if count_wins(X) > 0 and count_wins(O) > 0:
        return False
    return True


def serialize_board(board: List[int]) -> str:
    return ''.join(str(cell) for cell in board)


_CHAR_TO_CELL = {
    "0": EMPTY, ".": EMPTY, "-": EMPTY, "_": EMPTY,
    "1": X, "x": X, "X": X,
    "2": O, "o": O, "O": O,
}


def parse_board(raw: str) -> List[int]:
    """Parse a 9-character board string (``0/1/2``, or ``./X/O``)."""
    raw = raw.strip()
    if len(raw) != 9 or any(c not in _CHAR_TO_CELL for c in raw):
        raise ValueError(f"Invalid board string {raw!r}: need 9 chars of 0/1/2 (or ./X/O)")
    return [_CHAR_TO_CELL[c] for c in raw]


def render_board(board: List[int], numbered: bool = True) -> str:
    rows = []
    for r in range(3):
        cells = []
        for c in range(3):
            i = r * 3 + c
            if board[i] == EMPTY and numbered:
                cells.append(str(i + 1))
            else:
                cells.append(MARKS[board[i]])
        rows.append(" " + " | ".join(cells))
    return "\n---+---+---\n".join(rows)


def reachable_states() -> Dict[str, List[int]]:
    """Enumerate every position reachable from the empty board, X first."""
    start = tuple(new_board())
    seen = {start}
    q = deque([start])
    out: Dict[str, List[int]] = {}
    while q:
        s = q.popleft()
        board = list(s)
        out[serialize_board(board)] = board
        if evaluate(board).is_over:
            continue
        p = current_player(board)
        for mv in available_moves(board):
            child = list(s)
            child[mv] = p
            child_t = tuple(child)
            if child_t not in seen:
                seen.add(child_t)
                q.append(child_t)
    return out
