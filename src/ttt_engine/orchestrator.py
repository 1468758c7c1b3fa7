"""
Game session orchestration: one round of play as an explicit state machine.

Phases:
    waiting_for_human -> resolving -> (waiting_for_ai | waiting_for_human | game_over)
    waiting_for_ai    -> resolving -> (waiting_for_human | game_over)

A human move is applied, then (adversarial tier only) possibly relocated, and
only then is the board checked for a result. The AI replies afterwards. Each
command either completes its whole step or raises before touching the board.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .adversary import cheat_decision, relocate
from .difficulty import ADVERSARIAL, MEDIUM, parse_difficulty, select_ai_move
from .errors import OutOfTurn
from .game_basics import (
    AI,
    IN_PROGRESS,
    MARKS,
    O,
    WIN,
    X,
    GameResult,
    apply_move,
    evaluate,
    new_board,
    opponent,
)
from .rng import make_rng

PVP = "pvp"
VS_AI = "ai"
MODES = (PVP, VS_AI)

WAITING_FOR_HUMAN = "waiting_for_human"
RESOLVING = "resolving"
WAITING_FOR_AI = "waiting_for_ai"
GAME_OVER = "game_over"


@dataclass(frozen=True)
class MoveReport:
    player: int
    requested: int
    placed: int
    cheated: bool
    result: GameResult

    @property
    def relocated(self) -> bool:
        return self.placed != self.requested


@dataclass(frozen=True)
class TurnReport:
    human: MoveReport
    ai: Optional[MoveReport]

    @property
    def result(self) -> GameResult:
        return self.ai.result if self.ai is not None else self.human.result


@dataclass
class GameSession:
    mode: str = VS_AI
    difficulty: str = MEDIUM
    rng: Any = field(default_factory=make_rng)
    board: List[int] = field(default_factory=new_board)
    current_player: int = X
    phase: str = WAITING_FOR_HUMAN
    result: GameResult = field(default_factory=lambda: GameResult(IN_PROGRESS))
    scores: Dict[int, int] = field(default_factory=lambda: {X: 0, O: 0})

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"Unknown mode {self.mode!r}; choose one of {', '.join(MODES)}")
        self.difficulty = parse_difficulty(self.difficulty)

    @property
    def is_over(self) -> bool:
        return self.phase == GAME_OVER

    def restart(self) -> None:
        """Start a new round; scores carry over."""
        self.board = new_board()
        self.current_player = X
        self.phase = WAITING_FOR_HUMAN
        self.result = GameResult(IN_PROGRESS)
        logging.debug("session restarted mode=%s difficulty=%s", self.mode, self.difficulty)

    def select_mode(self, mode: str) -> None:
        if mode not in MODES:
            raise ValueError(f"Unknown mode {mode!r}; choose one of {', '.join(MODES)}")
        self.mode = mode
        self.restart()

    def select_difficulty(self, difficulty: str) -> None:
        self.difficulty = parse_difficulty(difficulty)
        self.restart()

    def human_move(self, index: int) -> MoveReport:
        if self.phase != WAITING_FOR_HUMAN:
            raise OutOfTurn(f"Not accepting a human move while {self.phase}")
        player = self.current_player
        apply_move(self.board, index, player)
        self.phase = RESOLVING

        placed = index
        cheated = False
        if self.mode == VS_AI and self.difficulty == ADVERSARIAL:
            decision = cheat_decision(self.board, index, self.rng, human=player)
            cheated = decision.relocates
            if decision.relocates:
                relocate(self.board, index, decision.relocate_to, player)
                placed = decision.relocate_to
                logging.info("%s move relocated from %d to %d", MARKS[player], index, placed)

        return MoveReport(player, index, placed, cheated, self._settle())

    def ai_move(self) -> MoveReport:
        if self.phase != WAITING_FOR_AI:
            raise OutOfTurn(f"Not accepting an AI move while {self.phase}")
        index = select_ai_move(self.board, self.difficulty, self.rng, AI)
        self.phase = RESOLVING
        apply_move(self.board, index, AI)
        return MoveReport(AI, index, index, False, self._settle())

    def turn(self, index: int) -> TurnReport:
        """Human move followed, in AI mode, by the AI's reply."""
        human = self.human_move(index)
        ai = self.ai_move() if self.phase == WAITING_FOR_AI else None
        return TurnReport(human, ai)

    def _settle(self) -> GameResult:
        self.result = evaluate(self.board)
        if self.result.is_over:
            self.phase = GAME_OVER
            if self.result.status == WIN:
                self.scores[self.result.winner] += 1
            logging.info("round over: %s scores=%s", self.result.describe(), self.scores)
            return self.result
        self.current_player = opponent(self.current_player)
        if self.mode == VS_AI and self.current_player == AI:
            self.phase = WAITING_FOR_AI
        else:
            self.phase = WAITING_FOR_HUMAN
        return self.result

