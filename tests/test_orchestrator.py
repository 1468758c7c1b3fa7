import pytest

import ttt_engine.orchestrator as orch
from ttt_engine.difficulty import ADVERSARIAL, EASY, HARD
from ttt_engine.errors import IllegalMove, OutOfTurn
from ttt_engine.game_basics import DRAW, EMPTY, HUMAN, O, WIN, X
from ttt_engine.orchestrator import (
    GAME_OVER,
    PVP,
    VS_AI,
    WAITING_FOR_AI,
    WAITING_FOR_HUMAN,
    GameSession,
)
from ttt_engine.rng import SequenceRandom, make_rng


def test_pvp_alternates_and_scores_persist_across_restart():
    s = GameSession(mode=PVP)
    for idx in (0, 3, 1, 4):
        report = s.human_move(idx)
        assert not report.cheated
        assert s.phase == WAITING_FOR_HUMAN
    assert s.board == [X, X, 0, O, O, 0, 0, 0, 0]
    report = s.human_move(2)
    assert report.result.status == WIN and report.result.winner == X
    assert s.phase == GAME_OVER
    assert s.scores == {X: 1, O: 0}

    with pytest.raises(OutOfTurn):
        s.human_move(5)

    s.restart()
    assert s.board == [EMPTY] * 9
    assert s.current_player == X
    assert s.phase == WAITING_FOR_HUMAN
    assert s.scores == {X: 1, O: 0}


def test_ai_replies_after_human_turn():
    s = GameSession(mode=VS_AI, difficulty=HARD, rng=SequenceRandom([]))
    report = s.turn(0)
    assert report.human.placed == 0 and not report.human.cheated
    assert report.ai is not None and report.ai.player == O
    assert s.board.count(X) == 1 and s.board.count(O) == 1
    assert s.phase == WAITING_FOR_HUMAN


def test_commands_out_of_phase_are_rejected():
    s = GameSession(mode=VS_AI, difficulty=EASY, rng=make_rng(3))
    with pytest.raises(OutOfTurn):
        s.ai_move()
    s.human_move(4)
    assert s.phase == WAITING_FOR_AI
    with pytest.raises(OutOfTurn):
        s.human_move(0)
    s.ai_move()
    assert s.phase == WAITING_FOR_HUMAN


def test_illegal_move_leaves_session_untouched():
    s = GameSession(mode=PVP)
    s.human_move(0)
    before = s.board[:]
    with pytest.raises(IllegalMove):
        s.human_move(0)
    with pytest.raises(IllegalMove):
        s.human_move(9)
    assert s.board == before
    assert s.phase == WAITING_FOR_HUMAN
    assert s.current_player == O


def test_adversarial_relocates_before_result_check():
    s = GameSession(mode=VS_AI, difficulty=ADVERSARIAL, rng=SequenceRandom([0.0]))
    report = s.human_move(0)
    assert report.cheated and report.relocated
    assert report.placed == 5
    assert s.board[0] == EMPTY and s.board[5] == X
    assert s.board.count(X) == 1
    assert s.phase == WAITING_FOR_AI


def test_relocation_settles_before_the_result_check():
    # X completes 0-1-2 at 2, but the mark is moved before the board is judged
    s = GameSession(mode=VS_AI, difficulty=ADVERSARIAL, rng=SequenceRandom([0.5]))
    s.board = [1, 1, 0, 2, 2, 0, 0, 0, 0]
    report = s.human_move(2)
    assert report.cheated
    assert report.placed == 6
    assert s.board == [1, 1, 0, 2, 2, 0, 1, 0, 0]
    assert not report.result.is_over
    assert s.phase == WAITING_FOR_AI


def test_aborted_cheat_keeps_move_and_finishes_round():
    s = GameSession(mode=VS_AI, difficulty=ADVERSARIAL, rng=SequenceRandom([0.1]))
    s.board = [1, 1, 2, 2, 2, 1, 1, 2, 0]
    report = s.human_move(8)
    assert not report.cheated and not report.relocated
    assert report.result.status == DRAW
    assert s.phase == GAME_OVER
    assert s.scores == {X: 0, O: 0}


def test_cheat_only_sees_boards_with_a_human_mark(monkeypatch):
    seen = []
    real = orch.cheat_decision

    def spy(board, human_index, rng, human=HUMAN):
        seen.append(board.count(human))
        return real(board, human_index, rng, human)

    monkeypatch.setattr(orch, "cheat_decision", spy)
    s = GameSession(mode=VS_AI, difficulty=ADVERSARIAL, rng=make_rng(11))
    for _ in range(5):
        while not s.is_over:
            s.turn(s.board.index(EMPTY))
        s.restart()
    assert seen and min(seen) >= 1


def test_no_cheating_outside_adversarial_or_in_pvp():
    s = GameSession(mode=PVP, difficulty=ADVERSARIAL, rng=SequenceRandom([]))
    report = s.human_move(0)
    assert not report.cheated and s.board[0] == X


def test_selecting_mode_or_difficulty_restarts():
    s = GameSession(mode=PVP)
    s.human_move(0)
    s.scores[X] = 2
    s.select_difficulty("impossible")
    assert s.difficulty == ADVERSARIAL
    assert s.board == [EMPTY] * 9
    s.select_mode(VS_AI)
    assert s.mode == VS_AI and s.scores[X] == 2
    with pytest.raises(ValueError):
        s.select_mode("online")
    with pytest.raises(ValueError):
        GameSession(mode="online")


def test_hard_ai_never_loses_to_random_play():
    rng = make_rng(5)
    s = GameSession(mode=VS_AI, difficulty=HARD, rng=rng)
    for _ in range(10):
        while not s.is_over:
            free = [i for i, v in enumerate(s.board) if v == EMPTY]
            s.turn(free[int(rng.random() * len(free))])
        s.restart()
    assert s.scores[X] == 0
