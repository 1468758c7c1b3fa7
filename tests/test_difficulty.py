import pytest

from ttt_engine.difficulty import (
    ADVERSARIAL,
    DIFFICULTIES,
    EASY,
    HARD,
    MEDIUM,
    parse_difficulty,
    select_ai_move,
)
from ttt_engine.errors import NoMoveAvailable
from ttt_engine.game_basics import available_moves
from ttt_engine.rng import SequenceRandom, make_rng

# X threatens 6-7-8; the only non-losing reply is 8, the first empty cell is 0
THREAT = [0, 0, 0, 0, 2, 0, 1, 1, 0]
FULL = [1, 1, 2, 2, 2, 1, 1, 2, 1]


def test_easy_maps_draw_onto_available_moves():
    moves = available_moves(THREAT)
    assert select_ai_move(THREAT, EASY, SequenceRandom([0.0])) == moves[0]
    assert select_ai_move(THREAT, EASY, SequenceRandom([0.999])) == moves[-1]
    assert select_ai_move(THREAT, EASY, SequenceRandom([0.5])) == moves[len(moves) // 2]


def test_medium_uses_search_below_threshold():
    rng = SequenceRandom([0.69])
    assert select_ai_move(THREAT, MEDIUM, rng) == 8
    assert rng.calls == 1


def test_medium_falls_back_to_random():
    rng = SequenceRandom([0.7, 0.0])
    assert select_ai_move(THREAT, MEDIUM, rng) == 0
    assert rng.calls == 2


def test_hard_never_consults_rng():
    rng = SequenceRandom([])
    assert select_ai_move(THREAT, HARD, rng) == 8
    assert rng.calls == 0


def test_adversarial_takes_winning_line():
    b = [2, 2, 0, 1, 1, 0, 1, 0, 0]
    assert select_ai_move(b, ADVERSARIAL, SequenceRandom([])) == 2


@pytest.mark.parametrize("tier", DIFFICULTIES)
def test_full_board_has_no_move(tier):
    with pytest.raises(NoMoveAvailable):
        select_ai_move(FULL, tier, SequenceRandom([0.0, 0.0]))


@pytest.mark.parametrize("tier", DIFFICULTIES)
def test_numpy_rng_returns_legal_move(tier):
    rng = make_rng(7)
    b = THREAT[:]
    mv = select_ai_move(b, tier, rng)
    assert mv in available_moves(THREAT)
    assert b == THREAT


def test_unknown_tier():
    with pytest.raises(ValueError):
        select_ai_move(THREAT, "nightmare", make_rng(0))


def test_parse_difficulty_aliases():
    assert parse_difficulty("Impossible") == ADVERSARIAL
    assert parse_difficulty(" hard ") == HARD
    with pytest.raises(ValueError):
        parse_difficulty("nightmare")
