from __future__ import annotations

import pytest

from magic_square_puzzle.difficulty import DifficultyTier
from magic_square_puzzle.errors import InvalidDifficulty, InvalidInput
from magic_square_puzzle.scoring import MIN_SCORE, score


def test_perfect_instant_normal_game_scores_base() -> None:
    assert score(0, 0, 1, "normal") == 10_000


def test_penalties_combine() -> None:
    # 65 s -> 650, one hint -> 1000, one failed check -> 500
    assert score(65_000, 1, 2, "normal") == 7_850


def test_partial_seconds_are_floored() -> None:
    assert score(1_999, 0, 1, "normal") == score(1_000, 0, 1, "normal") == 9_990


@pytest.mark.parametrize(
    ("tier", "expected"),
    [
        (DifficultyTier.EASY, 5_000),
        (DifficultyTier.NORMAL, 10_000),
        (DifficultyTier.HARD, 15_000),
        (DifficultyTier.MASTER, 20_000),
    ],
)
def test_difficulty_multiplier(tier: DifficultyTier, expected: int) -> None:
    assert score(0, 0, 1, tier) == expected


def test_hard_multiplier_is_exact() -> None:
    assert score(65_000, 1, 2, "hard") == 11_775


def test_score_never_drops_below_floor() -> None:
    assert score(10**9, 3, 50, "master") == MIN_SCORE
    # 9850 penalty on easy: raw 150 * 0.5 = 75 -> floor applies
    assert score(985_000, 0, 1, "easy") == MIN_SCORE


def test_score_is_non_increasing_in_time_and_hints() -> None:
    by_time = [score(t * 1000, 1, 2, "hard") for t in range(0, 1200, 7)]
    assert all(a >= b for a, b in zip(by_time, by_time[1:]))
    by_hints = [score(30_000, h, 1, "normal") for h in range(4)]
    assert all(a >= b for a, b in zip(by_hints, by_hints[1:]))


def test_invalid_inputs_are_rejected() -> None:
    with pytest.raises(InvalidInput):
        score(-1, 0, 1, "normal")
    with pytest.raises(InvalidInput):
        score(0, 4, 1, "normal")
    with pytest.raises(InvalidInput):
        score(0, 0, 0, "normal")
    with pytest.raises(InvalidDifficulty):
        score(0, 0, 1, "legendary")
