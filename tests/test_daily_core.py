from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from magic_square_puzzle.daily import (
    daily_seed,
    date_key,
    derive_daily_challenge,
    utc_today,
)
from magic_square_puzzle.difficulty import DifficultyTier
from magic_square_puzzle.errors import InvalidInput
from magic_square_puzzle.validator import is_valid_magic_square


def test_new_year_is_normal_with_iso_seed() -> None:
    ch = derive_daily_challenge(date(2024, 1, 1))
    assert ch.date_key == "2024-01-01"
    assert ch.difficulty is DifficultyTier.NORMAL
    assert ch.seed == sum(ord(c) for c in "2024-01-01") == 484
    # -55 + 484 % 101
    assert ch.puzzle.offset == 25
    assert ch.puzzle.solution == (33, 26, 31, 28, 30, 32, 29, 34, 27)
    assert ch.puzzle.magic_constant == 90


@pytest.mark.parametrize(
    ("day", "tier"),
    [
        (date(2024, 1, 2), DifficultyTier.HARD),
        (date(2024, 1, 3), DifficultyTier.MASTER),
        (date(2024, 1, 4), DifficultyTier.EASY),
        (date(2023, 12, 31), DifficultyTier.NORMAL),
        (date(2024, 12, 31), DifficultyTier.HARD),
    ],
)
def test_tier_rotates_with_day_of_year(day: date, tier: DifficultyTier) -> None:
    assert daily_seed(day).difficulty is tier


def test_same_day_is_bit_identical() -> None:
    a = derive_daily_challenge(date(2025, 7, 19))
    b = derive_daily_challenge(date(2025, 7, 19))
    assert a == b


def test_same_rotation_slot_different_day_differs() -> None:
    a = derive_daily_challenge(date(2024, 1, 1))
    b = derive_daily_challenge(date(2024, 1, 5))
    assert a.difficulty is b.difficulty
    assert a.puzzle.offset != b.puzzle.offset


def test_every_day_of_a_year_is_valid() -> None:
    d = date(2024, 1, 1)
    while d.year == 2024:
        p = derive_daily_challenge(d).puzzle
        assert is_valid_magic_square(p.solution, p.size, p.magic_constant)
        d += timedelta(days=1)


def test_aware_datetime_is_read_in_utc() -> None:
    evening_in_toronto = datetime(2024, 1, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    assert date_key(evening_in_toronto) == "2024-01-02"
    assert derive_daily_challenge(evening_in_toronto) == derive_daily_challenge(date(2024, 1, 2))


def test_naive_datetime_is_rejected() -> None:
    with pytest.raises(InvalidInput):
        derive_daily_challenge(datetime(2024, 1, 1, 12, 0))


def test_utc_today_uses_given_instant() -> None:
    now = datetime(2024, 6, 30, 23, 59, tzinfo=timezone(timedelta(hours=-1)))
    assert utc_today(now) == date(2024, 7, 1)
