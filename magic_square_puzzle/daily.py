"""Daily challenge derivation.

Everyone gets the same puzzle on the same UTC calendar day. The tier cycles
with the day of the year (1-indexed, so January 1st is ``normal``) and the
seed is the sum of the character codes of the ISO date string.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone

from .difficulty import DifficultyTier
from .errors import InvalidInput
from .generator import MagicSquarePuzzle, generate

logger = logging.getLogger(__name__)

DAILY_ROTATION: tuple[DifficultyTier, ...] = (
    DifficultyTier.EASY,
    DifficultyTier.NORMAL,
    DifficultyTier.HARD,
    DifficultyTier.MASTER,
)


@dataclass(frozen=True, slots=True)
class DailyChallengeSeed:
    difficulty: DifficultyTier
    seed: int


@dataclass(frozen=True, slots=True)
class DailyChallenge:
    date_key: str
    difficulty: DifficultyTier
    seed: int
    puzzle: MagicSquarePuzzle


def as_utc_date(day: date | datetime) -> date:
    """Calendar date in UTC; naive datetimes are ambiguous and rejected."""

    if isinstance(day, datetime):
        if day.tzinfo is None or day.utcoffset() is None:
            raise InvalidInput("daily challenge needs a timezone-aware datetime or a date")
        return day.astimezone(timezone.utc).date()
    if isinstance(day, date):
        return day
    raise InvalidInput(f"expected a date, got {type(day).__name__}")


def utc_today(now: datetime | None = None) -> date:
    return as_utc_date(now if now is not None else datetime.now(timezone.utc))


def date_key(day: date | datetime) -> str:
    return as_utc_date(day).isoformat()


def daily_seed(day: date | datetime) -> DailyChallengeSeed:
    d = as_utc_date(day)
    day_of_year = d.timetuple().tm_yday
    difficulty = DAILY_ROTATION[day_of_year % len(DAILY_ROTATION)]
    seed = sum(ord(ch) for ch in d.isoformat())
    return DailyChallengeSeed(difficulty=difficulty, seed=seed)


def derive_daily_challenge(day: date | datetime) -> DailyChallenge:
    d = as_utc_date(day)
    pair = daily_seed(d)
    puzzle = generate(pair.difficulty, pair.seed)
    logger.debug("daily challenge %s: %s seed=%d", d.isoformat(), pair.difficulty.value, pair.seed)
    return DailyChallenge(
        date_key=d.isoformat(),
        difficulty=pair.difficulty,
        seed=pair.seed,
        puzzle=puzzle,
    )
