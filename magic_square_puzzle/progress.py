from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import StrEnum
from types import MappingProxyType

from .daily import as_utc_date, date_key


@dataclass(frozen=True, slots=True)
class DailyProgressEntry:
    completed: bool
    score: int
    timestamp_ms: int


DailyProgress = Mapping[str, DailyProgressEntry]


class StreakReward(StrEnum):
    BEGINNER = "beginner"
    RISING = "rising"
    EXPERT = "expert"
    MASTER = "master"
    LEGENDARY = "legendary"


# Highest first.
_REWARD_STEPS: tuple[tuple[int, StreakReward], ...] = (
    (30, StreakReward.LEGENDARY),
    (14, StreakReward.MASTER),
    (7, StreakReward.EXPERT),
    (3, StreakReward.RISING),
)


def record_daily_result(
    progress: DailyProgress,
    day: date | datetime,
    *,
    completed: bool,
    score: int,
    timestamp_ms: int,
) -> DailyProgress:
    """Return a new progress mapping with ``day`` set (replacing any earlier entry)."""

    updated = dict(progress)
    updated[date_key(day)] = DailyProgressEntry(
        completed=bool(completed),
        score=int(score),
        timestamp_ms=int(timestamp_ms),
    )
    return MappingProxyType(updated)


def is_daily_completed(progress: DailyProgress, day: date | datetime) -> bool:
    entry = progress.get(date_key(day))
    return entry is not None and entry.completed


def current_streak(progress: DailyProgress, today: date | datetime) -> int:
    """Consecutive completed days ending at ``today``; zero if today is not done."""

    streak = 0
    d = as_utc_date(today)
    while is_daily_completed(progress, d):
        streak += 1
        d -= timedelta(days=1)
    return streak


def streak_reward(streak: int) -> StreakReward:
    for minimum, reward in _REWARD_STEPS:
        if streak >= minimum:
            return reward
    return StreakReward.BEGINNER
