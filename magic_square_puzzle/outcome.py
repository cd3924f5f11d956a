from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from .achievements import AchievementThresholds, evaluate
from .errors import InvalidInput
from .progress import DailyProgress, record_daily_result
from .results import GameAttemptRecord
from .scoring import score as score_game
from .stats import CumulativeStats, apply_attempt, unlock

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GameOutcome:
    score: int | None  # None for a revealed (lost) game
    stats: CumulativeStats
    unlocked: frozenset[str]
    progress: DailyProgress | None = None  # set only for daily games


def resolve(
    attempt: GameAttemptRecord,
    stats: CumulativeStats,
    *,
    thresholds: AchievementThresholds | None = None,
    progress: DailyProgress | None = None,
    day: date | datetime | None = None,
    timestamp_ms: int = 0,
) -> GameOutcome:
    """Score the game, fold it into the stats and merge newly unlocked achievements.

    For a daily game (``attempt.is_daily``) with ``progress`` given, the
    result is also recorded under ``day``; a revealed daily counts as not
    completed. The inputs are left untouched; persist what the outcome holds.
    """

    if attempt.is_daily and progress is not None and day is None:
        raise InvalidInput("a daily game needs the challenge day to record progress")

    points = (
        score_game(attempt.elapsed_ms, attempt.hints_used, attempt.attempts, attempt.difficulty)
        if attempt.won
        else None
    )
    updated = apply_attempt(stats, attempt, score=points or 0)
    unlocked = evaluate(attempt, updated, thresholds=thresholds)
    updated = unlock(updated, unlocked)

    daily_progress = None
    if attempt.is_daily and progress is not None:
        assert day is not None
        daily_progress = record_daily_result(
            progress,
            day,
            completed=attempt.won,
            score=points or 0,
            timestamp_ms=timestamp_ms,
        )

    logger.info(
        "game resolved: %s won=%s score=%s played=%d daily=%s",
        attempt.difficulty.value,
        attempt.won,
        points,
        updated.games_played,
        attempt.is_daily,
    )
    return GameOutcome(score=points, stats=updated, unlocked=unlocked, progress=daily_progress)
