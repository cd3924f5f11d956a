"""Achievement catalogue and evaluation.

Rules are checked independently against the finished game and the
cumulative statistics *after* that game has been folded in. Evaluation only
reports ids that are not already held, so it is idempotent once the caller
has merged the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from .difficulty import DifficultyTier
from .errors import InvalidInput
from .results import GameAttemptRecord
from .stats import CumulativeStats

logger = logging.getLogger(__name__)


class AchievementId(StrEnum):
    FIRST_WIN = "first_win"
    SPEED_DEMON = "speed_demon"
    PERFECT_GAME = "perfect_game"
    MASTER_PLAYER = "master_player"
    PERSISTENT = "persistent"
    HIGH_SCORER = "high_scorer"
    DEDICATION = "dedication"
    SPEED_MASTER = "speed_master"


@dataclass(frozen=True, slots=True)
class AchievementThresholds:
    speed_demon_ms: int = 60_000
    master_wins: int = 10
    persistent_games: int = 50
    high_score_total: int = 50_000
    dedication_games: int = 100
    speed_master_fast_wins: int = 5


@dataclass(frozen=True, slots=True)
class AchievementInfo:
    id: AchievementId
    name: str
    description: str


ACHIEVEMENTS: dict[AchievementId, AchievementInfo] = {
    info.id: info
    for info in (
        AchievementInfo(AchievementId.FIRST_WIN, "First Victory", "Complete your first magic square"),
        AchievementInfo(AchievementId.SPEED_DEMON, "Speed Demon", "Complete a puzzle in under 60 seconds"),
        AchievementInfo(AchievementId.PERFECT_GAME, "Perfect Game", "Win without using hints or making mistakes"),
        AchievementInfo(AchievementId.MASTER_PLAYER, "Master Player", "Win 10 games on Master difficulty"),
        AchievementInfo(AchievementId.PERSISTENT, "Persistent Player", "Play 50 games"),
        AchievementInfo(AchievementId.HIGH_SCORER, "High Scorer", "Reach 50,000 total score"),
        AchievementInfo(AchievementId.DEDICATION, "Dedicated", "Play 100 games"),
        AchievementInfo(AchievementId.SPEED_MASTER, "Speed Master", "Complete 5 puzzles under 30 seconds"),
    )
}


def achievement_info(achievement_id: str) -> AchievementInfo | None:
    try:
        return ACHIEVEMENTS[AchievementId(achievement_id)]
    except ValueError:
        return None


def _qualifying(
    attempt: GameAttemptRecord,
    stats: CumulativeStats,
    t: AchievementThresholds,
) -> list[AchievementId]:
    out: list[AchievementId] = []
    if attempt.won:
        if stats.games_won == 1:
            out.append(AchievementId.FIRST_WIN)
        if attempt.elapsed_ms < t.speed_demon_ms:
            out.append(AchievementId.SPEED_DEMON)
        if attempt.hints_used == 0 and attempt.attempts == 1:
            out.append(AchievementId.PERFECT_GAME)
    if stats.for_difficulty(DifficultyTier.MASTER).won >= t.master_wins:
        out.append(AchievementId.MASTER_PLAYER)
    if stats.games_played >= t.persistent_games:
        out.append(AchievementId.PERSISTENT)
    if stats.total_score >= t.high_score_total:
        out.append(AchievementId.HIGH_SCORER)
    if stats.games_played >= t.dedication_games:
        out.append(AchievementId.DEDICATION)
    if stats.fast_wins >= t.speed_master_fast_wins:
        out.append(AchievementId.SPEED_MASTER)
    return out


def evaluate(
    attempt: GameAttemptRecord,
    stats: CumulativeStats,
    *,
    thresholds: AchievementThresholds | None = None,
) -> frozenset[str]:
    """Return ids newly unlocked by this game, excluding those already held."""

    t = thresholds if thresholds is not None else AchievementThresholds()
    unlocked = frozenset(a.value for a in _qualifying(attempt, stats, t) if not stats.has_achievement(a.value))
    if unlocked:
        logger.info("achievements unlocked: %s", ", ".join(sorted(unlocked)))
    return unlocked


def achievement_progress(
    achievement_id: str,
    stats: CumulativeStats,
    *,
    thresholds: AchievementThresholds | None = None,
) -> float:
    """Progress towards an achievement in [0.0, 1.0]; held ones report 1.0."""

    if stats.has_achievement(achievement_id):
        return 1.0
    t = thresholds if thresholds is not None else AchievementThresholds()
    try:
        aid = AchievementId(achievement_id)
    except ValueError as e:
        raise InvalidInput(f"unknown achievement: {achievement_id!r}") from e

    if aid is AchievementId.FIRST_WIN:
        return _ratio(stats.games_won, 1)
    if aid is AchievementId.SPEED_DEMON:
        return 1.0 if stats.best_time_ms is not None and stats.best_time_ms < t.speed_demon_ms else 0.0
    if aid is AchievementId.MASTER_PLAYER:
        return _ratio(stats.for_difficulty(DifficultyTier.MASTER).won, t.master_wins)
    if aid is AchievementId.PERSISTENT:
        return _ratio(stats.games_played, t.persistent_games)
    if aid is AchievementId.HIGH_SCORER:
        return _ratio(stats.total_score, t.high_score_total)
    if aid is AchievementId.DEDICATION:
        return _ratio(stats.games_played, t.dedication_games)
    if aid is AchievementId.SPEED_MASTER:
        return _ratio(stats.fast_wins, t.speed_master_fast_wins)
    # perfect_game has no partial progress.
    return 0.0


def _ratio(value: int, target: int) -> float:
    if target <= 0:
        return 1.0
    return min(1.0, value / float(target))
