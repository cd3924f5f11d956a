from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from .difficulty import DifficultyTier, parse_difficulty
from .results import GameAttemptRecord

# Wins faster than this count towards the speed_master achievement.
FAST_WIN_MS = 30_000


@dataclass(frozen=True, slots=True)
class DifficultyStats:
    played: int = 0
    won: int = 0
    best_time_ms: int | None = None


def _empty_breakdown() -> Mapping[DifficultyTier, DifficultyStats]:
    return MappingProxyType({tier: DifficultyStats() for tier in DifficultyTier})


@dataclass(frozen=True, slots=True)
class CumulativeStats:
    """Accumulated statistics across games.

    Immutable: every update returns a new instance so the storage side
    decides when (and whether) to persist it.
    """

    games_played: int = 0
    games_won: int = 0
    total_time_ms: int = 0
    best_time_ms: int | None = None
    total_score: int = 0
    fast_wins: int = 0
    by_difficulty: Mapping[DifficultyTier, DifficultyStats] = field(default_factory=_empty_breakdown)
    achievements: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Fill tiers missing from older records and freeze the mapping.
        merged = {tier: DifficultyStats() for tier in DifficultyTier}
        for key, value in self.by_difficulty.items():
            merged[parse_difficulty(key)] = value
        object.__setattr__(self, "by_difficulty", MappingProxyType(merged))
        object.__setattr__(self, "achievements", tuple(dict.fromkeys(self.achievements)))

    def for_difficulty(self, difficulty: DifficultyTier | str) -> DifficultyStats:
        return self.by_difficulty[parse_difficulty(difficulty)]

    def has_achievement(self, achievement_id: str) -> bool:
        return achievement_id in self.achievements


def _best(current: int | None, candidate: int) -> int:
    return candidate if current is None else min(current, candidate)


def apply_attempt(stats: CumulativeStats, attempt: GameAttemptRecord, *, score: int = 0) -> CumulativeStats:
    """Fold one finished game into a new stats record.

    Reveals count as played only; time, best time and score move on wins.
    """

    tier_stats = stats.for_difficulty(attempt.difficulty)
    breakdown = dict(stats.by_difficulty)

    if not attempt.won:
        breakdown[attempt.difficulty] = replace(tier_stats, played=tier_stats.played + 1)
        return replace(stats, games_played=stats.games_played + 1, by_difficulty=breakdown)

    breakdown[attempt.difficulty] = DifficultyStats(
        played=tier_stats.played + 1,
        won=tier_stats.won + 1,
        best_time_ms=_best(tier_stats.best_time_ms, attempt.elapsed_ms),
    )
    return replace(
        stats,
        games_played=stats.games_played + 1,
        games_won=stats.games_won + 1,
        total_time_ms=stats.total_time_ms + attempt.elapsed_ms,
        best_time_ms=_best(stats.best_time_ms, attempt.elapsed_ms),
        total_score=stats.total_score + int(score),
        fast_wins=stats.fast_wins + (1 if attempt.elapsed_ms < FAST_WIN_MS else 0),
        by_difficulty=breakdown,
    )


def unlock(stats: CumulativeStats, achievement_ids: Iterable[str]) -> CumulativeStats:
    """Merge achievement ids into a new record, keeping first-unlock order."""

    new_ids = [a for a in sorted(achievement_ids) if a not in stats.achievements]
    if not new_ids:
        return stats
    return replace(stats, achievements=stats.achievements + tuple(new_ids))
