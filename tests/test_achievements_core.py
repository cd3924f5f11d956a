from __future__ import annotations

import pytest

from magic_square_puzzle.achievements import (
    ACHIEVEMENTS,
    AchievementThresholds,
    achievement_info,
    achievement_progress,
    evaluate,
)
from magic_square_puzzle.difficulty import DifficultyTier
from magic_square_puzzle.errors import InvalidInput, MagicSquareError
from magic_square_puzzle.results import GameAttemptRecord
from magic_square_puzzle.stats import CumulativeStats, DifficultyStats, unlock


def _win(elapsed_ms: int = 90_000, hints: int = 1, attempts: int = 2) -> GameAttemptRecord:
    return GameAttemptRecord(
        elapsed_ms=elapsed_ms,
        hints_used=hints,
        attempts=attempts,
        difficulty=DifficultyTier.NORMAL,
        won=True,
    )


def test_first_win_fast_and_perfect() -> None:
    stats = CumulativeStats(games_played=1, games_won=1)
    got = evaluate(_win(elapsed_ms=42_000, hints=0, attempts=1), stats)
    assert got == {"first_win", "speed_demon", "perfect_game"}


def test_plain_second_win_unlocks_nothing() -> None:
    stats = CumulativeStats(games_played=2, games_won=2)
    assert evaluate(_win(), stats) == frozenset()


def test_speed_demon_boundary_is_strict() -> None:
    stats = CumulativeStats(games_played=3, games_won=3)
    assert "speed_demon" not in evaluate(_win(elapsed_ms=60_000), stats)
    assert "speed_demon" in evaluate(_win(elapsed_ms=59_999), stats)


def test_reveal_does_not_earn_game_achievements() -> None:
    reveal = GameAttemptRecord(
        elapsed_ms=1_000, hints_used=0, attempts=1, difficulty=DifficultyTier.EASY, won=False
    )
    stats = CumulativeStats(games_played=1, games_won=1)
    assert evaluate(reveal, stats) == frozenset()


def test_cumulative_thresholds() -> None:
    stats = CumulativeStats(
        games_played=50,
        games_won=20,
        total_score=50_000,
        by_difficulty={DifficultyTier.MASTER: DifficultyStats(played=12, won=10)},
    )
    assert evaluate(_win(), stats) == {"master_player", "persistent", "high_scorer"}

    veteran = CumulativeStats(games_played=100, games_won=60, fast_wins=5)
    assert evaluate(_win(), veteran) == {"persistent", "dedication", "speed_master"}


def test_custom_thresholds() -> None:
    stats = CumulativeStats(games_played=25, games_won=10, total_score=25_000)
    t = AchievementThresholds(persistent_games=25, high_score_total=25_000)
    assert evaluate(_win(), stats, thresholds=t) == {"persistent", "high_scorer"}


def test_evaluation_is_idempotent_once_merged() -> None:
    attempt = _win(elapsed_ms=10_000, hints=0, attempts=1)
    stats = CumulativeStats(games_played=1, games_won=1)
    first = evaluate(attempt, stats)
    assert first
    merged = unlock(stats, first)
    assert evaluate(attempt, merged) == frozenset()


def test_progress_ratios() -> None:
    stats = CumulativeStats(
        games_played=20,
        games_won=4,
        best_time_ms=75_000,
        by_difficulty={"master": DifficultyStats(played=5, won=5)},
    )
    assert achievement_progress("persistent", stats) == 0.4
    assert achievement_progress("master_player", stats) == 0.5
    assert achievement_progress("speed_demon", stats) == 0.0
    assert achievement_progress("first_win", stats) == 1.0
    assert achievement_progress("perfect_game", stats) == 0.0
    assert achievement_progress("perfect_game", unlock(stats, ["perfect_game"])) == 1.0


def test_catalogue_covers_every_rule() -> None:
    assert len(ACHIEVEMENTS) == 8
    info = achievement_info("high_scorer")
    assert info is not None and info.name == "High Scorer"
    assert achievement_info("unknown") is None


def test_progress_for_unknown_achievement_is_rejected() -> None:
    with pytest.raises(InvalidInput):
        achievement_progress("bogus", CumulativeStats())
    with pytest.raises(MagicSquareError):
        achievement_progress("bogus", CumulativeStats())
