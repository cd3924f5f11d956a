"""Plain-record shape of what the storage collaborator persists.

Keys follow the stored camelCase layout (``gamesPlayed``, ``difficultyStats``,
...). Loading merges over defaults so records written before a field existed
still load; unknown keys are ignored.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import date, datetime
from types import MappingProxyType
from typing import Any

from .difficulty import DifficultyTier
from .errors import InvalidInput
from .progress import DailyProgress, DailyProgressEntry
from .stats import CumulativeStats, DifficultyStats

logger = logging.getLogger(__name__)

EXPORT_VERSION = 1


def _opt_int(value: Any) -> int | None:
    return None if value is None else int(value)


def stats_to_dict(stats: CumulativeStats) -> dict[str, Any]:
    return {
        "gamesPlayed": stats.games_played,
        "gamesWon": stats.games_won,
        "totalTime": stats.total_time_ms,
        "bestTime": stats.best_time_ms,
        "totalScore": stats.total_score,
        "fastWins": stats.fast_wins,
        "difficultyStats": {
            tier.value: {"played": s.played, "won": s.won, "bestTime": s.best_time_ms}
            for tier, s in stats.by_difficulty.items()
        },
        "achievements": list(stats.achievements),
    }


def _achievement_ids(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)) or not all(isinstance(a, str) for a in value):
        raise InvalidInput(f"achievements must be a list of strings, got {value!r}")
    return tuple(value)


def stats_from_dict(data: Mapping[str, Any]) -> CumulativeStats:
    try:
        breakdown: dict[DifficultyTier, DifficultyStats] = {}
        for key, raw in dict(data.get("difficultyStats") or {}).items():
            try:
                tier = DifficultyTier(key)
            except ValueError:
                continue
            breakdown[tier] = DifficultyStats(
                played=int(raw.get("played", 0)),
                won=int(raw.get("won", 0)),
                best_time_ms=_opt_int(raw.get("bestTime")),
            )
        return CumulativeStats(
            games_played=int(data.get("gamesPlayed", 0)),
            games_won=int(data.get("gamesWon", 0)),
            total_time_ms=int(data.get("totalTime", 0)),
            best_time_ms=_opt_int(data.get("bestTime")),
            total_score=int(data.get("totalScore", 0)),
            fast_wins=int(data.get("fastWins", 0)),
            by_difficulty=breakdown,
            achievements=_achievement_ids(data.get("achievements")),
        )
    except InvalidInput as e:
        logger.warning("rejected stats record: %s", e)
        raise
    except (AttributeError, TypeError, ValueError) as e:
        logger.warning("rejected stats record: %s", e)
        raise InvalidInput(f"malformed stats record: {e}") from e


def progress_to_dict(progress: DailyProgress) -> dict[str, Any]:
    return {
        key: {"completed": entry.completed, "score": entry.score, "timestamp": entry.timestamp_ms}
        for key, entry in sorted(progress.items())
    }


def _progress_entry(key: Any, raw: Any) -> DailyProgressEntry:
    if not isinstance(key, str):
        raise InvalidInput(f"daily progress key must be an ISO date, got {key!r}")
    try:
        date.fromisoformat(key)
    except ValueError as e:
        raise InvalidInput(f"daily progress key must be an ISO date, got {key!r}") from e
    completed = raw.get("completed", False)
    if not isinstance(completed, bool):
        raise InvalidInput(f"'completed' for {key} must be true or false, got {completed!r}")
    return DailyProgressEntry(
        completed=completed,
        score=int(raw.get("score", 0)),
        timestamp_ms=int(raw.get("timestamp", 0)),
    )


def progress_from_dict(data: Mapping[str, Any]) -> DailyProgress:
    try:
        out = {key: _progress_entry(key, raw) for key, raw in data.items()}
    except InvalidInput as e:
        logger.warning("rejected daily progress record: %s", e)
        raise
    except (AttributeError, TypeError, ValueError) as e:
        logger.warning("rejected daily progress record: %s", e)
        raise InvalidInput(f"malformed daily progress record: {e}") from e
    return MappingProxyType(out)


def export_game_data(stats: CumulativeStats, progress: DailyProgress, *, exported_at: datetime) -> str:
    """Serialise stats and daily progress into a JSON backup document."""

    payload = {
        "version": EXPORT_VERSION,
        "stats": stats_to_dict(stats),
        "dailyProgress": progress_to_dict(progress),
        "exportDate": exported_at.isoformat(),
    }
    return json.dumps(payload, indent=2)


def import_game_data(text: str) -> tuple[CumulativeStats, DailyProgress]:
    """Parse a backup produced by :func:`export_game_data`.

    Missing sections load as empty records. Raises ``InvalidInput`` when the
    document is not valid JSON or a section has the wrong shape.
    """

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("rejected game data import: %s", e)
        raise InvalidInput(f"game data is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        logger.warning("rejected game data import: top level is %s", type(data).__name__)
        raise InvalidInput("game data must be a JSON object")

    stats = stats_from_dict(_section(data, "stats"))
    progress = progress_from_dict(_section(data, "dailyProgress"))
    return stats, progress


def _section(data: Mapping[str, Any], key: str) -> Any:
    value = data.get(key)
    return {} if value is None else value
