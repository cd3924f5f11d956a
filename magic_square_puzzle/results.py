from __future__ import annotations

from dataclasses import dataclass

from .difficulty import DifficultyTier, parse_difficulty
from .errors import InvalidInput
from .scoring import MAX_HINTS


@dataclass(frozen=True, slots=True)
class GameAttemptRecord:
    """Summary of one finished game, created at the moment of win or reveal.

    It is consumed right away by the scorer and the achievement evaluator;
    its effects only survive through the cumulative statistics.
    """

    elapsed_ms: int
    hints_used: int
    attempts: int
    difficulty: DifficultyTier
    won: bool
    is_daily: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "difficulty", parse_difficulty(self.difficulty))
        if self.elapsed_ms < 0:
            raise InvalidInput(f"elapsed_ms must be >= 0, got {self.elapsed_ms}")
        if not (0 <= self.hints_used <= MAX_HINTS):
            raise InvalidInput(f"hints_used must be in [0, {MAX_HINTS}], got {self.hints_used}")
        if self.attempts < 1:
            raise InvalidInput(f"attempts must be >= 1, got {self.attempts}")
