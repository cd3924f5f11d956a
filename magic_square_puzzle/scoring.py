from __future__ import annotations

import math

from .difficulty import DifficultyTier, tier_profile
from .errors import InvalidInput

BASE_SCORE = 10_000
MIN_SCORE = 100
TIME_PENALTY_PER_S = 10
HINT_PENALTY = 1_000
FAILED_CHECK_PENALTY = 500
MAX_HINTS = 3


def score(elapsed_ms: int, hints_used: int, attempts: int, difficulty: DifficultyTier | str) -> int:
    """Score a won game; never below ``MIN_SCORE``.

    ``attempts`` counts every check including the winning one, so only the
    earlier failed checks are penalised. The tier multiplier is an exact
    fraction and the result is floored.
    """

    profile = tier_profile(difficulty)
    if elapsed_ms < 0:
        raise InvalidInput(f"elapsed_ms must be >= 0, got {elapsed_ms}")
    if not (0 <= hints_used <= MAX_HINTS):
        raise InvalidInput(f"hints_used must be in [0, {MAX_HINTS}], got {hints_used}")
    if attempts < 1:
        raise InvalidInput(f"attempts must be >= 1, got {attempts}")

    time_penalty = (int(elapsed_ms) // 1000) * TIME_PENALTY_PER_S
    hint_penalty = int(hints_used) * HINT_PENALTY
    attempt_penalty = (int(attempts) - 1) * FAILED_CHECK_PENALTY

    raw = max(0, BASE_SCORE - time_penalty - hint_penalty - attempt_penalty)
    final = math.floor(raw * profile.multiplier)
    return max(MIN_SCORE, int(final))
