from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from fractions import Fraction

from .errors import InvalidDifficulty


class DifficultyTier(StrEnum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    MASTER = "master"


@dataclass(frozen=True, slots=True)
class TierProfile:
    """Offset range applied to the base square, and the score multiplier."""

    min_offset: int
    max_offset: int
    multiplier: Fraction

    @property
    def range_size(self) -> int:
        return self.max_offset - self.min_offset + 1


# Offsets shift the 1..9 base square: easy lands roughly in 1..20,
# master roughly in -1000..1000.
_PROFILES: dict[DifficultyTier, TierProfile] = {
    DifficultyTier.EASY: TierProfile(min_offset=-7, max_offset=12, multiplier=Fraction(1, 2)),
    DifficultyTier.NORMAL: TierProfile(min_offset=-55, max_offset=45, multiplier=Fraction(1)),
    DifficultyTier.HARD: TierProfile(min_offset=-205, max_offset=195, multiplier=Fraction(3, 2)),
    DifficultyTier.MASTER: TierProfile(min_offset=-1005, max_offset=995, multiplier=Fraction(2)),
}


def parse_difficulty(value: DifficultyTier | str) -> DifficultyTier:
    """Coerce a tier or its string value; never falls back to a default."""

    if isinstance(value, DifficultyTier):
        return value
    if isinstance(value, str):
        try:
            return DifficultyTier(value.strip().lower())
        except ValueError:
            pass
    raise InvalidDifficulty(value)


def tier_profile(difficulty: DifficultyTier | str) -> TierProfile:
    return _PROFILES[parse_difficulty(difficulty)]
