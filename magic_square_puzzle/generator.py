"""Puzzle generation by the offset method.

Adding the same integer to every cell of a magic square keeps it magic:
each line grows by ``size * offset``. Every puzzle is therefore the Lo Shu
square shifted by one offset drawn from the difficulty's range, either at
random or from a seed (daily challenges).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .difficulty import DifficultyTier, parse_difficulty, tier_profile
from .errors import InvalidInput
from .randomness import RandomSource, system_random
from .validator import is_valid_magic_square

logger = logging.getLogger(__name__)

SIZE = 3
BASE_SQUARE: tuple[int, ...] = (8, 1, 6, 3, 5, 7, 4, 9, 2)
BASE_CONSTANT = 15


@dataclass(frozen=True, slots=True)
class MagicSquarePuzzle:
    size: int
    solution: tuple[int, ...]  # row-major
    number_pool: tuple[int, ...]
    magic_constant: int
    difficulty: DifficultyTier
    offset: int

    def __post_init__(self) -> None:
        if sorted(self.number_pool) != sorted(self.solution):
            raise InvalidInput("number pool must hold exactly the solution values")
        if not is_valid_magic_square(self.solution, self.size, self.magic_constant):
            raise InvalidInput(
                f"solution {list(self.solution)} is not a magic square for constant {self.magic_constant}"
            )


def offset_for(difficulty: DifficultyTier | str, *, seed: int | None = None, rng: RandomSource | None = None) -> int:
    """Pick the offset for a tier: ``min + seed mod range`` when seeded, else uniform."""

    profile = tier_profile(difficulty)
    if seed is not None:
        return profile.min_offset + int(seed) % profile.range_size
    source = rng if rng is not None else system_random()
    return int(source.uniform_int(profile.min_offset, profile.max_offset))


def puzzle_from_offset(difficulty: DifficultyTier | str, offset: int) -> MagicSquarePuzzle:
    tier = parse_difficulty(difficulty)
    solution = tuple(v + int(offset) for v in BASE_SQUARE)
    # Any line would do; construction re-checks all of them.
    constant = solution[0] + solution[1] + solution[2]
    return MagicSquarePuzzle(
        size=SIZE,
        solution=solution,
        number_pool=tuple(solution),
        magic_constant=constant,
        difficulty=tier,
        offset=int(offset),
    )


def generate(
    difficulty: DifficultyTier | str,
    seed: int | None = None,
    *,
    rng: RandomSource | None = None,
) -> MagicSquarePuzzle:
    """Generate a 3x3 puzzle for ``difficulty``.

    With ``seed`` the result is fully deterministic; ``rng`` is only consulted
    when no seed is given. Raises ``InvalidDifficulty`` for unknown tiers.
    """

    tier = parse_difficulty(difficulty)
    offset = offset_for(tier, seed=seed, rng=rng)
    puzzle = puzzle_from_offset(tier, offset)
    logger.debug(
        "generated %s puzzle offset=%d constant=%d seeded=%s",
        tier.value,
        offset,
        puzzle.magic_constant,
        seed is not None,
    )
    return puzzle


def shuffled_pool(puzzle: MagicSquarePuzzle, rng: RandomSource | None = None) -> list[int]:
    """Presentation order for the number pool."""

    source = rng if rng is not None else system_random()
    return source.shuffle(puzzle.number_pool)


@dataclass(frozen=True, slots=True)
class PresetPuzzle:
    id: str
    name: str
    description: str
    puzzle: MagicSquarePuzzle


def _preset(preset_id: str, name: str, description: str, difficulty: DifficultyTier, offset: int) -> PresetPuzzle:
    return PresetPuzzle(
        id=preset_id,
        name=name,
        description=description,
        puzzle=puzzle_from_offset(difficulty, offset),
    )


PRESETS: tuple[PresetPuzzle, ...] = (
    _preset("classic", "Classic Lo Shu", "The traditional Chinese magic square", DifficultyTier.EASY, 0),
    _preset("negative", "Negative Challenge", "All negative numbers magic square", DifficultyTier.NORMAL, -12),
    _preset("large", "Big Numbers", "Large positive numbers challenge", DifficultyTier.HARD, 100),
    _preset("extreme", "Extreme Range", "Maximum difficulty with extreme numbers", DifficultyTier.MASTER, -500),
)


def preset_puzzle(preset_id: str) -> PresetPuzzle:
    for preset in PRESETS:
        if preset.id == preset_id:
            return preset
    raise KeyError(preset_id)


def preset_ids() -> Sequence[str]:
    return tuple(p.id for p in PRESETS)
