from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Source of uniform random choices.

    Puzzle offsets and hint placement draw from an explicitly passed source
    so that tests can substitute a fixed sequence. Not cryptographic.
    """

    def uniform_int(self, lo: int, hi: int) -> int:
        """Return an integer in [lo, hi], inclusive on both ends."""
        ...

    def choice(self, seq: Sequence[T]) -> T:
        ...

    def shuffle(self, seq: Sequence[T]) -> list[T]:
        """Return a shuffled copy; the input is left untouched."""
        ...


class SeededRandomSource:
    """RandomSource backed by ``random.Random``.

    With a seed the stream is reproducible; without one it is seeded from
    the operating system.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(None if seed is None else int(seed))

    def uniform_int(self, lo: int, hi: int) -> int:
        if lo > hi:
            raise ValueError(f"empty range [{lo}, {hi}]")
        return self._rng.randint(lo, hi)

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)

    def shuffle(self, seq: Sequence[T]) -> list[T]:
        out = list(seq)
        self._rng.shuffle(out)
        return out


def system_random() -> SeededRandomSource:
    return SeededRandomSource()
