from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from .clock import Clock, elapsed_ms
from .errors import InvalidInput, SessionFinished
from .generator import MagicSquarePuzzle
from .randomness import RandomSource, system_random
from .results import GameAttemptRecord
from .scoring import MAX_HINTS
from .validator import is_valid_magic_square

logger = logging.getLogger(__name__)


class Phase(StrEnum):
    ACTIVE = "active"
    WON = "won"
    REVEALED = "revealed"


@dataclass(frozen=True, slots=True)
class SessionConfig:
    max_hints: int = MAX_HINTS

    def __post_init__(self) -> None:
        if not (0 <= self.max_hints <= MAX_HINTS):
            raise InvalidInput(f"max_hints must be in [0, {MAX_HINTS}]")


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """View model for the UI (pure data)."""

    phase: Phase
    grid: tuple[int | None, ...]
    pool: tuple[int, ...]
    magic_constant: int
    elapsed_ms: int
    hints_used: int
    hints_left: int
    attempts: int


class GameSession:
    """Headless state machine for one puzzle:

      ACTIVE -> WON      (a check passes)
      ACTIVE -> REVEALED (the player gives up)

    Time comes only from the injected Clock and hint cells from the injected
    RandomSource, so a scripted run is fully deterministic.
    """

    def __init__(
        self,
        puzzle: MagicSquarePuzzle,
        *,
        clock: Clock,
        rng: RandomSource | None = None,
        config: SessionConfig | None = None,
        is_daily: bool = False,
    ) -> None:
        self._puzzle = puzzle
        self._clock = clock
        self._rng = rng if rng is not None else system_random()
        self._config = config if config is not None else SessionConfig()
        self._is_daily = bool(is_daily)

        self._phase = Phase.ACTIVE
        self._grid: list[int | None] = []
        self._pool: list[int] = []
        self._hints_used = 0
        self._attempts = 0
        self._started_at_s = 0.0
        self._ended_at_s: float | None = None
        self._clear()

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def puzzle(self) -> MagicSquarePuzzle:
        return self._puzzle

    @property
    def grid(self) -> tuple[int | None, ...]:
        return tuple(self._grid)

    @property
    def pool(self) -> tuple[int, ...]:
        return tuple(self._pool)

    @property
    def hints_used(self) -> int:
        return self._hints_used

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def elapsed_ms(self) -> int:
        end = self._ended_at_s if self._ended_at_s is not None else self._clock.now()
        return elapsed_ms(self._started_at_s, end)

    def place(self, cell: int, value: int) -> None:
        """Put a pool value in ``cell``; a value already there goes back to the pool."""

        self._require_active()
        self._check_cell(cell)
        if value not in self._pool:
            raise InvalidInput(f"{value} is not in the number pool")
        previous = self._grid[cell]
        if previous is not None:
            self._pool.append(previous)
        self._pool.remove(value)
        self._grid[cell] = value

    def remove(self, cell: int) -> int | None:
        self._require_active()
        self._check_cell(cell)
        value = self._grid[cell]
        if value is None:
            return None
        self._grid[cell] = None
        self._pool.append(value)
        self._pool.sort()
        return value

    def check(self) -> bool:
        """Validate the grid. Every check counts as an attempt, even on an incomplete grid."""

        self._require_active()
        self._attempts += 1
        if not is_valid_magic_square(self._grid, self._puzzle.size, self._puzzle.magic_constant):
            return False
        self._finish(Phase.WON)
        return True

    def hint(self) -> int | None:
        """Place one correct value in a random wrong or empty cell.

        Returns the cell, or None when no hints are left or nothing is wrong.
        """

        self._require_active()
        if self._hints_used >= self._config.max_hints:
            return None
        solution = self._puzzle.solution
        wrong = [i for i, v in enumerate(self._grid) if v != solution[i]]
        if not wrong:
            return None

        cell = int(self._rng.choice(wrong))
        value = solution[cell]
        if value not in self._pool:
            # The value sits in some other, wrong cell: take it back first.
            holder = next(i for i, v in enumerate(self._grid) if v == value and solution[i] != value)
            self._grid[holder] = None
            self._pool.append(value)
        self.place(cell, value)
        self._hints_used += 1
        logger.debug("hint %d placed %d in cell %d", self._hints_used, value, cell)
        return cell

    def reveal(self) -> None:
        self._require_active()
        self._grid = list(self._puzzle.solution)
        self._pool = []
        self._finish(Phase.REVEALED)

    def reset(self) -> None:
        """Clear the grid and counters and restart the clock; same puzzle."""

        self._require_active()
        self._clear()

    def record(self) -> GameAttemptRecord:
        if self._phase is Phase.ACTIVE:
            raise InvalidInput("game is still in progress")
        return GameAttemptRecord(
            elapsed_ms=self.elapsed_ms,
            hints_used=self._hints_used,
            # A reveal before any check still counts as one resolution.
            attempts=max(1, self._attempts),
            difficulty=self._puzzle.difficulty,
            won=self._phase is Phase.WON,
            is_daily=self._is_daily,
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            phase=self._phase,
            grid=self.grid,
            pool=self.pool,
            magic_constant=self._puzzle.magic_constant,
            elapsed_ms=self.elapsed_ms,
            hints_used=self._hints_used,
            hints_left=self._config.max_hints - self._hints_used,
            attempts=self._attempts,
        )

    def _clear(self) -> None:
        cells = self._puzzle.size * self._puzzle.size
        self._grid = [None] * cells
        self._pool = self._rng.shuffle(self._puzzle.number_pool)
        self._hints_used = 0
        self._attempts = 0
        self._started_at_s = self._clock.now()
        self._ended_at_s = None

    def _finish(self, phase: Phase) -> None:
        self._phase = phase
        self._ended_at_s = self._clock.now()
        logger.debug("session %s after %d ms, %d checks", phase.value, self.elapsed_ms, self._attempts)

    def _require_active(self) -> None:
        if self._phase is not Phase.ACTIVE:
            raise SessionFinished(f"game already {self._phase.value}")

    def _check_cell(self, cell: int) -> None:
        if not (0 <= cell < len(self._grid)):
            raise InvalidInput(f"cell {cell} out of range 0..{len(self._grid) - 1}")
