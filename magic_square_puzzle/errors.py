from __future__ import annotations


class MagicSquareError(ValueError):
    """Base class for errors raised by the puzzle core."""


class InvalidDifficulty(MagicSquareError):
    """An unrecognised difficulty tier was requested."""

    def __init__(self, value: object) -> None:
        super().__init__(f"unknown difficulty tier: {value!r}")
        self.value = value


class InvalidInput(MagicSquareError):
    """A caller broke a documented precondition (negative time, wrong grid length, ...)."""


class SessionFinished(MagicSquareError, RuntimeError):
    """The game session was already won or revealed."""
