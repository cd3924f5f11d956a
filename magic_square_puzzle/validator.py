"""Magic-square validation.

A grid is a flat, row-major sequence of ``size * size`` cells. Empty cells
are ``None``; a grid with any empty cell is simply not (yet) a magic square,
so validation reports ``False`` instead of raising.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .errors import InvalidInput


@dataclass(frozen=True, slots=True)
class LineSums:
    """Sums of every line of a completely filled grid."""

    rows: tuple[int, ...]
    columns: tuple[int, ...]
    diagonals: tuple[int, int]  # (main, anti)

    def all_equal(self, target: int) -> bool:
        return all(total == target for total in (*self.rows, *self.columns, *self.diagonals))

    def mismatched(self, target: int) -> list[str]:
        """Labels such as ``"row 0"`` or ``"anti diagonal"`` for lines that miss target."""

        out = [f"row {i}" for i, total in enumerate(self.rows) if total != target]
        out += [f"column {j}" for j, total in enumerate(self.columns) if total != target]
        if self.diagonals[0] != target:
            out.append("main diagonal")
        if self.diagonals[1] != target:
            out.append("anti diagonal")
        return out


def _check_shape(grid: Sequence[int | None], size: int) -> None:
    if size < 1:
        raise InvalidInput(f"size must be >= 1, got {size}")
    if len(grid) != size * size:
        raise InvalidInput(f"grid has {len(grid)} cells, expected {size * size} for size {size}")


def line_sums(grid: Sequence[int], size: int) -> LineSums:
    """Return row, column and diagonal sums; every cell must be filled."""

    _check_shape(grid, size)
    if any(cell is None for cell in grid):
        raise InvalidInput("line sums need a completely filled grid")

    rows = tuple(sum(grid[i * size + j] for j in range(size)) for i in range(size))
    columns = tuple(sum(grid[i * size + j] for i in range(size)) for j in range(size))
    main = sum(grid[i * size + i] for i in range(size))
    anti = sum(grid[i * size + (size - 1 - i)] for i in range(size))
    return LineSums(rows=rows, columns=columns, diagonals=(main, anti))


def is_valid_magic_square(grid: Sequence[int | None], size: int, target_sum: int) -> bool:
    """True iff all ``2 * size + 2`` lines sum exactly to ``target_sum``.

    Raises ``InvalidInput`` only when ``grid`` does not hold ``size * size``
    cells; unfilled cells give ``False``.
    """

    _check_shape(grid, size)
    if any(cell is None for cell in grid):
        return False
    return line_sums(grid, size).all_equal(int(target_sum))
