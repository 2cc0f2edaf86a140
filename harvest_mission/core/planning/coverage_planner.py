"""Coverage planning utilities for boustrophedon (serpentine) grid sweeps."""

from __future__ import annotations

from typing import List, Tuple

Cell = Tuple[int, int]


def _check_dimensions(width: int, length: int) -> None:
    if width < 1 or length < 1:
        raise ValueError("width and length must both be at least 1")


def serpentine_cells(width: int, length: int) -> List[Cell]:
    """Return the (row, col) visitation order of a serpentine sweep.

    Rows and columns are 1-based in scan order: ``col`` counts cells walked in
    the current row, so odd rows advance away from home and even rows come
    back. The world cell for a (row, col) pair is given by :func:`cell_offset`.
    """

    _check_dimensions(width, length)
    return [(row, col) for row in range(1, length + 1) for col in range(1, width + 1)]


def cell_offset(row: int, col: int, width: int) -> Cell:
    """Map a 1-based (row, col) scan cursor to the (x, z) offset from home.

    Assumes the sweep starts facing EAST and shifts rows to the right (SOUTH).
    """

    x = col - 1 if row % 2 == 1 else width - col
    return (x, row - 1)


def serpentine_path_length(width: int, length: int) -> int:
    """Budgeted forward steps for a full sweep: cell-to-cell moves plus row shifts.

    Row shifts are counted on top of the cell count, so this bounds the exact
    step count (``width * length - 1``) from above by ``length - 1``.
    """

    _check_dimensions(width, length)
    return (width * length - 1) + (length - 1)


def remaining_path_length(width: int, length: int, row: int, col: int) -> int:
    """Forward steps still ahead of the agent standing at scan cursor (row, col)."""

    _check_dimensions(width, length)
    if not (1 <= row <= length and 1 <= col <= width):
        raise ValueError(f"cursor ({row}, {col}) lies outside a {width}x{length} grid")
    done = (row - 1) * width + (col - 1)
    return (width * length - 1) - done


def worst_round_trip(width: int, length: int) -> int:
    """Manhattan round trip from home to the far corner and back."""

    _check_dimensions(width, length)
    return 2 * ((width - 1) + (length - 1))


__all__ = [
    "Cell",
    "serpentine_cells",
    "cell_offset",
    "serpentine_path_length",
    "remaining_path_length",
    "worst_round_trip",
]
