"""Planning utilities for coverage paths."""

from .coverage_planner import (
    cell_offset,
    remaining_path_length,
    serpentine_cells,
    serpentine_path_length,
    worst_round_trip,
)

__all__ = [
    "serpentine_cells",
    "cell_offset",
    "serpentine_path_length",
    "remaining_path_length",
    "worst_round_trip",
]
