"""Small run counters collected in a backend-agnostic way."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass
class RunStats:
    cells_visited: int = 0
    harvested: int = 0
    harvest_unconfirmed: int = 0
    steps: int = 0
    turns: int = 0
    obstructions: int = 0
    blocked_s: float = 0.0
    dumps: int = 0
    items_deposited: int = 0
    fuel_items_consumed: int = 0
    suspensions: int = 0

    def as_rows(self) -> list[tuple[str, object]]:
        return list(asdict(self).items())


def harvest_rate(cells: int, harvested: int) -> float:
    if cells <= 0:
        return 0.0
    return max(0.0, min(1.0, harvested / float(cells)))


__all__ = ["RunStats", "harvest_rate"]
