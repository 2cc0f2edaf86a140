"""Fuel budgeting derived from the serpentine path."""

from __future__ import annotations

from typing import Optional

from .inventory import DEFAULT_REFUEL_ATTEMPTS, InventoryManager
from .planning import remaining_path_length, serpentine_path_length, worst_round_trip
from .pose import Checkpoint
from .runtime import FuelLevel, HarvestRuntime

DEFAULT_FUEL_BUFFER = 50


class FuelShortfallError(RuntimeError):
    """Raised when fuel stays below the requirement after refuelling."""

    def __init__(self, available: FuelLevel, needed: int, *, context: str = "") -> None:
        where = f" {context}" if context else ""
        super().__init__(f"Fuel shortfall{where}: have {available}, need {needed}")
        self.available = available
        self.needed = needed


def estimate_fuel_needed(width: int, length: int, buffer: int = DEFAULT_FUEL_BUFFER) -> int:
    """Serpentine sweep + one worst-case dump round trip + a safety buffer."""

    return serpentine_path_length(width, length) + worst_round_trip(width, length) + buffer


def estimate_remaining_fuel(
    width: int,
    length: int,
    row: int,
    col: int,
    checkpoint: Optional[Checkpoint] = None,
    buffer: int = DEFAULT_FUEL_BUFFER,
) -> int:
    """Fuel still required from home when resuming at scan cursor (row, col)."""

    back_to_checkpoint = abs(checkpoint.x) + abs(checkpoint.z) if checkpoint is not None else 0
    return (
        back_to_checkpoint
        + remaining_path_length(width, length, row, col)
        + worst_round_trip(width, length)
        + buffer
    )


class FuelManager:
    def __init__(
        self,
        runtime: HarvestRuntime,
        inventory: InventoryManager,
        width: int,
        length: int,
        *,
        buffer: int = DEFAULT_FUEL_BUFFER,
        refuel_attempts: int = DEFAULT_REFUEL_ATTEMPTS,
    ) -> None:
        self._runtime = runtime
        self._actuator = runtime.actuator
        self._inventory = inventory
        self._width = width
        self._length = length
        self.buffer = buffer
        self.refuel_attempts = refuel_attempts
        self.items_consumed = 0

    def level(self) -> FuelLevel:
        return FuelLevel.parse(self._actuator.fuel_level())

    def estimate(self) -> int:
        return estimate_fuel_needed(self._width, self._length, self.buffer)

    def ensure_fuel(self) -> bool:
        """Top up from the depot when below the full-run estimate."""
        return self.ensure_fuel_for(self.estimate())

    def ensure_fuel_for(self, needed: int) -> bool:
        fuel = self.level()
        if fuel.covers(needed):
            return True

        self._runtime.logger.info(f"Fuel {fuel} below requirement {needed}; refuelling from depot")
        self.items_consumed += self._inventory.refuel_intake(self.refuel_attempts)

        fuel = self.level()
        if fuel.covers(needed):
            return True
        self._runtime.logger.warning(f"Fuel still short after refuel: have {fuel}, need {needed}")
        return False


__all__ = [
    "DEFAULT_FUEL_BUFFER",
    "FuelManager",
    "FuelShortfallError",
    "estimate_fuel_needed",
    "estimate_remaining_fuel",
]
