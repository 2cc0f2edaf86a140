"""Inventory capacity checks plus depot unload and fuel intake."""

from __future__ import annotations

from typing import Optional

from .pose import Heading, PoseTracker
from .runtime import FuelLevel, HarvestRuntime

DEFAULT_SLOT_COUNT = 16
DEFAULT_REFUEL_ATTEMPTS = 128


class NotAtHomeError(RuntimeError):
    """Raised when a depot operation is attempted away from the home cell."""


class InventoryManager:
    """Slot bookkeeping against the depot that sits behind the home cell.

    Slots are numbered ``1..slot_count`` to match the actuator. Depot calls
    require the agent to stand on the home cell; the depot is reached by
    facing ``depot_heading``.
    """

    def __init__(
        self,
        runtime: HarvestRuntime,
        tracker: PoseTracker,
        *,
        depot_heading: Heading,
        slot_count: int = DEFAULT_SLOT_COUNT,
        default_slot: int = 1,
    ) -> None:
        if slot_count < 1:
            raise ValueError("slot_count must be at least 1")
        if not 1 <= default_slot <= slot_count:
            raise ValueError(f"default_slot must be within 1..{slot_count}")
        self._runtime = runtime
        self._actuator = runtime.actuator
        self._tracker = tracker
        self.depot_heading = depot_heading
        self.slot_count = slot_count
        self.default_slot = default_slot

    def slots(self) -> range:
        return range(1, self.slot_count + 1)

    def has_capacity(self) -> bool:
        return any(self._actuator.slot_count(slot) == 0 for slot in self.slots())

    def first_empty_slot(self) -> Optional[int]:
        for slot in self.slots():
            if self._actuator.slot_count(slot) == 0:
                return slot
        return None

    def total_items(self) -> int:
        return sum(self._actuator.slot_count(slot) for slot in self.slots())

    def dump_all(self) -> int:
        """Deposit every non-empty slot into the depot; returns items moved."""
        self._require_home("dump")
        original = self._tracker.heading
        before = self.total_items()
        self._tracker.face(self.depot_heading)
        try:
            for slot in self.slots():
                if self._actuator.slot_count(slot) > 0:
                    self._actuator.select_slot(slot)
                    self._actuator.deposit_forward(None)
        finally:
            self._actuator.select_slot(self.default_slot)
            self._tracker.face(original)

        remaining = self.total_items()
        deposited = max(0, before - remaining)
        if remaining:
            self._runtime.logger.warning(f"Depot accepted {deposited} items; {remaining} still on board")
        else:
            self._runtime.logger.info(f"Dumped {deposited} items into the depot")
        return deposited

    def refuel_intake(self, max_attempts: int = DEFAULT_REFUEL_ATTEMPTS) -> int:
        """Draw depot items one at a time, burning fuel and returning the rest.

        Pulling single items into an empty slot means harvested cargo that
        shares the depot is handed straight back instead of being hoarded.
        Returns the number of items consumed as fuel.
        """
        self._require_home("refuel")
        original = self._tracker.heading
        consumed = 0
        self._tracker.face(self.depot_heading)
        try:
            for _ in range(max_attempts):
                slot = self.first_empty_slot()
                if slot is None:
                    self._runtime.logger.warning("Refuel stopped: no empty slot to draw into")
                    break
                self._actuator.select_slot(slot)
                if not self._actuator.withdraw_forward(1):
                    self._runtime.logger.info("Refuel stopped: depot empty or inaccessible")
                    break
                if self._actuator.consume_selected_as_fuel(1):
                    consumed += 1
                else:
                    self._actuator.deposit_forward(1)
        finally:
            self._actuator.select_slot(self.default_slot)
            self._tracker.face(original)
        self._runtime.logger.info(
            f"Refuel intake consumed {consumed} items; fuel now {FuelLevel.parse(self._actuator.fuel_level())}"
        )
        return consumed

    def _require_home(self, operation: str) -> None:
        pose = self._tracker.pose
        if pose.cell != (0, 0):
            raise NotAtHomeError(f"Cannot {operation} at ({pose.x}, {pose.z}); the depot is only reachable from home")


__all__ = ["InventoryManager", "NotAtHomeError", "DEFAULT_SLOT_COUNT", "DEFAULT_REFUEL_ATTEMPTS"]
