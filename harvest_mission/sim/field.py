"""In-memory field world implementing the Actuator contract.

Useful for dry runs of a sweep and for exercising the core without a real
turtle: crops, transient obstructions, the depot and the fuel tank are all
simulated in the same relative frame the core tracks (home at ``(0, 0)``,
x to the East, z to the South).
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from ..core.pose import HOME_HEADING, Heading
from ..core.runtime import FuelLevel

MELON = "minecraft:melon"
MELON_STEM = "minecraft:melon_stem"
COAL = "minecraft:coal"
STACK_LIMIT = 64

FUEL_VALUES: Dict[str, int] = {
    COAL: 80,
    "minecraft:charcoal": 80,
    "minecraft:coal_block": 800,
    "minecraft:stick": 5,
}

Cell = Tuple[int, int]


@dataclass
class Stack:
    item: str
    count: int


class SimulatedField:
    def __init__(
        self,
        crops: Optional[Dict[Cell, str]] = None,
        *,
        fuel: Union[int, str, FuelLevel] = FuelLevel.UNLIMITED,
        slot_count: int = 16,
        home_heading: Heading = HOME_HEADING,
        depot_heading: Optional[Heading] = None,
        depot: Optional[List[Tuple[str, int]]] = None,
        depot_capacity: Optional[int] = None,
    ) -> None:
        self.crops: Dict[Cell, str] = dict(crops or {})
        self.fuel = FuelLevel.parse(fuel)
        self.num_slots = slot_count
        self.slots: List[Optional[Stack]] = [None] * slot_count
        self.selected = 1

        self.x = 0
        self.z = 0
        self.heading = home_heading
        depot_dir = depot_heading if depot_heading is not None else home_heading.opposite()
        dx, dz = depot_dir.delta
        self.depot_cell: Cell = (dx, dz)
        self.depot: List[Stack] = [Stack(item, count) for item, count in (depot or []) if count > 0]
        self.depot_capacity = depot_capacity

        self._obstructions: Dict[Cell, Optional[int]] = {}

        # Observability for tests and dry runs
        self.visits: List[Cell] = [(0, 0)]
        self.harvest_log: List[Tuple[int, int, str]] = []
        self.inspections = 0
        self.steps = 0
        self.turns = 0
        self.clears = 0
        self.attacks = 0
        self.lost_items = 0

    @classmethod
    def from_ratio(
        cls,
        width: int,
        length: int,
        ratio: float = 0.5,
        *,
        seed: int = 0,
        **kwargs,
    ) -> "SimulatedField":
        """Plant a width x length field with mature melons at ``ratio``.

        Rows run along the home heading and stack to its right, which is
        where a serpentine sweep from home will find them.
        """
        rng = random.Random(seed)
        home = kwargs.get("home_heading", HOME_HEADING)
        (ax, az), (bx, bz) = home.delta, home.right().delta
        crops = {}
        for row in range(length):
            for col in range(width):
                crops[(ax * col + bx * row, az * col + bz * row)] = MELON if rng.random() < ratio else MELON_STEM
        return cls(crops, **kwargs)

    # ------------------------------------------------------------------
    # Scenario setup

    def add_obstruction(self, x: int, z: int, failures: Optional[int] = 1) -> None:
        """Block entry to (x, z) for ``failures`` attempts (None blocks forever)."""
        self._obstructions[(x, z)] = failures

    def fill_slots(self, item: str = "minecraft:cobblestone", count: int = STACK_LIMIT, *, leave_empty: int = 0) -> None:
        for idx in range(self.num_slots - leave_empty):
            self.slots[idx] = Stack(item, count)

    # ------------------------------------------------------------------
    # Movement

    def step_forward(self) -> bool:
        target = self._ahead()
        if self.fuel.exhausted:
            return False
        if target == self.depot_cell:
            return False
        if target in self._obstructions:
            remaining = self._obstructions[target]
            if remaining is None:
                return False
            if remaining > 0:
                self._obstructions[target] = remaining - 1
                return False
            del self._obstructions[target]
        self.x, self.z = target
        if not self.fuel.unlimited:
            self.fuel = FuelLevel.finite(self.fuel.units - 1)
        self.steps += 1
        self.visits.append(target)
        return True

    def turn_left(self) -> None:
        self.heading = self.heading.left()
        self.turns += 1

    def turn_right(self) -> None:
        self.heading = self.heading.right()
        self.turns += 1

    # ------------------------------------------------------------------
    # World interaction

    def clear_ahead(self) -> None:
        self.clears += 1

    def attack_ahead(self) -> None:
        self.attacks += 1

    def inspect_below(self) -> Tuple[bool, Optional[str]]:
        self.inspections += 1
        identity = self.crops.get((self.x, self.z))
        return (identity is not None, identity)

    def clear_below(self) -> None:
        identity = self.crops.pop((self.x, self.z), None)
        if identity is None:
            return
        self.harvest_log.append((self.x, self.z, identity))
        if not self._insert(identity, 1):
            self.lost_items += 1

    # ------------------------------------------------------------------
    # Inventory

    def select_slot(self, slot: int) -> None:
        self._check_slot(slot)
        self.selected = slot

    def slot_count(self, slot: int) -> int:
        self._check_slot(slot)
        stack = self.slots[slot - 1]
        return stack.count if stack else 0

    def deposit_forward(self, count: Optional[int] = None) -> bool:
        if not self._facing_depot():
            return False
        stack = self.slots[self.selected - 1]
        if stack is None:
            return False
        amount = stack.count if count is None else min(count, stack.count)
        if self.depot_capacity is not None:
            amount = min(amount, self.depot_capacity - self.depot_items())
        if amount <= 0:
            return False
        self._depot_add(stack.item, amount)
        stack.count -= amount
        if stack.count == 0:
            self.slots[self.selected - 1] = None
        return True

    def withdraw_forward(self, count: int) -> bool:
        if not self._facing_depot() or not self.depot:
            return False
        source = self.depot[0]
        target = self.slots[self.selected - 1]
        if target is not None and (target.item != source.item or target.count >= STACK_LIMIT):
            return False
        amount = min(count, source.count)
        if target is not None:
            amount = min(amount, STACK_LIMIT - target.count)
            target.count += amount
        else:
            self.slots[self.selected - 1] = Stack(source.item, amount)
        source.count -= amount
        if source.count == 0:
            self.depot.pop(0)
        return True

    def depot_items(self, item: Optional[str] = None) -> int:
        return sum(s.count for s in self.depot if item is None or s.item == item)

    def inventory_items(self, item: Optional[str] = None) -> int:
        return sum(s.count for s in self.slots if s is not None and (item is None or s.item == item))

    # ------------------------------------------------------------------
    # Fuel

    def fuel_level(self) -> FuelLevel:
        return self.fuel

    def consume_selected_as_fuel(self, amount: int) -> bool:
        stack = self.slots[self.selected - 1]
        if stack is None or stack.item not in FUEL_VALUES:
            return False
        used = min(amount, stack.count)
        if not self.fuel.unlimited:
            self.fuel = FuelLevel.finite(self.fuel.units + FUEL_VALUES[stack.item] * used)
        stack.count -= used
        if stack.count == 0:
            self.slots[self.selected - 1] = None
        return True

    # ------------------------------------------------------------------
    # Internals

    def _ahead(self) -> Cell:
        dx, dz = self.heading.delta
        return (self.x + dx, self.z + dz)

    def _facing_depot(self) -> bool:
        return self._ahead() == self.depot_cell

    def _check_slot(self, slot: int) -> None:
        if not 1 <= slot <= self.num_slots:
            raise ValueError(f"Slot {slot} out of range 1..{self.num_slots}")

    def _insert(self, item: str, count: int) -> bool:
        for stack in self.slots:
            if stack is not None and stack.item == item and stack.count + count <= STACK_LIMIT:
                stack.count += count
                return True
        for idx, stack in enumerate(self.slots):
            if stack is None:
                self.slots[idx] = Stack(item, count)
                return True
        return False

    def _depot_add(self, item: str, count: int) -> None:
        for stack in self.depot:
            if stack.item == item:
                stack.count += count
                return
        self.depot.append(Stack(item, count))


__all__ = ["SimulatedField", "Stack", "FUEL_VALUES", "MELON", "MELON_STEM", "COAL", "STACK_LIMIT"]
