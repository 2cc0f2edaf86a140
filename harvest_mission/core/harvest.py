"""Per-cell harvest decision and action."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from .runtime import HarvestRuntime

DEFAULT_ALLOW_LIST: FrozenSet[str] = frozenset({"minecraft:melon", "minecraft:melon_block"})


@dataclass(frozen=True)
class HarvestClassifier:
    """Allow-list match, falling back to an include/exclude keyword pair.

    The keyword fallback catches modded or renamed crop ids while the exclude
    word keeps the growing stage (e.g. ``melon_stem``) in the ground.
    """

    allow_list: FrozenSet[str] = field(default_factory=lambda: DEFAULT_ALLOW_LIST)
    keyword: Optional[str] = "melon"
    exclude: Optional[str] = "stem"

    def is_harvestable(self, identity: Optional[str]) -> bool:
        if not identity:
            return False
        if identity in self.allow_list:
            return True
        if not self.keyword or self.keyword not in identity:
            return False
        return not (self.exclude and self.exclude in identity)


class CellActionPolicy:
    def __init__(self, runtime: HarvestRuntime, classifier: HarvestClassifier, slot_count: int) -> None:
        self._runtime = runtime
        self._actuator = runtime.actuator
        self._classifier = classifier
        self._slot_count = slot_count
        self.harvested = 0
        self.unconfirmed = 0

    def harvest_cell(self) -> bool:
        """Break the object below if it is harvestable. Returns True when broken."""
        present, identity = self._actuator.inspect_below()
        if not present or not self._classifier.is_harvestable(identity):
            return False

        before = self._item_total()
        self._actuator.clear_below()
        self.harvested += 1
        # Drops are not guaranteed to land in the inventory (full stack, no drop)
        if self._item_total() <= before:
            self.unconfirmed += 1
            self._runtime.logger.debug(f"Harvested '{identity}' but inventory total did not grow")
        return True

    def _item_total(self) -> int:
        return sum(self._actuator.slot_count(slot) for slot in range(1, self._slot_count + 1))


__all__ = ["DEFAULT_ALLOW_LIST", "HarvestClassifier", "CellActionPolicy"]
