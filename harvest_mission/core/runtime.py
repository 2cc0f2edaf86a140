"""Runtime and actuator contracts consumed by the core (backend-agnostic)."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, ClassVar, Optional, Protocol, Tuple, Union

UNLIMITED_TOKEN = "unlimited"


@dataclass(frozen=True)
class FuelLevel:
    """Either a finite amount of fuel units or the unlimited sentinel."""

    units: int = 0
    unlimited: bool = False

    UNLIMITED: ClassVar["FuelLevel"]

    def __post_init__(self) -> None:
        if not self.unlimited and self.units < 0:
            raise ValueError("Finite fuel level cannot be negative")

    @classmethod
    def finite(cls, units: int) -> "FuelLevel":
        return cls(units=int(units))

    @classmethod
    def parse(cls, raw: Union[int, str, "FuelLevel"]) -> "FuelLevel":
        """Accept the raw value reported by turtle-style actuators."""
        if isinstance(raw, FuelLevel):
            return raw
        if isinstance(raw, str):
            token = raw.strip().lower()
            if token == UNLIMITED_TOKEN:
                return cls.UNLIMITED
            try:
                return cls.finite(int(token))
            except ValueError as exc:
                raise ValueError(f"Unrecognised fuel level {raw!r}") from exc
        return cls.finite(raw)

    def covers(self, needed: int) -> bool:
        return self.unlimited or self.units >= needed

    @property
    def exhausted(self) -> bool:
        return not self.unlimited and self.units <= 0

    def __str__(self) -> str:
        return UNLIMITED_TOKEN if self.unlimited else str(self.units)


FuelLevel.UNLIMITED = FuelLevel(unlimited=True)


class LoggerLike(Protocol):
    def debug(self, msg: str, *args) -> None: ...

    def info(self, msg: str, *args) -> None: ...

    def warning(self, msg: str, *args) -> None: ...

    def error(self, msg: str, *args) -> None: ...


class Actuator(Protocol):
    # Movement
    def step_forward(self) -> bool: ...

    def turn_left(self) -> None: ...

    def turn_right(self) -> None: ...

    # World interaction
    def clear_ahead(self) -> None: ...

    def clear_below(self) -> None: ...

    def attack_ahead(self) -> None: ...

    def inspect_below(self) -> Tuple[bool, Optional[str]]: ...

    # Inventory (slots are numbered from 1)
    def select_slot(self, slot: int) -> None: ...

    def slot_count(self, slot: int) -> int: ...

    def deposit_forward(self, count: Optional[int] = None) -> bool: ...

    def withdraw_forward(self, count: int) -> bool: ...

    # Fuel
    def fuel_level(self) -> Union[int, str, FuelLevel]: ...  # raw values go through FuelLevel.parse

    def consume_selected_as_fuel(self, amount: int) -> bool: ...


class HarvestRuntime(Protocol):
    @property
    def logger(self) -> LoggerLike: ...

    @property
    def actuator(self) -> Actuator: ...

    def now(self) -> float: ...  # seconds

    def sleep(self, seconds: float) -> None: ...

    def publish_state(self, name: str) -> None: ...


class LocalRuntime(HarvestRuntime):
    """Concrete HarvestRuntime backed by the stdlib logger and wall clock."""

    def __init__(
        self,
        actuator: Actuator,
        *,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.monotonic,
        sleeper: Callable[[float], None] = time.sleep,
    ) -> None:
        self._actuator = actuator
        self._logger = logger or logging.getLogger("harvest_mission")
        self._clock = clock
        self._sleeper = sleeper
        self.states: list[str] = []

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def actuator(self) -> Actuator:
        return self._actuator

    def now(self) -> float:
        return self._clock()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            self._sleeper(seconds)

    def publish_state(self, name: str) -> None:
        self.states.append(name)
        self._logger.debug("Mission state published: %s", name)


__all__ = [
    "FuelLevel",
    "LoggerLike",
    "Actuator",
    "HarvestRuntime",
    "LocalRuntime",
]
