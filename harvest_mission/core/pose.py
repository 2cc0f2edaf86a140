"""Relative pose bookkeeping for a grid agent (integer cells, 4-way heading)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

from .runtime import Actuator


class Heading(IntEnum):
    EAST = 0
    SOUTH = 1
    WEST = 2
    NORTH = 3

    def right(self) -> "Heading":
        return Heading((self + 1) % 4)

    def left(self) -> "Heading":
        return Heading((self + 3) % 4)

    def opposite(self) -> "Heading":
        return Heading((self + 2) % 4)

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    @classmethod
    def parse(cls, value: object) -> "Heading":
        if isinstance(value, Heading):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError as exc:
                raise ValueError(f"Unknown heading {value!r}") from exc
        return cls(int(value))


# x grows to the East, z grows to the South
_DELTAS = {
    Heading.EAST: (1, 0),
    Heading.SOUTH: (0, 1),
    Heading.WEST: (-1, 0),
    Heading.NORTH: (0, -1),
}

HOME_HEADING = Heading.EAST


@dataclass(frozen=True)
class Checkpoint:
    x: int
    z: int
    heading: Heading


@dataclass
class Pose:
    x: int = 0
    z: int = 0
    heading: Heading = HOME_HEADING

    @property
    def cell(self) -> Tuple[int, int]:
        return (self.x, self.z)

    def advance(self) -> None:
        dx, dz = self.heading.delta
        self.x += dx
        self.z += dz

    def snapshot(self) -> Checkpoint:
        return Checkpoint(self.x, self.z, self.heading)

    def matches(self, checkpoint: Checkpoint) -> bool:
        return (self.x, self.z, self.heading) == (checkpoint.x, checkpoint.z, checkpoint.heading)


class PoseTracker:
    """Issues turn commands and keeps the tracked heading in step with them."""

    def __init__(self, actuator: Actuator, pose: Pose) -> None:
        self._actuator = actuator
        self.pose = pose
        self.turns = 0

    @property
    def heading(self) -> Heading:
        return self.pose.heading

    def turn_left(self) -> None:
        self._actuator.turn_left()
        self.pose.heading = self.pose.heading.left()
        self.turns += 1

    def turn_right(self) -> None:
        self._actuator.turn_right()
        self.pose.heading = self.pose.heading.right()
        self.turns += 1

    def turn_around(self) -> None:
        self.turn_left()
        self.turn_left()

    def face(self, target: Heading) -> int:
        """Turn right until facing ``target``; returns the number of turns (0-3)."""
        made = 0
        while self.pose.heading != target:
            self.turn_right()
            made += 1
        return made


__all__ = ["Heading", "HOME_HEADING", "Checkpoint", "Pose", "PoseTracker"]
