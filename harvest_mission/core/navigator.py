"""Axis-sequential (L-shaped) relocation relative to the home cell."""

from __future__ import annotations

from .motion import MotionPrimitive
from .pose import HOME_HEADING, Checkpoint, Heading, PoseTracker


class Navigator:
    def __init__(self, tracker: PoseTracker, motion: MotionPrimitive, *, home_heading: Heading = HOME_HEADING) -> None:
        self._tracker = tracker
        self._motion = motion
        self.home_heading = home_heading

    @property
    def pose(self):
        return self._tracker.pose

    def move_to(self, target_x: int, target_z: int) -> None:
        """Resolve the X displacement first, then Z."""
        pose = self._tracker.pose
        if pose.x < target_x:
            self._walk(Heading.EAST, target_x - pose.x)
        elif pose.x > target_x:
            self._walk(Heading.WEST, pose.x - target_x)

        if pose.z < target_z:
            self._walk(Heading.SOUTH, target_z - pose.z)
        elif pose.z > target_z:
            self._walk(Heading.NORTH, pose.z - target_z)

    def go_home(self) -> None:
        self.move_to(0, 0)
        self._tracker.face(self.home_heading)

    def return_to(self, checkpoint: Checkpoint) -> None:
        self.move_to(checkpoint.x, checkpoint.z)
        self._tracker.face(checkpoint.heading)

    def at_home(self) -> bool:
        return self._tracker.pose.cell == (0, 0)

    def _walk(self, heading: Heading, cells: int) -> None:
        self._tracker.face(heading)
        for _ in range(cells):
            self._motion.forward()


__all__ = ["Navigator"]
