"""Finite state machine driving the serpentine harvest sweep (backend-free)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .fuel import FuelManager, FuelShortfallError, estimate_remaining_fuel
from .harvest import CellActionPolicy
from .inventory import InventoryManager
from .kpi import RunStats
from .motion import MotionPrimitive
from .navigator import Navigator
from .plan import HarvestPlan
from .pose import Checkpoint, Pose, PoseTracker
from .runtime import HarvestRuntime

STATE_SCANNING = "SCANNING"
STATE_SUSPENDED = "SUSPENDED_FOR_DUMP"
STATE_COMPLETE = "COMPLETE"


@dataclass
class CoverageContext:
    runtime: HarvestRuntime
    plan: HarvestPlan

    def __post_init__(self) -> None:
        calibration = self.plan.calibration
        self.pose = Pose(heading=calibration.home_heading)
        self.tracker = PoseTracker(self.runtime.actuator, self.pose)
        self.motion = MotionPrimitive(self.runtime, self.pose, self.plan.retry)
        self.navigator = Navigator(self.tracker, self.motion, home_heading=calibration.home_heading)
        self.inventory = InventoryManager(
            self.runtime,
            self.tracker,
            depot_heading=calibration.depot_heading,
            slot_count=self.plan.inventory.slot_count,
            default_slot=self.plan.inventory.default_slot,
        )
        self.fuel = FuelManager(
            self.runtime,
            self.inventory,
            self.plan.task.width,
            self.plan.task.length,
            buffer=self.plan.fuel.buffer,
            refuel_attempts=self.plan.fuel.refuel_attempts,
        )
        self.cell_action = CellActionPolicy(self.runtime, self.plan.classifier, self.plan.inventory.slot_count)
        self.stats = RunStats()

        # Scan cursor (1-based) and per-cell progress flags
        self.row = 1
        self.col = 1
        self.cell_action_done = False
        self.capacity_checked = False
        self.checkpoint: Optional[Checkpoint] = None

    # ------------------------------------------------------------------
    # Convenience helpers

    @property
    def logger(self):
        return self.runtime.logger

    @property
    def width(self) -> int:
        return self.plan.task.width

    @property
    def length(self) -> int:
        return self.plan.task.length

    def publish_state(self, name: str) -> None:
        self.runtime.publish_state(name)

    def advance_cell(self) -> None:
        self.col += 1
        self._reset_cell_flags()

    def advance_row(self) -> None:
        self.row += 1
        self.col = 1
        self._reset_cell_flags()

    def _reset_cell_flags(self) -> None:
        self.cell_action_done = False
        self.capacity_checked = False

    def dump(self) -> None:
        self.stats.items_deposited += self.inventory.dump_all()
        self.stats.dumps += 1

    def sync_stats(self) -> RunStats:
        """Fold component counters into the run stats and return them."""
        stats = self.stats
        stats.steps = self.motion.steps
        stats.obstructions = self.motion.obstructions
        stats.blocked_s = self.motion.blocked_s
        stats.turns = self.tracker.turns
        stats.harvested = self.cell_action.harvested
        stats.harvest_unconfirmed = self.cell_action.unconfirmed
        stats.fuel_items_consumed = self.fuel.items_consumed
        return stats


class State(ABC):
    """Lifecycle interface for FSM states. Keep persistent data in CoverageContext."""

    name = ""

    def enter(self, ctx: CoverageContext) -> None:  # pragma: no cover - default noop
        pass

    @abstractmethod
    def tick(self, ctx: CoverageContext) -> Optional[type["State"]]:
        """Return the next state class or None to remain."""
        raise NotImplementedError

    def exit(self, ctx: CoverageContext) -> None:  # pragma: no cover - default noop
        pass


class ScanningState(State):
    """Handles one cell per tick: harvest, capacity check, then move on."""

    name = STATE_SCANNING

    def tick(self, ctx: CoverageContext) -> Optional[type[State]]:
        if not ctx.cell_action_done:
            ctx.cell_action.harvest_cell()
            ctx.cell_action_done = True
            ctx.stats.cells_visited += 1

        if not ctx.capacity_checked:
            ctx.capacity_checked = True
            if not ctx.inventory.has_capacity():
                ctx.checkpoint = ctx.pose.snapshot()
                ctx.logger.info(
                    "Inventory full at cell (%d, %d); suspending at (%d, %d) heading %s"
                    % (ctx.row, ctx.col, ctx.pose.x, ctx.pose.z, ctx.pose.heading.name)
                )
                return SuspendedForDumpState

        if ctx.col < ctx.width:
            ctx.motion.forward()
            ctx.advance_cell()
            return None

        if ctx.row < ctx.length:
            self._shift_row(ctx)
            ctx.advance_row()
            return None

        ctx.logger.info("Sweep finished; returning home for the final unload")
        ctx.navigator.go_home()
        ctx.dump()
        return CompleteState

    @staticmethod
    def _shift_row(ctx: CoverageContext) -> None:
        tracker = ctx.tracker
        if ctx.row % 2 == 1:
            tracker.turn_right()
            ctx.motion.forward()
            tracker.turn_right()
        else:
            tracker.turn_left()
            ctx.motion.forward()
            tracker.turn_left()


class SuspendedForDumpState(State):
    """Go home, unload, top up fuel and come back to the saved checkpoint."""

    name = STATE_SUSPENDED

    def enter(self, ctx: CoverageContext) -> None:
        ctx.stats.suspensions += 1

    def tick(self, ctx: CoverageContext) -> Optional[type[State]]:
        checkpoint = ctx.checkpoint
        if checkpoint is None:
            raise RuntimeError("Suspended for a dump without a saved checkpoint")

        ctx.navigator.go_home()
        ctx.dump()
        if not ctx.inventory.has_capacity():
            ctx.logger.warning("Depot refused cargo; resuming with a full inventory")

        if not ctx.fuel.ensure_fuel():
            needed = estimate_remaining_fuel(
                ctx.width, ctx.length, ctx.row, ctx.col, checkpoint, ctx.plan.fuel.buffer
            )
            available = ctx.fuel.level()
            if not available.covers(needed):
                ctx.logger.error(
                    f"Fuel {available} cannot cover the remaining sweep ({needed}); parking at home"
                )
                raise FuelShortfallError(available, needed, context="mid-run")
            ctx.logger.warning(f"Fuel {available} below full-run estimate but covers remaining {needed}")

        ctx.navigator.return_to(checkpoint)
        ctx.logger.info(
            "Resumed at (%d, %d) heading %s" % (ctx.pose.x, ctx.pose.z, ctx.pose.heading.name)
        )
        ctx.checkpoint = None
        return ScanningState


class CompleteState(State):
    name = STATE_COMPLETE

    def tick(self, ctx: CoverageContext) -> Optional[type[State]]:
        return None  # terminal


class CoverageStateMachine:
    def __init__(self, ctx: CoverageContext) -> None:
        self._ctx = ctx
        self._state: State = ScanningState()
        self._state.enter(ctx)
        self._publish()

    @property
    def state(self) -> State:
        return self._state

    @property
    def complete(self) -> bool:
        return isinstance(self._state, CompleteState)

    def tick(self) -> None:
        if self.complete:
            return
        next_state_cls = self._state.tick(self._ctx)
        if next_state_cls is not None:
            self._transition(next_state_cls)

    def _transition(self, state_cls: type[State]) -> None:
        previous = self._state.name
        self._state.exit(self._ctx)
        self._state = state_cls()
        self._state.enter(self._ctx)
        self._ctx.logger.info(f"FSM state {previous} -> {self._state.name}")
        self._publish()

    def _publish(self) -> None:
        self._ctx.publish_state(self._state.name)


__all__ = [
    "CoverageContext",
    "CoverageStateMachine",
    "State",
    "ScanningState",
    "SuspendedForDumpState",
    "CompleteState",
    "STATE_SCANNING",
    "STATE_SUSPENDED",
    "STATE_COMPLETE",
]
