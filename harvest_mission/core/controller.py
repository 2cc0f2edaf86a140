"""Coverage controller that wires a runtime with the harvest FSM."""

from __future__ import annotations

from typing import Optional

from .fsm import CoverageContext, CoverageStateMachine
from .fuel import FuelShortfallError
from .kpi import RunStats, harvest_rate
from .plan import HarvestPlan
from .runtime import HarvestRuntime


class CalibrationError(RuntimeError):
    """Raised when the agent's starting assumptions do not hold."""


class CoverageController:
    def __init__(self, runtime: HarvestRuntime, plan: HarvestPlan, *, max_ticks: Optional[int] = None) -> None:
        self._runtime = runtime
        self._plan = plan
        self._context = CoverageContext(runtime, plan)
        self._state_machine = CoverageStateMachine(self._context)
        task = plan.task
        self._max_ticks = max_ticks if max_ticks is not None else task.cells * 4 + 16

    @property
    def plan(self) -> HarvestPlan:
        return self._plan

    @property
    def context(self) -> CoverageContext:
        return self._context

    @property
    def complete(self) -> bool:
        return self._state_machine.complete

    def calibrate(self) -> None:
        """Check the start-of-run preconditions the sweep relies on."""
        ctx = self._context
        calibration = self._plan.calibration
        if ctx.pose.cell != (0, 0) or ctx.pose.heading != calibration.home_heading:
            raise CalibrationError(
                f"Agent must start at home (0, 0) facing {calibration.home_heading.name}, "
                f"tracked pose is ({ctx.pose.x}, {ctx.pose.z}) {ctx.pose.heading.name}"
            )
        # Rows run along the home heading and stack to its right
        if calibration.depot_heading in (calibration.home_heading, calibration.home_heading.right()):
            raise CalibrationError(
                f"Depot facing {calibration.depot_heading.name} would sit inside the work area; "
                f"it must lie behind or to the left of home ({calibration.home_heading.name})"
            )
        actuator = self._runtime.actuator
        for slot in ctx.inventory.slots():
            try:
                count = actuator.slot_count(slot)
            except (IndexError, ValueError) as exc:
                raise CalibrationError(f"Actuator does not expose inventory slot {slot}") from exc
            if count < 0:
                raise CalibrationError(f"Actuator reported a negative count for slot {slot}")
        self._runtime.logger.info(
            "Calibration ok: home facing %s, depot facing %s, %d slots"
            % (calibration.home_heading.name, calibration.depot_heading.name, ctx.inventory.slot_count)
        )

    def tick(self) -> None:
        self._state_machine.tick()

    def run(self) -> RunStats:
        task = self._plan.task
        logger = self._runtime.logger
        self.calibrate()
        self._check_initial_fuel()

        logger.info(f"Harvest sweep started: {task.width}x{task.length} ({task.cells} cells)")
        ticks = 0
        while not self._state_machine.complete:
            if ticks >= self._max_ticks:
                raise RuntimeError(f"Harvest sweep did not complete within {self._max_ticks} ticks")
            self._state_machine.tick()
            ticks += 1

        stats = self._context.sync_stats()
        logger.info(
            "Harvest sweep complete: %d cells, %d harvested (%.0f%%), %d dumps, %d suspensions, %.1fs blocked"
            % (
                stats.cells_visited,
                stats.harvested,
                harvest_rate(stats.cells_visited, stats.harvested) * 100.0,
                stats.dumps,
                stats.suspensions,
                stats.blocked_s,
            )
        )
        for key, value in stats.as_rows():
            logger.debug(f"  {key}: {value}")
        return stats

    def _check_initial_fuel(self) -> None:
        fuel = self._context.fuel
        if fuel.ensure_fuel():
            self._runtime.logger.info(f"Fuel {fuel.level()} covers estimate {fuel.estimate()}")
            return
        available = fuel.level()
        if self._plan.fuel.strict:
            self._runtime.logger.error(f"Fuel {available} below estimate {fuel.estimate()}; aborting before the sweep")
            raise FuelShortfallError(available, fuel.estimate(), context="before start")
        self._runtime.logger.warning(f"Fuel {available} below estimate {fuel.estimate()}; continuing (strict=false)")


__all__ = ["CoverageController", "CalibrationError"]
