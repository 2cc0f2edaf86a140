"""Core harvest mission logic (backend-agnostic)."""

from .controller import CalibrationError, CoverageController
from .fsm import CoverageContext, CoverageStateMachine
from .fuel import FuelManager, FuelShortfallError, estimate_fuel_needed, estimate_remaining_fuel
from .harvest import CellActionPolicy, HarvestClassifier
from .inventory import InventoryManager, NotAtHomeError
from .kpi import RunStats
from .motion import FuelExhaustedError, MotionPrimitive, ObstructionError, RetryPolicy
from .navigator import Navigator
from .plan import CoverageTask, HarvestPlan, PlanError, load_plan, plan_from_mapping
from .pose import HOME_HEADING, Checkpoint, Heading, Pose, PoseTracker
from .runtime import Actuator, FuelLevel, HarvestRuntime, LocalRuntime

__all__ = [
    "CoverageController",
    "CalibrationError",
    "CoverageContext",
    "CoverageStateMachine",
    "FuelManager",
    "FuelShortfallError",
    "estimate_fuel_needed",
    "estimate_remaining_fuel",
    "CellActionPolicy",
    "HarvestClassifier",
    "InventoryManager",
    "NotAtHomeError",
    "RunStats",
    "MotionPrimitive",
    "RetryPolicy",
    "ObstructionError",
    "FuelExhaustedError",
    "Navigator",
    "CoverageTask",
    "HarvestPlan",
    "PlanError",
    "load_plan",
    "plan_from_mapping",
    "Heading",
    "HOME_HEADING",
    "Checkpoint",
    "Pose",
    "PoseTracker",
    "Actuator",
    "FuelLevel",
    "HarvestRuntime",
    "LocalRuntime",
]
