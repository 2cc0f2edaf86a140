"""Harvest mission package exposing the coverage core and the simulated field."""

from .core import (
    CoverageController,
    CoverageTask,
    FuelLevel,
    HarvestPlan,
    Heading,
    LocalRuntime,
    PlanError,
    RunStats,
    load_plan,
)

__all__ = [
    "CoverageController",
    "CoverageTask",
    "HarvestPlan",
    "PlanError",
    "FuelLevel",
    "Heading",
    "LocalRuntime",
    "RunStats",
    "load_plan",
]
