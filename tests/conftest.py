"""Shared fixtures: a simulated field and a runtime that never really sleeps."""

from __future__ import annotations

import logging

import pytest

from harvest_mission.core import CoverageContext, LocalRuntime, plan_from_mapping
from harvest_mission.sim import SimulatedField


class RecordingSleeper:
    """Records requested sleeps and advances a fake clock by the same amount."""

    def __init__(self) -> None:
        self.calls: list[float] = []
        self.elapsed = 0.0

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        self.elapsed += seconds

    def clock(self) -> float:
        return self.elapsed


class RawFuelField(SimulatedField):
    """Reports fuel the way turtle firmware does: a bare int or "unlimited"."""

    def fuel_level(self):
        return str(self.fuel) if self.fuel.unlimited else self.fuel.units


@pytest.fixture
def sleeper():
    return RecordingSleeper()


@pytest.fixture
def make_runtime(sleeper):
    def _make(field: SimulatedField) -> LocalRuntime:
        return LocalRuntime(
            field,
            logger=logging.getLogger("harvest_mission.tests"),
            clock=sleeper.clock,
            sleeper=sleeper,
        )

    return _make


@pytest.fixture
def field():
    """Empty field with unlimited fuel and an empty depot behind home."""
    return SimulatedField()


@pytest.fixture
def raw_field_cls():
    return RawFuelField


@pytest.fixture
def runtime(field, make_runtime):
    return make_runtime(field)


@pytest.fixture
def make_context(make_runtime):
    def _make(field: SimulatedField, width: int = 3, length: int = 2, config: dict | None = None) -> CoverageContext:
        plan = plan_from_mapping(config or {}, width, length)
        return CoverageContext(make_runtime(field), plan)

    return _make
