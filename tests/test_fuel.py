"""Tests for harvest_mission.core.fuel and the FuelLevel value."""

from __future__ import annotations

import pytest

from harvest_mission.core.fuel import FuelShortfallError, estimate_fuel_needed, estimate_remaining_fuel
from harvest_mission.core.pose import Checkpoint, Heading
from harvest_mission.core.runtime import FuelLevel
from harvest_mission.sim import COAL, MELON, SimulatedField


class TestFuelLevel:
    def test_parse_unlimited_token(self) -> None:
        assert FuelLevel.parse("unlimited") is FuelLevel.UNLIMITED
        assert FuelLevel.parse("Unlimited").unlimited

    @pytest.mark.parametrize("raw,units", [(5, 5), ("12", 12), (FuelLevel.finite(3), 3)])
    def test_parse_finite(self, raw, units) -> None:
        level = FuelLevel.parse(raw)
        assert not level.unlimited
        assert level.units == units

    def test_parse_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            FuelLevel.parse("lots")

    def test_negative_is_invalid(self) -> None:
        with pytest.raises(ValueError):
            FuelLevel.finite(-1)

    def test_covers(self) -> None:
        assert FuelLevel.UNLIMITED.covers(10**9)
        assert FuelLevel.finite(10).covers(10)
        assert not FuelLevel.finite(9).covers(10)

    def test_exhausted(self) -> None:
        assert FuelLevel.finite(0).exhausted
        assert not FuelLevel.finite(1).exhausted
        assert not FuelLevel.UNLIMITED.exhausted


class TestEstimates:
    @pytest.mark.parametrize(
        "width,length,expected",
        [(1, 1, 50), (3, 2, 62), (5, 5, 94), (10, 1, 77)],
    )
    def test_matches_formula(self, width, length, expected) -> None:
        assert estimate_fuel_needed(width, length) == expected

    def test_buffer_is_additive(self) -> None:
        assert estimate_fuel_needed(4, 4, buffer=0) + 50 == estimate_fuel_needed(4, 4)

    def test_monotone_in_both_dimensions(self) -> None:
        for width in range(1, 12):
            for length in range(1, 12):
                base = estimate_fuel_needed(width, length)
                assert estimate_fuel_needed(width + 1, length) >= base
                assert estimate_fuel_needed(width, length + 1) >= base

    def test_remaining_from_start_without_checkpoint(self) -> None:
        # 5 exact steps + round trip 6, no buffer
        assert estimate_remaining_fuel(3, 2, 1, 1, None, buffer=0) == 11

    def test_remaining_adds_trip_back_to_checkpoint(self) -> None:
        checkpoint = Checkpoint(2, 1, Heading.WEST)
        assert estimate_remaining_fuel(3, 2, 2, 1, checkpoint, buffer=0) == 3 + 2 + 6

    def test_remaining_never_exceeds_full_estimate_at_start(self) -> None:
        assert estimate_remaining_fuel(6, 4, 1, 1) <= estimate_fuel_needed(6, 4)


class TestEnsureFuel:
    def test_unlimited_needs_no_refuel(self, make_context) -> None:
        field = SimulatedField(depot=[(COAL, 10)])
        ctx = make_context(field)
        assert ctx.fuel.ensure_fuel()
        assert field.turns == 0
        assert field.depot_items(COAL) == 10

    def test_sufficient_fuel_skips_depot(self, make_context) -> None:
        field = SimulatedField(fuel=62, depot=[(COAL, 10)])
        ctx = make_context(field)
        assert ctx.fuel.ensure_fuel()
        assert field.turns == 0

    def test_refuels_from_depot(self, make_context) -> None:
        field = SimulatedField(fuel=0, depot=[(COAL, 2)])
        ctx = make_context(field)
        assert ctx.fuel.ensure_fuel()
        assert ctx.fuel.level() == FuelLevel.finite(160)
        assert ctx.fuel.items_consumed == 2

    def test_reports_failure_when_depot_has_no_fuel(self, make_context) -> None:
        field = SimulatedField(fuel=10, depot=[(MELON, 3)])
        ctx = make_context(field)
        assert not ctx.fuel.ensure_fuel()
        assert field.depot_items(MELON) == 3

    def test_explicit_requirement(self, make_context) -> None:
        field = SimulatedField(fuel=20)
        ctx = make_context(field)
        assert ctx.fuel.ensure_fuel_for(20)
        assert not ctx.fuel.ensure_fuel_for(21)


def test_shortfall_error_carries_numbers() -> None:
    error = FuelShortfallError(FuelLevel.finite(4), 90, context="mid-run")
    assert error.needed == 90
    assert error.available.units == 4
    assert "mid-run" in str(error)
