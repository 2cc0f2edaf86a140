"""Tests for harvest_mission.core.plan: defaults and YAML overrides."""

from __future__ import annotations

import pytest

from harvest_mission.core.plan import CoverageTask, PlanError, load_plan, plan_from_mapping
from harvest_mission.core.pose import Heading


def test_defaults_without_config() -> None:
    plan = load_plan(None, 4, 3)
    assert plan.task == CoverageTask(4, 3)
    assert plan.task.cells == 12
    assert plan.retry.max_attempts == 64
    assert plan.retry.delay_s == pytest.approx(0.15)
    assert plan.fuel.buffer == 50
    assert plan.fuel.strict is True
    assert plan.inventory.slot_count == 16
    assert plan.inventory.default_slot == 1
    assert plan.calibration.home_heading == Heading.EAST
    assert plan.calibration.depot_heading == Heading.WEST
    assert plan.classifier.is_harvestable("minecraft:melon")
    assert not plan.classifier.is_harvestable("minecraft:melon_stem")


def test_yaml_overrides(tmp_path) -> None:
    config = tmp_path / "harvest.yaml"
    config.write_text(
        "\n".join(
            [
                "api_version: 1",
                "motion:",
                "  max_attempts: 5",
                "  delay_s: 0.5",
                "  backoff: 2.0",
                "fuel:",
                "  buffer: 10",
                "  strict: false",
                "inventory:",
                "  slot_count: 9",
                "  default_slot: 2",
                "harvest:",
                "  allow_list: [mod:giant_pumpkin]",
                "  keyword: pumpkin",
                "  exclude: null",
                "calibration:",
                "  home_heading: south",
                "  depot_heading: east",
            ]
        ),
        encoding="utf-8",
    )
    plan = load_plan(config, 2, 2)
    assert plan.retry.max_attempts == 5
    assert plan.retry.delay_s == pytest.approx(0.5)
    assert plan.retry.backoff == pytest.approx(2.0)
    assert plan.fuel.buffer == 10
    assert plan.fuel.strict is False
    assert plan.inventory.slot_count == 9
    assert plan.inventory.default_slot == 2
    assert plan.classifier.is_harvestable("mod:giant_pumpkin")
    assert plan.classifier.is_harvestable("minecraft:pumpkin_stem")
    assert not plan.classifier.is_harvestable("minecraft:melon")
    assert plan.calibration.home_heading == Heading.SOUTH
    assert plan.calibration.depot_heading == Heading.EAST
    assert plan.raw["fuel"]["buffer"] == 10


def test_depot_heading_follows_home_heading() -> None:
    plan = plan_from_mapping({"calibration": {"home_heading": "north"}}, 1, 1)
    assert plan.calibration.depot_heading == Heading.SOUTH


def test_null_max_attempts_means_unbounded() -> None:
    plan = plan_from_mapping({"motion": {"max_attempts": None}}, 1, 1)
    assert plan.retry.max_attempts is None


def test_empty_file_uses_defaults(tmp_path) -> None:
    config = tmp_path / "empty.yaml"
    config.write_text("", encoding="utf-8")
    assert load_plan(config, 1, 1).fuel.buffer == 50


@pytest.mark.parametrize(
    "data",
    [
        {"api_version": 2},
        {"motion": "fast"},
        {"motion": {"delay_s": "soon"}},
        {"motion": {"max_attempts": 0}},
        {"motion": {"backoff": 0.5}},
        {"fuel": {"buffer": -1}},
        {"inventory": {"slot_count": 0}},
        {"inventory": {"default_slot": 17}},
        {"inventory": {"slot_count": True}},
        {"harvest": {"allow_list": 3}},
        {"harvest": {"keyword": 7}},
        {"calibration": {"home_heading": "up"}},
    ],
)
def test_invalid_values_raise(data) -> None:
    with pytest.raises(PlanError):
        plan_from_mapping(data, 3, 3)


@pytest.mark.parametrize("width,length", [(0, 3), (3, 0), (-2, 1)])
def test_invalid_dimensions(width, length) -> None:
    with pytest.raises(PlanError):
        plan_from_mapping({}, width, length)


def test_missing_file(tmp_path) -> None:
    with pytest.raises(PlanError, match="not found"):
        load_plan(tmp_path / "nope.yaml", 2, 2)


def test_top_level_must_be_mapping(tmp_path) -> None:
    config = tmp_path / "list.yaml"
    config.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(PlanError, match="mapping"):
        load_plan(config, 2, 2)


def test_invalid_yaml(tmp_path) -> None:
    config = tmp_path / "broken.yaml"
    config.write_text("motion: [unclosed\n", encoding="utf-8")
    with pytest.raises(PlanError, match="not valid YAML"):
        load_plan(config, 2, 2)
