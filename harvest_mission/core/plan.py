"""Harvest task and tuning parameters, optionally loaded from a YAML file."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from .fuel import DEFAULT_FUEL_BUFFER
from .harvest import DEFAULT_ALLOW_LIST, HarvestClassifier
from .inventory import DEFAULT_REFUEL_ATTEMPTS, DEFAULT_SLOT_COUNT
from .motion import RetryPolicy
from .pose import HOME_HEADING, Heading


class PlanError(RuntimeError):
    """Raised when the task or its configuration is invalid."""


@dataclass(frozen=True)
class CoverageTask:
    width: int
    length: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.length < 1:
            raise PlanError(f"Task dimensions must be >= 1, got {self.width}x{self.length}")

    @property
    def cells(self) -> int:
        return self.width * self.length


@dataclass
class FuelConfig:
    buffer: int = DEFAULT_FUEL_BUFFER
    refuel_attempts: int = DEFAULT_REFUEL_ATTEMPTS
    strict: bool = True


@dataclass
class InventoryConfig:
    slot_count: int = DEFAULT_SLOT_COUNT
    default_slot: int = 1


@dataclass
class CalibrationConfig:
    home_heading: Heading = HOME_HEADING
    depot_heading: Heading = HOME_HEADING.opposite()


@dataclass
class HarvestPlan:
    task: CoverageTask
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    fuel: FuelConfig = field(default_factory=FuelConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    classifier: HarvestClassifier = field(default_factory=HarvestClassifier)
    calibration: CalibrationConfig = field(default_factory=CalibrationConfig)
    raw: Dict[str, object] = field(default_factory=dict)


def load_plan(path: Optional[pathlib.Path], width: int, length: int) -> HarvestPlan:
    if path is None:
        return plan_from_mapping({}, width, length)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise PlanError(f"Config file not found: {path}") from exc
    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as exc:
        raise PlanError(f"Config file {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise PlanError("Config file must contain a top-level mapping")
    return plan_from_mapping(data, width, length)


def plan_from_mapping(data: Dict[str, Any], width: int, length: int) -> HarvestPlan:
    version = data.get("api_version", 1)
    if version != 1:
        raise PlanError("Config 'api_version' must be 1")

    task = CoverageTask(int(width), int(length))

    motion = _section(data, "motion")
    try:
        retry = RetryPolicy(
            max_attempts=_coerce_optional_int(motion, "max_attempts", 64),
            delay_s=_coerce_float(motion, "delay_s", 0.15),
            backoff=_coerce_float(motion, "backoff", 1.0),
            max_delay_s=_coerce_float(motion, "max_delay_s", 2.0),
        )
    except ValueError as exc:
        raise PlanError(f"Invalid 'motion' section: {exc}") from exc

    fuel_raw = _section(data, "fuel")
    fuel = FuelConfig(
        buffer=_coerce_int(fuel_raw, "buffer", DEFAULT_FUEL_BUFFER, minimum=0),
        refuel_attempts=_coerce_int(fuel_raw, "refuel_attempts", DEFAULT_REFUEL_ATTEMPTS, minimum=0),
        strict=bool(fuel_raw.get("strict", True)),
    )

    inventory_raw = _section(data, "inventory")
    inventory = InventoryConfig(
        slot_count=_coerce_int(inventory_raw, "slot_count", DEFAULT_SLOT_COUNT, minimum=1),
        default_slot=_coerce_int(inventory_raw, "default_slot", 1, minimum=1),
    )
    if inventory.default_slot > inventory.slot_count:
        raise PlanError("Config 'inventory.default_slot' exceeds 'inventory.slot_count'")

    classifier = _parse_classifier(_section(data, "harvest"))
    calibration = _parse_calibration(_section(data, "calibration"))

    return HarvestPlan(
        task=task,
        retry=retry,
        fuel=fuel,
        inventory=inventory,
        classifier=classifier,
        calibration=calibration,
        raw=data,
    )


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PlanError(f"Config '{key}' must be a mapping")
    return value


def _coerce_float(container: Dict[str, Any], key: str, default: float) -> float:
    value = container.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise PlanError(f"Config parameter '{key}' must be a number") from exc


def _coerce_int(container: Dict[str, Any], key: str, default: int, *, minimum: Optional[int] = None) -> int:
    value = container.get(key, default)
    if isinstance(value, bool):
        raise PlanError(f"Config parameter '{key}' must be an integer")
    try:
        result = int(value)
    except (TypeError, ValueError) as exc:
        raise PlanError(f"Config parameter '{key}' must be an integer") from exc
    if minimum is not None and result < minimum:
        raise PlanError(f"Config parameter '{key}' must be >= {minimum}")
    return result


def _coerce_optional_int(container: Dict[str, Any], key: str, default: int) -> Optional[int]:
    if key in container and container[key] is None:
        return None
    return _coerce_int(container, key, default)


def _parse_classifier(value: Dict[str, Any]) -> HarvestClassifier:
    allow_raw = value.get("allow_list", sorted(DEFAULT_ALLOW_LIST))
    if isinstance(allow_raw, str):
        allow_raw = [allow_raw]
    if not isinstance(allow_raw, (list, tuple)):
        raise PlanError("Config 'harvest.allow_list' must be a list of identifiers")
    keyword = value.get("keyword", "melon")
    exclude = value.get("exclude", "stem")
    for key, item in (("keyword", keyword), ("exclude", exclude)):
        if item is not None and not isinstance(item, str):
            raise PlanError(f"Config 'harvest.{key}' must be a string or null")
    return HarvestClassifier(
        allow_list=frozenset(str(item) for item in allow_raw),
        keyword=keyword or None,
        exclude=exclude or None,
    )


def _parse_calibration(value: Dict[str, Any]) -> CalibrationConfig:
    try:
        home = Heading.parse(value.get("home_heading", HOME_HEADING))
        depot = Heading.parse(value.get("depot_heading", home.opposite()))
    except (TypeError, ValueError) as exc:
        raise PlanError(f"Invalid 'calibration' section: {exc}") from exc
    return CalibrationConfig(home_heading=home, depot_heading=depot)


__all__ = [
    "PlanError",
    "CoverageTask",
    "FuelConfig",
    "InventoryConfig",
    "CalibrationConfig",
    "HarvestPlan",
    "load_plan",
    "plan_from_mapping",
]
