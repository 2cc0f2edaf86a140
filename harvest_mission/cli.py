"""Command line entry point running a harvest sweep against the simulated field.

Usage mirrors the turtle program it drives: ``harvest-mission <width> <length>``.
Missing or non-numeric dimensions default to 5; anything below 1 prints the
usage line and exits without touching the actuator.
"""
from __future__ import annotations

import argparse
import logging
import math
import pathlib
import sys
from typing import List, Optional

from .core import (
    CalibrationError,
    CoverageController,
    FuelExhaustedError,
    FuelLevel,
    FuelShortfallError,
    LocalRuntime,
    NotAtHomeError,
    ObstructionError,
    PlanError,
    load_plan,
)
from .sim import COAL, SimulatedField

DEFAULT_DIMENSION = 5
USAGE = "Usage: harvest-mission <width> <length>"

_MISSION_ERRORS = (
    PlanError,
    CalibrationError,
    FuelShortfallError,
    FuelExhaustedError,
    ObstructionError,
    NotAtHomeError,
)


def parse_dimension(value: Optional[str]) -> float:
    """Lenient numeric parse: anything that is not a finite number becomes the default."""
    if value is None:
        return DEFAULT_DIMENSION
    try:
        number = float(value)
    except ValueError:
        return DEFAULT_DIMENSION
    if not math.isfinite(number):
        return DEFAULT_DIMENSION
    return number


def _fuel_arg(value: str) -> FuelLevel:
    try:
        return FuelLevel.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="harvest-mission",
        description="Sweep a width x length field, harvesting melons and unloading at the home depot",
    )
    parser.add_argument("width", nargs="?", help="Cells per row (default 5)")
    parser.add_argument("length", nargs="?", help="Number of rows (default 5)")
    parser.add_argument("--config", type=pathlib.Path, help="Optional YAML tuning file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    sim = parser.add_argument_group("simulated field")
    sim.add_argument("--fuel", type=_fuel_arg, default=FuelLevel.finite(0), help="Starting fuel (int or 'unlimited')")
    sim.add_argument("--depot-fuel", type=int, default=64, help="Coal items stocked in the depot")
    sim.add_argument("--crop-ratio", type=float, default=0.5, help="Fraction of cells holding a mature melon")
    sim.add_argument("--seed", type=int, default=0, help="Seed for the crop layout")
    return parser


def main(argv: List[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    width = parse_dimension(args.width)
    length = parse_dimension(args.length)
    if width < 1 or length < 1:
        print(USAGE)
        return 2
    width, length = int(width), int(length)

    logging.basicConfig(level=getattr(logging, args.log_level), format="[%(levelname)s] %(name)s: %(message)s")
    logger = logging.getLogger("harvest_mission")

    try:
        plan = load_plan(args.config, width, length)
        field = SimulatedField.from_ratio(
            width,
            length,
            args.crop_ratio,
            seed=args.seed,
            fuel=args.fuel,
            slot_count=plan.inventory.slot_count,
            home_heading=plan.calibration.home_heading,
            depot_heading=plan.calibration.depot_heading,
            depot=[(COAL, args.depot_fuel)],
        )
        runtime = LocalRuntime(field, logger=logger)
        CoverageController(runtime, plan).run()
    except _MISSION_ERRORS as exc:
        logger.error(f"Harvest mission failed: {exc}")
        return 1

    print(f"Harvest complete ({width}x{length}).")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
