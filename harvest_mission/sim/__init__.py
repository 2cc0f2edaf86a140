"""Simulated backends for dry runs and tests."""

from .field import COAL, FUEL_VALUES, MELON, MELON_STEM, SimulatedField

__all__ = ["SimulatedField", "FUEL_VALUES", "MELON", "MELON_STEM", "COAL"]
