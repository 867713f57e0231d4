"""Specification values compared between two parts."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .parsers import as_number


class SpecUnit(Enum):
    """Physical unit tag. Informational unless a rule checks it."""

    VOLTS = ("V", "Voltage")
    AMPS = ("A", "Current")
    WATTS = ("W", "Power")
    OHMS = ("Ω", "Resistance")
    FARADS = ("F", "Capacitance")
    HENRIES = ("H", "Inductance")
    HERTZ = ("Hz", "Frequency")
    SECONDS = ("s", "Time")
    CELSIUS = ("°C", "Temperature")
    PERCENTAGE = ("%", "Percentage")
    PPM = ("ppm", "Parts per million")
    DECIBELS = ("dB", "Decibels")
    MILLIMETERS = ("mm", "Length")
    DEGREES = ("°", "Angle")
    NANOMETERS = ("nm", "Wavelength")
    CANDELAS = ("cd", "Luminous intensity")
    BYTES = ("B", "Memory size")
    BITS = ("bit", "Memory size")
    VOLTS_PER_MICROSECOND = ("V/µs", "Slew rate")
    COUNT = ("pcs", "Count")
    NONE = ("", "Dimensionless")

    def __init__(self, symbol: str, description: str):
        self.symbol = symbol
        self.description = description


@dataclass(frozen=True)
class SpecValue:
    """A single measured or declared spec of a part.

    ``value`` may be a number, a string or a bool. ``min_value`` and
    ``max_value`` optionally bound the acceptable range for the spec.
    """
    value: Any
    unit: SpecUnit = SpecUnit.NONE
    min_value: float | None = None
    max_value: float | None = None
    description: str = ""

    @property
    def numeric(self) -> float | None:
        """Value as a float in base units, or None when it is not numeric."""
        return as_number(self.value)

    def is_in_range(self, x: float) -> bool:
        if self.min_value is not None and x < self.min_value:
            return False
        if self.max_value is not None and x > self.max_value:
            return False
        return True

    def formatted(self) -> str:
        if self.value is None:
            return "N/A"
        if self.unit is SpecUnit.NONE:
            return str(self.value)
        return f"{self.value}{self.unit.symbol}"


def spec(value: Any, unit: SpecUnit = SpecUnit.NONE) -> SpecValue:
    """Shorthand used by callers building spec maps by hand."""
    if isinstance(value, SpecValue):
        return value
    return SpecValue(value, unit)


def coerce_specs(specs: dict[str, Any] | None) -> dict[str, SpecValue]:
    """Wrap plain values of a spec map in ``SpecValue``; drops None keys."""
    if not specs:
        return {}
    return {name: spec(v) for name, v in specs.items() if name}
