"""Tolerance rules: how one spec of a candidate part compares to the original.

Every rule maps ``(original, candidate)`` to a score in [0, 1] and never
raises. Values may be plain numbers, strings or ``SpecValue`` objects.
Numeric rules fall back to exact matching whenever either side is not a
number (``"X7R"``, ``"N-Channel"``) or the original is zero. Two
``SpecValue`` operands tagged with different units score 0.0.

Invalid parameters are rejected when the rule is built, not when it is
used.
"""

import math
from dataclasses import dataclass
from typing import Any, ClassVar

from .config import (
    DEFAULT_ACCEPTANCE_THRESHOLD,
    MINIMUM_REQUIRED_ACCEPTANCE,
    VALUE_MATCH_EPSILON,
)
from .errors import MalformedRule
from .packages import normalize_package
from .parsers import as_quantity, normalize_text, units_differ
from .specs import SpecUnit, SpecValue


# =============================================================================
# HELPERS
# =============================================================================


def _unwrap(value: Any) -> tuple[Any, SpecUnit | None]:
    if isinstance(value, SpecValue):
        return value.value, value.unit
    return value, None


def _units_conflict(a: SpecUnit | None, b: SpecUnit | None) -> bool:
    if a is None or b is None or a is SpecUnit.NONE or b is SpecUnit.NONE:
        return False
    return a is not b


def _clamp(score: float) -> float:
    if math.isnan(score):
        return 0.0
    return max(0.0, min(1.0, score))


def _numbers_equal(a: float, b: float) -> bool:
    if a == b:
        return True
    if math.isinf(a) or math.isinf(b):
        return False
    return abs(a - b) <= VALUE_MATCH_EPSILON * max(1.0, abs(a), abs(b))


def _check_param(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedRule(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError as e:
        raise MalformedRule(f"{name} is too large: {value!r}") from e
    if not math.isfinite(number):
        raise MalformedRule(f"{name} must be finite, got {value!r}")
    return number


def exact_score(original: Any, candidate: Any) -> float:
    """1.0 if the values are equal, else 0.0.

    Two values that both read as quantities compare numerically ("10k" vs
    10000, "2.54mm" vs "2.54 mm") and differ when they name different
    units. Anything else compares as case-insensitive text. Both missing
    counts as equal; one missing does not.
    """
    if original is None and candidate is None:
        return 1.0
    if original is None or candidate is None:
        return 0.0
    a, b = as_quantity(original), as_quantity(candidate)
    if a is not None and b is not None:
        if units_differ(a[1], b[1]):
            return 0.0
        return 1.0 if _numbers_equal(a[0], b[0]) else 0.0
    return 1.0 if normalize_text(original) == normalize_text(candidate) else 0.0


# =============================================================================
# RULES
# =============================================================================


@dataclass(frozen=True)
class ToleranceRule:
    """Base rule: exact comparison."""

    acceptance_threshold: ClassVar[float] = DEFAULT_ACCEPTANCE_THRESHOLD

    def compare(self, original: Any, candidate: Any) -> float:
        a, unit_a = _unwrap(original)
        b, unit_b = _unwrap(candidate)
        if _units_conflict(unit_a, unit_b):
            return 0.0
        if a is None or b is None:
            return exact_score(a, b)
        return _clamp(self._score(a, b))

    def is_acceptable(self, score: float) -> bool:
        return score >= self.acceptance_threshold

    def describe(self) -> str:
        return "exact match"

    def _score(self, original: Any, candidate: Any) -> float:
        return exact_score(original, candidate)

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class ExactMatch(ToleranceRule):
    pass


@dataclass(frozen=True)
class PackageMatch(ToleranceRule):
    """Exact match on normalized package names ("TO-220" == "TO220")."""

    def describe(self) -> str:
        return "package match"

    def _score(self, original: Any, candidate: Any) -> float:
        a, b = normalize_package(original), normalize_package(candidate)
        if a is None or b is None:
            return exact_score(original, candidate)
        return 1.0 if a == b else 0.0


@dataclass(frozen=True)
class _NumericRule(ToleranceRule):
    """Shared numeric coercion. Subclasses implement ``_numeric``."""

    def _score(self, original: Any, candidate: Any) -> float:
        qa, qb = as_quantity(original), as_quantity(candidate)
        if qa is None or qb is None:
            return exact_score(original, candidate)
        if units_differ(qa[1], qb[1]):
            return 0.0
        a, b = qa[0], qb[0]
        if _numbers_equal(a, b):
            return 1.0
        if a == 0:
            return 0.0
        return self._numeric(a, b)

    def _numeric(self, a: float, b: float) -> float:
        raise NotImplementedError


@dataclass(frozen=True)
class PercentageTolerance(_NumericRule):
    """Full score within ±percent, linear decay to zero at twice that."""

    percent: float

    def __post_init__(self) -> None:
        percent = _check_param("percent", self.percent)
        if percent < 0:
            raise MalformedRule(f"Tolerance percentage cannot be negative: {percent}")

    def describe(self) -> str:
        return f"±{self.percent:g}%"

    def _numeric(self, a: float, b: float) -> float:
        p = self.percent
        deviation = abs(b - a) * 100 / abs(a)
        if deviation <= p + VALUE_MATCH_EPSILON:
            return 1.0
        if p == 0 or deviation > 2 * p:
            return 0.0
        return (2 * p - deviation) / p


@dataclass(frozen=True)
class MinimumRequired(_NumericRule):
    """Candidate must reach the original value; higher is free.

    Slightly under (within 10% of the original) keeps partial credit,
    anything lower scores zero.
    """

    acceptance_threshold: ClassVar[float] = MINIMUM_REQUIRED_ACCEPTANCE

    def describe(self) -> str:
        return "minimum required"

    def _numeric(self, a: float, b: float) -> float:
        if b >= a:
            return 1.0
        if b >= a - 0.1 * abs(a):
            return 0.8
        return 0.0


@dataclass(frozen=True)
class MaximumAllowed(_NumericRule):
    """Candidate must not exceed ``multiplier`` times the original.

    Lower than the original scores 0.98; above it decays linearly from
    1.0 to 0.7 at the limit and drops to zero past it.
    """

    multiplier: float

    def __post_init__(self) -> None:
        multiplier = _check_param("multiplier", self.multiplier)
        if multiplier < 1:
            raise MalformedRule(f"Maximum multiplier must be at least 1.0: {multiplier}")

    def describe(self) -> str:
        return f"maximum {self.multiplier:g}x"

    def _numeric(self, a: float, b: float) -> float:
        if b < a:
            return 0.98
        headroom = abs(a) * (self.multiplier - 1)
        if headroom == 0 or b - a > headroom * (1 + VALUE_MATCH_EPSILON):
            return 0.0
        return 1.0 - 0.3 * (b - a) / headroom


@dataclass(frozen=True)
class RangeTolerance(_NumericRule):
    """Full score inside [original*low, original*high].

    Outside the band the score decays linearly to zero over a distance
    equal to that side's band width.
    """

    low: float
    high: float

    def __post_init__(self) -> None:
        low = _check_param("low", self.low)
        high = _check_param("high", self.high)
        if low < 0 or high < 0:
            raise MalformedRule(f"Range bounds cannot be negative: [{low}, {high}]")
        if low > high:
            raise MalformedRule(f"Range low bound exceeds high bound: [{low}, {high}]")
        if low > 1 or high < 1:
            raise MalformedRule(f"Range must contain the original value: [{low}, {high}]")

    def describe(self) -> str:
        return f"range {self.low:g}x-{self.high:g}x"

    def _numeric(self, a: float, b: float) -> float:
        magnitude = abs(a)
        lower = a - magnitude * (1 - self.low)
        upper = a + magnitude * (self.high - 1)
        if lower <= b <= upper:
            return 1.0
        if b < lower:
            width, distance = a - lower, lower - b
        else:
            width, distance = upper - a, b - upper
        if width == 0 or distance >= width:
            return 0.0
        return 1.0 - distance / width


# =============================================================================
# FACTORIES
# =============================================================================

_EXACT = ExactMatch()
_MINIMUM = MinimumRequired()
_PACKAGE = PackageMatch()


def exact_match() -> ToleranceRule:
    return _EXACT


def package_match() -> ToleranceRule:
    return _PACKAGE


def percentage_tolerance(percent: float) -> ToleranceRule:
    return PercentageTolerance(percent)


def minimum_required() -> ToleranceRule:
    return _MINIMUM


def maximum_allowed(multiplier: float) -> ToleranceRule:
    return MaximumAllowed(multiplier)


def range_tolerance(low: float, high: float) -> ToleranceRule:
    return RangeTolerance(low, high)
