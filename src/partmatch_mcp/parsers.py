"""Value-string parsing for component specifications.

Turns strings such as ``"10k"``, ``"4k7"``, ``"100nF"``, ``"1/4W"`` or
``"±5%"`` into floats in base SI units. Anything that is not clearly a
single finite quantity (``"X7R"``, ``"SOT-23"``, ``"N-Channel"``,
``"1e999"``) parses to None, which tolerance rules treat as "compare as
text". Parsing never raises.
"""

import math
import re
from typing import Any


# =============================================================================
# PRE-COMPILED REGEX PATTERNS
# =============================================================================

# Whole-string quantity: optional sign, number, optional SI prefix, optional unit
_QUANTITY_PATTERN = re.compile(
    r"^[±+]?(-?\d+(?:\.\d+)?|-?\.\d+)(?:[eE]([+-]?\d+))?\s*"
    r"([pnuµmkKMG])?"
    r"((?i:V|A|W|R|Ω|ohms?|F|H|Hz|%|ppm|s|B|bit|mm|nm|mcd|°C|dB))?$"
)
# European notation: 4k7 = 4.7k, 4R7 = 4.7Ω, 1M5 = 1.5M, 4n7 = 4.7n
_EURO_PATTERN = re.compile(r"^(\d+)([kKMrRpnuµ])(\d+)\s*(Ω|ohms?|F|H)?$")
# Fractional power ratings: 1/4W, 1/10W
_FRACTION_PATTERN = re.compile(r"^(\d+)\s*/\s*(\d+)\s*(W)?$", re.IGNORECASE)

_PREFIXES: dict[str, float] = {
    "p": 1e-12,
    "n": 1e-9,
    "u": 1e-6,
    "µ": 1e-6,
    "m": 1e-3,
    "k": 1e3,
    "K": 1e3,
    "M": 1e6,
    "G": 1e9,
}

# Spellings of the same unit, keyed by casefolded symbol
_UNIT_ALIASES: dict[str, str] = {
    "r": "ohm",
    "ω": "ohm",
    "ohm": "ohm",
    "ohms": "ohm",
}


def _unit(symbol: str | None) -> str | None:
    if not symbol:
        return None
    key = symbol.casefold()
    return _UNIT_ALIASES.get(key, key)


def _finite(number: float) -> float | None:
    return number if math.isfinite(number) else None


# =============================================================================
# PARSERS
# =============================================================================


def parse_quantity(s: str) -> tuple[float, str | None] | None:
    """Parse a quantity string into ``(value, unit)``.

    ``unit`` is a normalized symbol ("v", "ohm", "%") or None when the
    string carries no unit. Returns None when the string is not a single
    finite quantity.
    """
    if not isinstance(s, str):
        return None
    text = s.strip().replace(",", "")
    if not text:
        return None

    match = _FRACTION_PATTERN.match(text)
    if match:
        denominator = float(match.group(2))
        if denominator == 0:
            return None
        number = _finite(float(match.group(1)) / denominator)
        return None if number is None else (number, _unit(match.group(3)))

    match = _EURO_PATTERN.match(text)
    if match:
        whole, letter, frac, unit = match.groups()
        number = float(f"{whole}.{frac}")
        if letter in "rR":
            unit = "R"
        else:
            number *= _PREFIXES[letter]
        number = _finite(number)
        return None if number is None else (number, _unit(unit))

    match = _QUANTITY_PATTERN.match(text)
    if not match:
        return None
    mantissa, exponent, prefix, unit = match.groups()
    # float() saturates a huge exponent to inf instead of building a big int
    number = float(f"{mantissa}e{exponent}") if exponent else float(mantissa)
    if prefix:
        # A bare "m"/"M" with no unit reads as milli/mega, which is how
        # resistor and capacitor values are written in BOMs
        number *= _PREFIXES[prefix]
    number = _finite(number)
    return None if number is None else (number, _unit(unit))


def parse_value(s: str) -> float | None:
    """Parse a quantity string: '10k' -> 10000, '4k7' -> 4700, '100nF' -> 1e-7.

    Returns None when the string is not a single finite quantity.
    """
    parsed = parse_quantity(s)
    return parsed[0] if parsed else None


def as_quantity(value: Any) -> tuple[float, str | None] | None:
    """Coerce a spec value to ``(float, unit)``; None for text, bools, NaN and None.

    Plain numbers carry no unit. Integers too large for a float are not
    numbers.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return None if math.isnan(number) else (number, None)
    if isinstance(value, str):
        return parse_quantity(value)
    return None


def as_number(value: Any) -> float | None:
    """Coerce a spec value to float; None for text, bools, NaN and None."""
    quantity = as_quantity(value)
    return quantity[0] if quantity else None


def units_differ(a: str | None, b: str | None) -> bool:
    """True only when both sides name a unit and the units are different."""
    return a is not None and b is not None and a != b


def normalize_text(value: Any) -> str | None:
    """Canonical text form used for case-insensitive equality."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip().casefold()
