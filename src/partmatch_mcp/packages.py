"""Package name normalization.

Datasheets and distributors spell the same package several ways:
``SOT-23`` / ``SOT23`` / ``sot 23``, ``TO-263`` / ``D2PAK``, ``SO-8`` /
``SOIC8``, ``0603`` / ``SMD_0603``. ``normalize_package`` folds these to
one compact upper-case key so that equal packages compare equal.
"""

import re
from typing import Any


# =============================================================================
# PRE-COMPILED REGEX PATTERNS
# =============================================================================

_SEPARATOR_PATTERN = re.compile(r"[\s\-_./]+")
# Imperial chip sizes, optionally prefixed "SMD"
_CHIP_PATTERN = re.compile(r"^(?:SMD)?(01005|0201|0402|0603|0805|1206|1210|1812|2010|2512)$")
# SO-8 / SOP-8 / SOIC-8 all name the same small-outline package
_SOIC_PATTERN = re.compile(r"^(?:SO|SOP|SOIC)(\d+)$")

# Same physical package under a different name, keyed by compact form
PACKAGE_ALIASES: dict[str, str] = {
    "SC70": "SOT323",
    "SC703": "SOT323",
    "SC88": "SOT363",
    "SC706": "SOT363",
    "TO252": "DPAK",
    "TO263": "D2PAK",
    "TO2633": "D2PAK",
    "DO214AC": "SMA",
    "DO214AA": "SMB",
    "DO214AB": "SMC",
    "SO": "SOIC8",
    "SOP": "SOIC8",
    "SOIC": "SOIC8",
}


def normalize_package(value: Any) -> str | None:
    """Compact package key: 'sot-23' -> 'SOT23', 'TO-263' -> 'D2PAK'.

    Returns None for values that are not a package name (None, bools,
    blank strings, non-text values other than an integer chip size).
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        # 603 read from a spreadsheet cell is the 0603 chip size
        value = str(value).zfill(4)
    if not isinstance(value, str):
        return None
    key = _SEPARATOR_PATTERN.sub("", value).upper()
    if not key:
        return None

    match = _CHIP_PATTERN.match(key)
    if match:
        return match.group(1)
    match = _SOIC_PATTERN.match(key)
    if match:
        return f"SOIC{match.group(1)}"
    return PACKAGE_ALIASES.get(key, key)
