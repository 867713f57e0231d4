"""Known-equivalent part numbers.

Groups of MPNs that are historically interchangeable across vendors
(2N2222 / PN2222, 1N4148 / 1N914). Lookups ignore case, punctuation and
a short trailing grade or packaging suffix (``BC547B``, ``2N2222A-TR``).
"""

import re

from .handlers import normalize_mpn

# Trailing letters after the last digit: grade, package or reel codes
_SUFFIX_PATTERN = re.compile(r"^(.*\d)[A-Z]{1,3}$")

BUILTIN_GROUPS: tuple[tuple[str, ...], ...] = (
    # NPN small-signal
    ("2N2222", "2N2222A", "PN2222"),
    ("2N3904", "PN3904"),
    ("2N4401", "PN4401"),
    ("BC547", "BC548", "BC337"),
    # PNP small-signal
    ("2N2907", "2N2907A", "PN2907"),
    ("2N3906", "PN3906"),
    ("BC557", "BC558", "BC327"),
    # Diodes
    ("1N4148", "1N914"),
    ("1N4001", "RL201"),
    ("1N4002", "RL202"),
    ("1N4003", "RL203"),
    ("1N4004", "RL204"),
    ("1N4005", "RL205"),
    ("1N4006", "RL206"),
    ("1N4007", "RL207"),
    # Vishay 5 mm red LEDs
    ("TLHR5400", "TLHR5401", "TLHR5402", "TLHR5403"),
)


class EquivalenceTable:
    """Immutable mapping from MPN to the canonical member of its group."""

    def __init__(self, groups: "tuple[tuple[str, ...], ...] | list" = ()):
        canonical: dict[str, str] = {}
        for group in groups:
            members = [normalize_mpn(m) for m in group if normalize_mpn(m)]
            if len(members) < 2:
                raise ValueError(f"Equivalence group needs at least two MPNs: {group!r}")
            # Joining a group that shares a member merges the two
            head = next((canonical[m] for m in members if m in canonical), members[0])
            for member in members:
                previous = canonical.get(member)
                if previous is not None and previous != head:
                    for key, value in canonical.items():
                        if value == previous:
                            canonical[key] = head
                canonical[member] = head
        self._canonical = canonical

    def _lookup(self, mpn: str) -> str | None:
        key = normalize_mpn(mpn)
        if not key:
            return None
        if key in self._canonical:
            return self._canonical[key]
        match = _SUFFIX_PATTERN.match(key)
        if match:
            return self._canonical.get(match.group(1))
        return None

    def canonical(self, mpn: str) -> str | None:
        """Canonical MPN of the group containing ``mpn``; None if not listed."""
        return self._lookup(mpn)

    def are_equivalent(self, mpn_a: str, mpn_b: str) -> bool:
        a = self._lookup(mpn_a)
        return a is not None and a == self._lookup(mpn_b)

    def group_of(self, mpn: str) -> list[str]:
        head = self._lookup(mpn)
        if head is None:
            return []
        return sorted(k for k, v in self._canonical.items() if v == head)

    def __len__(self) -> int:
        return len(set(self._canonical.values()))


def builtin_equivalences() -> EquivalenceTable:
    return EquivalenceTable(BUILTIN_GROUPS)
