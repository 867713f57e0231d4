"""Registry of MPN patterns contributed by each handler.

Patterns are stored per component type and per handler. Queries are
scoped to one handler so that one vendor's rule can never match another
vendor's part number by accident (``IRF`` MOSFETs vs look-alike prefixes).
The unscoped union is available only under an explicit name.
"""

import logging
import re
import threading
from collections import defaultdict

from .types import ComponentType

logger = logging.getLogger(__name__)


class PatternRegistry:
    """Thread-safe ``type -> handler -> patterns`` map.

    Patterns are compiled case-insensitively and must match the whole
    MPN. Registration is copy-on-write, so lookups can run concurrently
    with late registrations.
    """

    def __init__(self):
        self._lock = threading.Lock()
        # type -> handler_id -> tuple of compiled patterns (in registration order)
        self._patterns: dict[ComponentType, dict[str, tuple[re.Pattern, ...]]] = {}

    def register(self, component_type: ComponentType, handler_id: str, pattern: str) -> bool:
        """Add ``pattern`` for ``(component_type, handler_id)``.

        Returns False if the identical triple was already registered.
        Raises ValueError for an unknown type, a blank handler id or a
        pattern that does not compile.
        """
        if not isinstance(component_type, ComponentType):
            raise ValueError(f"Unknown component type: {component_type!r}")
        if not isinstance(handler_id, str) or not handler_id.strip():
            raise ValueError(f"Handler id must be a non-empty string, got {handler_id!r}")
        try:
            compiled = re.compile(pattern, re.IGNORECASE)
        except (re.error, TypeError) as e:
            raise ValueError(f"Invalid pattern {pattern!r} for {handler_id}: {e}") from e

        with self._lock:
            by_handler = self._patterns.get(component_type, {})
            existing = by_handler.get(handler_id, ())
            if any(p.pattern == compiled.pattern for p in existing):
                return False
            updated = dict(self._patterns)
            updated[component_type] = {**by_handler, handler_id: existing + (compiled,)}
            self._patterns = updated
        logger.debug(f"Registered {handler_id} pattern {pattern!r} for {component_type.value}")
        return True

    def matches_for_handler(self, mpn: str, component_type: ComponentType, handler_id: str) -> bool:
        """True if one of ``handler_id``'s patterns for the type matches ``mpn``."""
        if not isinstance(mpn, str) or not mpn:
            return False
        patterns = self._patterns.get(component_type, {}).get(handler_id, ())
        return any(p.fullmatch(mpn) for p in patterns)

    def matches_any_handler(self, mpn: str, component_type: ComponentType) -> bool:
        """Unscoped check across every handler's patterns for the type.

        Prone to cross-vendor false positives; handlers validating their own
        part numbers should use ``matches_for_handler``.
        """
        if not isinstance(mpn, str) or not mpn:
            return False
        return any(
            p.fullmatch(mpn)
            for patterns in self._patterns.get(component_type, {}).values()
            for p in patterns
        )

    def matching_handlers(self, mpn: str, component_type: ComponentType) -> list[str]:
        """Handler ids (sorted) with a pattern for the type that matches ``mpn``."""
        return sorted(
            handler_id
            for handler_id in self._patterns.get(component_type, {})
            if self.matches_for_handler(mpn, component_type, handler_id)
        )

    def patterns_for(self, component_type: ComponentType, handler_id: str) -> tuple[str, ...]:
        return tuple(p.pattern for p in self._patterns.get(component_type, {}).get(handler_id, ()))

    def has_pattern(self, component_type: ComponentType, handler_id: str) -> bool:
        return bool(self._patterns.get(component_type, {}).get(handler_id))

    def handlers_for(self, component_type: ComponentType) -> list[str]:
        return sorted(self._patterns.get(component_type, {}))

    def supported_types(self) -> list[ComponentType]:
        """Types with at least one pattern, in stable identifier order."""
        return sorted(self._patterns, key=lambda t: t.value)

    def pattern_counts(self) -> dict[str, int]:
        """Pattern totals per handler, for diagnostics."""
        counts: dict[str, int] = defaultdict(int)
        for by_handler in self._patterns.values():
            for handler_id, patterns in by_handler.items():
                counts[handler_id] += len(patterns)
        return dict(sorted(counts.items()))
