"""Resolve a raw MPN to its most specific component type.

Every registered type whose patterns match the MPN (under any handler)
becomes a candidate. Candidates are ranked by specificity: vendor variants
outrank their base type, base types outrank category types such as
``IC``. Equal specificity is broken by the type's identifier in lexical
order, so the winner never depends on registration or dict order.
"""

import logging
from dataclasses import dataclass, field

from .config import MAX_MPN_LENGTH
from .handlers import BUILTIN_HANDLERS, Handler, clean_mpn, register_handlers
from .patterns import PatternRegistry
from .types import ComponentType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """A type matched by at least one handler."""
    component_type: ComponentType
    handlers: tuple[str, ...]

    @property
    def specificity(self) -> int:
        return self.component_type.specificity

    def sort_key(self) -> tuple[int, str]:
        return (-self.specificity, self.component_type.value)


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one MPN.

    ``component_type`` is None when nothing matched; check ``is_unknown``.
    """
    mpn: str
    component_type: ComponentType | None
    handler_id: str | None = None
    candidates: tuple[Candidate, ...] = field(default=())

    @property
    def is_unknown(self) -> bool:
        return self.component_type is None

    @property
    def specificity(self) -> int:
        return self.component_type.specificity if self.component_type else -1

    @property
    def base_type(self) -> ComponentType | None:
        return self.component_type.base_type if self.component_type else None

    def to_dict(self) -> dict:
        return {
            "mpn": self.mpn,
            "type": self.component_type.value if self.component_type else "UNKNOWN",
            "base_type": self.base_type.value if self.base_type else None,
            "handler": self.handler_id,
            "specificity": self.specificity,
            "candidates": [
                {"type": c.component_type.value, "specificity": c.specificity, "handlers": list(c.handlers)}
                for c in self.candidates
            ],
        }


def unknown(mpn: str = "") -> Resolution:
    return Resolution(mpn=mpn if isinstance(mpn, str) else "", component_type=None)


class TypeResolver:
    """Picks the best-fit type for an MPN from a ``PatternRegistry``."""

    def __init__(self, registry: PatternRegistry):
        self.registry = registry

    @classmethod
    def with_handlers(cls, handlers: "tuple[Handler, ...]" = BUILTIN_HANDLERS) -> "TypeResolver":
        """Resolver over a fresh registry populated from ``handlers``."""
        return cls(register_handlers(PatternRegistry(), handlers))

    def candidates(self, mpn: str) -> list[Candidate]:
        """All matching types, most specific first, ties in identifier order."""
        cleaned = clean_mpn(mpn)
        if not cleaned or len(cleaned) > MAX_MPN_LENGTH:
            return []
        found = []
        for component_type in self.registry.supported_types():
            handlers = self.registry.matching_handlers(cleaned, component_type)
            if handlers:
                found.append(Candidate(component_type, tuple(handlers)))
        found.sort(key=Candidate.sort_key)
        return found

    def resolve(self, mpn: str) -> Resolution:
        """Most specific matching type, or an unknown resolution. Never raises."""
        found = self.candidates(mpn)
        if not found:
            logger.debug(f"No type matched {mpn!r}")
            return unknown(mpn)
        best = found[0]
        if len(found) > 1 and found[1].specificity == best.specificity:
            tied = [c.component_type.value for c in found if c.specificity == best.specificity]
            logger.debug(f"Specificity tie for {mpn!r} between {tied}; chose {best.component_type.value}")
        return Resolution(
            mpn=mpn,
            component_type=best.component_type,
            handler_id=best.handlers[0],
            candidates=tuple(found),
        )

    def resolve_type(self, mpn: str) -> ComponentType | None:
        return self.resolve(mpn).component_type

    def matches_for_handler(self, mpn: str, component_type: ComponentType, handler_id: str) -> bool:
        return self.registry.matches_for_handler(clean_mpn(mpn), component_type, handler_id)
