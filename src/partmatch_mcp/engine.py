"""Similarity scoring between two parts of the same component type.

The score is a weighted blend of per-spec tolerance scores, with weights
from the spec's importance scaled by the chosen profile. Any critical
spec that is missing on either side, or that scores below its rule's
acceptance threshold, forces the whole score to 0.0. A type without
metadata produces ``NoMetadata``, never a zero score.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from .config import EQUIVALENCE_SCORE
from .equivalence import EquivalenceTable
from .metadata import TypeMetadata, TypeMetadataRegistry
from .profiles import SimilarityProfile, SpecImportance
from .resolver import TypeResolver
from .specs import SpecValue
from .types import ComponentType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpecScore:
    """How one spec contributed to a comparison."""
    name: str
    importance: SpecImportance
    rule: str
    score: float
    weight: float
    critical: bool
    acceptable: bool

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "importance": self.importance.name,
            "rule": self.rule,
            "score": round(self.score, 4),
            "weight": round(self.weight, 4),
            "critical": self.critical,
            "acceptable": self.acceptable,
        }


@dataclass(frozen=True)
class Score:
    """Aggregate similarity and the profile's accept/reject decision."""
    value: float
    meets_threshold: bool
    component_type: ComponentType
    profile: SimilarityProfile
    critical_mismatch: str | None = None
    equivalent: bool = False
    specs: tuple[SpecScore, ...] = field(default=())

    def to_dict(self) -> dict:
        return {
            "score": round(self.value, 4),
            "meets_threshold": self.meets_threshold,
            "component_type": self.component_type.value,
            "profile": self.profile.name,
            "minimum_score": self.profile.minimum_score,
            "critical_mismatch": self.critical_mismatch,
            "equivalent": self.equivalent,
            "specs": [s.to_dict() for s in self.specs],
        }


@dataclass(frozen=True)
class NoMetadata:
    """The engine has no rules for this type; the pair cannot be scored."""
    component_type: ComponentType | None
    reason: str

    def to_dict(self) -> dict:
        return {
            "error": self.reason,
            "component_type": self.component_type.value if self.component_type else None,
            "scorable": False,
        }


def _present(value: Any) -> bool:
    if isinstance(value, SpecValue):
        return value.value is not None
    return value is not None


class SimilarityEngine:
    """Scores part pairs using a metadata registry and optional equivalences."""

    def __init__(
        self,
        registry: TypeMetadataRegistry,
        equivalences: EquivalenceTable | None = None,
    ):
        self.registry = registry
        self.equivalences = equivalences

    def score(
        self,
        specs_a: Mapping[str, Any] | None,
        specs_b: Mapping[str, Any] | None,
        component_type: ComponentType,
        profile: SimilarityProfile | None = None,
        mpn_a: str | None = None,
        mpn_b: str | None = None,
    ) -> Score | NoMetadata:
        """Compare ``specs_b`` (candidate) against ``specs_a`` (original).

        ``profile`` defaults to the type's metadata default. When both MPNs
        are given and listed as equivalent, the score is raised to at least
        the equivalence floor, but never past a critical mismatch.
        """
        if not isinstance(component_type, ComponentType):
            return NoMetadata(None, f"Not a component type: {component_type!r}")
        metadata = self.registry.get(component_type)
        if metadata is None:
            logger.debug(f"No metadata for {component_type.value}")
            return NoMetadata(component_type, f"No similarity metadata for {component_type.value}")

        profile = profile or metadata.default_profile
        specs_a = specs_a or {}
        specs_b = specs_b or {}
        breakdown = self._breakdown(metadata, specs_a, specs_b, profile)

        mismatch = self._critical_mismatch(metadata, specs_a, specs_b, breakdown)
        if mismatch is not None:
            logger.debug(f"Critical mismatch on '{mismatch}' for {component_type.value}")
            return Score(
                value=0.0,
                meets_threshold=False,
                component_type=component_type,
                profile=profile,
                critical_mismatch=mismatch,
                specs=tuple(breakdown),
            )

        total = 0.0
        denominator = 0.0
        for item in breakdown:
            total += item.score * item.weight
            denominator += item.weight
        value = total / denominator if denominator > 0 else 0.0

        equivalent = False
        if self.equivalences is not None and mpn_a and mpn_b:
            equivalent = self.equivalences.are_equivalent(mpn_a, mpn_b)
            if equivalent:
                value = max(value, EQUIVALENCE_SCORE)

        value = max(0.0, min(1.0, value))
        return Score(
            value=value,
            meets_threshold=profile.meets_threshold(value),
            component_type=component_type,
            profile=profile,
            equivalent=equivalent,
            specs=tuple(breakdown),
        )

    def breakdown(
        self,
        specs_a: Mapping[str, Any] | None,
        specs_b: Mapping[str, Any] | None,
        component_type: ComponentType,
        profile: SimilarityProfile | None = None,
    ) -> list[SpecScore]:
        """Per-spec scores for the specs present on both sides."""
        metadata = self.registry.get(component_type) if isinstance(component_type, ComponentType) else None
        if metadata is None:
            return []
        return self._breakdown(metadata, specs_a or {}, specs_b or {}, profile or metadata.default_profile)

    def score_mpns(
        self,
        resolver: TypeResolver,
        mpn_a: str,
        specs_a: Mapping[str, Any] | None,
        mpn_b: str,
        specs_b: Mapping[str, Any] | None,
        profile: SimilarityProfile | None = None,
    ) -> Score | NoMetadata:
        """Resolve the original's type from its MPN, then score the pair.

        Parts from different families cannot replace each other and score 0.0.
        """
        resolution = resolver.resolve(mpn_a)
        if resolution.is_unknown:
            return NoMetadata(None, f"Could not determine component type of {mpn_a!r}")
        component_type = resolution.component_type
        other = resolver.resolve_type(mpn_b)
        if other is not None and not component_type.is_same_family(other):
            metadata = self.registry.get(component_type)
            if metadata is None:
                return NoMetadata(component_type, f"No similarity metadata for {component_type.value}")
            profile = profile or metadata.default_profile
            return Score(
                value=0.0,
                meets_threshold=False,
                component_type=component_type,
                profile=profile,
                critical_mismatch="component_type",
            )
        return self.score(specs_a, specs_b, component_type, profile, mpn_a=mpn_a, mpn_b=mpn_b)

    @staticmethod
    def _breakdown(
        metadata: TypeMetadata,
        specs_a: Mapping[str, Any],
        specs_b: Mapping[str, Any],
        profile: SimilarityProfile,
    ) -> list[SpecScore]:
        result = []
        for name in metadata.spec_names:
            a, b = specs_a.get(name), specs_b.get(name)
            if not (_present(a) and _present(b)):
                continue
            config = metadata.specs[name]
            score = config.rule.compare(a, b)
            result.append(SpecScore(
                name=name,
                importance=config.importance,
                rule=config.rule.describe(),
                score=score,
                weight=profile.effective_weight(config.importance),
                critical=metadata.is_critical(name),
                acceptable=config.rule.is_acceptable(score),
            ))
        return result

    @staticmethod
    def _critical_mismatch(
        metadata: TypeMetadata,
        specs_a: Mapping[str, Any],
        specs_b: Mapping[str, Any],
        breakdown: list[SpecScore],
    ) -> str | None:
        """Name of the first failing critical spec in declaration order."""
        scored = {item.name: item for item in breakdown}
        for name in metadata.spec_names:
            if not metadata.is_critical(name):
                continue
            if not (_present(specs_a.get(name)) and _present(specs_b.get(name))):
                return name
            if not scored[name].acceptable:
                return name
        return None
