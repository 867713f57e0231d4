"""Spec importance levels and similarity profiles."""

from enum import Enum


class SpecImportance(Enum):
    """How much a spec counts toward the aggregate score."""

    CRITICAL = (1.0, True)
    HIGH = (0.7, False)
    MEDIUM = (0.4, False)
    LOW = (0.2, False)
    OPTIONAL = (0.0, False)

    def __init__(self, base_weight: float, mandatory: bool):
        self.base_weight = base_weight
        self.mandatory = mandatory


_I = SpecImportance


class SimilarityProfile(Enum):
    """Usage context for a comparison.

    Each profile scales the base weight of every importance level and sets
    the minimum aggregate score a pair needs to count as interchangeable.
    """

    DESIGN_PHASE = (
        "Exact specification match required",
        {_I.CRITICAL: 1.0, _I.HIGH: 0.9, _I.MEDIUM: 0.7, _I.LOW: 0.4, _I.OPTIONAL: 0.0},
        0.85,
    )
    REPLACEMENT = (
        "Drop-in replacement - form/fit/function compatible",
        {_I.CRITICAL: 1.0, _I.HIGH: 0.7, _I.MEDIUM: 0.4, _I.LOW: 0.2, _I.OPTIONAL: 0.0},
        0.75,
    )
    COST_OPTIMIZATION = (
        "Accept downgrade if cheaper, maintain critical specs",
        {_I.CRITICAL: 1.0, _I.HIGH: 0.4, _I.MEDIUM: 0.2, _I.LOW: 0.0, _I.OPTIONAL: 0.0},
        0.60,
    )
    PERFORMANCE_UPGRADE = (
        "Accept better specs, prioritize performance",
        {_I.CRITICAL: 1.0, _I.HIGH: 0.8, _I.MEDIUM: 0.5, _I.LOW: 0.2, _I.OPTIONAL: 0.0},
        0.70,
    )
    EMERGENCY_SOURCING = (
        "Any functional equivalent acceptable",
        {_I.CRITICAL: 0.8, _I.HIGH: 0.4, _I.MEDIUM: 0.2, _I.LOW: 0.0, _I.OPTIONAL: 0.0},
        0.50,
    )

    def __init__(self, description: str, multipliers: dict, minimum_score: float):
        self.description = description
        self._multipliers = multipliers
        self.minimum_score = minimum_score

    def multiplier(self, importance: SpecImportance) -> float:
        return self._multipliers[importance]

    def effective_weight(self, importance: SpecImportance) -> float:
        return importance.base_weight * self._multipliers[importance]

    def meets_threshold(self, score: float) -> bool:
        return score >= self.minimum_score

    @classmethod
    def from_name(cls, name: str) -> "SimilarityProfile | None":
        """Case-insensitive lookup; accepts 'replacement' or 'emergency-sourcing'."""
        if not isinstance(name, str):
            return None
        key = name.strip().upper().replace("-", "_").replace(" ", "_")
        return cls.__members__.get(key)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "minimum_score": self.minimum_score,
            "weights": {i.name: round(self.effective_weight(i), 4) for i in SpecImportance},
        }
