"""Per-type comparison metadata and its registry.

``TypeMetadata`` declares which specs matter for a component type, how
important each one is and which tolerance rule compares it. The
``TypeMetadataRegistry`` maps types to metadata, falling back to the
generic base type when a vendor variant has no entry of its own.
"""

import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .errors import MetadataError
from .profiles import SimilarityProfile, SpecImportance
from .tolerance import (
    ToleranceRule,
    exact_match,
    maximum_allowed,
    minimum_required,
    package_match,
    percentage_tolerance,
    range_tolerance,
)
from .types import ComponentType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpecConfig:
    """Importance and comparison rule for one spec."""
    importance: SpecImportance
    rule: ToleranceRule


@dataclass(frozen=True)
class TypeMetadata:
    """Immutable comparison metadata for one component type.

    Build instances with ``TypeMetadata.builder(component_type)``.
    """
    component_type: ComponentType
    specs: Mapping[str, SpecConfig]
    critical_specs: frozenset[str] = field(default_factory=frozenset)
    default_profile: SimilarityProfile = SimilarityProfile.REPLACEMENT

    @staticmethod
    def builder(component_type: ComponentType) -> "TypeMetadataBuilder":
        return TypeMetadataBuilder(component_type)

    @property
    def spec_names(self) -> tuple[str, ...]:
        """Spec names in declaration order."""
        return tuple(self.specs)

    def spec_config(self, name: str) -> SpecConfig | None:
        return self.specs.get(name)

    def importance(self, name: str) -> SpecImportance:
        config = self.specs.get(name)
        return config.importance if config else SpecImportance.OPTIONAL

    def rule(self, name: str) -> ToleranceRule:
        config = self.specs.get(name)
        return config.rule if config else exact_match()

    def is_critical(self, name: str) -> bool:
        return name in self.critical_specs

    def to_dict(self) -> dict:
        return {
            "component_type": self.component_type.value,
            "default_profile": self.default_profile.name,
            "specs": [
                {
                    "name": name,
                    "importance": config.importance.name,
                    "rule": config.rule.describe(),
                    "critical": name in self.critical_specs,
                }
                for name, config in self.specs.items()
            ],
        }


class TypeMetadataBuilder:
    """Accumulates specs, then validates everything in ``build()``.

    A missing type or an invalid spec is rejected immediately; zero specs
    is rejected at ``build()``.
    """

    def __init__(self, component_type: ComponentType):
        if not isinstance(component_type, ComponentType):
            raise MetadataError(f"Component type is required, got {component_type!r}")
        self._component_type = component_type
        self._specs: dict[str, SpecConfig] = {}
        self._critical: set[str] = set()
        self._default_profile = SimilarityProfile.REPLACEMENT

    def add_spec(
        self,
        name: str,
        importance: SpecImportance,
        rule: ToleranceRule,
    ) -> "TypeMetadataBuilder":
        if not isinstance(name, str) or not name.strip():
            raise MetadataError(f"Spec name must be a non-empty string, got {name!r}")
        if not isinstance(importance, SpecImportance):
            raise MetadataError(f"Spec '{name}' needs an importance, got {importance!r}")
        if not isinstance(rule, ToleranceRule):
            raise MetadataError(f"Spec '{name}' needs a tolerance rule, got {rule!r}")
        name = name.strip()
        self._specs[name] = SpecConfig(importance, rule)
        if importance.mandatory:
            self._critical.add(name)
        return self

    def mark_critical(self, name: str) -> "TypeMetadataBuilder":
        """Treat a declared spec as critical regardless of its importance."""
        if name not in self._specs:
            raise MetadataError(f"Cannot mark undeclared spec '{name}' as critical")
        self._critical.add(name)
        return self

    def default_profile(self, profile: SimilarityProfile) -> "TypeMetadataBuilder":
        if not isinstance(profile, SimilarityProfile):
            raise MetadataError(f"Default profile must be a SimilarityProfile, got {profile!r}")
        self._default_profile = profile
        return self

    def build(self) -> TypeMetadata:
        if not self._specs:
            raise MetadataError(
                f"Metadata for {self._component_type.value} must declare at least one spec"
            )
        return TypeMetadata(
            component_type=self._component_type,
            specs=MappingProxyType(dict(self._specs)),
            critical_specs=frozenset(self._critical),
            default_profile=self._default_profile,
        )


class TypeMetadataRegistry:
    """Thread-safe map from component type to metadata.

    Reads never lock: writers build a new dict under a lock and swap the
    reference, so a reader always sees a complete snapshot. The last
    registration for a type wins.
    """

    def __init__(self, entries: "list[TypeMetadata] | None" = None):
        self._lock = threading.Lock()
        self._entries: dict[ComponentType, TypeMetadata] = {}
        for metadata in entries or ():
            self.register(metadata)

    def register(self, metadata: TypeMetadata) -> None:
        if not isinstance(metadata, TypeMetadata):
            raise MetadataError(f"Expected TypeMetadata, got {type(metadata).__name__}")
        with self._lock:
            entries = dict(self._entries)
            if metadata.component_type in entries:
                logger.info(f"Replacing metadata for {metadata.component_type.value}")
            entries[metadata.component_type] = metadata
            self._entries = entries
        logger.debug(
            f"Registered metadata for {metadata.component_type.value} "
            f"({len(metadata.specs)} specs)"
        )

    def get(self, component_type: ComponentType) -> TypeMetadata | None:
        """Metadata for the exact type, else its base type, else None."""
        entries = self._entries
        metadata = entries.get(component_type)
        if metadata is not None:
            return metadata
        if not isinstance(component_type, ComponentType):
            return None
        return entries.get(component_type.base_type)

    def has_exact(self, component_type: ComponentType) -> bool:
        return component_type in self._entries

    def registered_types(self) -> list[ComponentType]:
        return sorted(self._entries, key=lambda t: t.value)

    def __len__(self) -> int:
        return len(self._entries)


# =============================================================================
# BUILT-IN METADATA
# =============================================================================

_C = SpecImportance.CRITICAL
_H = SpecImportance.HIGH
_M = SpecImportance.MEDIUM
_L = SpecImportance.LOW

_BUILTIN_SPECS: dict[ComponentType, tuple[tuple[str, SpecImportance, ToleranceRule], ...]] = {
    ComponentType.RESISTOR: (
        ("resistance", _C, percentage_tolerance(1.0)),
        ("tolerance", _C, exact_match()),
        ("package", _H, package_match()),
        ("power_rating", _M, minimum_required()),
        ("temperature_coefficient", _L, percentage_tolerance(20.0)),
        ("composition", _L, exact_match()),
    ),
    ComponentType.CAPACITOR: (
        ("capacitance", _C, percentage_tolerance(5.0)),
        ("voltage", _C, minimum_required()),
        ("dielectric", _C, exact_match()),
        ("package", _H, package_match()),
        ("tolerance", _M, exact_match()),
        ("temperature_characteristic", _M, exact_match()),
        ("esr", _L, maximum_allowed(1.5)),
    ),
    ComponentType.MOSFET: (
        ("voltage_rating", _C, minimum_required()),
        ("current_rating", _C, minimum_required()),
        ("channel", _C, exact_match()),
        ("rds_on", _H, maximum_allowed(1.2)),
        ("package", _M, package_match()),
        ("gate_charge", _L, percentage_tolerance(30.0)),
        ("threshold", _L, range_tolerance(0.8, 1.2)),
    ),
    ComponentType.TRANSISTOR: (
        ("polarity", _C, exact_match()),
        ("voltage_rating", _C, minimum_required()),
        ("current_rating", _C, minimum_required()),
        ("package", _H, package_match()),
        ("hfe", _M, range_tolerance(0.7, 1.5)),
        ("power_rating", _M, minimum_required()),
    ),
    ComponentType.DIODE: (
        ("type", _C, exact_match()),
        ("voltage_rating", _C, minimum_required()),
        ("current_rating", _C, minimum_required()),
        ("package", _H, package_match()),
        ("forward_voltage", _M, maximum_allowed(1.2)),
        ("reverse_recovery", _L, maximum_allowed(1.5)),
    ),
    ComponentType.OPAMP: (
        ("configuration", _C, exact_match()),
        ("input_type", _H, exact_match()),
        ("package", _H, package_match()),
        ("gbw", _M, minimum_required()),
        ("slew_rate", _M, minimum_required()),
        ("input_offset", _L, maximum_allowed(1.5)),
    ),
    ComponentType.MICROCONTROLLER: (
        ("family", _C, exact_match()),
        ("series", _H, exact_match()),
        ("flash_size", _H, minimum_required()),
        ("ram_size", _H, minimum_required()),
        ("io_count", _M, minimum_required()),
        ("package", _M, package_match()),
        ("frequency", _L, minimum_required()),
    ),
    ComponentType.MEMORY: (
        ("type", _C, exact_match()),
        ("capacity", _C, minimum_required()),
        ("interface", _C, exact_match()),
        ("voltage", _H, exact_match()),
        ("package", _M, package_match()),
        ("speed", _L, minimum_required()),
    ),
    ComponentType.LED: (
        ("color", _C, exact_match()),
        ("package", _H, package_match()),
        ("brightness", _M, minimum_required()),
        ("forward_voltage", _M, range_tolerance(0.9, 1.1)),
        ("viewing_angle", _L, minimum_required()),
        ("wavelength", _L, percentage_tolerance(5.0)),
    ),
    ComponentType.CONNECTOR: (
        ("pin_count", _C, exact_match()),
        ("pitch", _C, exact_match()),
        ("gender", _C, exact_match()),
        ("mounting_type", _H, exact_match()),
        ("current_rating", _M, minimum_required()),
        ("voltage_rating", _M, minimum_required()),
    ),
}


def builtin_metadata() -> list[TypeMetadata]:
    """Fresh metadata objects for the built-in component types."""
    result = []
    for component_type, specs in _BUILTIN_SPECS.items():
        builder = TypeMetadata.builder(component_type)
        for name, importance, rule in specs:
            builder.add_spec(name, importance, rule)
        result.append(builder.build())
    return result


def default_registry() -> TypeMetadataRegistry:
    """New registry populated with the built-in metadata."""
    return TypeMetadataRegistry(builtin_metadata())
