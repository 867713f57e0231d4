"""Part Match MCP - MPN classification and part interchangeability scoring."""

__version__ = "0.1.0"

from .engine import NoMetadata, Score, SimilarityEngine, SpecScore
from .equivalence import EquivalenceTable, builtin_equivalences
from .errors import MalformedRule, MetadataError
from .handlers import BUILTIN_HANDLERS, Handler, normalize_mpn, register_handlers
from .metadata import (
    SpecConfig,
    TypeMetadata,
    TypeMetadataBuilder,
    TypeMetadataRegistry,
    builtin_metadata,
    default_registry,
)
from .packages import normalize_package
from .patterns import PatternRegistry
from .profiles import SimilarityProfile, SpecImportance
from .resolver import Resolution, TypeResolver
from .specs import SpecUnit, SpecValue
from .tolerance import (
    ToleranceRule,
    exact_match,
    maximum_allowed,
    minimum_required,
    package_match,
    percentage_tolerance,
    range_tolerance,
)
from .types import ComponentType, base_type

__all__ = [
    "__version__",
    # Taxonomy
    "ComponentType",
    "base_type",
    # Spec values and rules
    "SpecUnit",
    "SpecValue",
    "ToleranceRule",
    "exact_match",
    "percentage_tolerance",
    "minimum_required",
    "package_match",
    "maximum_allowed",
    "range_tolerance",
    "MalformedRule",
    # Importance and profiles
    "SpecImportance",
    "SimilarityProfile",
    # Metadata
    "SpecConfig",
    "TypeMetadata",
    "TypeMetadataBuilder",
    "TypeMetadataRegistry",
    "MetadataError",
    "builtin_metadata",
    "default_registry",
    # Pattern resolution
    "PatternRegistry",
    "Handler",
    "BUILTIN_HANDLERS",
    "register_handlers",
    "normalize_mpn",
    "normalize_package",
    "TypeResolver",
    "Resolution",
    # Scoring
    "SimilarityEngine",
    "Score",
    "SpecScore",
    "NoMetadata",
    "EquivalenceTable",
    "builtin_equivalences",
]
