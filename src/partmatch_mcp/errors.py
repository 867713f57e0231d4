"""Exceptions raised when rules or metadata are configured incorrectly.

Comparison and resolution never raise; only construction does.
"""


class MalformedRule(ValueError):
    """A tolerance rule was constructed with invalid parameters."""


class MetadataError(ValueError):
    """Type metadata or a registry entry is incomplete or wrong-typed."""
