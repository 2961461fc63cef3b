"""Exception hierarchy for package assignment.

Only genuinely exceptional conditions are raised. Expected business outcomes
(overlapping ranges, an empty catalog, nothing to ship) are reported as
result objects by the algorithms and the store instead.
"""

from __future__ import annotations


class PackageAssignmentError(Exception):
    """Base class for all package assignment errors."""


class DefinitionInputError(PackageAssignmentError):
    """A package definition payload failed field validation.

    Attributes:
        field:   Name of the offending field (e.g. "min_quantity").
        message: Human-readable reason, suitable for an inline form error.
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class DataServiceError(PackageAssignmentError):
    """The remote data service could not be reached or rejected a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CatalogError(PackageAssignmentError):
    """A catalog file is missing, unreadable or malformed."""
