"""Shipping package assignment.

Decides which package(s) an order ships in from its item count and a catalog
of package definitions, and validates that catalog's quantity ranges.
"""

from package_assignment.algorithms.decomposition import PackageDecomposer, calculate_packages, decompose
from package_assignment.algorithms.range_validator import RangeCheck, find_overlaps, validate_quantity_range
from package_assignment.algorithms.selector import SelectionTier, select_package_for_quantity, select_with_tier
from package_assignment.core.errors import (
    CatalogError,
    DataServiceError,
    DefinitionInputError,
    PackageAssignmentError,
)
from package_assignment.core.models import (
    DecomposedPackage,
    DecompositionRequest,
    DecompositionResult,
    PackageDefinition,
    PackageDefinitionInput,
    QuantityRange,
    parse_definition,
    parse_definition_input,
)

__version__ = "0.1.0"

__all__ = [
    # Models
    "PackageDefinition",
    "PackageDefinitionInput",
    "QuantityRange",
    "DecompositionRequest",
    "DecomposedPackage",
    "DecompositionResult",
    "parse_definition",
    "parse_definition_input",
    # Algorithms
    "validate_quantity_range",
    "find_overlaps",
    "RangeCheck",
    "select_package_for_quantity",
    "select_with_tier",
    "SelectionTier",
    "PackageDecomposer",
    "calculate_packages",
    "decompose",
    # Errors
    "PackageAssignmentError",
    "DefinitionInputError",
    "DataServiceError",
    "CatalogError",
]
