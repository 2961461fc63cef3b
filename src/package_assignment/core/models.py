"""Core data models for shipping package assignment.

All modules import their core types from here to ensure consistency across
the algorithms, the store and the command line layer.

Classes:
    PackageDefinition      — persisted box template (dimensions, tare, range)
    PackageDefinitionInput — administrative create/edit payload
    QuantityRange          — candidate range checked by the range validator
    DecompositionRequest   — total quantity + per-item weight + catalog
    DecomposedPackage      — one package instance produced by decomposition
    DecompositionResult    — all package instances plus totals and summary

Units: dimensions are inches, weights are pounds.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from package_assignment.core.errors import DefinitionInputError


DIMENSION_UNIT = "inch"
WEIGHT_UNIT = "pound"

# Inline messages shown to administrators, keyed by field.
FIELD_MESSAGES: dict[str, str] = {
    "name": "Package name is required",
    "length": "Length must be a positive number",
    "width": "Width must be a positive number",
    "height": "Height must be a positive number",
    "empty_weight": "Empty weight must be a non-negative number",
    "min_quantity": "Minimum quantity must be at least 1",
    "max_quantity": "Maximum quantity must be greater than or equal to minimum",
    "sort_order": "Sort order must be an integer",
}

FIELD_LABELS: dict[str, str] = {
    "name": "Package name",
    "length": "Length",
    "width": "Width",
    "height": "Height",
    "empty_weight": "Empty weight",
    "min_quantity": "Minimum quantity",
    "max_quantity": "Maximum quantity",
    "is_default": "Default flag",
    "is_active": "Active flag",
    "sort_order": "Sort order",
}

# Pydantic error type prefix -> what the value should have been.
TYPE_EXPECTATIONS: dict[str, str] = {
    "int_": "a whole number",
    "float_": "a number",
    "bool_": "true or false",
    "string_": "text",
}


# ─────────────────────────────────────────────────────────────────────────────
# Package definitions
# ─────────────────────────────────────────────────────────────────────────────

class _PackageFields(BaseModel):
    """Fields and checks shared by stored definitions and admin payloads."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    name: str
    length: float
    width: float
    height: float
    empty_weight: float = 0.0
    min_quantity: int = 1
    max_quantity: int = 999
    is_default: bool = False
    is_active: bool = True
    sort_order: int = 0

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError(FIELD_MESSAGES["name"])
        return v

    @field_validator("length", "width", "height")
    @classmethod
    def _positive_dimension(cls, v: float, info) -> float:
        if v <= 0:
            raise ValueError(FIELD_MESSAGES[info.field_name])
        return v

    @field_validator("empty_weight")
    @classmethod
    def _non_negative_weight(cls, v: float) -> float:
        if v < 0:
            raise ValueError(FIELD_MESSAGES["empty_weight"])
        return v

    @field_validator("min_quantity")
    @classmethod
    def _min_at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError(FIELD_MESSAGES["min_quantity"])
        return v

    @field_validator("is_default", "is_active", mode="before")
    @classmethod
    def _null_flag_is_false(cls, v: Any) -> Any:
        # Nullable boolean columns come back as null.
        return False if v is None else v

    @field_validator("sort_order", mode="before")
    @classmethod
    def _null_sort_order(cls, v: Any) -> Any:
        return 0 if v is None else v

    @model_validator(mode="after")
    def _range_is_ordered(self):
        if self.max_quantity < self.min_quantity:
            raise ValueError(FIELD_MESSAGES["max_quantity"])
        return self

    @property
    def dimensions(self) -> tuple[float, float, float]:
        """Return (length, width, height) in inches."""
        return self.length, self.width, self.height

    @property
    def quantity_range(self) -> "QuantityRange":
        return QuantityRange(self.min_quantity, self.max_quantity, self.is_active)

    def covers(self, quantity: int) -> bool:
        """True if ``quantity`` falls inside the inclusive capacity range."""
        return self.min_quantity <= quantity <= self.max_quantity


class PackageDefinitionInput(_PackageFields):
    """Payload an administrator submits to create or edit a definition."""

    def to_row(self) -> dict[str, Any]:
        return self.model_dump()


class PackageDefinition(_PackageFields):
    """A named physical container an order can ship in."""

    id: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @property
    def label(self) -> str:
        """Name with its range, e.g. ``Small Box (1-4)``."""
        return f"{self.name} ({self.min_quantity}-{self.max_quantity})"

    def editable_fields(self) -> dict[str, Any]:
        """Fields an administrator may change, as a plain dict."""
        return self.model_dump(exclude={"id", "created_at", "updated_at"})

    def __repr__(self) -> str:
        flags = "".join([
            "" if self.is_active else " inactive",
            " default" if self.is_default else "",
        ])
        return f"PackageDefinition(id={self.id!r}, {self.label}{flags})"


def _first_error(exc: ValidationError) -> tuple[str, str]:
    error = exc.errors()[0]
    loc = error.get("loc") or ()
    # Model-level checks have an empty location; the only one is the range order.
    field_name = str(loc[0]) if loc else "max_quantity"
    error_type = error.get("type", "")
    if error_type in ("value_error", "missing"):
        return field_name, FIELD_MESSAGES.get(field_name, error.get("msg", "Invalid value"))

    label = FIELD_LABELS.get(field_name, field_name)
    for prefix, expected in TYPE_EXPECTATIONS.items():
        if error_type.startswith(prefix):
            return field_name, f"{label} must be {expected}"
    return field_name, f"{label}: {error.get('msg', 'Invalid value')}"


def parse_definition_input(payload: Mapping[str, Any]) -> PackageDefinitionInput:
    """Validate an admin payload, raising DefinitionInputError on the first bad field.

    Example:
        >>> parse_definition_input({"name": " ", "length": 1, "width": 1, "height": 1})
        Traceback (most recent call last):
        ...
        package_assignment.core.errors.DefinitionInputError: Package name is required
    """
    try:
        return PackageDefinitionInput.model_validate(dict(payload))
    except ValidationError as exc:
        field_name, message = _first_error(exc)
        raise DefinitionInputError(field_name, message) from exc


def parse_definition(row: Mapping[str, Any]) -> PackageDefinition:
    """Build a PackageDefinition from a data service row or catalog entry."""
    try:
        return PackageDefinition.model_validate(dict(row))
    except ValidationError as exc:
        field_name, message = _first_error(exc)
        raise DefinitionInputError(field_name, message) from exc


# ─────────────────────────────────────────────────────────────────────────────
# Range candidate
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class QuantityRange:
    """Inclusive ``[min_quantity, max_quantity]`` range proposed for a definition."""

    min_quantity: int
    max_quantity: int
    is_active: bool = True


# ─────────────────────────────────────────────────────────────────────────────
# Decomposition
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DecompositionRequest:
    """
    Input to the decomposition engine.

    Attributes:
        total_quantity:  Items in the shipment. Zero or less means nothing to ship.
        weight_per_item: Average weight of one item in pounds.
        packages:        Package definitions; inactive ones are ignored.
    """
    total_quantity: int
    weight_per_item: float
    packages: tuple[PackageDefinition, ...] = ()

    def __post_init__(self) -> None:
        if self.weight_per_item < 0:
            raise ValueError(f"weight_per_item cannot be negative, got {self.weight_per_item!r}")
        object.__setattr__(self, "packages", tuple(self.packages))


@dataclass(frozen=True)
class DecomposedPackage:
    """One physical package instance and the items it carries."""

    package: PackageDefinition
    item_count: int
    calculated_weight: float  # full precision, pounds
    weight: float             # rounded to 2 decimals for display

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.package.name,
            "item_count": self.item_count,
            "dimensions": {
                "length": self.package.length,
                "width": self.package.width,
                "height": self.package.height,
                "unit": DIMENSION_UNIT,
            },
            "weight": {"value": self.weight, "unit": WEIGHT_UNIT},
        }


@dataclass
class DecompositionResult:
    """Aggregate output of the decomposition engine."""

    packages: list[DecomposedPackage] = field(default_factory=list)
    total_weight: float = 0.0
    summary: str = ""

    @property
    def total_packages(self) -> int:
        return len(self.packages)

    @property
    def total_items(self) -> int:
        return sum(p.item_count for p in self.packages)

    @property
    def is_empty(self) -> bool:
        return not self.packages

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_packages": self.total_packages,
            "total_items": self.total_items,
            "total_weight": self.total_weight,
            "summary": self.summary,
            "packages": [p.to_dict() for p in self.packages],
        }

    def to_rate_packages(self) -> list[dict[str, Any]]:
        """Per-package ``weight``/``dimensions`` payloads for a carrier rate request."""
        return [
            {"weight": entry["weight"], "dimensions": entry["dimensions"]}
            for entry in (p.to_dict() for p in self.packages)
        ]
