"""Turn checkout order lines into a decomposition request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Union

from package_assignment.core.models import DecompositionRequest, PackageDefinition

DEFAULT_WEIGHT_PER_ITEM = 0.5  # pounds


@dataclass(frozen=True)
class OrderItem:
    """One checkout line: a quantity and, optionally, the weight of one unit."""

    quantity: int
    weight_per_item: Optional[float] = None

    @classmethod
    def from_dict(cls, d: Mapping) -> "OrderItem":
        weight = d.get("weight_per_item")
        return cls(
            quantity=int(d.get("quantity") or 0),
            weight_per_item=float(weight) if weight is not None else None,
        )


def average_weight(items: Iterable[OrderItem], default_weight: float = DEFAULT_WEIGHT_PER_ITEM) -> float:
    """
    Quantity-weighted average unit weight.

    Lines without a weight count at ``default_weight``; lines with no
    positive quantity are ignored.

    Example:
        >>> average_weight([OrderItem(3, 1.0), OrderItem(1, None)])
        0.875
    """
    total_quantity = 0
    total_weight = 0.0
    for item in items:
        if item.quantity <= 0:
            continue
        weight = item.weight_per_item if item.weight_per_item is not None else default_weight
        total_quantity += item.quantity
        total_weight += item.quantity * weight
    if total_quantity == 0:
        return default_weight
    return total_weight / total_quantity


def build_request(
    items: Iterable[Union[OrderItem, Mapping]],
    packages: Iterable[PackageDefinition],
    default_weight: float = DEFAULT_WEIGHT_PER_ITEM,
) -> DecompositionRequest:
    """Aggregate order lines into one DecompositionRequest."""
    lines = [item if isinstance(item, OrderItem) else OrderItem.from_dict(item) for item in items]
    return DecompositionRequest(
        total_quantity=sum(max(item.quantity, 0) for item in lines),
        weight_per_item=average_weight(lines, default_weight=default_weight),
        packages=tuple(packages),
    )
