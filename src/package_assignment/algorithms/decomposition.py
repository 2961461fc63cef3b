"""Split an order's item quantity across one or more package instances."""

from __future__ import annotations

import logging
from typing import Iterable

from package_assignment.algorithms.selector import select_package_for_quantity
from package_assignment.core.models import (
    DecomposedPackage,
    DecompositionRequest,
    DecompositionResult,
    PackageDefinition,
)
from package_assignment.monitoring.summary import (
    NO_CONFIGURATION_SUMMARY,
    calculate_weight,
    format_summary,
    round_weight,
)

logger = logging.getLogger(__name__)


class PackageDecomposer:
    """
    Repeated-selection decomposition.

    Asks the selector for a package for the remaining quantity, fills it up
    to its own ``max_quantity`` and repeats until nothing remains. Every
    iteration assigns at least one item (``max_quantity >= 1``), so the loop
    always terminates.
    """

    def __init__(self, include_item_count: bool = False):
        self.include_item_count = include_item_count

    def decompose(self, request: DecompositionRequest) -> DecompositionResult:
        """
        Decompose a request into package instances.

        Args:
            request: Total quantity, per-item weight and catalog.

        Returns:
            DecompositionResult. An empty catalog or a non-positive quantity
            yields an empty result with the "no configuration" summary.
        """
        active = [p for p in request.packages if p.is_active]

        if not active or request.total_quantity <= 0:
            logger.info(
                "Nothing to decompose (quantity=%d, active packages=%d)",
                request.total_quantity,
                len(active),
            )
            return DecompositionResult(packages=[], total_weight=0.0, summary=NO_CONFIGURATION_SUMMARY)

        logger.debug(
            "Decomposing %d items at %.3f lb over %s",
            request.total_quantity,
            request.weight_per_item,
            [p.label for p in active],
        )

        packages: list[DecomposedPackage] = []
        remaining = request.total_quantity
        while remaining > 0:
            chosen = select_package_for_quantity(remaining, active)
            items = min(remaining, chosen.max_quantity)
            weight = calculate_weight(chosen.empty_weight, items, request.weight_per_item)
            packages.append(
                DecomposedPackage(
                    package=chosen,
                    item_count=items,
                    calculated_weight=weight,
                    weight=round_weight(weight),
                )
            )
            remaining -= items

        result = DecompositionResult(
            packages=packages,
            total_weight=round_weight(sum(p.calculated_weight for p in packages)),
            summary=format_summary(packages, include_item_count=self.include_item_count),
        )
        logger.debug(
            "Decomposition result: %s (%s)",
            [f"{p.package.name}:{p.item_count}" for p in packages],
            result.summary,
        )
        return result


def calculate_packages(request: DecompositionRequest, include_item_count: bool = False) -> DecompositionResult:
    """Decompose ``request`` with the default decomposer."""
    return PackageDecomposer(include_item_count=include_item_count).decompose(request)


def decompose(
    total_quantity: int,
    weight_per_item: float,
    definitions: Iterable[PackageDefinition],
) -> DecompositionResult:
    """Convenience wrapper taking the request fields directly.

    Raises:
        ValueError: If ``weight_per_item`` is negative.
    """
    request = DecompositionRequest(
        total_quantity=total_quantity,
        weight_per_item=weight_per_item,
        packages=tuple(definitions),
    )
    return calculate_packages(request)
