"""Weight calculation and human-readable shipping summaries.

Summaries must be byte-for-byte stable for the same input: checkout caches
them and UI snapshot tests compare them verbatim. Package names are grouped in
first-seen order.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Sequence

from package_assignment.core.models import DecomposedPackage, DecompositionResult


NO_CONFIGURATION_SUMMARY = "No package configuration available"


def round_weight(value: float) -> float:
    """Round a weight to 2 decimals, halves rounding up.

    Example:
        >>> round_weight(1.005)
        1.01
        >>> round_weight(2.5)
        2.5

    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    exact = Decimal(str(value))
    with localcontext() as ctx:
        # Enough digits for every integer part a float can carry.
        ctx.prec = max(ctx.prec, exact.adjusted() + 4)
        return float(exact.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def calculate_weight(empty_weight: float, item_count: int, weight_per_item: float) -> float:
    """Tare weight plus contents, at full precision.

    Example:
        >>> calculate_weight(0.5, 7, 0.5)
        4.0
    """
    return empty_weight + item_count * weight_per_item


def group_package_names(packages: Sequence[DecomposedPackage]) -> list[tuple[str, int]]:
    """Count package instances per definition name, in first-seen order."""
    counts: dict[str, int] = {}
    for p in packages:
        counts[p.package.name] = counts.get(p.package.name, 0) + 1
    return list(counts.items())


def format_summary(packages: Sequence[DecomposedPackage], include_item_count: bool = False) -> str:
    """Render the "Ships in: ..." line for a decomposition.

    Args:
        packages: Package instances in decomposition order.
        include_item_count: Append the total number of items carried.

    Returns:
        Summary string.

    Example:
        >>> format_summary([])
        'No package configuration available'
    """
    if not packages:
        return NO_CONFIGURATION_SUMMARY

    total_items = sum(p.item_count for p in packages)

    if len(packages) == 1:
        summary = f"Ships in: 1 {packages[0].package.name}"
        if include_item_count:
            summary += f" ({total_items} items)"
        return summary

    parts = [name if count == 1 else f"{count} {name}" for name, count in group_package_names(packages)]
    summary = f"Ships in: {len(packages)} packages ({' + '.join(parts)})"
    if include_item_count:
        summary += f" — {total_items} items"
    return summary


def format_breakdown(result: DecompositionResult) -> str:
    """Generate a multi-line console report of a decomposition."""
    lines = [
        "=" * 60,
        result.summary,
        "=" * 60,
    ]
    for index, p in enumerate(result.packages, start=1):
        length, width, height = p.package.dimensions
        lines.append(
            f"  #{index:<3} {p.package.name:<20} "
            f"{p.item_count:>4} items  "
            f"{length:g}x{width:g}x{height:g} in  "
            f"{p.weight:.2f} lb"
        )
    if result.packages:
        lines.append("")
    lines.extend([
        f"Total packages: {result.total_packages}",
        f"Total items:    {result.total_items}",
        f"Total weight:   {result.total_weight:.2f} lb",
        "=" * 60,
    ])
    return "\n".join(lines)
