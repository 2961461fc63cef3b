"""
Package selector — pick one package definition for a quantity.

Tiers are tried in order; the first one that returns a definition wins:

  1. exact      — first definition whose range contains the quantity
  2. overflow   — quantity above every range: the largest capacity
  3. cover      — quantity in a gap: smallest capacity that still holds it
  4. default    — the definition flagged as default
  5. largest    — the largest capacity, or None for an empty catalog

As long as one active definition exists something is returned, so gaps in
the configured ranges never block checkout.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence

from package_assignment.core.models import PackageDefinition

logger = logging.getLogger(__name__)


class SelectionTier(str, Enum):
    EXACT = "exact"
    OVERFLOW = "overflow"
    COVER = "cover"
    DEFAULT = "default"
    LARGEST = "largest"


def _largest(packages: Sequence[PackageDefinition]) -> Optional[PackageDefinition]:
    # max() keeps the first of equal elements.
    return max(packages, key=lambda p: p.max_quantity, default=None)


def exact_fit(quantity: int, packages: Sequence[PackageDefinition]) -> Optional[PackageDefinition]:
    """First definition with ``min_quantity <= quantity <= max_quantity``."""
    return next((p for p in packages if p.covers(quantity)), None)


def overflow_fit(quantity: int, packages: Sequence[PackageDefinition]) -> Optional[PackageDefinition]:
    """Largest definition, but only when the quantity exceeds every capacity."""
    largest = _largest(packages)
    if largest is not None and quantity > largest.max_quantity:
        return largest
    return None


def tightest_cover(quantity: int, packages: Sequence[PackageDefinition]) -> Optional[PackageDefinition]:
    """Smallest-capacity definition that can still hold the quantity."""
    holding = [p for p in packages if p.max_quantity >= quantity]
    return min(holding, key=lambda p: p.max_quantity, default=None)


def default_fallback(quantity: int, packages: Sequence[PackageDefinition]) -> Optional[PackageDefinition]:
    """The definition flagged as default, if any."""
    return next((p for p in packages if p.is_default), None)


def largest_fallback(quantity: int, packages: Sequence[PackageDefinition]) -> Optional[PackageDefinition]:
    """The largest-capacity definition; None only for an empty catalog."""
    return _largest(packages)


# Ordered tiers, tried first to last.
SELECTION_TIERS: list[tuple[SelectionTier, Callable[[int, Sequence[PackageDefinition]], Optional[PackageDefinition]]]] = [
    (SelectionTier.EXACT, exact_fit),
    (SelectionTier.OVERFLOW, overflow_fit),
    (SelectionTier.COVER, tightest_cover),
    (SelectionTier.DEFAULT, default_fallback),
    (SelectionTier.LARGEST, largest_fallback),
]


def select_with_tier(
    quantity: int,
    definitions: Iterable[PackageDefinition],
) -> tuple[Optional[PackageDefinition], Optional[SelectionTier]]:
    """
    Select a definition for ``quantity`` and report which tier matched.

    Args:
        quantity:    Number of items that must go into one package.
        definitions: Catalog in store order; inactive entries are dropped.

    Returns:
        (definition, tier), or (None, None) when no definition is active.
    """
    active = [p for p in definitions if p.is_active]
    if not active:
        return None, None

    for tier, pick in SELECTION_TIERS:
        chosen = pick(quantity, active)
        if chosen is not None:
            logger.debug("quantity %d -> %s via %s", quantity, chosen.label, tier.value)
            return chosen, tier

    return None, None


def select_package_for_quantity(
    quantity: int,
    definitions: Iterable[PackageDefinition],
) -> Optional[PackageDefinition]:
    """Pick the best package definition for ``quantity``, or None for an empty catalog."""
    chosen, _ = select_with_tier(quantity, definitions)
    return chosen
