"""
Pure overlap checks for package quantity ranges.

Ranges are closed intervals: ``[1, 4]`` and ``[4, 8]`` share quantity 4 and
therefore overlap. Administrators pick disjoint integer boundaries
(``[1, 4]`` then ``[5, 8]``).

Only active definitions take part. An inactive candidate may use any range
and is never rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from package_assignment.core.models import PackageDefinition


class RangeLike(Protocol):
    min_quantity: int
    max_quantity: int


@dataclass(frozen=True)
class RangeCheck:
    """Outcome of validating one candidate range."""

    valid: bool
    conflict: Optional[PackageDefinition] = None

    @property
    def message(self) -> Optional[str]:
        if self.conflict is None:
            return None
        return (
            f'Quantity range overlaps with "{self.conflict.name}" '
            f"({self.conflict.min_quantity}-{self.conflict.max_quantity})"
        )


def ranges_overlap(a_min: int, a_max: int, b_min: int, b_max: int) -> bool:
    """Closed-interval overlap test.

    Example:
        >>> ranges_overlap(1, 4, 4, 8)
        True
        >>> ranges_overlap(1, 4, 5, 8)
        False
    """
    return a_min <= b_max and a_max >= b_min


def validate_quantity_range(
    candidate: RangeLike,
    definitions: Iterable[PackageDefinition],
    exclude_id: Optional[str] = None,
) -> RangeCheck:
    """
    Check a candidate range against every other active definition.

    Args:
        candidate:   Anything with ``min_quantity``/``max_quantity``; an
                     ``is_active`` attribute set to False skips the check.
        definitions: Current catalog, in store order.
        exclude_id:  Id of the definition being edited, so it does not
                     conflict with itself.

    Returns:
        RangeCheck; on failure ``conflict`` is the first overlapping
        definition in iteration order.
    """
    if not getattr(candidate, "is_active", True):
        return RangeCheck(valid=True)

    for p in definitions:
        if not p.is_active or (exclude_id is not None and p.id == exclude_id):
            continue
        if ranges_overlap(candidate.min_quantity, candidate.max_quantity, p.min_quantity, p.max_quantity):
            return RangeCheck(valid=False, conflict=p)

    return RangeCheck(valid=True)


def find_overlaps(definitions: Iterable[PackageDefinition]) -> list[tuple[PackageDefinition, PackageDefinition]]:
    """Return every pair of active definitions whose ranges overlap."""
    active = [p for p in definitions if p.is_active]
    pairs = []
    for i, a in enumerate(active):
        for b in active[i + 1:]:
            if ranges_overlap(a.min_quantity, a.max_quantity, b.min_quantity, b.max_quantity):
                pairs.append((a, b))
    return pairs
