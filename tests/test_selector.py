"""
Tests for single-quantity package selection and each fallback tier.
"""

import pytest

from package_assignment.algorithms.selector import (
    SELECTION_TIERS,
    SelectionTier,
    default_fallback,
    exact_fit,
    largest_fallback,
    overflow_fit,
    select_package_for_quantity,
    select_with_tier,
    tightest_cover,
)

from conftest import make_definition


# ---------------------------------------------------------------------------
# 1. Individual tiers
# ---------------------------------------------------------------------------

class TestTiers:
    def test_tier_order(self):
        assert [tier for tier, _ in SELECTION_TIERS] == [
            SelectionTier.EXACT,
            SelectionTier.OVERFLOW,
            SelectionTier.COVER,
            SelectionTier.DEFAULT,
            SelectionTier.LARGEST,
        ]

    @pytest.mark.parametrize("quantity, expected", [
        (1, "small"), (4, "small"), (5, "medium"), (10, "medium"), (11, "large"), (20, "large"),
    ])
    def test_exact_fit_boundaries(self, catalog, quantity, expected):
        assert exact_fit(quantity, catalog).id == expected

    def test_exact_fit_none_outside_ranges(self, catalog):
        assert exact_fit(21, catalog) is None

    def test_exact_fit_first_match_wins(self, small):
        twin = make_definition("twin", "Twin", 1, 4)
        assert exact_fit(2, [small, twin]).id == "small"
        assert exact_fit(2, [twin, small]).id == "twin"

    def test_overflow_only_above_every_capacity(self, catalog):
        assert overflow_fit(21, catalog).id == "large"
        assert overflow_fit(20, catalog) is None

    def test_overflow_tie_first_encountered(self):
        a = make_definition("a", "A", 1, 10)
        b = make_definition("b", "B", 5, 10)
        assert overflow_fit(50, [a, b]).id == "a"
        assert overflow_fit(50, [b, a]).id == "b"

    def test_tightest_cover_in_gap(self):
        """Quantity 7 falls between Small[1,4] and Large[11,20]."""
        small = make_definition("small", "Small", 1, 4)
        huge = make_definition("huge", "Huge", 21, 50)
        large = make_definition("large", "Large", 11, 20)
        assert tightest_cover(7, [small, huge, large]).id == "large"

    def test_tightest_cover_below_every_minimum(self):
        medium = make_definition("medium", "Medium", 5, 10)
        large = make_definition("large", "Large", 11, 20)
        assert tightest_cover(2, [large, medium]).id == "medium"

    def test_tightest_cover_none_when_too_big(self, catalog):
        assert tightest_cover(99, catalog) is None

    def test_default_fallback(self, catalog):
        assert default_fallback(0, catalog).id == "large"

    def test_default_fallback_none_without_default(self, small, medium):
        assert default_fallback(3, [small, medium]) is None

    def test_largest_fallback(self, catalog):
        assert largest_fallback(0, catalog).id == "large"
        assert largest_fallback(0, []) is None


# ---------------------------------------------------------------------------
# 2. Full selection
# ---------------------------------------------------------------------------

class TestSelectPackageForQuantity:
    def test_exact(self, catalog):
        chosen, tier = select_with_tier(7, catalog)
        assert chosen.name == "Medium"
        assert tier is SelectionTier.EXACT

    def test_overflow(self, catalog):
        chosen, tier = select_with_tier(25, catalog)
        assert chosen.name == "Large"
        assert tier is SelectionTier.OVERFLOW

    def test_gap_uses_cover(self):
        small = make_definition("small", "Small", 1, 4)
        large = make_definition("large", "Large", 11, 20)
        chosen, tier = select_with_tier(7, [small, large])
        assert chosen.id == "large"
        assert tier is SelectionTier.COVER

    def test_inactive_definitions_never_selected(self, small, medium):
        big_inactive = make_definition("old", "Old", 5, 100, is_active=False)
        assert select_package_for_quantity(50, [small, big_inactive, medium]).id == "medium"

    def test_empty_catalog(self):
        assert select_package_for_quantity(5, []) is None
        assert select_with_tier(5, []) == (None, None)

    def test_only_inactive(self):
        retired = make_definition("old", "Old", 1, 10, is_active=False)
        assert select_package_for_quantity(5, [retired]) is None

    def test_accepts_generator(self, catalog):
        assert select_package_for_quantity(3, (p for p in catalog)).id == "small"

    def test_always_returns_something_for_nonempty_catalog(self, catalog):
        for quantity in range(-2, 60):
            assert select_package_for_quantity(quantity, catalog) is not None

    def test_idempotent(self, catalog):
        first = [select_package_for_quantity(q, catalog) for q in range(1, 40)]
        second = [select_package_for_quantity(q, catalog) for q in range(1, 40)]
        assert first == second
