"""
Tests for quantity range overlap validation.

Ranges are closed intervals; sharing a boundary counts as overlapping.
"""

import itertools

import pytest

from package_assignment.algorithms.range_validator import (
    find_overlaps,
    ranges_overlap,
    validate_quantity_range,
)
from package_assignment.core.models import QuantityRange

from conftest import make_definition


class TestRangesOverlap:
    @pytest.mark.parametrize("a, b, expected", [
        ((1, 4), (5, 8), False),
        ((1, 4), (4, 8), True),
        ((3, 6), (1, 4), True),
        ((1, 10), (3, 4), True),
        ((9, 12), (1, 8), False),
    ])
    def test_closed_interval(self, a, b, expected):
        assert ranges_overlap(*a, *b) is expected
        assert ranges_overlap(*b, *a) is expected


class TestValidateQuantityRange:
    def test_overlapping_candidate_rejected(self, catalog):
        """[3,6] against Small[1,4] shares 3-4."""
        check = validate_quantity_range(QuantityRange(3, 6), catalog)
        assert not check.valid
        assert check.conflict.id == "small"
        assert check.message == 'Quantity range overlaps with "Small" (1-4)'

    def test_touching_boundary_rejected(self, catalog):
        check = validate_quantity_range(QuantityRange(20, 30), catalog)
        assert not check.valid
        assert check.conflict.name == "Large"

    def test_disjoint_candidate_accepted(self, catalog):
        check = validate_quantity_range(QuantityRange(21, 40), catalog)
        assert check.valid
        assert check.conflict is None
        assert check.message is None

    def test_edited_definition_excluded(self, catalog):
        """Widening Medium to [5,9] must not conflict with Medium itself."""
        check = validate_quantity_range(QuantityRange(5, 9), catalog, exclude_id="medium")
        assert check.valid

    def test_inactive_definitions_ignored(self, small, medium):
        retired = make_definition("old", "Old", 1, 100, is_active=False)
        check = validate_quantity_range(QuantityRange(11, 20), [small, medium, retired])
        assert check.valid

    def test_inactive_candidate_always_valid(self, catalog):
        check = validate_quantity_range(QuantityRange(1, 100, is_active=False), catalog)
        assert check.valid

    def test_first_conflict_in_list_order(self, catalog):
        check = validate_quantity_range(QuantityRange(1, 100), catalog)
        assert check.conflict.id == "small"
        check = validate_quantity_range(QuantityRange(1, 100), list(reversed(catalog)))
        assert check.conflict.id == "large"

    def test_accepts_any_range_like_object(self, catalog, medium):
        """Definitions themselves can be checked as candidates."""
        check = validate_quantity_range(medium, catalog, exclude_id="medium")
        assert check.valid

    def test_accepted_ranges_never_overlap(self, catalog):
        """Every candidate accepted against the catalog is disjoint from all active ranges."""
        for lo, hi in itertools.combinations_with_replacement(range(1, 26), 2):
            check = validate_quantity_range(QuantityRange(lo, hi), catalog)
            if check.valid:
                for p in catalog:
                    assert hi < p.min_quantity or p.max_quantity < lo, (
                        f"[{lo},{hi}] accepted but overlaps {p.label}"
                    )


class TestFindOverlaps:
    def test_clean_catalog(self, catalog):
        assert find_overlaps(catalog) == []

    def test_reports_each_pair(self, catalog):
        extra = make_definition("extra", "Extra", 4, 5)
        pairs = find_overlaps(catalog + [extra])
        assert [(a.id, b.id) for a, b in pairs] == [("small", "extra"), ("medium", "extra")]

    def test_inactive_not_reported(self, catalog):
        extra = make_definition("extra", "Extra", 4, 5, is_active=False)
        assert find_overlaps(catalog + [extra]) == []
