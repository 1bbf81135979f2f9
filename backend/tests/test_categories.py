"""Tests for category resolution."""

import pytest

from qahq.core.categories import (
    Category,
    format_category_name,
    is_valid_category,
    normalize_category,
    resolve_category,
)


class TestResolveCategory:
    """Tests for free-text category lookup."""

    @pytest.mark.parametrize("raw,expected", [
        ("Fitness", Category.FITNESS_EXERCISE),
        ("  Health & Wellness ", Category.GENERAL_HEALTH),
        ("fitness_exercise", Category.FITNESS_EXERCISE),
        ("Money", Category.MONEY_FINANCE),
        ("technology", Category.SCIENCE),
        ("SLEEP", Category.SLEEP),
    ])
    def test_known_spellings(self, raw, expected):
        assert resolve_category(raw) is expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "astrology"])
    def test_unresolvable(self, raw):
        assert resolve_category(raw) is None

    def test_normalize_keeps_unknown_values(self):
        """Unknown text comes back cleaned up so callers can report it."""
        assert normalize_category("  Astrology ") == "astrology"

    def test_every_category_is_valid(self):
        assert all(is_valid_category(c.value) for c in Category)


class TestFormatCategoryName:
    """Tests for display names."""

    def test_known(self):
        assert format_category_name("fitness_exercise") == "Fitness & Exercise"

    def test_unknown_falls_back_to_title_case(self):
        assert format_category_name("space_travel") == "Space Travel"
