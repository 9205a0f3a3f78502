"""Tests for reconcile module."""

import pytest

from museum_tracker.catalog import Catalog
from museum_tracker.donations import DonationRecord
from museum_tracker.reconcile import (
    EMPTY_CATALOG_HINT,
    MissingEntry,
    completion_percentage,
    reconcile,
)


def _donations(*keys: str, total: int | None = None, categories=None) -> DonationRecord:
    return DonationRecord(
        all_normalized=set(keys),
        total_donated=len(keys) if total is None else total,
        categories=categories or [],
    )


def test_basic_completion():
    catalog = Catalog(categories={"Weapons": ["Sword A", "Sword B"]})

    result = reconcile(catalog, _donations("sword a"))

    assert result.donated == 1
    assert result.total == 2
    assert result.completion_pct == 50
    assert result.missing == [MissingEntry(category="Weapons", name="Sword B")]
    assert result.hints == []


def test_empty_catalog():
    result = reconcile(Catalog(), _donations("sword a", "sword b"))

    assert result.donated == 2
    assert result.total is None
    assert result.completion_pct is None
    assert result.missing == []
    assert result.hints == [EMPTY_CATALOG_HINT]


def test_catalog_without_target_categories_counts_as_empty():
    catalog = Catalog(categories={"sword": ["Aspect of the End"], "bow": ["Terminator"]})

    result = reconcile(catalog, _donations())

    assert result.total is None
    assert result.missing == []
    assert result.hints == [EMPTY_CATALOG_HINT]


def test_special_items_folded_into_special():
    catalog = Catalog(
        categories={
            "Special": ["Shiny Prism", "Golden Trophy"],
            "Special Items": ["Shiny Prism"],
        }
    )

    result = reconcile(catalog, _donations())

    assert result.total == 2
    assert result.missing == [
        MissingEntry(category="Special", name="Shiny Prism"),
        MissingEntry(category="Special", name="Golden Trophy"),
    ]


def test_total_deduplicated_but_missing_per_category():
    catalog = Catalog(
        categories={
            "Weapons": ["Dragon Fusion"],
            "Rarities": ["Dragon Fusion", "Dragon_Fusion"],
        }
    )

    result = reconcile(catalog, _donations())

    assert result.total == 1
    assert result.missing == [
        MissingEntry(category="Weapons", name="Dragon Fusion"),
        MissingEntry(category="Rarities", name="Dragon Fusion"),
    ]


def test_missing_keeps_display_name_and_source_order():
    catalog = Catalog(
        categories={
            "Armor Sets": ["Superior Dragon Armor"],
            "Weapons": ["§6Hyperion", "Aspect of the End"],
        }
    )

    result = reconcile(catalog, _donations("aspect of the end"))

    assert [(m.category, m.name) for m in result.missing] == [
        ("Armor Sets", "Superior Dragon Armor"),
        ("Weapons", "§6Hyperion"),
    ]


def test_alias_resolution_marks_base_donated():
    catalog = Catalog(
        categories={"Special": ["Dragon Fusion"]},
        aliases={"old dragon fusion": "dragon fusion"},
    )
    # Alias bases are already expanded into the global set by extraction.
    donations = _donations("old dragon fusion", "dragon fusion", total=1)

    result = reconcile(catalog, donations)

    assert result.missing == []
    assert result.completion_pct == 100


def test_non_target_categories_ignored():
    catalog = Catalog(categories={"Weapons": ["Sword A"], "Accessories": ["Ring"]})

    result = reconcile(catalog, _donations())

    assert result.total == 1
    assert result.missing == [MissingEntry(category="Weapons", name="Sword A")]


def test_completion_can_exceed_100():
    catalog = Catalog(categories={"Weapons": ["Sword A"]})

    result = reconcile(catalog, _donations("sword a", total=3))

    assert result.completion_pct == 300
    assert result.missing == []


def test_observed_categories_passed_through():
    catalog = Catalog(categories={"Weapons": ["Sword A"]})

    result = reconcile(catalog, _donations(categories=["weapons", "value"]))

    assert result.categories == ["weapons", "value"]


def test_malformed_catalog_degrades():
    catalog = Catalog(categories={"Weapons": "Sword A", "Special": None})

    result = reconcile(catalog, _donations())

    assert result.total is None
    assert result.missing == []


@pytest.mark.parametrize(
    "donated,total,expected",
    [
        (1, 2, 50),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (0, 5, 0),
        (3, 1, 300),
        (5, 0, None),
    ],
)
def test_completion_percentage(donated, total, expected):
    assert completion_percentage(donated, total) == expected
