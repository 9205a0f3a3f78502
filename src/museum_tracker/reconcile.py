"""
Reconciliation of player donations against the museum catalog.

Computes the per-category missing items and the aggregate completion
counts. Catalog items are deduplicated by normalized key for the total,
while missing entries are deduplicated per (target category, key) pair.
Malformed inputs degrade to empty results; nothing here raises.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from museum_tracker.catalog import Catalog
from museum_tracker.donations import DonationRecord
from museum_tracker.normalize import normalize_name

log = logging.getLogger(__name__)

TARGET_CATEGORIES: dict[str, str] = {
    "Weapons": "Weapons",
    "Armor Sets": "Armor Sets",
    "Rarities": "Rarities",
    "Special": "Special",
    "Special Items": "Special",
}

EMPTY_CATALOG_HINT = (
    "Completion percentage requires a populated dataset; currently using raw donations only."
)


@dataclass
class MissingEntry:
    category: str
    name: str


@dataclass
class ReconciliationResult:
    donated: int
    total: int | None
    completion_pct: int | None
    missing: list[MissingEntry] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    hints: list[str] = field(default_factory=list)


def completion_percentage(donated: int, total: int) -> int | None:
    if total <= 0:
        return None
    # Round half up, not half to even.
    return math.floor(donated / total * 100 + 0.5)


def _target_items(categories: Any) -> list[tuple[str, str]]:
    if not isinstance(categories, dict):
        return []
    pairs: list[tuple[str, str]] = []
    for category, items in categories.items():
        mapped = TARGET_CATEGORIES.get(category)
        if mapped is None or not isinstance(items, list):
            continue
        pairs.extend((mapped, item) for item in items)
    return pairs


def reconcile(catalog: Catalog, donations: DonationRecord) -> ReconciliationResult:
    unique_keys: set[str] = set()
    seen_missing: set[tuple[str, str]] = set()
    missing: list[MissingEntry] = []

    for category, item_name in _target_items(catalog.categories):
        key = normalize_name(item_name)
        unique_keys.add(key)
        if key in donations.all_normalized:
            continue
        if (category, key) in seen_missing:
            continue
        seen_missing.add((category, key))
        missing.append(MissingEntry(category=category, name=item_name))

    total = len(unique_keys)
    hints: list[str] = []
    if total == 0:
        hints.append(EMPTY_CATALOG_HINT)

    result = ReconciliationResult(
        donated=donations.total_donated,
        total=total or None,
        completion_pct=completion_percentage(donations.total_donated, total),
        missing=missing,
        categories=list(donations.categories),
        hints=hints,
    )
    log.debug(
        "Reconciled %d donations against %d catalog items: %d missing",
        result.donated,
        total,
        len(missing),
    )
    return result
