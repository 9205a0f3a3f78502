"""
Donation extraction from museum payloads.

The upstream museum payload comes in two layouts: a `profile` shape with
`profile.items` and `profile.special`, and a `member` shape keyed by the
player's dashless UUID. Both are flattened into a `DonationRecord` of
normalized item keys. Extraction fails soft: entries without a usable name
are counted but otherwise skipped, and an unrecognised payload yields an
empty record.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from museum_tracker.normalize import normalize_name
from museum_tracker.profiles import member_key

log = logging.getLogger(__name__)

SPECIAL_CATEGORY = "special"
NAME_FIELDS = ("name", "display_name", "item_id", "id")


@dataclass
class DonationRecord:
    by_category: dict[str, set[str]] = field(default_factory=dict)
    all_normalized: set[str] = field(default_factory=set)
    total_donated: int = 0
    categories: list[str] = field(default_factory=list)

    def add(self, category: str, name: Any, aliases: dict[str, str]) -> None:
        key = normalize_name(name)
        if not key:
            return
        self.by_category.setdefault(category, set()).add(key)
        self.all_normalized.add(key)
        base = aliases.get(key)
        if base:
            self.all_normalized.add(base)


def _is_empty_slot(entry: Any) -> bool:
    # Containers occupy a slot even when empty; only null-like scalars do not.
    if isinstance(entry, (dict, list)):
        return False
    return not entry


def entry_name(entry: Any) -> Any:
    if isinstance(entry, dict):
        for name_field in NAME_FIELDS:
            value = entry.get(name_field)
            if value:
                return value
        return None
    if isinstance(entry, str):
        return entry
    return None


def _extract_entries(
    record: DonationRecord, category: str, items: Any, aliases: dict[str, str]
) -> None:
    if isinstance(items, list):
        record.total_donated += sum(1 for entry in items if not _is_empty_slot(entry))
        for entry in items:
            record.add(category, entry_name(entry), aliases)
    elif isinstance(items, dict):
        record.total_donated += len(items)
        for item_key in items:
            record.add(category, item_key, aliases)


def _find_member(payload: dict[str, Any], identifier: str) -> dict[str, Any] | None:
    key = member_key(identifier)
    for container in (payload.get("museum"), payload):
        if not isinstance(container, dict):
            continue
        members = container.get("members")
        if isinstance(members, dict):
            member = members.get(key)
            if member:
                return member if isinstance(member, dict) else None
    return None


def _extract_profile_shape(
    record: DonationRecord, profile: dict[str, Any], aliases: dict[str, str]
) -> None:
    items = profile.get("items") or {}
    if isinstance(items, dict):
        if items:
            record.categories = list(items)
        for category, category_items in items.items():
            _extract_entries(record, category, category_items, aliases)

    special = profile.get("special") or []
    if isinstance(special, list):
        record.total_donated += len(special)
        for entry in special:
            record.add(SPECIAL_CATEGORY, entry_name(entry), aliases)


def _extract_member_shape(
    record: DonationRecord, member: dict[str, Any], aliases: dict[str, str]
) -> None:
    record.categories = list(member)
    for category, category_items in member.items():
        _extract_entries(record, category, category_items, aliases)


def extract_donations(
    payload: Any, identifier: str, aliases: dict[str, str] | None = None
) -> DonationRecord:
    aliases = aliases or {}
    record = DonationRecord()
    if not isinstance(payload, dict):
        log.warning("Museum payload is not an object; no donations extracted")
        return record

    profile = payload.get("profile")
    if isinstance(profile, dict) and (profile.get("items") or profile.get("special")):
        _extract_profile_shape(record, profile, aliases)
        return record

    member = _find_member(payload, identifier)
    if member is not None:
        _extract_member_shape(record, member, aliases)
        return record

    log.info("Unrecognised museum payload shape for %s; no donations extracted", identifier)
    return record
