"""
Museum catalog loading.

The reference catalog comes from one of three on-disk snapshots, picked by
file presence: the wiki-derived snapshot (with aliases), the item-registry
snapshot, or a manually curated one. Whichever is found is resolved once
into a single `Catalog`; nothing downstream branches on the source again.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from museum_tracker.exceptions import CatalogError
from museum_tracker.normalize import normalize_name

log = logging.getLogger(__name__)

ALIAS_OVERRIDES_FILE = "alias_overrides.yaml"


class CatalogSource(Enum):
    WIKI = "wiki"
    API = "api"
    MANUAL = "manual"
    NONE = "none"

    @property
    def filename(self) -> str | None:
        return _SNAPSHOT_FILES.get(self)


_SNAPSHOT_FILES: dict[CatalogSource, str] = {
    CatalogSource.WIKI: "wiki_museum_items.json",
    CatalogSource.API: "api_museum_items.json",
    CatalogSource.MANUAL: "museum_items.json",
}


@dataclass(frozen=True)
class Catalog:
    categories: dict[str, list[str]] = field(default_factory=dict)
    aliases: dict[str, str] = field(default_factory=dict)
    source: CatalogSource = CatalogSource.NONE

    @property
    def item_count(self) -> int:
        return sum(len(items) for items in self.categories.values())

    def is_empty(self) -> bool:
        return not self.categories


def build_alias_table(pairs: dict[Any, Any]) -> dict[str, str]:
    aliases: dict[str, str] = {}
    for alias, base in pairs.items():
        alias_key = normalize_name(alias)
        base_key = normalize_name(base)
        if not alias_key or not base_key:
            continue
        if alias_key == base_key:
            log.debug("Dropping self-alias '%s'", alias)
            continue
        aliases[alias_key] = base_key
    return aliases


def _clean_categories(raw: Any) -> dict[str, list[str]]:
    if not isinstance(raw, dict):
        raise CatalogError(f"Expected a category mapping, got {type(raw).__name__}")
    categories: dict[str, list[str]] = {}
    for category, items in raw.items():
        if not isinstance(items, list):
            log.debug("Skipping non-list category '%s'", category)
            continue
        categories[str(category)] = [str(item) for item in items if item is not None]
    return categories


def _parse_snapshot(
    source: CatalogSource, data: Any
) -> tuple[dict[str, list[str]], dict[str, str]]:
    if source is CatalogSource.WIKI:
        if not isinstance(data, dict):
            raise CatalogError("Wiki snapshot must be a JSON object")
        categories = _clean_categories(data.get("categories") or {})
        raw_aliases = data.get("aliases") or {}
        if not isinstance(raw_aliases, dict):
            raise CatalogError("Wiki snapshot 'aliases' must be a mapping")
        return categories, build_alias_table(raw_aliases)
    return _clean_categories(data), {}


def _read_snapshot(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise CatalogError(f"Failed to read catalog snapshot {path}: {e}") from e


def load_alias_overrides(data_dir: Path) -> dict[str, str]:
    override_path = data_dir / ALIAS_OVERRIDES_FILE
    if not override_path.exists():
        return {}

    try:
        with override_path.open(encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Failed to read alias overrides {override_path}: {e}") from e

    if not isinstance(overrides, dict):
        raise CatalogError(f"Alias overrides in {override_path} must be a mapping")
    return build_alias_table(overrides)


def find_snapshot(data_dir: Path) -> tuple[CatalogSource, Path | None]:
    for source, filename in _SNAPSHOT_FILES.items():
        path = data_dir / filename
        if path.exists():
            return source, path
    return CatalogSource.NONE, None


def load_catalog(data_dir: Path) -> Catalog:
    source, path = find_snapshot(data_dir)
    if path is None:
        log.warning(
            "No museum dataset found in %s; run scripts/build_catalog.py to populate one",
            data_dir,
        )
        return Catalog()

    try:
        categories, aliases = _parse_snapshot(source, _read_snapshot(path))
    except CatalogError as e:
        log.warning("Museum dataset unavailable: %s", e)
        return Catalog()

    try:
        aliases.update(load_alias_overrides(data_dir))
    except CatalogError as e:
        log.warning("Ignoring alias overrides: %s", e)

    catalog = Catalog(categories=categories, aliases=aliases, source=source)
    log.info(
        "%s-sourced museum dataset loaded: %d categories, %d items, %d aliases",
        source.value,
        len(categories),
        catalog.item_count,
        len(aliases),
    )
    return catalog
