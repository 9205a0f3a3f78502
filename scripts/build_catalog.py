"""
Build a museum catalog snapshot for the server to load at startup.

Two sources are supported:
- --wiki: parse the SkyBlock Wiki `Museum/Items` tables (with aliases)
  into data/wiki_museum_items.json
- --api: group the Hypixel item registry by museum-eligible category
  into data/api_museum_items.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from museum_tracker import api, wiki
from museum_tracker.cache import CacheClient
from museum_tracker.catalog import CatalogSource
from museum_tracker.config import get_settings
from museum_tracker.exceptions import APIError, WikiError


def _write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def build_wiki_catalog(
    data_dir: Path,
    cache: CacheClient | None = None,
    *,
    html_file: Path | None = None,
    force: bool = False,
) -> Path:
    if html_file is not None:
        if not html_file.exists():
            raise WikiError(f"Wiki HTML file not found at {html_file}")
        page_html = html_file.read_text(encoding="utf-8")
        source = html_file.name
    else:
        if cache is None:
            raise WikiError("A cache is required when fetching the wiki page")
        page_html = wiki.get_museum_page_html(cache, force=force)
        source = wiki.MUSEUM_PAGE

    snapshot = wiki.build_wiki_snapshot(page_html, source=source)
    output_path = data_dir / CatalogSource.WIKI.filename
    _write_json(output_path, snapshot.model_dump())

    print(
        f"Saved wiki museum dataset: {snapshot.category_count} categories, "
        f"{snapshot.total_items} items"
    )
    print(f"  Categories: {', '.join(snapshot.categories)}")
    print(f"  Aliases captured: {len(snapshot.aliases)}")
    print(f"  Written to {output_path}")
    return output_path


def build_registry_catalog(data_dir: Path, cache: CacheClient, *, force: bool = False) -> Path:
    result = api.get_items_resource(cache, force=force)
    print(f"Total items in item registry: {len(result.items):,}")

    catalog = api.build_api_catalog(result.items)
    output_path = data_dir / CatalogSource.API.filename
    _write_json(output_path, catalog)

    print(f"\nMuseum dataset created with {len(catalog)} categories:")
    for category, items in catalog.items():
        print(f"  - {category}: {len(items)} items")
    print(f"  Written to {output_path}")
    return output_path


def main() -> None:
    parser = argparse.ArgumentParser(description="Build a museum catalog snapshot")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--wiki", action="store_true", help="Build from the SkyBlock Wiki")
    group.add_argument("--api", action="store_true", help="Build from the Hypixel item registry")

    parser.add_argument(
        "--html-file",
        type=Path,
        help="Parse a saved copy of the wiki page instead of fetching it (wiki only)",
    )
    parser.add_argument("--force", action="store_true", help="Ignore cache and re-fetch")
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(message)s",
    )

    try:
        cache = CacheClient(settings.cache_dir)
        if args.wiki:
            build_wiki_catalog(
                settings.data_dir, cache, html_file=args.html_file, force=args.force
            )
        else:
            build_registry_catalog(settings.data_dir, cache, force=args.force)

    except (APIError, WikiError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
