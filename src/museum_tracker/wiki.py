"""
SkyBlock Wiki client for the museum item tables.

Wraps the Fandom MediaWiki parse API to fetch the rendered `Museum/Items`
page and extracts the per-category item tables from it. The notes column
of each row links items that count toward the row's item when donated;
those become the alias table. Pages are cached indefinitely to minimize
load on the wiki servers.
"""

import html
import logging
import re
from datetime import UTC, datetime
from typing import Any

import httpx

from museum_tracker.cache import CacheClient
from museum_tracker.catalog import build_alias_table
from museum_tracker.config import get_settings
from museum_tracker.exceptions import WikiError
from museum_tracker.models import WikiSnapshot
from museum_tracker.normalize import normalize_name

log = logging.getLogger(__name__)

_WIKI_API_URL = "https://hypixel-skyblock.fandom.com/api.php"
MUSEUM_PAGE = "Museum/Items"

_SECTION_HEADER = re.compile(r'<th[^>]*colspan="3"[^>]*>\s*<b>([^<]+)</b>', re.IGNORECASE)
_ROW = re.compile(r"<tr[^>]*>.*?</tr>", re.DOTALL)
_CELL = re.compile(r"<td.*?>.*?</td>", re.DOTALL)
_HEADER_CELL = re.compile(r"<th", re.IGNORECASE)
_ANCHOR_TITLE = re.compile(r'<a [^>]*title="([^"]+)"[^>]*>', re.IGNORECASE)


def _fetch_wiki_page(page_name: str) -> str:
    settings = get_settings()
    try:
        response = httpx.get(
            _WIKI_API_URL,
            params={
                "action": "parse",
                "page": page_name,
                "prop": "text",
                "format": "json",
            },
            headers={"User-Agent": settings.user_agent},
            timeout=settings.api_timeout,
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise WikiError(
            f"Failed to fetch wiki page '{page_name}': HTTP {e.response.status_code}"
        ) from e
    except httpx.RequestError as e:
        raise WikiError(f"Network error fetching wiki page '{page_name}': {e}") from e

    try:
        data: dict[str, Any] = response.json()
    except (ValueError, TypeError) as e:
        raise WikiError(f"Invalid JSON response for wiki page '{page_name}'") from e

    if "error" in data:
        error_info = data["error"].get("info", "Unknown error")
        raise WikiError(f"Wiki page '{page_name}' not found: {error_info}")

    if "parse" not in data or "text" not in data["parse"]:
        raise WikiError(f"Unexpected wiki API response format for '{page_name}'")

    return data["parse"]["text"]["*"]


def get_museum_page_html(cache: CacheClient, *, force: bool = False) -> str:
    if not force:
        cached = cache.get_wiki_page(MUSEUM_PAGE)
        if cached is not None:
            log.info("Wiki page '%s': using cached HTML", MUSEUM_PAGE)
            return cached

    log.info("Wiki page '%s': fetching from wiki API", MUSEUM_PAGE)
    html_content = _fetch_wiki_page(MUSEUM_PAGE)
    cache.set_wiki_page(MUSEUM_PAGE, html_content)
    return html_content


def _anchor_titles(cell_html: str) -> list[str]:
    titles = []
    for match in _ANCHOR_TITLE.finditer(cell_html):
        title = html.unescape(match.group(1)).strip()
        if title:
            titles.append(title)
    return titles


def dedupe_names(names: list[str]) -> list[str]:
    seen: set[str] = set()
    unique = []
    for name in names:
        key = normalize_name(name)
        if key in seen:
            continue
        seen.add(key)
        unique.append(name)
    return unique


def parse_section(section_html: str) -> tuple[list[str], dict[str, str]]:
    items: list[str] = []
    alias_pairs: dict[str, str] = {}

    for row_match in _ROW.finditer(section_html):
        row_html = row_match.group(0)
        if _HEADER_CELL.search(row_html):
            continue
        cells = _CELL.findall(row_html)
        if len(cells) < 2:
            continue

        titles = _anchor_titles(cells[1])
        if not titles:
            continue
        item_name = titles[0]
        items.append(item_name)

        if len(cells) > 2:
            for alias_name in _anchor_titles(cells[2]):
                alias_pairs[alias_name] = item_name

    return dedupe_names(items), build_alias_table(alias_pairs)


def parse_museum_tables(page_html: str) -> tuple[dict[str, list[str]], dict[str, str]]:
    """
    Split the museum page into category sections and parse each table.

    Sections start at a three-column `<th>` header whose bold text is the
    category name and run until the next such header. Sections with no
    items are dropped. When an alias appears under several base items the
    first mapping wins.
    """
    headers = [
        (html.unescape(m.group(1)).strip(), m.start(), m.end())
        for m in _SECTION_HEADER.finditer(page_html)
    ]

    categories: dict[str, list[str]] = {}
    aliases: dict[str, str] = {}
    for i, (name, _, end) in enumerate(headers):
        next_start = headers[i + 1][1] if i + 1 < len(headers) else len(page_html)
        items, section_aliases = parse_section(page_html[end:next_start])
        if items:
            categories[name] = items
        for alias, base in section_aliases.items():
            aliases.setdefault(alias, base)

    return categories, aliases


def build_wiki_snapshot(page_html: str, source: str = MUSEUM_PAGE) -> WikiSnapshot:
    categories, aliases = parse_museum_tables(page_html)
    if not categories:
        raise WikiError("No museum item tables found in wiki HTML")

    return WikiSnapshot(
        source=source,
        generated_at=datetime.now(UTC).isoformat(),
        category_count=len(categories),
        total_items=sum(len(items) for items in categories.values()),
        categories=categories,
        aliases=aliases,
    )
