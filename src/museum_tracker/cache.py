"""
Cache layer for wiki pages and the item registry using diskcache.

Provides persistent caching across catalog builds to minimize wiki
fetches and item registry downloads. Player profile and museum data are
never cached; every request fetches them fresh. Entries are tagged
(api, wiki) for selective clearing.
"""

from pathlib import Path

from diskcache import Cache as DiskCache

from museum_tracker.types import SkyblockItem

_ITEMS_KEY = "api:items"


class CacheClient:
    def __init__(self, cache_dir: Path):
        self._cache_dir = cache_dir
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        self._cache = DiskCache(str(self._cache_dir))

    def get_items_resource(self) -> list[SkyblockItem] | None:
        return self._cache.get(_ITEMS_KEY)

    def set_items_resource(self, items: list[SkyblockItem]) -> None:
        self._cache.set(_ITEMS_KEY, items, expire=None, tag="api")

    def get_wiki_page(self, page_name: str) -> str | None:
        return self._cache.get(f"wiki:{page_name}")

    def set_wiki_page(self, page_name: str, content: str) -> None:
        self._cache.set(f"wiki:{page_name}", content, expire=None, tag="wiki")

    def clear_cache(self, tags: list[str] | None = None) -> None:
        if tags:
            for tag in tags:
                self._cache.evict(tag)
        else:
            self._cache.clear()
