"""
Hypixel SkyBlock API client for profile, museum and item registry data.

Wraps the public Hypixel API (api.hypixel.net/v2). Player endpoints take a
caller-supplied API key and are never cached; the item registry is keyless
and cached indefinitely since it only feeds offline catalog builds.

The upstream reports failures through a `success` flag in the JSON body,
so the body decides success rather than the HTTP status.
"""

import logging
from typing import Any

import httpx

from museum_tracker.cache import CacheClient
from museum_tracker.config import get_settings
from museum_tracker.exceptions import APIError, UpstreamError
from museum_tracker.types import ItemsResult, MuseumResponse, ProfilesResponse, SkyblockItem

log = logging.getLogger(__name__)

MUSEUM_REGISTRY_CATEGORIES = (
    "SWORD",
    "BOW",
    "HELMET",
    "CHESTPLATE",
    "LEGGINGS",
    "BOOTS",
    "ACCESSORY",
    "WAND",
    "FISHING_ROD",
    "HOE",
    "AXE",
    "PICKAXE",
    "SHOVEL",
    "SHEARS",
    "COSMETIC",
    "PET_ITEM",
    "ARROW",
    "DEPLOYABLE",
)


def _get_json(path: str, params: dict[str, str], what: str) -> dict[str, Any]:
    settings = get_settings()
    try:
        response = httpx.get(
            f"{settings.api_base_url}{path}",
            params=params,
            headers={"User-Agent": settings.user_agent},
            timeout=settings.api_timeout,
        )
    except httpx.RequestError as e:
        raise APIError(f"Network error fetching {what}: {e}") from e

    try:
        data = response.json()
    except (ValueError, TypeError) as e:
        raise APIError(f"Invalid JSON response fetching {what}: HTTP {response.status_code}") from e

    if not isinstance(data, dict):
        raise APIError(f"Unexpected response format fetching {what}")
    return data


def get_profiles(uuid: str, api_key: str) -> ProfilesResponse:
    if not uuid or not api_key:
        raise APIError("uuid and api_key are required")

    log.info("Profiles for %s: fetching from Hypixel API", uuid)
    data = _get_json("/v2/skyblock/profiles", {"key": api_key, "uuid": uuid}, "profiles")
    if not data.get("success"):
        raise UpstreamError("Failed to fetch profiles", details=data)

    return data


def get_museum(profile_id: str, api_key: str) -> MuseumResponse:
    if not profile_id or not api_key:
        raise APIError("profile_id and api_key are required")

    log.info("Museum for profile %s: fetching from Hypixel API", profile_id)
    data = _get_json("/v2/skyblock/museum", {"key": api_key, "profile": profile_id}, "museum")
    if not data.get("success"):
        raise UpstreamError("Failed to fetch museum", details=data)

    return data


def get_items_resource(cache: CacheClient, *, force: bool = False) -> ItemsResult:
    if not force:
        cached = cache.get_items_resource()
        if cached is not None:
            log.info("Item registry: using cached API data (%d items)", len(cached))
            return ItemsResult(items=cached, from_cache=True)

    log.info("Item registry: fetching from Hypixel API")
    data = _get_json("/v2/resources/skyblock/items", {}, "item registry")
    if not data.get("success"):
        raise UpstreamError("Failed to fetch item registry", details=data)

    items = data.get("items")
    if not isinstance(items, list):
        raise APIError("Unexpected item registry format: 'items' is not a list")

    cache.set_items_resource(items)
    return ItemsResult(items=items, from_cache=False)


def build_api_catalog(items: list[SkyblockItem]) -> dict[str, list[str]]:
    catalog: dict[str, list[str]] = {}
    for item in items:
        category = item.get("category")
        name = item.get("name")
        if category not in MUSEUM_REGISTRY_CATEGORIES or not name:
            continue
        catalog.setdefault(category.lower(), []).append(name)
    return catalog
