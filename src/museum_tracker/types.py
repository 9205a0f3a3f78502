"""
Type definitions for Hypixel SkyBlock API responses.

Provides TypedDict structures matching the parts of the upstream payloads
this package reads. The upstream format is not contractually stable, so
every field beyond `success` is optional.
"""

from typing import Any, NamedTuple, NotRequired, TypedDict


class ProfileMember(TypedDict):
    last_save: NotRequired[int]


class Profile(TypedDict):
    profile_id: str
    selected: NotRequired[bool]
    cute_name: NotRequired[str]
    members: NotRequired[dict[str, ProfileMember]]


class ProfilesResponse(TypedDict):
    success: bool
    profiles: NotRequired[list[Profile] | None]
    cause: NotRequired[str]


class MuseumProfile(TypedDict):
    items: NotRequired[dict[str, Any]]
    special: NotRequired[list[Any]]


class MuseumResponse(TypedDict):
    success: bool
    profile: NotRequired[MuseumProfile]
    members: NotRequired[dict[str, dict[str, Any]]]
    museum: NotRequired[dict[str, Any]]
    cause: NotRequired[str]


class SkyblockItem(TypedDict):
    id: str
    name: str
    category: NotRequired[str]
    tier: NotRequired[str]
    museum: NotRequired[bool]


class ItemsResource(TypedDict):
    success: bool
    lastUpdated: NotRequired[int]
    items: list[SkyblockItem]


class ItemsResult(NamedTuple):
    items: list[SkyblockItem]
    from_cache: bool
