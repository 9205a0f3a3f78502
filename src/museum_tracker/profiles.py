import logging
from typing import Any

from museum_tracker.types import Profile

log = logging.getLogger(__name__)


def member_key(identifier: str) -> str:
    return str(identifier or "").replace("-", "")


def _last_save(profile: Any, key: str) -> float:
    try:
        value = profile["members"][key]["last_save"]
    except (KeyError, TypeError, IndexError):
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def select_profile(profiles: Any, identifier: str) -> Profile | None:
    """
    Pick the active profile for a player.

    A profile flagged `selected` wins outright. Otherwise the profile with the
    most recent `last_save` for the player's member entry is chosen; ties and
    missing timestamps fall back to the original order.
    """
    if not isinstance(profiles, list) or not profiles:
        return None

    for profile in profiles:
        if isinstance(profile, dict) and profile.get("selected"):
            return profile

    key = member_key(identifier)
    best = profiles[0]
    best_save = _last_save(best, key)
    for profile in profiles[1:]:
        last_save = _last_save(profile, key)
        if last_save > best_save:
            best, best_save = profile, last_save

    log.debug("No selected profile flag; picked profile by last_save=%s", best_save)
    return best
