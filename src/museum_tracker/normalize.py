"""
Item name normalization.

Every cross-dataset comparison (wiki catalog, item registry, player
donations) goes through `normalize_name`: two names refer to the same
collectible if and only if they normalize to the same key.
"""

import re
from typing import Any

_COLOR_CODE = re.compile(r"§.")
_DISALLOWED = re.compile(r"[^a-z0-9 ]+")
_WHITESPACE = re.compile(r"\s+")


def normalize_name(name: Any) -> str:
    if not name:
        return ""
    key = str(name).lower()
    key = _COLOR_CODE.sub("", key)
    key = key.replace("_", " ")
    key = _DISALLOWED.sub(" ", key)
    return _WHITESPACE.sub(" ", key).strip()
