"""Best-effort logging of raw museum payloads, one JSON file per request."""

import json
import logging
import re
import time
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^a-zA-Z0-9_-]")


def _safe(value: Any) -> str:
    return _UNSAFE.sub("", str(value))


def request_log_path(log_dir: Path, uuid: str, profile_id: str | None) -> Path:
    timestamp_ms = int(time.time() * 1000)
    filename = f"museum_{_safe(uuid)}_{_safe(profile_id or 'unknown')}_{timestamp_ms}.json"
    return log_dir / filename


def write_request_log(
    log_dir: Path, uuid: str, profile_id: str | None, payload: Any
) -> Path | None:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        path = request_log_path(log_dir, uuid, profile_id)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        log.warning("Failed to write museum log: %s", e)
        return None

    log.debug("Museum payload written to %s", path)
    return path
