"""Tests for request_log module."""

import json
import logging
from pathlib import Path

from museum_tracker.request_log import request_log_path, write_request_log


def test_writes_payload(tmp_path: Path):
    payload = {"success": True, "members": {"abc": {}}}

    path = write_request_log(tmp_path / "logs", "1234-abcd", "prof-1", payload)

    assert path is not None
    assert path.parent == tmp_path / "logs"
    assert json.loads(path.read_text(encoding="utf-8")) == payload


def test_filename_is_sanitized(tmp_path: Path):
    path = request_log_path(tmp_path, "../12 34/ab", "prof:1?")

    assert path.parent == tmp_path
    assert path.name.startswith("museum_1234ab_prof1_")
    assert path.suffix == ".json"


def test_missing_profile_id_uses_unknown(tmp_path: Path):
    path = request_log_path(tmp_path, "uuid", None)

    assert path.name.startswith("museum_uuid_unknown_")


def test_write_failure_only_warns(tmp_path: Path, caplog):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("file in the way")

    with caplog.at_level(logging.WARNING):
        result = write_request_log(blocker / "logs", "uuid", "prof", {"success": True})

    assert result is None
    assert "Failed to write museum log" in caplog.text


def test_unserializable_payload_only_warns(tmp_path: Path, caplog):
    with caplog.at_level(logging.WARNING):
        result = write_request_log(tmp_path, "uuid", "prof", {"bad": object()})

    assert result is None
    assert "Failed to write museum log" in caplog.text
