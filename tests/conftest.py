"""Pytest configuration: import path for backend/ modules and export builders."""

from __future__ import annotations

import io
import json
import sys
import zipfile
from pathlib import Path

import pytest

BACKEND_DIR = Path(__file__).resolve().parents[1] / "backend"
backend_dir_str = str(BACKEND_DIR)
if backend_dir_str not in sys.path:
    # Ensure tests can import backend modules without package installation.
    sys.path.insert(0, backend_dir_str)


def _entry(username: str) -> dict:
    return {
        "title": "",
        "media_list_data": [],
        "string_list_data": [
            {"href": f"https://www.instagram.com/{username}", "value": username, "timestamp": 1700000000}
        ],
    }


def following_bytes(usernames: list[str]) -> bytes:
    """Encode usernames the way Instagram writes following.json."""
    return json.dumps({"relationships_following": [_entry(u) for u in usernames]}).encode("utf-8")


def followers_bytes(usernames: list[str]) -> bytes:
    """Encode usernames the way Instagram writes followers_N.json."""
    return json.dumps([_entry(u) for u in usernames]).encode("utf-8")


def zip_bytes(members: dict[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as z:
        for name, data in members.items():
            z.writestr(name, data)
    return buf.getvalue()


@pytest.fixture
def export_dir() -> str:
    return "connections/followers_and_following"
