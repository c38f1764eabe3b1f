"""
config.py
---------
Environment-driven settings shared by the Flask app and the command line.

    FOLLOWCHECK_MAX_FILE_MB    per-file size ceiling (default 5)
    FOLLOWCHECK_MAX_ENTRIES    max JSON members read from an archive (default 20000)
    FOLLOWCHECK_MAX_UPLOAD_MB  whole-request ceiling for the web app (default 25)
"""

import os

from models import DEFAULT_MAX_ENTRIES, DEFAULT_MAX_FILE_BYTES, MB, Limits

DEFAULT_MAX_UPLOAD_BYTES = 25 * MB


def _env_number(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def load_limits() -> Limits:
    return Limits(
        max_file_bytes=int(_env_number("FOLLOWCHECK_MAX_FILE_MB", DEFAULT_MAX_FILE_BYTES / MB) * MB),
        max_entries=int(_env_number("FOLLOWCHECK_MAX_ENTRIES", DEFAULT_MAX_ENTRIES)),
    )


def max_upload_bytes() -> int:
    return int(_env_number("FOLLOWCHECK_MAX_UPLOAD_MB", DEFAULT_MAX_UPLOAD_BYTES / MB) * MB)
