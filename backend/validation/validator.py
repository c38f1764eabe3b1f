"""
validator.py
-----------
Per-file checks: size, JSON decoding and the role-specific top-level shape.
Raises on the first problem; returns an ExportRecord when the file is usable.

Only the top level is checked here. Malformed individual entries are left
to the username extractor, which skips them.
"""

import json

from errors import ParseError, SchemaError, SizeLimitError
from models import ExportRecord, FileRole, Limits

FOLLOWING_KEY = "relationships_following"


def check_size(name: str, size: int, limits: Limits) -> None:
    if size > limits.max_file_bytes:
        mb = limits.max_file_bytes / (1024 * 1024)
        raise SizeLimitError(
            name,
            f"{name} ({size / (1024 * 1024):.1f} MB) exceeds the maximum allowed ({mb:g} MB) per file.",
        )


def _decode(name: str, data: bytes):
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(name) from e
    if not text.strip():
        raise ParseError(name)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(name) from e


def validate_export(name: str, role: FileRole, data: bytes) -> ExportRecord:
    """
    Parse `data` and check it has the shape expected for `role`.
    following.json  -> {"relationships_following": [entry, ...]}
    followers_N.json -> [entry, ...]
    """
    parsed = _decode(name, data)

    if role is FileRole.FOLLOWING:
        if not isinstance(parsed, dict):
            raise SchemaError(name)
        entries = parsed.get(FOLLOWING_KEY)
        if not isinstance(entries, list):
            raise SchemaError(name)
    elif role is FileRole.FOLLOWERS:
        if not isinstance(parsed, list):
            raise SchemaError(name)
        entries = parsed
    else:
        raise ValueError(f"Cannot validate a file with role {role.value!r}: {name}")

    return ExportRecord(name=name, role=role, entries=tuple(entries))

