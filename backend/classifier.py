"""
classifier.py
-------------
Labels uploaded files by name. Only the base name counts, so archive member
paths and folder uploads classify the same as loose files.
"""

import re

from models import ClassifiedFile, FileRole, UploadedFile

FOLLOWING_FILE = "following.json"
_FOLLOWERS_RE = re.compile(r"followers_[0-9]+\.json")


def _basename(name: str) -> str:
    return name.replace("\\", "/").rstrip("/").split("/")[-1]


def classify_name(name: str) -> FileRole:
    base = _basename(name)
    if base == FOLLOWING_FILE:
        return FileRole.FOLLOWING
    if _FOLLOWERS_RE.fullmatch(base):
        return FileRole.FOLLOWERS
    return FileRole.IGNORED


def classify_files(files: list[UploadedFile]) -> list[ClassifiedFile]:
    """Classify in upload order and drop everything that is not an export file."""
    out = []
    for f in files:
        role = classify_name(f.name)
        if role is not FileRole.IGNORED:
            out.append(ClassifiedFile(name=f.name, role=role, data=f.data))
    return out
