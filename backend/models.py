"""
models.py
---------
Typed values passed between pipeline stages. All of them are built fresh
for one upload and never mutated afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum

MB = 1024 * 1024

DEFAULT_MAX_FILE_BYTES = 5 * MB
DEFAULT_MAX_ENTRIES = 20_000


class FileRole(str, Enum):
    FOLLOWING = "following"
    FOLLOWERS = "followers"
    IGNORED = "ignored"


@dataclass(frozen=True)
class Limits:
    """Resource bounds enforced before any file is parsed."""

    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    max_entries: int = DEFAULT_MAX_ENTRIES


@dataclass(frozen=True)
class UploadedFile:
    """One named blob, either a loose upload or an archive member."""

    name: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ClassifiedFile:
    name: str
    role: FileRole
    data: bytes


@dataclass(frozen=True)
class ExportRecord:
    """Validated JSON of one export file: its ordered relationship entries."""

    name: str
    role: FileRole
    entries: tuple


@dataclass(frozen=True)
class ReconciliationResult:
    """Final outcome handed to the web layer or the command line."""

    not_following_back: list[str] = field(default_factory=list)
    you_dont_follow_back: list[str] = field(default_factory=list)
    message: str | None = None
    subtext: str | None = None
    warnings: list[str] = field(default_factory=list)
    following_count: int = 0
    followers_count: int = 0

    def to_dict(self) -> dict:
        return {
            "notFollowingBack":  list(self.not_following_back),
            "youDontFollowBack": list(self.you_dont_follow_back),
            "message":           self.message,
            "subtext":           self.subtext,
            "warnings":          list(self.warnings),
            "followingCount":    self.following_count,
            "followersCount":    self.followers_count,
        }
