"""Per-file validation: size, decoding and top-level shape."""

from __future__ import annotations

import pytest

from conftest import followers_bytes, following_bytes
from errors import ParseError, SchemaError, SizeLimitError
from models import FileRole, Limits
from validation import check_size, validate_export


def test_valid_following_file_returns_entries() -> None:
    record = validate_export("following.json", FileRole.FOLLOWING, following_bytes(["a", "b"]))
    assert record.role is FileRole.FOLLOWING
    assert len(record.entries) == 2


def test_valid_followers_file_returns_entries() -> None:
    record = validate_export("followers_1.json", FileRole.FOLLOWERS, followers_bytes(["a"]))
    assert record.name == "followers_1.json"
    assert len(record.entries) == 1


def test_utf8_bom_is_accepted() -> None:
    record = validate_export("followers_1.json", FileRole.FOLLOWERS, b"\xef\xbb\xbf[]")
    assert record.entries == ()


@pytest.mark.parametrize("data", [b"", b"   \n", b"{not json", b"\xff\xfe\x00"])
def test_unreadable_text_is_a_parse_error(data: bytes) -> None:
    with pytest.raises(ParseError) as excinfo:
        validate_export("followers_3.json", FileRole.FOLLOWERS, data)
    assert excinfo.value.filename == "followers_3.json"
    assert "followers_3.json" in str(excinfo.value)


@pytest.mark.parametrize(
    "data",
    [
        b"[]",
        b'{"relationships_followers": []}',
        b'{"relationships_following": {"value": "a"}}',
        b'{"relationships_following": null}',
    ],
)
def test_following_shape_errors(data: bytes) -> None:
    with pytest.raises(SchemaError) as excinfo:
        validate_export("following.json", FileRole.FOLLOWING, data)
    assert excinfo.value.filename == "following.json"


@pytest.mark.parametrize("data", [b"{}", b'{"relationships_followers": []}', b'"a"', b"42"])
def test_followers_shape_errors(data: bytes) -> None:
    with pytest.raises(SchemaError):
        validate_export("followers_1.json", FileRole.FOLLOWERS, data)


def test_check_size_rejects_oversized_file() -> None:
    with pytest.raises(SizeLimitError) as excinfo:
        check_size("following.json", 11, Limits(max_file_bytes=10))
    assert excinfo.value.filename == "following.json"

