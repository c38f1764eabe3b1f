"""Command-line runner and environment configuration tests."""

from __future__ import annotations

import json

import pytest

import cli
import config
from conftest import followers_bytes, following_bytes, zip_bytes
from models import MB


def test_cli_loose_files_to_output_file(tmp_path) -> None:
    following = tmp_path / "following.json"
    followers = tmp_path / "followers_1.json"
    following.write_bytes(following_bytes(["a", "b", "c"]))
    followers.write_bytes(followers_bytes(["b", "c", "d"]))
    output = tmp_path / "out" / "result.json"

    code = cli.main([str(following), str(followers), "--output", str(output)])

    assert code == 0
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["notFollowingBack"] == ["a"]
    assert payload["youDontFollowBack"] == ["d"]


def test_cli_zip_to_stdout(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    archive = tmp_path / "export.zip"
    archive.write_bytes(
        zip_bytes({"following.json": following_bytes([]), "followers_1.json": followers_bytes(["x"])})
    )

    assert cli.main([str(archive)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["message"] == "You aren't following anyone yet. Nothing to check here."


def test_cli_pipeline_error_exits_with_one(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    following = tmp_path / "following.json"
    following.write_bytes(following_bytes(["a"]))

    assert cli.main([str(following)]) == 1
    assert "followers_" in capsys.readouterr().err


def test_cli_size_limit_flag(tmp_path) -> None:
    following = tmp_path / "following.json"
    followers = tmp_path / "followers_1.json"
    following.write_bytes(following_bytes(["a"] * 200))
    followers.write_bytes(followers_bytes(["b"]))

    assert cli.main([str(following), str(followers), "--max-file-mb", "0.001"]) == 1


def test_cli_missing_path(tmp_path) -> None:
    assert cli.main([str(tmp_path / "nope.zip")]) == 2


def test_load_limits_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FOLLOWCHECK_MAX_FILE_MB", raising=False)
    monkeypatch.delenv("FOLLOWCHECK_MAX_ENTRIES", raising=False)
    limits = config.load_limits()
    assert limits.max_file_bytes == 5 * MB
    assert limits.max_entries == 20_000


def test_load_limits_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FOLLOWCHECK_MAX_FILE_MB", "2.5")
    monkeypatch.setenv("FOLLOWCHECK_MAX_ENTRIES", "100")
    limits = config.load_limits()
    assert limits.max_file_bytes == int(2.5 * MB)
    assert limits.max_entries == 100


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_invalid_environment_values_fail_fast(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("FOLLOWCHECK_MAX_UPLOAD_MB", raw)
    with pytest.raises(ValueError, match="FOLLOWCHECK_MAX_UPLOAD_MB"):
        config.max_upload_bytes()


def test_cli_unreadable_input_exits_with_two(tmp_path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    following = tmp_path / "following.json"
    followers = tmp_path / "followers_1.json"
    following.write_bytes(following_bytes(["a"]))
    followers.write_bytes(followers_bytes(["a"]))

    def denied(self):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(cli.Path, "read_bytes", denied)

    assert cli.main([str(following), str(followers)]) == 2
    assert "Could not read input" in capsys.readouterr().err
