"""
archive.py
----------
ZIP extraction into memory. Member count and declared sizes of all `.json`
members are checked before anything is read; only following.json and
followers_N.json members are ever decompressed.

Public API:
    extract_archive(data, limits) -> list[UploadedFile]
"""

import io
import zipfile
import zlib

from classifier import classify_name
from errors import FormatError, SizeLimitError
from models import FileRole, Limits, UploadedFile
from validation import check_size

JSON_EXT = ".json"


def _json_members(z: zipfile.ZipFile) -> list[zipfile.ZipInfo]:
    return [
        info for info in z.infolist()
        if not info.is_dir() and info.filename.lower().endswith(JSON_EXT)
    ]


def _read_member(z: zipfile.ZipFile, info: zipfile.ZipInfo, limits: Limits) -> bytes:
    try:
        with z.open(info) as fh:
            # Declared sizes can lie; never read past the limit.
            return fh.read(limits.max_file_bytes + 1)
    except (RuntimeError, NotImplementedError) as e:
        raise FormatError(
            f"{info.filename} is encrypted or uses an unsupported compression method.",
            filename=info.filename,
        ) from e


def extract_archive(data: bytes, limits: Limits | None = None) -> list[UploadedFile]:
    limits = limits or Limits()
    try:
        with zipfile.ZipFile(io.BytesIO(data), "r") as z:
            members = _json_members(z)
            if not members:
                raise FormatError("The archive contains no JSON files. Choose JSON as the export format.")

            if len(members) > limits.max_entries:
                name = members[limits.max_entries].filename
                raise SizeLimitError(
                    name,
                    f"The archive holds more than {limits.max_entries:,} JSON files (stopped at {name}).",
                )
            for info in members:
                check_size(info.filename, info.file_size, limits)

            out = []
            for info in members:
                if classify_name(info.filename) is FileRole.IGNORED:
                    continue
                blob = _read_member(z, info, limits)
                check_size(info.filename, len(blob), limits)
                out.append(UploadedFile(name=info.filename, data=blob))
            return out
    except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError) as e:
        raise FormatError(f"File is not a valid ZIP archive ({e!s}).") from e
