"""
analyzer.py
-----------
Username extraction and follower reconciliation. No network or server
dependencies; everything happens in memory for one upload.

Public API:
    analyze_archive(data, limits, progress_callback) -> ReconciliationResult
    analyze_files(files, limits, progress_callback)  -> ReconciliationResult
    extract_usernames(record)                        -> list[str]
    deduplicate(usernames, label)                    -> (list[str], str | None)
    reconcile(following, followers, followers_files) -> ReconciliationResult
    assemble_result(reconciled, warnings)            -> ReconciliationResult
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from typing import Callable

from archive import extract_archive
from classifier import classify_files
from errors import AnalysisError, FormatError, MissingFollowersError, MissingFollowingError
from models import ClassifiedFile, ExportRecord, FileRole, Limits, ReconciliationResult, UploadedFile
from validation import check_size, validate_export

ProgressCallback = Callable[[str, int, int], None]

MAX_WORKERS = 4
LARGE_FOLLOWING = 1000

MSG_NOT_FOLLOWING_ANYONE = "You aren't following anyone yet. Nothing to check here."
MSG_NO_FOLLOWERS = "No one follows you yet. Clean slate, clean feed."
MSG_MUTUAL = "Everyone you follow follows you back, and you follow all of your followers."
SUB_MUTUAL = "A perfect match. Nothing to clean up."
MSG_CIRCLE_COMPLETE = "Everyone you follow follows you back. Your circle is complete."
SUB_CIRCLE_COMPLETE = "Nice work. Looks like you've curated your feed with intention."
MSG_SOME_DONT_FOLLOW_BACK = "Some accounts you follow don't follow you back."

WARN_MISSING_FOLLOWERS_FILES = (
    "You may have multiple followers files. Try uploading followers_2.json, "
    "followers_3.json, etc. for full results."
)


def _label(name: str) -> str:
    return name.replace("\\", "/").split("/")[-1]


# ── Username extraction ───────────────────────────────────────────

def extract_usernames(record: ExportRecord) -> list[str]:
    """Flatten every entry's string_list_data values; malformed entries are skipped."""
    names = []
    for entry in record.entries:
        if not isinstance(entry, dict):
            continue
        items = entry.get("string_list_data")
        if not isinstance(items, list):
            continue
        for item in items:
            if isinstance(item, dict) and isinstance(item.get("value"), str):
                names.append(item["value"])
    return names


def deduplicate(usernames: list[str], label: str = "your files") -> tuple[list[str], str | None]:
    unique = list(dict.fromkeys(usernames))
    if len(unique) != len(usernames):
        return unique, f"We cleaned up a few duplicates in {label} before comparing."
    return unique, None


# ── Reconciliation ────────────────────────────────────────────────

def reconcile(following: list[str], followers: list[str], followers_files: int = 1) -> ReconciliationResult:
    """
    Compare the Following sequence against the combined Followers sequence.
    Both output lists keep the order of the sequence they were filtered from.
    """
    following_set = set(following)
    followers_set = set(followers)
    counts = {"following_count": len(following_set), "followers_count": len(followers_set)}

    warnings = []
    if len(following) > LARGE_FOLLOWING and followers_files == 1:
        warnings.append(WARN_MISSING_FOLLOWERS_FILES)

    if not following:
        return ReconciliationResult(message=MSG_NOT_FOLLOWING_ANYONE, warnings=warnings, **counts)
    if not followers:
        return ReconciliationResult(message=MSG_NO_FOLLOWERS, warnings=warnings, **counts)

    not_following_back = [u for u in following if u not in followers_set]
    you_dont_follow_back = list(dict.fromkeys(u for u in followers if u not in following_set))

    message = subtext = None
    if not not_following_back and not you_dont_follow_back:
        message, subtext = MSG_MUTUAL, SUB_MUTUAL
    elif not not_following_back:
        message, subtext = MSG_CIRCLE_COMPLETE, SUB_CIRCLE_COMPLETE
    elif not you_dont_follow_back:
        message = MSG_SOME_DONT_FOLLOW_BACK

    return ReconciliationResult(
        not_following_back=not_following_back,
        you_dont_follow_back=you_dont_follow_back,
        message=message,
        subtext=subtext,
        warnings=warnings,
        **counts,
    )


def assemble_result(reconciled: ReconciliationResult, warnings: list[str]) -> ReconciliationResult:
    """Prepend pipeline warnings (duplicates, extra following files) to the advisory ones."""
    return replace(reconciled, warnings=[*warnings, *reconciled.warnings])


# ── Pipeline ──────────────────────────────────────────────────────

def _process_file(f: ClassifiedFile) -> list[str]:
    return extract_usernames(validate_export(f.name, f.role, f.data))


def _extract_all(
    files: list[ClassifiedFile],
    progress_callback: ProgressCallback | None = None,
) -> list[list[str]]:
    """
    Validate and flatten files in parallel. Results are stored by input index
    so the merge order never depends on completion order; the first failing
    file in upload order is the error that is raised.
    """
    total = len(files)

    def report(done: int) -> None:
        if progress_callback:
            progress_callback("Reading export files...", done, total)

    results: list[list[str] | None] = [None] * total
    failures: dict[int, AnalysisError] = {}
    report(0)
    with ThreadPoolExecutor(max_workers=min(total, MAX_WORKERS)) as executor:
        futures = {executor.submit(_process_file, f): i for i, f in enumerate(files)}
        done = 0
        for future in as_completed(futures):
            i = futures[future]
            try:
                results[i] = future.result()
            except AnalysisError as e:
                failures[i] = e
            done += 1
            report(done)

    if failures:
        raise failures[min(failures)]
    return results


def analyze_files(
    files: list[UploadedFile],
    limits: Limits | None = None,
    progress_callback: ProgressCallback | None = None,
) -> ReconciliationResult:
    limits = limits or Limits()
    classified = classify_files(files)
    if not classified:
        raise FormatError()

    following_files = [f for f in classified if f.role is FileRole.FOLLOWING]
    followers_files = [f for f in classified if f.role is FileRole.FOLLOWERS]
    if not following_files:
        raise MissingFollowingError()
    if not followers_files:
        raise MissingFollowersError()

    warnings = []
    if len(following_files) > 1:
        warnings.append(
            f"Found {len(following_files)} following.json files; only "
            f"{following_files[0].name} was used."
        )

    selected = [following_files[0], *followers_files]
    for f in selected:
        check_size(f.name, len(f.data), limits)

    sequences = _extract_all(selected, progress_callback)

    following, warning = deduplicate(sequences[0], _label(selected[0].name))
    if warning:
        warnings.append(warning)

    followers = []
    for f, names in zip(followers_files, sequences[1:]):
        unique, warning = deduplicate(names, _label(f.name))
        if warning:
            warnings.append(warning)
        followers.extend(unique)

    reconciled = reconcile(following, followers, followers_files=len(followers_files))
    return assemble_result(reconciled, warnings)


def analyze_archive(
    data: bytes,
    limits: Limits | None = None,
    progress_callback: ProgressCallback | None = None,
) -> ReconciliationResult:
    limits = limits or Limits()
    members = extract_archive(data, limits)
    if not classify_files(members):
        raise FormatError(
            "The archive has no following.json or followers_*.json files. "
            "Select 'Followers and following' when creating the export."
        )
    return analyze_files(members, limits, progress_callback)
