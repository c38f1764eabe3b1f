"""
cli.py
------
Command-line runner: reconcile a local export and print the JSON result.

    followcheck instagram-export.zip
    followcheck following.json followers_1.json followers_2.json --output result.json
"""

import argparse
import json
import sys
from pathlib import Path

import analyzer
import config
from errors import AnalysisError
from models import MB, Limits, UploadedFile


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    defaults = config.load_limits()
    parser = argparse.ArgumentParser(
        prog="followcheck",
        description="Find who doesn't follow you back in an Instagram data export.",
    )
    parser.add_argument("paths", nargs="+", type=Path,
                        help="One export .zip, or following.json plus followers_N.json files")
    parser.add_argument("--output", type=Path, default=None, help="Write JSON here instead of stdout")
    parser.add_argument("--max-file-mb", type=float, default=defaults.max_file_bytes / MB,
                        help="Per-file size ceiling in MB")
    parser.add_argument("--max-entries", type=int, default=defaults.max_entries,
                        help="Maximum JSON files read from an archive")
    return parser.parse_args(argv)


def run(paths: list[Path], limits: Limits):
    if len(paths) == 1 and paths[0].suffix.lower() == ".zip":
        return analyzer.analyze_archive(paths[0].read_bytes(), limits)
    files = [UploadedFile(name=p.name, data=p.read_bytes()) for p in paths]
    return analyzer.analyze_files(files, limits)


def write_result(payload: dict, output: Path | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    if output is None:
        sys.stdout.write(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    print(f"💾 Wrote result: {output}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    limits = Limits(max_file_bytes=int(args.max_file_mb * MB), max_entries=args.max_entries)

    missing = [str(p) for p in args.paths if not p.is_file()]
    if missing:
        print(f"❌ File not found: {', '.join(missing)}", file=sys.stderr)
        return 2

    try:
        result = run(args.paths, limits)
    except AnalysisError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"❌ Could not read input: {e}", file=sys.stderr)
        return 2

    for warning in result.warnings:
        print(f"⚠️  {warning}", file=sys.stderr)
    write_result(result.to_dict(), args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
