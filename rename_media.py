#!/usr/bin/env python3
"""
rename-media: Rename images and videos to yyyyMMdd_HHmmss[_n].ext using
their capture time (exiftool CreateDate, or a timestamp in the filename).

Usage:
    python rename_media.py --source ~/Pictures/Import
    python rename_media.py --source ~/Pictures/Import --apply
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from metadata_reader import DEFAULT_EXIFTOOL, ExifToolReader
from models import RenameSummary
from renamer import MediaDateTimeRenamer
from scanner import count_media_files, scan_directory


# ── Progress helpers ──────────────────────────────────────────────────────────

class _NoOpBar:
    """Minimal tqdm-compatible no-op for --no-progress mode."""
    def __init__(self, *args, **kwargs):
        pass

    def update(self, n=1):
        pass

    def set_postfix(self, **kwargs):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        pass


def _make_bar(total: int, desc: str, use_progress: bool):
    if use_progress:
        return tqdm(total=total, unit="file", desc=desc, ncols=80)
    return _NoOpBar()


# ── Core pipeline ─────────────────────────────────────────────────────────────

def rename_file(old_path: Path, new_path: Path) -> None:
    """
    Rename on disk, refusing to replace an existing file.

    The existence check and os.rename are separate steps: a file created at
    new_path in between is silently replaced on POSIX.
    """
    if new_path.exists():
        raise FileExistsError(f"Target already exists: {new_path}")
    os.rename(old_path, new_path)


def process_source(
    source_path: Path,
    renamer: MediaDateTimeRenamer,
    apply: bool,
    recursive: bool,
    verbose: bool,
    use_progress: bool,
) -> RenameSummary:
    """Compute (and with apply, perform) renames for one source directory."""
    summary = RenameSummary(source_path=str(source_path))

    if use_progress:
        print(f"\nCounting files in {source_path} ...")
    total = count_media_files(source_path, recursive=recursive)

    with _make_bar(total, desc=str(source_path.name), use_progress=use_progress) as bar:
        for file_path in scan_directory(source_path, recursive=recursive):
            summary.files_scanned += 1
            bar.update(1)
            bar.set_postfix(renamed=summary.files_renamed)

            try:
                new_path = Path(renamer.replace(str(file_path)))

                if new_path == file_path:
                    summary.files_unchanged += 1
                    if verbose:
                        print(f"  KEEP    {file_path}")
                    continue

                if apply:
                    rename_file(file_path, new_path)

                summary.files_renamed += 1
                if verbose:
                    action = "RENAME " if apply else "PREVIEW"
                    print(f"  {action} {file_path}  →  {new_path.name}")

            except Exception as e:
                summary.files_errored += 1
                summary.errors.append((str(file_path), str(e)))
                if verbose:
                    print(f"  ERROR   {file_path}: {e}", file=sys.stderr)

    return summary


# ── Output ────────────────────────────────────────────────────────────────────

def print_summary(summaries: List[RenameSummary], apply: bool) -> None:
    print("\n" + "=" * 44)
    print("  Media Rename Summary")
    if not apply:
        print("  (PREVIEW — no files were renamed)")
    print("=" * 44)

    total_scanned = total_renamed = total_unchanged = total_errored = 0

    for s in summaries:
        print(f"\nSource: {s.source_path}")
        print(f"  Scanned   : {s.files_scanned:>6,} files")
        print(f"  Renamed   : {s.files_renamed:>6,} files")
        print(f"  Unchanged : {s.files_unchanged:>6,} files")
        print(f"  Errors    : {s.files_errored:>6,} files")
        if s.errors:
            show = s.errors if len(s.errors) <= 20 else s.errors[:20]
            for path, msg in show:
                print(f"    ! {path}: {msg}")
            if len(s.errors) > 20:
                print(f"    ... and {len(s.errors) - 20} more errors")
        total_scanned += s.files_scanned
        total_renamed += s.files_renamed
        total_unchanged += s.files_unchanged
        total_errored += s.files_errored

    if len(summaries) > 1:
        print(f"\n{'─' * 44}")
        print("Totals")
        print(f"  Scanned   : {total_scanned:>6,} files")
        print(f"  Renamed   : {total_renamed:>6,} files")
        print(f"  Unchanged : {total_unchanged:>6,} files")
        print(f"  Errors    : {total_errored:>6,} files")
    print()


# ── CLI ───────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rename_media.py",
        description=MediaDateTimeRenamer.description(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python rename_media.py --source ~/Pictures/Import\n"
            "  python rename_media.py --source /Volumes/SD1/DCIM --apply --verbose\n"
            "  python rename_media.py --source . --exiftool /opt/bin/exiftool --no-recursive\n"
        ),
    )
    parser.add_argument(
        "--source",
        nargs="+",
        required=True,
        metavar="PATH",
        help="One or more directories to process (sequentially, in one run).",
    )
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Actually rename files. Without it only a preview is printed.",
    )
    parser.add_argument(
        "--no-recursive",
        action="store_false",
        dest="recursive",
        help="Only process files directly inside each source directory.",
    )
    parser.add_argument(
        "--exiftool",
        metavar="PATH",
        default=DEFAULT_EXIFTOOL,
        help="exiftool executable to use (default: exiftool on PATH).",
    )
    parser.add_argument(
        "--rewrite-canonical",
        action="store_true",
        help="Also re-derive names for files already named yyyyMMdd_HHmmss.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print each file's action (PREVIEW / RENAME / KEEP / ERROR).",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable progress bars (useful when piping output to log files).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    sources: List[Path] = []
    for raw in args.source:
        p = Path(raw).expanduser().resolve()
        if not p.exists():
            parser.error(f"Source path does not exist: {p}")
        if not p.is_dir():
            parser.error(f"Source path is not a directory: {p}")
        sources.append(p)

    # One renamer per run: collision state spans all sources
    renamer = MediaDateTimeRenamer(
        metadata_reader=ExifToolReader(args.exiftool),
        skip_canonical=not args.rewrite_canonical,
    )

    if not args.apply:
        print("[PREVIEW] No files will be renamed. Pass --apply to rename.")

    summaries: List[RenameSummary] = []
    for source_path in sources:
        print(f"\nProcessing: {source_path}")
        summary = process_source(
            source_path=source_path,
            renamer=renamer,
            apply=args.apply,
            recursive=args.recursive,
            verbose=args.verbose,
            use_progress=not args.no_progress,
        )
        summaries.append(summary)

    print_summary(summaries, apply=args.apply)


if __name__ == "__main__":
    main()
