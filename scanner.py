from pathlib import Path
from typing import Generator

from classifier import classify_file
from models import ParsedPath


def _is_hidden(path: Path) -> bool:
    """Return True if any component of the path starts with a dot."""
    return any(part.startswith(".") for part in path.parts)


def scan_directory(
    source_path: Path,
    recursive: bool = True,
) -> Generator[Path, None, None]:
    """
    Yield image and video files under source_path in sorted order.
    Skips hidden paths, symlinks and anything that is not a regular file.
    """
    candidates = source_path.rglob("*") if recursive else source_path.glob("*")
    for file_path in sorted(candidates):
        rel = file_path.relative_to(source_path)

        if _is_hidden(rel):
            continue
        if file_path.is_symlink():
            continue
        if not file_path.is_file():
            continue

        if classify_file(ParsedPath.parse(str(file_path))) is not None:
            yield file_path


def count_media_files(source_path: Path, recursive: bool = True) -> int:
    """Count media files in source_path for progress bar sizing."""
    total = 0
    for _ in scan_directory(source_path, recursive=recursive):
        total += 1
    return total
