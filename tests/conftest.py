"""
Shared fixtures for the media-rename test suite.
"""
from datetime import datetime
from pathlib import Path
from typing import Optional

import pytest


# ── File-creation helpers ─────────────────────────────────────────────────────

def make_file(path: Path, content: bytes = b"dummy content") -> Path:
    """Create a file with the given content; create parent dirs as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


def exiftool_output(create_date: Optional[str] = None) -> str:
    """Text shaped like exiftool's default output, optionally with a Create Date."""
    lines = [
        "ExifTool Version Number         : 12.30",
        "File Name                       : IMG_0001.JPG",
        "Directory                       : /photos",
        "File Modification Date/Time     : 2021:12:25 14:23:59+02:00",
    ]
    if create_date:
        lines.append(f"Create Date                     : {create_date}")
    lines.append("Comment                         : Some:Value:With:Colons")
    return "\n".join(lines) + "\n"


def fixed_reader(create_date: Optional[str] = None):
    """Metadata reader double returning the same CreateDate for every file."""
    metadata = {"CreateDate": create_date} if create_date else {}

    def reader(file_path):
        return dict(metadata)

    return reader


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def src(tmp_path: Path) -> Path:
    """Empty source directory."""
    d = tmp_path / "source"
    d.mkdir()
    return d


@pytest.fixture
def missing_dir(tmp_path: Path) -> Path:
    """A directory path that does not exist (listing fails → no collisions)."""
    return tmp_path / "does-not-exist"


@pytest.fixture
def fixed_date() -> datetime:
    return datetime(2024, 3, 15, 10, 30, 0)
