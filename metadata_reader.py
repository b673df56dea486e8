"""
Capture metadata via the exiftool command line.

exiftool's default output is one 'Tag Name   : value' pair per line; this
module turns that into a dict keyed by the tag name with whitespace removed
('Create Date' -> 'CreateDate').
"""
import subprocess
from pathlib import Path
from typing import Dict, Union

DEFAULT_EXIFTOOL = "exiftool"

MetadataMap = Dict[str, str]


class MetadataUnavailable(Exception):
    """exiftool could not be run, failed, or produced undecodable output."""


def parse_metadata_output(text: str) -> MetadataMap:
    """
    Parse exiftool's human-readable output.

    Values may contain colons themselves (times, comments), so only the
    first colon separates key from value. Later duplicates win.
    """
    metadata: MetadataMap = {}
    for line in text.splitlines():
        if not line.strip():
            continue
        raw_key, _, raw_value = line.partition(":")
        key = "".join(raw_key.split())
        metadata[key] = raw_value.strip()
    return metadata


def read_metadata(
    file_path: Union[str, Path],
    exiftool: str = DEFAULT_EXIFTOOL,
) -> MetadataMap:
    """
    Run exiftool on file_path and return its parsed output.
    Blocks until exiftool exits. Raises MetadataUnavailable on any failure.
    """
    try:
        result = subprocess.run(
            [exiftool, str(file_path)],
            capture_output=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise MetadataUnavailable(
            f"{exiftool} exited with status {e.returncode} for {file_path}"
        ) from e
    except OSError as e:
        raise MetadataUnavailable(f"Cannot run {exiftool}: {e}") from e

    try:
        output = result.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MetadataUnavailable(
            f"Undecodable {exiftool} output for {file_path}"
        ) from e

    return parse_metadata_output(output)


class ExifToolReader:
    """Callable reader bound to a specific exiftool executable."""

    def __init__(self, executable: str = DEFAULT_EXIFTOOL) -> None:
        self.executable = executable

    def __call__(self, file_path: Union[str, Path]) -> MetadataMap:
        return read_metadata(file_path, exiftool=self.executable)
