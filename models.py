import os
from dataclasses import dataclass, field
from typing import List, NamedTuple, Tuple


@dataclass(frozen=True)
class ParsedPath:
    directory: str           # "" for a bare filename
    name: str                # base name without extension
    extension: str           # case preserved, e.g. ".JPG"; "" if none
    full_path: str

    @staticmethod
    def parse(path: str) -> "ParsedPath":
        directory, filename = os.path.split(path)
        name, extension = os.path.splitext(filename)
        return ParsedPath(
            directory=directory,
            name=name,
            extension=extension,
            full_path=path,
        )

    @property
    def filename(self) -> str:
        return self.name + self.extension

    def stem_without_extension(self) -> str:
        """Filename up to the first occurrence of the extension text."""
        if not self.extension:
            return self.filename
        return self.filename.split(self.extension)[0]


class BaseNameKey(NamedTuple):
    """Collision bucket: names that differ only by their numeric suffix."""
    directory: str
    formatted_timestamp: str
    extension_lower: str


@dataclass
class RenameSummary:
    source_path: str
    files_scanned: int = 0
    files_renamed: int = 0
    files_unchanged: int = 0
    files_errored: int = 0
    errors: List[Tuple[str, str]] = field(default_factory=list)
