import os
import re
from typing import Dict, Set


def candidate_name(formatted_timestamp: str, extension: str, index: int) -> str:
    """
    index < 0 → '<timestamp><ext>'
    index ≥ 0 → '<timestamp>_<index + 1><ext>'
    """
    if index < 0:
        return f"{formatted_timestamp}{extension}"
    return f"{formatted_timestamp}_{index + 1}{extension}"


class DirectoryIndex:
    """
    Lower-cased filenames known to exist per directory.

    Each directory is listed at most once per instance; names handed out
    during the run are added so later lookups see them. Nothing is ever
    removed.
    """

    def __init__(self) -> None:
        self._names: Dict[str, Set[str]] = {}

    def ensure_loaded(self, directory: str) -> None:
        if directory in self._names:
            return
        try:
            entries = os.listdir(directory or ".")
        except OSError:
            # Missing or unreadable directory: nothing to collide with
            entries = []
        self._names[directory] = {entry.lower() for entry in entries}

    def contains(self, directory: str, name_lower: str) -> bool:
        self.ensure_loaded(directory)
        return name_lower in self._names[directory]

    def add(self, directory: str, name_lower: str) -> None:
        self.ensure_loaded(directory)
        self._names[directory].add(name_lower)

    def compute_initial_suffix(
        self,
        directory: str,
        formatted_timestamp: str,
        extension_lower: str,
    ) -> int:
        """
        Highest numeric suffix already on disk for this timestamp/extension,
        or -1 when there is none. An existing unsuffixed name does not count
        here; next_available_suffix finds it through contains().
        """
        self.ensure_loaded(directory)
        pattern = re.compile(
            rf"^{re.escape(formatted_timestamp)}(?:_(\d+))?{re.escape(extension_lower)}$"
        )
        highest = -1
        for name in self._names[directory]:
            match = pattern.match(name)
            if match and match.group(1) is not None:
                highest = max(highest, int(match.group(1)))
        return highest

    def next_available_suffix(
        self,
        directory: str,
        formatted_timestamp: str,
        extension_lower: str,
        start_index: int,
    ) -> int:
        """First index ≥ start_index whose candidate name is not taken."""
        index = start_index
        while self.contains(
            directory, candidate_name(formatted_timestamp, extension_lower, index)
        ):
            index += 1
        return index
