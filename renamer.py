"""
Rename engine: maps a media file path to '<yyyyMMdd_HHmmss>[_<n>]<ext>'.

One MediaDateTimeRenamer is meant to live for exactly one run. It only
computes names; moving the files is up to the caller.
"""
import os
from datetime import datetime
from typing import Callable, Dict, Optional

from classifier import is_image, is_video
from directory_index import DirectoryIndex, candidate_name
from metadata_reader import ExifToolReader, MetadataMap
from models import BaseNameKey, ParsedPath
from timestamp_resolver import TimestampResolver

MONTH_DAY_TIME_FORMAT = "%m%d_%H%M%S"


def format_timestamp(date: datetime) -> str:
    """yyyyMMdd_HHmmss; the year is padded here since %Y is not below 1000."""
    return f"{date.year:04d}{date.strftime(MONTH_DAY_TIME_FORMAT)}"


class MediaDateTimeRenamer:
    def __init__(
        self,
        metadata_reader: Optional[Callable[[str], MetadataMap]] = None,
        skip_canonical: bool = True,
        directory_index: Optional[DirectoryIndex] = None,
    ) -> None:
        self.resolver = TimestampResolver(
            metadata_reader or ExifToolReader(),
            skip_canonical=skip_canonical,
        )
        self.directory_index = directory_index or DirectoryIndex()
        # Highest suffix index handed out (or found on disk) per bucket
        self._suffix_floor: Dict[BaseNameKey, int] = {}

    @staticmethod
    def description() -> str:
        return "Renames image and video files to a yyyyMMdd_HHmmss format."

    def replace(self, file_path: str) -> str:
        """
        Return the new path for file_path, or file_path itself when the file
        is not media, no capture time can be found, or anything goes wrong.
        """
        parsed = ParsedPath.parse(file_path)
        if not (is_image(parsed) or is_video(parsed)):
            return file_path

        try:
            date = self.resolver.resolve(file_path)
        except Exception:
            date = None

        if date is None:
            return file_path

        try:
            return self._assign(parsed, date)
        except Exception:
            return file_path

    def _assign(self, parsed: ParsedPath, date: datetime) -> str:
        formatted = format_timestamp(date)
        extension_lower = parsed.extension.lower()
        key = BaseNameKey(parsed.directory, formatted, extension_lower)

        if key not in self._suffix_floor:
            self._suffix_floor[key] = self.directory_index.compute_initial_suffix(
                parsed.directory, formatted, extension_lower
            )

        index = self.directory_index.next_available_suffix(
            parsed.directory, formatted, extension_lower, self._suffix_floor[key]
        )
        new_name = candidate_name(formatted, parsed.extension, index)

        self._suffix_floor[key] = index
        self.directory_index.add(parsed.directory, new_name.lower())

        return os.path.join(parsed.directory, new_name)
