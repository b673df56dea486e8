import re
from datetime import datetime, timedelta
from typing import Callable, Mapping, Optional

from classifier import CANONICAL_PATTERN, is_already_canonical
from metadata_reader import MetadataMap
from models import ParsedPath

CREATE_DATE_FIELD = "CreateDate"

METADATA_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"
FILENAME_DATE_FORMAT = "%Y%m%d_%H%M%S"

# 13-digit epoch milliseconds starting with 15 (mid 2017 to early 2020s)
EPOCH_MILLIS_PATTERN = re.compile(r"15\d{11}")


def _parse(raw_value: str, fmt: str) -> Optional[datetime]:
    try:
        return datetime.strptime(raw_value, fmt)
    except ValueError:
        return None


def _single_match(pattern: re.Pattern, text: str) -> Optional[str]:
    """Return the matched text if pattern occurs exactly once, else None."""
    matches = pattern.findall(text)
    if len(matches) != 1:
        return None
    return matches[0]


def date_from_metadata(metadata: Mapping[str, str]) -> Optional[datetime]:
    """
    Parse the CreateDate field, e.g. '2021:12:25 14:23:59.123+02:00'.
    Everything from the first '.' on (sub-seconds, offset) is dropped.
    """
    raw_value = metadata.get(CREATE_DATE_FIELD)
    if raw_value is None:
        return None
    return _parse(raw_value.split(".")[0], METADATA_DATE_FORMAT)


def date_from_filename(parsed: ParsedPath) -> Optional[datetime]:
    """Parse an embedded yyyyMMdd_HHmmss run, e.g. 'IMG_20190704_080910123'."""
    match = _single_match(CANONICAL_PATTERN, parsed.stem_without_extension())
    if match is None:
        return None
    return _parse(match[:15], FILENAME_DATE_FORMAT)


def date_from_epoch_millis(parsed: ParsedPath) -> Optional[datetime]:
    """Interpret an embedded 15xxxxxxxxxxx run as epoch milliseconds."""
    match = _single_match(EPOCH_MILLIS_PATTERN, parsed.stem_without_extension())
    if match is None:
        return None
    millis = int(match[:13])
    return datetime.fromtimestamp(millis // 1000) + timedelta(milliseconds=millis % 1000)


class TimestampResolver:
    """
    Best-effort capture time for a media path.

    Sources, first hit wins:
      1. CreateDate reported by the metadata reader
      2. yyyyMMdd_HHmmss embedded in the filename
      3. epoch milliseconds embedded in the filename

    Names already in canonical form resolve to None when skip_canonical
    is set, so the file keeps its name across repeated runs.
    """

    def __init__(
        self,
        metadata_reader: Callable[[str], MetadataMap],
        skip_canonical: bool = True,
    ) -> None:
        self.metadata_reader = metadata_reader
        self.skip_canonical = skip_canonical

    def read_metadata(self, file_path: str) -> MetadataMap:
        """Metadata for file_path, or an empty map if it cannot be read."""
        try:
            return self.metadata_reader(file_path)
        except Exception:
            # MetadataUnavailable, or whatever a substituted reader raises
            return {}

    def resolve(self, file_path: str) -> Optional[datetime]:
        parsed = ParsedPath.parse(file_path)

        if self.skip_canonical and is_already_canonical(parsed):
            return None

        date = date_from_metadata(self.read_metadata(file_path))
        if date is not None:
            return date

        date = date_from_filename(parsed)
        if date is not None:
            return date

        return date_from_epoch_millis(parsed)
