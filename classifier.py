import re
from typing import Optional

from models import ParsedPath


IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".heic"}

VIDEO_EXTENSIONS = {".mp4", ".mov"}

CANONICAL_PATTERN = re.compile(r"\d{8}_\d{6,}")


def is_image(parsed: ParsedPath) -> bool:
    return parsed.extension.lower() in IMAGE_EXTENSIONS


def is_video(parsed: ParsedPath) -> bool:
    return parsed.extension.lower() in VIDEO_EXTENSIONS


def classify_file(parsed: ParsedPath) -> Optional[str]:
    """Return 'image', 'video', or None based on file extension."""
    if is_image(parsed):
        return "image"
    if is_video(parsed):
        return "video"
    return None


def is_already_canonical(parsed: ParsedPath) -> bool:
    """
    True when the name starts with a single yyyyMMdd_HHmmss run, e.g.
    '20210518_122045.jpg' or '20210518_122045_sample.jpg'.
    """
    matches = list(CANONICAL_PATTERN.finditer(parsed.stem_without_extension()))
    return len(matches) == 1 and matches[0].start() == 0
