"""Time conversion utilities and the note-timestamp parser."""

from __future__ import annotations

import re
from functools import lru_cache

from src.models.clip import Clip

# "M:SS[.d] - M:SS[.d]" or "H:MM:SS[.d] - H:MM:SS[.d]"; hyphen, en dash or em dash
_RANGE_RE = re.compile(
    r"(\d{1,2}):(\d{2})(?::(\d{2}))?(?:\.(\d+))?"
    r"\s*[-–—]\s*"
    r"(\d{1,2}):(\d{2})(?::(\d{2}))?(?:\.(\d+))?"
)


def seconds_to_ms(seconds: float) -> int:
    """Convert seconds (float) to integer milliseconds."""
    return int(round(seconds * 1000))


def ms_to_seconds(ms: int) -> float:
    return ms / 1000.0


@lru_cache(maxsize=4096)
def format_seconds_to_time(total_seconds: float) -> str:
    """Format seconds as 'M:SS.d', or 'H:MM:SS.d' from one hour up."""
    if total_seconds < 0:
        total_seconds = 0.0
    tenths = int(round(total_seconds * 10))
    hours, rem = divmod(tenths, 36000)
    minutes, rem = divmod(rem, 600)
    seconds = rem / 10
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:04.1f}"
    return f"{minutes}:{seconds:04.1f}"


def parse_time_to_seconds(text: str) -> float:
    """Parse 'M:SS', 'M:SS.d', 'H:MM:SS' or 'H:MM:SS.d' → seconds.

    Returns 0.0 for anything else.

    Example:
        >>> parse_time_to_seconds('1:02:03.5')
        3723.5
    """
    parts = [p.strip() for p in text.strip().split(":")]
    try:
        if len(parts) == 2:
            return int(parts[0]) * 60 + float(parts[1])
        if len(parts) == 3:
            return int(parts[0]) * 3600 + int(parts[1]) * 60 + float(parts[2])
    except ValueError:
        return 0.0
    return 0.0


def _match_bound(a: str, b: str, c: str | None, frac: str | None) -> float:
    fraction = float(f"0.{frac}") if frac else 0.0
    if c is not None:
        return int(a) * 3600 + int(b) * 60 + int(c) + fraction
    return int(a) * 60 + int(b) + fraction


def parse_notes_to_clips(notes: str) -> list[Clip]:
    """Extract one clip per note line that contains a time range.

    The text after the range becomes the clip label (``Clip N`` when the line
    has nothing else). Clips keep line order; overlaps and reversed ranges
    are passed through untouched.
    """
    clips: list[Clip] = []
    if not notes or not isinstance(notes, str):
        return clips

    for line in notes.splitlines():
        m = _RANGE_RE.search(line)
        if m is None:
            continue
        g = m.groups()
        start = _match_bound(g[0], g[1], g[2], g[3])
        end = _match_bound(g[4], g[5], g[6], g[7])
        index = len(clips)
        text = line[m.end():].strip() or f"Clip {index + 1}"
        clips.append(Clip(start, end, text=text, clip_id=f"clip-{index}"))
    return clips
