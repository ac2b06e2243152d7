"""Utility functions."""

import re

from transcript_search_mcp.models import TranscriptEntry

MUSIC_CUE_RE = re.compile(r"^[\s♪♫]*(\[(music|applause|música|musik)\][\s♪♫]*)*$", re.IGNORECASE)


def extract_video_id(url_or_id: str) -> str | None:
    """Extract YouTube video ID from URL or return as-is if valid ID."""
    patterns = [
        r"(?:v=|/v/|youtu\.be/)([a-zA-Z0-9_-]{11})",
        r"(?:embed/)([a-zA-Z0-9_-]{11})",
        r"(?:shorts/)([a-zA-Z0-9_-]{11})",
    ]
    for pattern in patterns:
        match = re.search(pattern, url_or_id)
        if match:
            return match.group(1)
    if re.match(r"^[a-zA-Z0-9_-]{11}$", url_or_id):
        return url_or_id
    return None


def format_timestamp(seconds: float) -> str:
    """Format seconds to HH:MM:SS or MM:SS."""
    h = int(seconds // 3600)
    m = int((seconds % 3600) // 60)
    s = int(seconds % 60)
    if h > 0:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def is_music_cue(text: str) -> bool:
    """True for captions that only mark music, e.g. ``[Music]`` or ``♪ ♪``."""
    if not text.strip():
        return False
    return MUSIC_CUE_RE.match(text) is not None


def entries_from_captions(captions: list[tuple[str, float, float]]) -> list[TranscriptEntry]:
    """Turn ``(text, start, duration)`` captions into numbered entries."""
    return [
        TranscriptEntry(
            id=i,
            start=start,
            end=start + duration,
            raw_text=text,
            is_music=is_music_cue(text),
        )
        for i, (text, start, duration) in enumerate(captions)
    ]
