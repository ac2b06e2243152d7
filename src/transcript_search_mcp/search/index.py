"""Merged-text index over a transcript.

The whole transcript is searched as one string so that a term can cross
caption boundaries. Each entry's span in that string is recorded so that
any offset can be traced back to the caption it came from.

All ranges are half-open: ``[start_index, end_index)``.
"""

import logging
from bisect import bisect_right
from collections.abc import Iterable
from functools import cached_property

from pydantic import BaseModel, ConfigDict

from transcript_search_mcp.models import Range, SegmentIndex, TranscriptEntry

logger = logging.getLogger(__name__)

SEPARATOR = " "


def intersection(a: Range, b: Range) -> Range | None:
    """Overlap of two ranges, or None when they are disjoint.

    Ranges that merely touch produce a zero-length range.
    """
    min_range = a if a.start_index <= b.start_index else b
    max_range = b if min_range is a else a

    if min_range.end_index < max_range.start_index:
        return None

    end_index = min(min_range.end_index, max_range.end_index)
    return Range(start_index=max_range.start_index, end_index=end_index)


class SearchIndex(BaseModel):
    model_config = ConfigDict(frozen=True)

    merged_text: str
    segments: tuple[SegmentIndex, ...]

    @cached_property
    def start_offsets(self) -> list[int]:
        return [s.range.start_index for s in self.segments]

    @cached_property
    def end_offsets(self) -> list[int]:
        return [s.range.end_index for s in self.segments]

    def entry_at(self, offset: int) -> SegmentIndex | None:
        """The segment whose range contains ``offset``."""
        i = bisect_right(self.start_offsets, offset) - 1
        # step back over empty entries indexed at or before offset
        while i >= 0:
            segment = self.segments[i]
            if segment.range.contains(offset):
                return segment
            if segment.range.length > 0:
                return None
            i -= 1
        return None

    def intersecting(self, span: Range) -> list[SegmentIndex]:
        """Segments overlapping ``span`` by at least one character, in entry order."""
        found = []
        for segment in self.segments[bisect_right(self.end_offsets, span.start_index):]:
            if segment.range.start_index >= span.end_index:
                break
            overlap = intersection(span, segment.range)
            if overlap is not None and overlap.length > 0:
                found.append(segment)
        return found

    def text_at(self, span: Range) -> str:
        return self.merged_text[span.start_index:span.end_index]


def build_index(entries: Iterable[TranscriptEntry]) -> SearchIndex:
    """Concatenate entries into one searchable string and map each entry's span."""
    ranges: list[tuple[TranscriptEntry, int, int]] = []
    merged = ""
    cursor = 0
    for entry in entries:
        text = entry.display_text
        ranges.append((entry, cursor, cursor + len(text)))
        merged += text + SEPARATOR
        cursor = len(merged)

    trimmed = merged.strip()
    # ranges were measured against the untrimmed text
    shift = len(merged) - len(merged.lstrip())
    limit = len(trimmed)

    def clamp(offset: int) -> int:
        return min(max(offset - shift, 0), limit)

    segments = tuple(
        SegmentIndex(entry=entry, range=Range(start_index=clamp(start), end_index=clamp(end)))
        for entry, start, end in ranges
    )
    logger.debug("Indexed %d entries into %d characters", len(segments), limit)
    return SearchIndex(merged_text=trimmed, segments=segments)
