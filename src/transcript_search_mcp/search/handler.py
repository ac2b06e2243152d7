"""Entry point for searching a transcript.

``SearchHandler.search(term)`` returns a new list of entries in which every
match is its own entry (numbered through ``search_match_index``) while the
text around the matches is cut back along the original caption boundaries.
A match that runs across two captions stays in one piece and is credited to
the caption it starts in.
"""

import logging
from collections.abc import Iterable, Sequence

from transcript_search_mcp.models import Chunk, Range, TranscriptEntry
from transcript_search_mcp.search.index import SearchIndex, build_index, intersection
from transcript_search_mcp.search.matcher import find_match_ranges
from transcript_search_mcp.search.segmenter import split_chunks

logger = logging.getLogger(__name__)


def _copy_entry(source: TranscriptEntry, raw_text: str, search_match_index: int | None = None) -> TranscriptEntry:
    return TranscriptEntry(
        id=source.id,
        start=source.start,
        end=source.end,
        raw_text=raw_text,
        is_music=source.is_music,
        search_match_index=search_match_index,
    )


def rebuild(chunks: Iterable[Chunk], index: SearchIndex) -> list[TranscriptEntry]:
    """Turn chunks back into transcript entries."""
    entries = []
    match_index = 0

    for chunk in chunks:
        if chunk.is_search_match:
            owner = index.entry_at(chunk.range.start_index)
            if owner is None:
                logger.debug("Dropping match at %d: no entry owns it", chunk.range.start_index)
                continue
            entries.append(_copy_entry(owner.entry, chunk.text, match_index))
            match_index += 1
            continue

        for segment in index.intersecting(chunk.range):
            overlap = intersection(chunk.range, segment.range)
            entries.append(_copy_entry(segment.entry, index.text_at(overlap).strip()))

    return entries


class SearchHandler:
    """Searches one transcript. The index is built once, on construction."""

    def __init__(self, entries: Sequence[TranscriptEntry], escape: bool = False):
        self.index = build_index(entries)
        self.escape = escape

    @property
    def merged_text(self) -> str:
        return self.index.merged_text

    def search_ranges(self, term: str | None, escape: bool | None = None) -> list[Range]:
        if escape is None:
            escape = self.escape
        return find_match_ranges(term, self.index.merged_text, escape)

    def match_count(self, term: str | None, escape: bool | None = None) -> int:
        return len(self.search_ranges(term, escape))

    def search(self, term: str | None, escape: bool | None = None) -> list[TranscriptEntry]:
        """Rebuild the transcript around every match of ``term``.

        Raises InvalidSearchTermError if ``term`` is not a valid pattern.
        With no term the original entries come back unchanged in content.
        """
        chunks = split_chunks(self.index.merged_text, self.search_ranges(term, escape))
        return rebuild(chunks, self.index)
