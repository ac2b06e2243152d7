"""Cut the merged transcript into alternating non-match / match chunks."""

from collections.abc import Sequence

from transcript_search_mcp.models import Chunk, Range


def split_chunks(merged_text: str, match_ranges: Sequence[Range]) -> list[Chunk]:
    """Partition ``merged_text`` around sorted, non-overlapping matches.

    For ``foo bar baz boop bump snap pop`` and a match on ``bump`` this gives:

    1. ``foo bar baz boop `` (non-match)
    2. ``bump`` (match)
    3. `` snap pop`` (non-match)

    The chunks cover the text exactly once and always start and end with a
    non-match chunk, which may be empty.
    """
    if not match_ranges:
        whole = Range(start_index=0, end_index=len(merged_text))
        return [Chunk(range=whole, text=merged_text, is_search_match=False)]

    chunks = []
    cursor = 0
    for match in match_ranges:
        before = Range(start_index=cursor, end_index=match.start_index)
        chunks.append(Chunk(range=before, text=merged_text[cursor:match.start_index], is_search_match=False))
        chunks.append(
            Chunk(
                range=match,
                text=merged_text[match.start_index:match.end_index],
                is_search_match=True,
            )
        )
        cursor = match.end_index

    tail = Range(start_index=cursor, end_index=len(merged_text))
    chunks.append(Chunk(range=tail, text=merged_text[cursor:], is_search_match=False))
    return chunks


def split_chunks_at(merged_text: str, offsets: Sequence[int], term_length: int) -> list[Chunk]:
    """Same as :func:`split_chunks` for fixed-length matches given by start offset."""
    return split_chunks(
        merged_text,
        [Range(start_index=o, end_index=o + term_length) for o in offsets],
    )
