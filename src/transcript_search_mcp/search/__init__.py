"""Cross-caption transcript search."""

from .handler import SearchHandler, rebuild
from .index import SearchIndex, build_index, intersection
from .matcher import InvalidSearchTermError, find_match_offsets, find_match_ranges
from .segmenter import split_chunks, split_chunks_at

__all__ = [
    "SearchHandler",
    "SearchIndex",
    "InvalidSearchTermError",
    "build_index",
    "intersection",
    "find_match_offsets",
    "find_match_ranges",
    "split_chunks",
    "split_chunks_at",
    "rebuild",
]
