"""Find search term occurrences in the merged transcript.

Terms are regular expressions unless ``escape`` is set, so ``a.c`` matches
``abc``. Matching ignores case and never overlaps: scanning resumes after
the end of the previous match.
"""

import logging
import re

from transcript_search_mcp.models import Range

logger = logging.getLogger(__name__)


class InvalidSearchTermError(ValueError):
    def __init__(self, term: str, reason: str):
        super().__init__(f"Invalid search term {term!r}: {reason}")
        self.term = term
        self.reason = reason


def compile_term(term: str, escape: bool = False) -> re.Pattern:
    pattern = re.escape(term) if escape else term
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise InvalidSearchTermError(term, str(e)) from e


def find_match_ranges(term: str | None, merged_text: str, escape: bool = False) -> list[Range]:
    """Spans of every non-overlapping match, in text order.

    An empty term matches nothing. Zero-width matches are skipped.
    """
    if not term:
        return []

    regex = compile_term(term, escape)
    ranges = [
        Range(start_index=m.start(), end_index=m.end())
        for m in regex.finditer(merged_text)
        if m.end() > m.start()
    ]
    logger.debug("Term %r matched %d time(s)", term, len(ranges))
    return ranges


def find_match_offsets(term: str | None, merged_text: str, escape: bool = False) -> list[int]:
    """Start offset of every match."""
    return [r.start_index for r in find_match_ranges(term, merged_text, escape)]
