"""In-memory TTL cache of indexed transcripts."""

from typing import NamedTuple

from cachetools import TTLCache

from transcript_search_mcp.models import Transcript
from transcript_search_mcp.search import SearchHandler


class IndexedTranscript(NamedTuple):
    transcript: Transcript
    handler: SearchHandler


class SearchIndexCache:
    def __init__(self, max_size: int = 100, ttl: int = 3600, escape: bool = False):
        self._cache: TTLCache = TTLCache(maxsize=max_size, ttl=ttl)
        self._escape = escape
        self._hits = 0
        self._misses = 0

    def _key(self, video_id: str, language: str) -> str:
        return f"{video_id}:{language}"

    def get(self, video_id: str, language: str) -> IndexedTranscript | None:
        key = self._key(video_id, language)
        result = self._cache.get(key)
        if result is not None:
            self._hits += 1
        else:
            self._misses += 1
        return result

    def put(self, transcript: Transcript, language: str | None = None) -> IndexedTranscript:
        """Index ``transcript`` and store it under its video and language."""
        indexed = IndexedTranscript(
            transcript=transcript,
            handler=SearchHandler(transcript.entries, escape=self._escape),
        )
        key = self._key(transcript.video_id, language or transcript.language)
        self._cache[key] = indexed
        return indexed

    def stats(self) -> dict:
        return {
            "size": len(self._cache),
            "max_size": self._cache.maxsize,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / max(self._hits + self._misses, 1) * 100, 1),
        }
