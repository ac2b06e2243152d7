"""Data models for transcripts and the search index."""

from pydantic import BaseModel, ConfigDict


class Range(BaseModel):
    """Half-open span ``[start_index, end_index)`` of the merged transcript."""

    model_config = ConfigDict(frozen=True)

    start_index: int
    end_index: int

    @property
    def length(self) -> int:
        return abs(self.end_index - self.start_index)

    def contains(self, offset: int) -> bool:
        return self.start_index <= offset < self.end_index


class TranscriptEntry(BaseModel):
    """One timestamped caption.

    ``raw_text`` is what the caption source delivered (or, for search output,
    the text cut from the merged transcript). ``display_text`` is the
    normalized form that gets indexed and searched.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    start: float
    end: float
    raw_text: str = ""
    is_music: bool = False
    search_match_index: int | None = None

    @property
    def display_text(self) -> str:
        return " ".join(self.raw_text.split())

    @property
    def is_search_match(self) -> bool:
        return self.search_match_index is not None


class SegmentIndex(BaseModel):
    """Where one original entry sits inside the merged transcript."""

    model_config = ConfigDict(frozen=True)

    entry: TranscriptEntry
    range: Range


class Chunk(BaseModel):
    """A stretch of the merged transcript that is either a match or not."""

    model_config = ConfigDict(frozen=True)

    range: Range
    text: str
    is_search_match: bool


class Transcript(BaseModel):
    video_id: str
    language: str
    is_generated: bool = False
    entries: list[TranscriptEntry] = []
    method: str = "unknown"

    @property
    def text(self) -> str:
        return " ".join(e.display_text for e in self.entries if e.display_text)
