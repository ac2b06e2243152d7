"""Shared test fixtures."""

import pytest

from transcript_search_mcp.models import Transcript, TranscriptEntry


def make_entries(*texts: str) -> list[TranscriptEntry]:
    return [
        TranscriptEntry(id=i, start=i * 2.0, end=i * 2.0 + 2.0, raw_text=t)
        for i, t in enumerate(texts)
    ]


@pytest.fixture
def sample_entries():
    return make_entries("foo bar baz", "boop bump", "snap pop")


@pytest.fixture
def caption_entries():
    return [
        TranscriptEntry(id=0, start=0.0, end=2.5, raw_text="[Music]", is_music=True),
        TranscriptEntry(id=1, start=2.5, end=5.5, raw_text="Hello world this is"),
        TranscriptEntry(id=2, start=5.5, end=7.5, raw_text="a test of the\ntranscript"),
        TranscriptEntry(id=3, start=7.5, end=10.0, raw_text="search system"),
        TranscriptEntry(id=4, start=65.0, end=67.0, raw_text="goodbye world"),
    ]


@pytest.fixture
def sample_transcript(caption_entries):
    return Transcript(
        video_id="dQw4w9WgXcQ",
        language="en",
        is_generated=False,
        entries=caption_entries,
        method="standalone",
    )
