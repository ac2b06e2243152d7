"""Standalone provider using youtube-transcript-api directly."""

import asyncio
import logging
from functools import partial

from youtube_transcript_api import YouTubeTranscriptApi, TranscriptsDisabled, NoTranscriptFound

from transcript_search_mcp.models import Transcript
from transcript_search_mcp.utils import entries_from_captions
from .base import TranscriptProvider

logger = logging.getLogger(__name__)


class StandaloneProvider(TranscriptProvider):
    def __init__(self):
        self._api = YouTubeTranscriptApi()

    async def get_transcript(
        self, video_id: str, language: str = "en"
    ) -> Transcript:
        loop = asyncio.get_running_loop()
        try:
            fetched = await loop.run_in_executor(
                None,
                partial(self._fetch, video_id, language),
            )
        except (TranscriptsDisabled, NoTranscriptFound) as e:
            raise ValueError(f"No transcript available for {video_id}: {e}")

        entries = entries_from_captions(
            [(s.text, s.start, s.duration) for s in fetched]
        )
        logger.debug("Fetched %d captions for %s", len(entries), video_id)

        return Transcript(
            video_id=video_id,
            language=getattr(fetched, "language_code", language),
            is_generated=getattr(fetched, "is_generated", False),
            entries=entries,
            method="standalone",
        )

    def _fetch(self, video_id: str, language: str):
        """Synchronous fetch in executor."""
        return self._api.fetch(video_id, languages=[language, "en"])

    async def close(self) -> None:
        pass
