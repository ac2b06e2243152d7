"""Abstract base for transcript providers."""

from abc import ABC, abstractmethod

from transcript_search_mcp.models import Transcript


class TranscriptProvider(ABC):
    @abstractmethod
    async def get_transcript(
        self, video_id: str, language: str = "en"
    ) -> Transcript:
        """Fetch the captions of a single video as transcript entries."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources."""
        ...
