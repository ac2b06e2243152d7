"""Backend provider that calls a remote transcript service."""

import logging

import httpx

from transcript_search_mcp.models import Transcript
from transcript_search_mcp.utils import entries_from_captions
from .base import TranscriptProvider

logger = logging.getLogger(__name__)


class BackendProvider(TranscriptProvider):
    def __init__(self, base_url: str, api_key: str = ""):
        self._base_url = base_url.rstrip("/")
        self._headers = {}
        if api_key:
            self._headers["X-API-Key"] = api_key
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers,
            timeout=60.0,
        )

    async def get_transcript(
        self, video_id: str, language: str = "en"
    ) -> Transcript:
        resp = await self._client.get(
            f"/transcript/{video_id}",
            params={"lang": language, "format": "segments"},
        )
        resp.raise_for_status()
        data = resp.json()

        captions = [
            (s["text"], s["start"], s["duration"])
            for s in data.get("segments", [])
        ]
        logger.debug("Backend returned %d captions for %s", len(captions), video_id)

        return Transcript(
            video_id=data.get("video_id", video_id),
            language=data.get("language", language),
            is_generated=data.get("metadata", {}).get("is_generated", False),
            entries=entries_from_captions(captions),
            method=data.get("method", "backend"),
        )

    async def close(self) -> None:
        await self._client.aclose()
