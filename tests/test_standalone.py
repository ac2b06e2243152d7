"""Tests for standalone provider with mocked youtube-transcript-api."""

from unittest.mock import patch
import pytest

from transcript_search_mcp.providers.standalone import StandaloneProvider


class MockSnippet:
    def __init__(self, text, start, duration):
        self.text = text
        self.start = start
        self.duration = duration


@pytest.fixture
def mock_snippets():
    return [
        MockSnippet("[Music]", 0.0, 2.0),
        MockSnippet("Hello", 2.0, 3.0),
        MockSnippet("World", 5.0, 1.0),
    ]


class TestStandaloneProvider:
    @pytest.mark.asyncio
    async def test_get_transcript_success(self, mock_snippets):
        provider = StandaloneProvider()
        with patch.object(provider, "_fetch", return_value=mock_snippets):
            result = await provider.get_transcript("dQw4w9WgXcQ", "en")
        assert result.video_id == "dQw4w9WgXcQ"
        assert result.language == "en"
        assert result.method == "standalone"
        assert [e.id for e in result.entries] == [0, 1, 2]
        assert result.entries[0].is_music
        assert result.entries[1].end == 5.0
        assert result.text == "[Music] Hello World"

    @pytest.mark.asyncio
    async def test_get_transcript_no_transcript(self):
        from youtube_transcript_api import TranscriptsDisabled
        provider = StandaloneProvider()
        with patch.object(
            provider, "_fetch", side_effect=TranscriptsDisabled("vid")
        ):
            with pytest.raises(ValueError, match="No transcript available"):
                await provider.get_transcript("vid123456789", "en")

    @pytest.mark.asyncio
    async def test_close(self):
        provider = StandaloneProvider()
        await provider.close()
