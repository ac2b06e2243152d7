"""Transcript Search MCP Server."""

import logging
import sys
import time
from collections import deque
from contextlib import asynccontextmanager
from typing import Annotated, Literal

from pydantic import Field
from mcp.server.fastmcp import FastMCP

from transcript_search_mcp.cache import IndexedTranscript, SearchIndexCache
from transcript_search_mcp.config import Mode, Settings, Transport
from transcript_search_mcp.models import TranscriptEntry
from transcript_search_mcp.providers.backend import BackendProvider
from transcript_search_mcp.providers.standalone import StandaloneProvider
from transcript_search_mcp.search import InvalidSearchTermError
from transcript_search_mcp.utils import extract_video_id, format_timestamp

# Logging to stderr (MCP convention)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("transcript-search-mcp")

# Module-level state
_provider = None
_cache = None
_settings = None
_rate_window = deque()

TOOL_ANNOTATIONS = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "openWorldHint": True,
}


@asynccontextmanager
async def app_lifespan(server: FastMCP):
    global _provider, _cache, _settings, _rate_window
    _settings = Settings()
    logging.getLogger().setLevel(_settings.log_level)
    _cache = SearchIndexCache(
        max_size=_settings.cache_max_size,
        ttl=_settings.cache_ttl_seconds,
        escape=_settings.escape_special_characters,
    )
    _rate_window = deque()

    if _settings.mode == Mode.BACKEND:
        _provider = BackendProvider(
            base_url=_settings.backend_url,
            api_key=_settings.backend_api_key,
        )
        logger.info(f"Backend mode: {_settings.backend_url}")
    else:
        _provider = StandaloneProvider()
        logger.info("Standalone mode")

    logger.info("Server started")
    yield

    if _provider:
        await _provider.close()
    logger.info("Server stopped")


mcp = FastMCP(
    "Transcript Search",
    instructions="Search video transcripts, including phrases that run across caption boundaries",
    lifespan=app_lifespan,
)


def _check_rate_limit():
    """Sliding window rate limit."""
    now = time.time()
    limit = (_settings.rate_limit_per_minute if _settings else 30)
    while _rate_window and _rate_window[0] < now - 60:
        _rate_window.popleft()
    if len(_rate_window) >= limit:
        raise ValueError(
            f"Rate limit exceeded ({limit}/min). Try again in a few seconds."
        )
    _rate_window.append(now)


async def _get_indexed(video_id: str, language: str) -> IndexedTranscript:
    """Fetch and index a transcript once, then serve it from the cache."""
    cached = _cache.get(video_id, language)
    if cached:
        return cached

    transcript = await _provider.get_transcript(video_id, language)
    return _cache.put(transcript, language)


def _entries_to_markdown(entries: list[TranscriptEntry]) -> str:
    """Format entries as markdown with timestamps."""
    lines = []
    for entry in entries:
        if not entry.display_text:
            continue
        text = f"_{entry.display_text}_" if entry.is_music else entry.display_text
        lines.append(f"**[{format_timestamp(entry.start)}]** {text}")
    return "\n".join(lines)


def _render_match(entries: list[TranscriptEntry], position: int, context: int) -> str:
    """One match line: timestamp, ordinal and the surrounding text."""
    match = entries[position]
    before = entries[max(0, position - context):position]
    after = entries[position + 1:position + 1 + context]
    parts = [e.display_text for e in before if e.display_text]
    parts.append(f"**{match.display_text}**")
    parts.extend(e.display_text for e in after if e.display_text)
    return (
        f"{match.search_match_index + 1}. **[{format_timestamp(match.start)}]** "
        + " ".join(parts)
    )


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def get_transcript(
    url: Annotated[str, Field(description="YouTube video URL or video ID (e.g. https://youtube.com/watch?v=dQw4w9WgXcQ or just dQw4w9WgXcQ)")],
    language: Annotated[str, Field(default="en", description="ISO 639-1 language code for the transcript (e.g. en, de, es, fr, ja, ko)")] = "en",
    format: Annotated[Literal["text", "entries", "both"], Field(default="text", description="Output format: text for plain text, entries for timestamped captions, both for combined output")] = "text",
) -> str:
    """Get the full transcript of a YouTube video in the specified language and format."""
    try:
        _check_rate_limit()
    except ValueError as e:
        return f"Error: {e}"

    video_id = extract_video_id(url)
    if not video_id:
        return f"Error: Invalid YouTube URL or video ID: {url}"

    try:
        indexed = await _get_indexed(video_id, language)
    except Exception as e:
        return f"Error fetching transcript for {video_id}: {e}"

    transcript = indexed.transcript
    header = f"## Transcript: {video_id}\n**Language:** {transcript.language} | **Method:** {transcript.method}\n"

    if format == "entries":
        body = _entries_to_markdown(transcript.entries)
    elif format == "both":
        body = (
            f"### Full Text\n{transcript.text}\n\n"
            f"### Timestamped Captions\n{_entries_to_markdown(transcript.entries)}"
        )
    else:
        body = transcript.text

    return f"{header}\n{body}"


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def search_transcript(
    url: Annotated[str, Field(description="YouTube video URL or video ID to search in")],
    query: Annotated[str, Field(description="Case-insensitive search term. Matches may span several captions. Regular expression syntax is honored unless literal is set")],
    language: Annotated[str, Field(default="en", description="ISO 639-1 language code for the transcript (e.g. en, de, es, fr)")] = "en",
    context_entries: Annotated[int, Field(default=1, ge=0, le=10, description="Number of surrounding transcript pieces to show on each side of a match")] = 1,
    literal: Annotated[bool | None, Field(default=None, description="Treat the query as plain text instead of a pattern. Defaults to the server setting")] = None,
) -> str:
    """Search a YouTube video transcript and return every match with its timestamp and context."""
    try:
        _check_rate_limit()
    except ValueError as e:
        return f"Error: {e}"

    video_id = extract_video_id(url)
    if not video_id:
        return f"Error: Invalid YouTube URL or video ID: {url}"

    if not query.strip():
        return "Error: Search query cannot be empty."

    try:
        indexed = await _get_indexed(video_id, language)
    except Exception as e:
        return f"Error fetching transcript for {video_id}: {e}"

    notes = []
    try:
        results = indexed.handler.search(query, escape=literal)
    except InvalidSearchTermError as e:
        logger.warning(f"{e}; falling back to literal search")
        notes.append(f"_'{query}' is not a valid pattern ({e.reason}); searched for it as plain text._\n")
        results = indexed.handler.search(query, escape=True)

    positions = [i for i, e in enumerate(results) if e.is_search_match]
    if not positions:
        return "".join(notes) + f"No matches found for '{query}' in {video_id}."

    context = min(context_entries, _settings.max_context_entries if _settings else context_entries)
    header = (
        f"## Search Results: '{query}' in {video_id}\n"
        f"**{len(positions)} match(es) found**\n"
    )
    body = "\n".join(_render_match(results, i, context) for i in positions)
    return "".join(notes) + f"{header}\n{body}"


# -- MCP Prompts --


@mcp.prompt()
def find_key_moments(
    url: Annotated[str, Field(description="YouTube video URL or video ID to analyze")],
    topic: Annotated[str, Field(description="The topic or keyword to search for in the video")],
) -> str:
    """Find and analyze key moments in a video related to a specific topic."""
    return f"""Please use the search_transcript tool to find mentions of "{topic}" in this video: {url}

Then use get_transcript with format="entries" to read the timestamped captions around them.

Analyze and present:
1. All timestamps where "{topic}" is discussed
2. Context around each mention
3. The speaker's main points about this topic"""


# -- MCP Resources --


@mcp.resource("transcript://help")
def help_resource() -> str:
    """Usage guide for the Transcript Search MCP server."""
    return """# Transcript Search MCP Server - Help Guide

## Available Tools

### get_transcript
Extract the full transcript from a YouTube video.
- Output formats: text, entries (timestamped captions), or both
- Example: get_transcript(url="https://youtube.com/watch?v=VIDEO_ID", format="entries")

### search_transcript
Find every occurrence of a term in a transcript.
- Case-insensitive; a phrase is found even when it is split over two captions
- Each match is numbered and shown with its timestamp and surrounding text
- The query is a regular expression unless literal=true
- Example: search_transcript(url="VIDEO_ID", query="machine learning", context_entries=2)

## Tips
- Use video IDs or full YouTube URLs
- Try different language codes if the default transcript is not available
- Set literal=true to search for text containing characters like ? or (
"""


def main():
    settings = Settings()
    if settings.transport == Transport.STREAMABLE_HTTP:
        mcp.run(transport="streamable-http")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
