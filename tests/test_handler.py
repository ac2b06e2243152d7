"""Tests for rebuilding a transcript around search matches."""

import pytest
from conftest import make_entries

from transcript_search_mcp.models import Chunk, Range
from transcript_search_mcp.search import InvalidSearchTermError, SearchHandler
from transcript_search_mcp.search.handler import rebuild
from transcript_search_mcp.search.index import build_index


def summary(entries):
    return [(e.id, e.raw_text, e.search_match_index) for e in entries]


class TestSearchScenarios:
    def test_match_inside_one_entry(self, sample_entries):
        handler = SearchHandler(sample_entries)
        assert handler.merged_text == "foo bar baz boop bump snap pop"
        assert summary(handler.search("bump")) == [
            (0, "foo bar baz", None),
            (1, "boop", None),
            (1, "bump", 0),
            (2, "snap pop", None),
        ]

    def test_match_across_entries_stays_whole(self):
        handler = SearchHandler(make_entries("foo bar", "baz boop"))
        assert summary(handler.search("bar baz")) == [
            (0, "foo", None),
            (0, "bar baz", 0),
            (1, "boop", None),
        ]

    def test_separator_breaks_adjacency(self):
        handler = SearchHandler(make_entries("foo bar", "baz boop"))
        results = handler.search("barbaz")
        assert not any(e.is_search_match for e in results)

    def test_no_match_reproduces_entries(self):
        handler = SearchHandler(make_entries("foo bar", "", "baz"))
        assert summary(handler.search("zzz")) == [
            (0, "foo bar", None),
            (2, "baz", None),
        ]

    def test_adjacent_matches_split_by_entry_boundary(self):
        handler = SearchHandler(make_entries("boop bump", "bump snap"))
        assert summary(handler.search("bump")) == [
            (0, "boop", None),
            (0, "bump", 0),
            (1, "bump", 1),
            (1, "snap", None),
        ]

    def test_touching_matches_inside_one_entry(self):
        handler = SearchHandler(make_entries("bumpbump"))
        assert summary(handler.search("bump")) == [
            (0, "bump", 0),
            (0, "bump", 1),
        ]

    def test_whitespace_gap_inside_entry(self):
        handler = SearchHandler(make_entries("la la", "la"))
        assert summary(handler.search("la")) == [
            (0, "la", 0),
            (0, "", None),
            (0, "la", 1),
            (1, "la", 2),
        ]


class TestSearchBehavior:
    def test_copies_entry_fields(self, caption_entries):
        handler = SearchHandler(caption_entries)
        results = handler.search("transcript")
        match = next(e for e in results if e.is_search_match)
        source = caption_entries[2]
        assert (match.id, match.start, match.end, match.is_music) == (
            source.id,
            source.start,
            source.end,
            source.is_music,
        )

    def test_keeps_music_flag(self, caption_entries):
        results = SearchHandler(caption_entries).search(r"\[music\]")
        assert results[0].is_music
        assert results[0].raw_text == "[Music]"
        assert results[0].search_match_index == 0

    def test_match_keeps_merged_text_casing(self, sample_entries):
        results = SearchHandler(sample_entries).search("BUMP")
        assert [e.raw_text for e in results if e.is_search_match] == ["bump"]

    def test_does_not_mutate_input(self, sample_entries):
        before = [e.model_copy() for e in sample_entries]
        SearchHandler(sample_entries).search("bump")
        assert sample_entries == before

    def test_search_is_repeatable(self, sample_entries):
        handler = SearchHandler(sample_entries)
        assert handler.search("ba") == handler.search("ba")
        assert summary(handler.search("")) == summary(handler.search(None))

    def test_match_indices_follow_match_count(self, caption_entries):
        handler = SearchHandler(caption_entries)
        for term in ["s", "world", "t", "is a test of", "o"]:
            results = handler.search(term)
            indices = [e.search_match_index for e in results if e.is_search_match]
            assert indices == list(range(handler.match_count(term)))

    def test_partition_keeps_every_character(self, caption_entries):
        handler = SearchHandler(caption_entries)
        merged = handler.merged_text
        for term in ["s", "world this", "he", "m", "is a"]:
            cursor = 0
            for entry in handler.search(term):
                if not entry.raw_text:
                    continue
                position = merged.index(entry.raw_text, cursor)
                # only trimmed whitespace may sit between pieces
                assert merged[cursor:position].strip() == ""
                cursor = position + len(entry.raw_text)
            assert merged[cursor:].strip() == ""

    def test_pieces_keep_inner_spaces(self):
        handler = SearchHandler(make_entries("foo bar baz", "qux"))
        assert [e.raw_text for e in handler.search("baz")] == ["foo bar", "baz", "qux"]

    def test_invalid_term(self, sample_entries):
        handler = SearchHandler(sample_entries)
        with pytest.raises(InvalidSearchTermError):
            handler.search("bu(mp")

    def test_escape_per_call(self, sample_entries):
        handler = SearchHandler(sample_entries)
        assert handler.search("bu(mp", escape=True) == handler.search("zzz")
        assert handler.match_count("b.mp") == 1
        assert handler.match_count("b.mp", escape=True) == 0

    def test_escape_default_from_constructor(self):
        handler = SearchHandler(make_entries("what? really?"), escape=True)
        assert handler.match_count("?") == 2


class TestEmptySearch:
    def test_round_trip(self, caption_entries):
        handler = SearchHandler(caption_entries)
        results = handler.search("")
        assert not any(e.is_search_match for e in results)
        assert [e.id for e in results] == [e.id for e in caption_entries]
        assert " ".join(e.raw_text for e in results).strip() == handler.merged_text

    def test_round_trip_keeps_display_text(self, sample_entries):
        results = SearchHandler(sample_entries).search("")
        assert [e.raw_text for e in results] == [e.display_text for e in sample_entries]

    def test_no_entries(self):
        handler = SearchHandler([])
        assert handler.merged_text == ""
        assert handler.search("") == []
        assert handler.search("foo") == []


class TestRebuild:
    def test_match_on_separator_is_dropped(self):
        handler = SearchHandler(make_entries("a", "b"))
        assert handler.match_count(" ") == 1
        assert summary(handler.search(" ")) == [(0, "a", None), (1, "b", None)]

    def test_unowned_match_does_not_consume_an_index(self):
        index = build_index(make_entries("ab", "cd"))
        chunks = [
            Chunk(range=Range(start_index=0, end_index=0), text="", is_search_match=False),
            Chunk(range=Range(start_index=0, end_index=1), text="a", is_search_match=True),
            Chunk(range=Range(start_index=1, end_index=2), text="b", is_search_match=False),
            Chunk(range=Range(start_index=2, end_index=3), text=" ", is_search_match=True),
            Chunk(range=Range(start_index=3, end_index=3), text="", is_search_match=False),
            Chunk(range=Range(start_index=3, end_index=4), text="c", is_search_match=True),
            Chunk(range=Range(start_index=4, end_index=5), text="d", is_search_match=False),
        ]
        assert summary(rebuild(chunks, index)) == [
            (0, "a", 0),
            (0, "b", None),
            (1, "c", 1),
            (1, "d", None),
        ]

    def test_non_match_chunk_over_many_entries(self, sample_entries):
        index = build_index(sample_entries)
        whole = Chunk(range=Range(start_index=4, end_index=26), text="", is_search_match=False)
        assert summary(rebuild([whole], index)) == [
            (0, "bar baz", None),
            (1, "boop bump", None),
            (2, "snap", None),
        ]
