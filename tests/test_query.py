"""Tests for query orchestration."""

import pytest

from cmdpal.commands import Command, CommandType
from cmdpal.config.user_prefs import UserPreferences
from cmdpal.core.personalization import PersonalizationIndex
from cmdpal.core.query import (
    PaletteContext,
    QueryFilters,
    parse_query,
    query,
    search,
)


@pytest.fixture
def twenty_commands():
    return [
        Command(id=f"menu_{i}", name=f"Item {i:02d}", type=CommandType.MENU)
        for i in range(20)
    ]


def ids(commands):
    return [c.id for c in commands]


class TestParseQuery:
    def test_plain_text(self):
        parsed = parse_query("  crop tool ")
        assert parsed.text == "crop tool"
        assert parsed.type is None

    def test_known_type_token_removed(self):
        parsed = parse_query("#tool brush")
        assert parsed.type == CommandType.TOOL
        assert parsed.text == "brush"

    def test_token_in_the_middle(self):
        parsed = parse_query("crop  #menu   image")
        assert parsed.type == CommandType.MENU
        assert parsed.text == "crop image"

    def test_token_case_and_alias(self):
        assert parse_query("#TOOL").type == CommandType.TOOL
        assert parse_query("#plugin about").type == CommandType.BUILTIN

    def test_unknown_token_kept_literally(self):
        parsed = parse_query("#zzz crop")
        assert parsed.type is None
        assert parsed.text == "#zzz crop"

    def test_hash_inside_word_is_not_a_token(self):
        parsed = parse_query("c#tool")
        assert parsed.type is None
        assert parsed.text == "c#tool"


class TestStartupView:
    def test_empty_query_capped_and_ordered_by_usage(self, twenty_commands, no_startup_prefs):
        index = PersonalizationIndex(
            occurrence_count={"menu_15": 3, "menu_7": 1, "menu_3": 1},
            recency_rank={"menu_15": 1, "menu_7": 3, "menu_3": 2},
        )
        context = PaletteContext(index=index, prefs=no_startup_prefs)

        results = query("", twenty_commands, context=context)

        assert len(results) == 9
        assert ids(results)[:3] == ["menu_15", "menu_7", "menu_3"]
        # The rest keep registration order
        assert ids(results)[3:] == ["menu_0", "menu_1", "menu_2", "menu_4", "menu_5", "menu_6"]

    def test_name_text_is_ignored(self, no_startup_prefs):
        commands = [
            Command(id="b", name="Zebra", type=CommandType.TOOL),
            Command(id="a", name="Aardvark", type=CommandType.TOOL),
        ]
        assert ids(query("", commands, context=PaletteContext(prefs=no_startup_prefs))) == ["b", "a"]

    def test_startup_commands_shown_when_configured(self, sample_commands):
        results = query("", sample_commands)
        assert ids(results) == ["builtin_about"]

    def test_falls_back_when_startup_filtered_out(self, sample_commands):
        results = query("#menu", sample_commands)
        assert ids(results) == ["menu_crop", "menu_new", "menu_open", "menu_disabled"]

    def test_startup_results_have_zero_score_and_plain_name(self, sample_commands):
        result = search("", sample_commands)[0]
        assert result.score == 0.0
        assert result.match is None
        assert result.highlighted == "About Command Palette"


class TestSearch:
    def test_fuzzy_filter_then_rank(self, sample_commands):
        results = query("crop", sample_commands)
        assert ids(results) == ["menu_crop", "tool_cropTool"]

    def test_both_subsequence_matches_returned(self, sample_commands):
        results = search("crp", sample_commands)

        # No substring hits, so equal scores keep registration order
        assert ids(r.command for r in results) == [
            "tool_cropTool",
            "menu_crop",
            "tool_colorReplacementBrushTool",
        ]
        assert results[0].highlighted == "<strong>C</strong><strong>r</strong>o<strong>p</strong> Tool"

    def test_type_token_filters(self, sample_commands):
        assert ids(query("#tool cr", sample_commands)) == [
            "tool_cropTool",
            "tool_colorReplacementBrushTool",
        ]
        assert ids(query("#menu cr", sample_commands)) == ["menu_crop"]

    def test_unknown_token_matched_literally(self, sample_commands):
        commands = sample_commands + [Command(id="menu_fan", name="#1 Fan", type=CommandType.MENU)]
        assert ids(query("#1", commands)) == ["menu_fan"]
        assert query("#zzz crop", sample_commands) == []

    def test_filter_types_intersect_with_token(self, sample_commands):
        filters = QueryFilters(types=[CommandType.MENU])
        assert query("#tool crop", sample_commands, filters) == []
        assert ids(query("crop", sample_commands, filters)) == ["menu_crop"]

    def test_hidden_commands_excluded(self, sample_commands):
        context = PaletteContext(prefs=UserPreferences(hidden_commands=["tool_cropTool"]))

        assert ids(query("crop", sample_commands, context=context)) == ["menu_crop"]

        filters = QueryFilters(include_hidden=True)
        assert "tool_cropTool" in ids(query("crop", sample_commands, filters, context))

    def test_disabled_included_by_default(self, sample_commands):
        assert ids(query("disabled", sample_commands)) == ["menu_disabled"]
        assert query("disabled", sample_commands, QueryFilters(include_disabled=False)) == []

    def test_results_capped(self, twenty_commands):
        assert len(query("item", twenty_commands)) == 9

    def test_custom_limit(self, twenty_commands):
        assert len(query("item", twenty_commands, context=PaletteContext(limit=3))) == 3

    def test_no_commands(self):
        assert query("crop", []) == []
        assert query("", []) == []

    def test_no_match(self, sample_commands):
        assert query("qqqq", sample_commands) == []

    def test_latch_uses_text_without_token(self, sample_commands):
        index = PersonalizationIndex(query_latch={"cr": "tool_colorReplacementBrushTool"})
        results = query("#tool cr", sample_commands, context=PaletteContext(index=index))
        assert ids(results)[0] == "tool_colorReplacementBrushTool"

    def test_personalization_reorders_text_ties(self, sample_commands):
        index = PersonalizationIndex(
            occurrence_count={"tool_colorReplacementBrushTool": 1},
            recency_rank={"tool_colorReplacementBrushTool": 1},
        )
        results = query("crp", sample_commands, context=PaletteContext(index=index))
        assert ids(results)[0] == "tool_colorReplacementBrushTool"

    def test_failure_returns_empty(self):
        def broken():
            yield Command(id="a", name="A", type=CommandType.TOOL)
            raise RuntimeError("source failed")

        assert search("a", broken()) == []
