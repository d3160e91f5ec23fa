"""
Tests for the nested-brace walking primitives.
"""

import pytest

from cbslint.parsing.braces import (
    BraceKind,
    find_matching_close,
    find_top_level,
    find_top_level_colon,
    is_single_tag,
    iter_brace_tokens,
    mask_nested_tags,
    split_top_level,
)


class TestIterBraceTokens:
    """Tests for atomic two-character brace tokens."""

    def test_simple_tag(self):
        assert list(iter_brace_tokens("a{{b}}c")) == [
            (BraceKind.OPEN, 1),
            (BraceKind.CLOSE, 4),
        ]

    def test_triple_braces_are_consumed_left_to_right(self):
        """'{{{x}}}' is an opener, a literal brace, x, a closer and a literal brace."""
        assert list(iter_brace_tokens("{{{x}}}")) == [
            (BraceKind.OPEN, 0),
            (BraceKind.CLOSE, 4),
        ]

    def test_single_braces_are_not_tokens(self):
        assert list(iter_brace_tokens("{a} {b}")) == []

    def test_scan_window(self):
        tokens = list(iter_brace_tokens("{{a}}{{b}}", start=5))
        assert tokens == [(BraceKind.OPEN, 5), (BraceKind.CLOSE, 8)]


class TestFindTopLevel:
    """Tests for separator search outside nested tags."""

    def test_first_separator(self):
        assert find_top_level("a::{{b::c}}::d", "::") == 1

    def test_separator_inside_nested_tag_is_skipped(self):
        assert find_top_level("{{b::c}}::d", "::") == 8

    def test_only_nested_separators(self):
        assert find_top_level("{{b::c}}", "::") == -1

    def test_start_offset(self):
        assert find_top_level("a::b::c", "::", 3) == 4

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("random:a,b", 6),
            ("a::b", -1),
            ("{{x:y}}:z", 7),
            (":else", 0),
            ("a:::b", 3),
        ],
    )
    def test_single_colon(self, text, expected):
        assert find_top_level_colon(text) == expected


class TestSplitTopLevel:
    """Tests for whitespace-preserving top-level splitting."""

    def test_whitespace_is_preserved(self):
        assert split_top_level(" a :: {{b::c}} ::d", "::") == [" a ", " {{b::c}} ", "d"]

    def test_no_separator(self):
        assert split_top_level("abc", "::") == ["abc"]

    def test_empty_text(self):
        assert split_top_level("", "::") == [""]

    def test_empty_pieces(self):
        assert split_top_level("a::::b", "::") == ["a", "", "b"]

    @pytest.mark.parametrize(
        "text",
        [
            "a::b::c",
            "  spaced  ::  out  ",
            "{{x::y}}::{{z::{{w::v}}}}",
            "::leading",
            "trailing::",
        ],
    )
    def test_rejoining_reproduces_text(self, text):
        assert "::".join(split_top_level(text, "::")) == text


class TestTagBoundaries:
    """Tests for balanced tag detection."""

    def test_matching_close_of_nested_tag(self):
        assert find_matching_close("{{a{{b}}c}}", 0) == 11

    def test_unterminated_tag(self):
        assert find_matching_close("{{a", 0) == -1

    def test_offset_must_be_an_opener(self):
        assert find_matching_close("x{{a}}", 0) == -1
        assert find_matching_close("x{{a}}", 1) == 6

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("{{a}}", True),
            ("{{a{{b}}}}", True),
            ("{{a}}{{b}}", False),
            ("{{a}}x", False),
            ("x{{a}}", False),
            ("{{a", False),
        ],
    )
    def test_is_single_tag(self, text, expected):
        assert is_single_tag(text) is expected


class TestMaskNestedTags:
    """Tests for masking nested tags out of a tag's content."""

    def test_nested_tag_is_masked(self):
        masked = mask_nested_tags("a {{b : c}} d")
        assert masked == "a " + "_" * 9 + " d"

    def test_length_is_preserved(self):
        text = "x{{y{{z}}}}w"
        assert len(mask_nested_tags(text)) == len(text)

    def test_unbalanced_braces_are_left_alone(self):
        assert mask_nested_tags("a {{b") == "a {{b"
