"""
Tests for brace balance, empty tags and separator typos.
"""

import pytest

from cbslint.checks.syntax import check_general_syntax, has_separator_typo
from cbslint.config import LinterConfig
from cbslint.core.types import Category, Position, Range, Severity


class TestSeparatorTypo:
    """Tests for the ' : ' separator typo."""

    @pytest.mark.parametrize(
        "content,expected",
        [
            ("a : b", True),
            ("getvar :x", False),
            ("random:a,b", False),
            ("? a ? b : c", False),
            ("getvar::{{a : b}}", False),
        ],
    )
    def test_has_separator_typo(self, content, expected):
        assert has_separator_typo(content) is expected

    def test_typo_is_an_error(self, make_context):
        diagnostics = check_general_syntax(make_context("{{ a : b }}"))
        assert len(diagnostics) == 1
        assert diagnostics[0].message == "Invalid separator ' : ' found. Use '::' instead."
        assert diagnostics[0].severity is Severity.ERROR
        assert diagnostics[0].range == Range(Position(0, 0), Position(0, 11))

    def test_typo_is_reported_on_the_tag_containing_it(self, make_context):
        diagnostics = check_general_syntax(make_context("{{getvar::{{a : b}}}}"))
        assert len(diagnostics) == 1
        assert diagnostics[0].range == Range(Position(0, 10), Position(0, 19))

    def test_ternary_expression_is_allowed(self, make_context):
        assert check_general_syntax(make_context("{{getvar::{{? a ? b : c}}}}")) == []


class TestBraceBalance:
    """Tests for stray and unclosed braces."""

    def test_balanced(self, make_context):
        assert check_general_syntax(make_context("{{a::{{b}}}} {{c}}")) == []

    def test_unexpected_closing_braces(self, make_context):
        diagnostics = check_general_syntax(make_context("}}"))
        assert [d.message for d in diagnostics] == ["Unexpected closing braces '}}'."]
        assert diagnostics[0].category is Category.STRUCTURAL
        assert diagnostics[0].range == Range(Position(0, 0), Position(0, 2))

    def test_unclosed_opening_braces(self, make_context):
        diagnostics = check_general_syntax(make_context("{{a"))
        assert [d.message for d in diagnostics] == ["Unclosed opening braces '{{'."]
        assert diagnostics[0].range == Range(Position(0, 0), Position(0, 2))

    def test_scan_order(self, make_context):
        diagnostics = check_general_syntax(make_context("{{a}} }} {{"))
        assert [d.message for d in diagnostics] == [
            "Unexpected closing braces '}}'.",
            "Unclosed opening braces '{{'.",
        ]
        assert diagnostics[0].range.start == Position(0, 6)
        assert diagnostics[1].range.start == Position(0, 9)


class TestEmptyTags:
    """Tests for empty tag warnings."""

    @pytest.mark.parametrize("text", ["{{}}", "{{   }}", "{{\n}}"])
    def test_empty_tag(self, make_context, text):
        diagnostics = check_general_syntax(make_context(text))
        assert [d.message for d in diagnostics] == ["Empty CBS tag '{{}}'."]
        assert diagnostics[0].severity is Severity.WARNING

    def test_empty_nested_tag(self, make_context):
        diagnostics = check_general_syntax(make_context("{{lower::{{ }}}}"))
        assert [d.message for d in diagnostics] == ["Empty CBS tag '{{}}'."]
        assert diagnostics[0].range == Range(Position(0, 9), Position(0, 14))


class TestNestingDepth:
    """Tests for the nesting bound on typo detection."""

    def test_typo_within_depth_limit(self, make_context):
        diagnostics = check_general_syntax(make_context("{{lower::{{lower::{{a : b}}}}}}"))
        assert len(diagnostics) == 1

    def test_typo_below_depth_limit_is_not_searched(self, make_context):
        config = LinterConfig(max_depth=1)
        text = "{{lower::{{lower::{{a : b}}}}}}"
        assert check_general_syntax(make_context(text, config)) == []
