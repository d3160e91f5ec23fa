"""
Tests for recursive command validation.

This module tests unknown commands, parameter counts, deprecation warnings,
nested parameter offsets and the nesting depth limit.
"""

import pytest

from cbslint.checks.base import LintContext
from cbslint.checks.commands import _locate_parameter, check_command_usage
from cbslint.config import LinterConfig
from cbslint.core.types import Category, Position, Range, Severity
from cbslint.exceptions import OffsetMappingError
from cbslint.parsing.tokenizer import TagSpan
from cbslint.registry import CommandRegistry


def nested_chain(levels: int, innermost: str = "{{user}}") -> str:
    """Wrap a tag in `levels` layers of '{{lower::...}}'."""
    text = innermost
    for _ in range(levels):
        text = "{{lower::" + text + "}}"
    return text


def run(make_context, text, config=None):
    return check_command_usage(make_context(text, config))


class TestKnownCommands:
    """Tests for tags that validate cleanly."""

    @pytest.mark.parametrize(
        "text",
        [
            "Hello {{user}}!",
            "{{USER}}",
            "{{bot}}",
            "{{slot}}",
            "{{slot::item}}",
            "{{random:a,b,c}}",
            "{{roll:d20}}",
            "{{replace::a::b::c}}",
            "{{min::1::2::3::4}}",
            "{{:else}}",
            "{{#each items as item}}",
        ],
    )
    def test_no_diagnostics(self, make_context, text):
        assert run(make_context, text) == []

    @pytest.mark.parametrize("text", ["{{/if}}", "{{? 1 + $x}}", "{{}}", "{{ a : b }}"])
    def test_tags_left_to_other_checks(self, make_context, text):
        assert run(make_context, text) == []

    def test_variable_builtins_need_no_registry_entry(self):
        context = LintContext("{{getvar::x}}{{setvar::y::1}}", registry=CommandRegistry([]))
        assert check_command_usage(context) == []


class TestUnknownCommands:
    """Tests for commands missing from the registry."""

    def test_unknown_command(self, make_context):
        diagnostics = run(make_context, "{{nosuch}}")
        assert len(diagnostics) == 1
        assert diagnostics[0].message == "Unknown command 'nosuch'."
        assert diagnostics[0].severity is Severity.ERROR
        assert diagnostics[0].category is Category.SEMANTIC

    def test_empty_registry_reports_regular_commands(self):
        context = LintContext("{{user}}", registry=CommandRegistry([]))
        assert [d.message for d in check_command_usage(context)] == ["Unknown command 'user'."]

    def test_unknown_block_is_not_reported(self, make_context):
        assert run(make_context, "{{#weird}}") == []


class TestParameterCounts:
    """Tests for arity errors."""

    def test_replace_with_one_parameter(self, make_context):
        diagnostics = run(make_context, "{{replace::a}}")
        assert len(diagnostics) == 1
        assert diagnostics[0].message == (
            "Incorrect parameter count for command 'replace'. Provided 1 parameter(s). "
            "Valid signature(s): {{replace::A::B::C}}"
        )
        assert diagnostics[0].range == Range(Position(0, 0), Position(0, 14))

    def test_every_overload_is_listed(self, make_context):
        diagnostics = run(make_context, "{{slot::a::b}}")
        assert diagnostics[0].message.endswith("Valid signature(s): {{slot}} or {{slot::A}}")

    def test_blank_parameter_region_counts_as_none(self, make_context):
        diagnostics = run(make_context, "{{getvar::}}")
        assert "Provided 0 parameter(s)" in diagnostics[0].message


class TestDeprecation:
    """Tests for deprecated command warnings."""

    def test_deprecated_command_names_replacement(self, make_context):
        diagnostics = run(make_context, "{{inlayeddata::x}}")
        assert len(diagnostics) == 1
        assert diagnostics[0].severity is Severity.WARNING
        assert diagnostics[0].message == (
            "Command 'inlayeddata' is deprecated. 'inlayeddata' duplicates 'inlayed'. "
            "Use 'inlayed' instead."
        )

    def test_arity_error_precedes_deprecation(self, make_context):
        diagnostics = run(make_context, "{{inlayeddata}}")
        assert [d.severity for d in diagnostics] == [Severity.ERROR, Severity.WARNING]

    def test_deprecated_block(self, make_context):
        diagnostics = run(make_context, "{{#if_pure x}}")
        assert len(diagnostics) == 1
        assert diagnostics[0].message.startswith("Command '#if_pure' is deprecated.")


class TestNestedParameters:
    """Tests for validating tags used as parameters."""

    def test_nested_unknown_is_anchored_to_nested_tag(self, make_context):
        diagnostics = run(make_context, "{{getvar::{{nosuch}}}}")
        assert len(diagnostics) == 1
        assert diagnostics[0].message == "Unknown command 'nosuch'."
        assert diagnostics[0].range == Range(Position(0, 10), Position(0, 20))

    def test_offsets_account_for_whitespace(self, make_context):
        diagnostics = run(make_context, "{{ replace :: {{nosuch}} :: b :: c }}")
        assert len(diagnostics) == 1
        assert diagnostics[0].range == Range(Position(0, 14), Position(0, 24))

    def test_offsets_on_later_lines(self, make_context):
        diagnostics = run(make_context, "line one\n{{getvar::{{nosuch}}}}")
        assert diagnostics[0].range.start == Position(1, 10)

    def test_block_header_parameters_are_validated(self, make_context):
        diagnostics = run(make_context, "{{#if {{nosuch}}}}")
        assert len(diagnostics) == 1
        assert diagnostics[0].range == Range(Position(0, 6), Position(0, 16))

    def test_parameters_mixing_text_and_tags_are_not_descended(self, make_context):
        assert run(make_context, "{{getvar::a{{nosuch}}}}") == []

    def test_locate_parameter_rejects_wrong_offset(self):
        parent = TagSpan(start=0, end=13, text="{{getvar::x}}")
        with pytest.raises(OffsetMappingError):
            _locate_parameter("{{getvar::x}}", "{{x}}", 10, parent)


class TestNestingDepth:
    """Tests for the nesting depth limit."""

    def test_depth_ten_is_validated(self, make_context):
        diagnostics = run(make_context, nested_chain(10, "{{nosuch}}"))
        assert [d.message for d in diagnostics] == ["Unknown command 'nosuch'."]

    def test_depth_eleven_stops_the_branch(self, make_context):
        diagnostics = run(make_context, nested_chain(11, "{{nosuch}}"))
        assert len(diagnostics) == 1
        assert diagnostics[0].severity is Severity.WARNING
        assert diagnostics[0].message == (
            "Excessive tag nesting depth (11). Linting stopped for this branch."
        )

    def test_sibling_branches_are_still_validated(self, make_context):
        deep = nested_chain(10, "{{user}}")
        text = "{{replace::" + deep + "::{{nosuch}}::c}}"
        messages = [d.message for d in run(make_context, text)]
        assert len(messages) == 2
        assert "Excessive tag nesting depth (11). Linting stopped for this branch." in messages
        assert "Unknown command 'nosuch'." in messages

    def test_configured_limit(self, make_context):
        diagnostics = run(make_context, nested_chain(2), LinterConfig(max_depth=1))
        assert [d.message for d in diagnostics] == [
            "Excessive tag nesting depth (2). Linting stopped for this branch."
        ]


class TestSeparatorTypoTags:
    """Tests for tags that also contain the ' : ' separator typo."""

    def test_nested_parameters_are_still_validated(self, make_context):
        diagnostics = run(make_context, "{{replace::{{nosuch}}::a : b::c}}")
        assert [d.message for d in diagnostics] == ["Unknown command 'nosuch'."]
        assert diagnostics[0].range == Range(Position(0, 11), Position(0, 21))

    def test_name_before_double_colon_is_still_checked(self, make_context):
        diagnostics = run(make_context, "{{nosuch::a : b}}")
        assert [d.message for d in diagnostics] == ["Unknown command 'nosuch'."]

    def test_parameter_count_is_still_checked(self, make_context):
        diagnostics = run(make_context, "{{replace::a : b}}")
        assert diagnostics[0].message.startswith(
            "Incorrect parameter count for command 'replace'. Provided 1 parameter(s)."
        )

    def test_typo_in_name_skips_only_the_signature_check(self, make_context):
        diagnostics = run(make_context, "{{ a : {{nosuch}} }}")
        assert [d.message for d in diagnostics] == ["Unknown command 'nosuch'."]

    def test_deprecated_block_with_double_colon_condition(self, make_context):
        diagnostics = run(make_context, "{{#if_pure x::y}}")
        assert len(diagnostics) == 1
        assert diagnostics[0].message.startswith("Command '#if_pure' is deprecated.")
