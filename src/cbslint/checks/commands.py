"""
Command usage validation for CBS tags.

Every top-level tag is decomposed and checked against the command registry:
unknown commands, wrong parameter counts and deprecated commands. Parameters
that are themselves complete tags are mapped back to their document offsets
and validated one level deeper, down to the configured depth limit.
"""

# Group 1: External direct imports (alphabetical)
import logging

# Group 2: External from imports (alphabetical by source module)
from collections.abc import Iterator

# Group 4: Internal from imports (alphabetical by source module)
from cbslint.checks.base import LintContext
from cbslint.checks.syntax import has_separator_typo
from cbslint.core.types import Category, Diagnostic
from cbslint.exceptions import OffsetMappingError
from cbslint.parsing.braces import is_single_tag
from cbslint.parsing.decomposer import ParsedTag, decompose
from cbslint.parsing.tokenizer import TagSpan, tokenize
from cbslint.registry.signatures import CommandSignature

logger = logging.getLogger(__name__)


def check_command_usage(context: LintContext) -> list[Diagnostic]:
    """
    Validate the commands of every tag in the document.

    Params:
        context: Lint context of the document

    Returns:
        Diagnostics for unknown commands, parameter count mismatches,
        deprecated commands and excessive nesting
    """
    diagnostics = []
    for span in tokenize(context.text):
        diagnostics.extend(validate_tag(context, span))
    return diagnostics


def validate_tag(context: LintContext, span: TagSpan) -> list[Diagnostic]:
    """
    Validate one tag and, recursively, the tags used as its parameters.

    A branch nested deeper than ``config.max_depth`` gets a single warning
    and is not descended into; sibling branches are unaffected.

    Params:
        context: Lint context of the document
        span: The tag to validate, with its absolute offsets and depth

    Returns:
        Diagnostics for this tag and its nested parameter tags
    """
    if span.depth > context.config.max_depth:
        return [
            context.warning(
                span.start,
                span.end,
                f"Excessive tag nesting depth ({span.depth}). Linting stopped for this branch.",
                Category.STYLE,
            )
        ]

    parsed = decompose(span.content)
    if parsed is None:
        return []

    # The syntax check reports the typo; a name it touches cannot be trusted
    if has_separator_typo(_name_region(parsed)):
        diagnostics = []
    else:
        diagnostics = _check_signature(context, span, parsed)
    for child in _nested_parameter_tags(context, span, parsed):
        diagnostics.extend(validate_tag(context, child))
    return diagnostics


def _name_region(parsed: ParsedTag) -> str:
    """Text of the content that determines the command name."""
    if parsed.separator == "::":
        return parsed.content[: parsed.params_offset - 2]
    if parsed.is_block:
        return parsed.command_name
    return parsed.content


def _check_signature(
    context: LintContext, span: TagSpan, parsed: ParsedTag
) -> list[Diagnostic]:
    name = parsed.command_name
    matches = context.registry.lookup_all(name)

    # Block structure belongs to the block check; only deprecation applies here
    if parsed.is_block:
        return _check_deprecation(context, span, name, matches)

    if not matches:
        if context.config.is_builtin(name):
            return []
        return [
            context.error(
                span.start, span.end, f"Unknown command '{name}'.", Category.SEMANTIC
            )
        ]

    diagnostics = []
    provided = parsed.param_count
    if not any(signature.accepts(provided) for signature in matches):
        signatures = " or ".join(signature.display for signature in matches)
        diagnostics.append(
            context.error(
                span.start,
                span.end,
                f"Incorrect parameter count for command '{name}'. "
                f"Provided {provided} parameter(s). Valid signature(s): {signatures}",
                Category.SEMANTIC,
            )
        )
    diagnostics.extend(_check_deprecation(context, span, name, matches))
    return diagnostics


def _check_deprecation(
    context: LintContext,
    span: TagSpan,
    name: str,
    matches: list[CommandSignature],
) -> list[Diagnostic]:
    for signature in matches:
        if signature.deprecated is None:
            continue
        message = f"Command '{name}' is deprecated. {signature.deprecated.message}"
        if signature.deprecated.replacement:
            message += f" Use '{signature.deprecated.replacement}' instead."
        return [context.warning(span.start, span.end, message, Category.STYLE)]
    return []


def _nested_parameter_tags(
    context: LintContext, span: TagSpan, parsed: ParsedTag
) -> Iterator[TagSpan]:
    """Yield spans for parameters that are exactly one nested tag."""
    content_start = span.start + span.content_offset
    for param, offset in zip(parsed.raw_params, parsed.param_offsets()):
        candidate = param.strip()
        if not is_single_tag(candidate):
            continue
        start = content_start + offset + len(param) - len(param.lstrip())
        try:
            yield _locate_parameter(context.text, candidate, start, span)
        except OffsetMappingError as exc:
            logger.debug("Skipping nested parameter of tag at %d: %s", span.start, exc)


def _locate_parameter(text: str, parameter: str, start: int, parent: TagSpan) -> TagSpan:
    """
    Confirm a parameter sits at the computed offset and build its span.

    Raises:
        OffsetMappingError: When the document text at `start` differs
    """
    if text[start : start + len(parameter)] != parameter:
        raise OffsetMappingError(parameter, start)
    return parent.child(start, parameter)
