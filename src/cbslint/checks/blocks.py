"""
Block structure matching for CBS documents.

Pairs ``{{#name ...}}`` openers with ``{{/name}}`` closers across the whole
document using a stack. The scan walks balanced tags on its own instead of
reusing the command check's results, so a block tag that fails command
decomposition is still matched structurally.
"""

# Group 1: External direct imports (alphabetical)
import re

# Group 2: External from imports (alphabetical by source module)
from dataclasses import dataclass

# Group 4: Internal from imports (alphabetical by source module)
from cbslint.checks.base import LintContext
from cbslint.core.types import Category, Diagnostic
from cbslint.parsing.tokenizer import TagSpan, iter_all_spans

BLOCK_NAME_PATTERN = re.compile(r"[\w-]*")


@dataclass
class BlockFrame:
    """An open block waiting for its closing tag."""

    name: str
    span: TagSpan
    line: int  # zero-based

    @property
    def label(self) -> str:
        return "{{#" + self.name + "}}"


def block_name(content: str) -> str:
    """
    Extract the block name following the leading '#' or '/'.

    Params:
        content: Trimmed tag content starting with '#' or '/'

    Returns:
        The name, or an empty string for anonymous closers like '{{/}}'
    """
    return BLOCK_NAME_PATTERN.match(content[1:].lstrip()).group()


def check_block_structure(context: LintContext) -> list[Diagnostic]:
    """
    Report unexpected, mismatched and unclosed block tags.

    ``{{/}}`` closes whichever block is open. A named closer that differs
    from the open block produces an error on both tags, each naming the
    other's line. Block tags nested deeper than ``config.max_depth`` are
    not considered.

    Params:
        context: Lint context of the document

    Returns:
        Diagnostics in scan order, followed by one error per unclosed block
    """
    diagnostics = []
    stack: list[BlockFrame] = []

    for span in iter_all_spans(context.text, max_depth=context.config.max_depth):
        content = span.content
        if content.startswith("#"):
            stack.append(
                BlockFrame(
                    name=block_name(content),
                    span=span,
                    line=context.lines.line_of(span.start),
                )
            )
            continue
        if not content.startswith("/"):
            continue

        closing_name = block_name(content)
        if not stack:
            diagnostics.append(
                context.error(
                    span.start,
                    span.end,
                    f"Unexpected closing tag '{span.text}'. No matching opening tag found.",
                    Category.STRUCTURAL,
                )
            )
            continue

        frame = stack.pop()
        if closing_name and closing_name != frame.name:
            closing_line = context.lines.line_of(span.start)
            diagnostics.append(
                context.error(
                    span.start,
                    span.end,
                    f"Closing tag '{span.text}' does not match opening tag "
                    f"'{frame.label}' on line {frame.line + 1}.",
                    Category.STRUCTURAL,
                )
            )
            diagnostics.append(
                context.error(
                    frame.span.start,
                    frame.span.end,
                    f"Opening tag '{frame.label}' mismatch with closing tag "
                    f"'{span.text}' on line {closing_line + 1}.",
                    Category.STRUCTURAL,
                )
            )

    for frame in stack:
        diagnostics.append(
            context.error(
                frame.span.start,
                frame.span.end,
                f"Unclosed block tag '{frame.label}'. No matching closing tag found.",
                Category.STRUCTURAL,
            )
        )

    return diagnostics
