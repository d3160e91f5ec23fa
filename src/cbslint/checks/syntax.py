"""
General syntax checks for CBS documents.

Brace balance and malformed separators, independent of command semantics.
This scan keeps its own stack of open braces so that a malformed tag never
hides problems elsewhere in the document.
"""

# Group 1: External direct imports (alphabetical)
import re

# Group 4: Internal from imports (alphabetical by source module)
from cbslint.checks.base import LintContext
from cbslint.core.types import Category, Diagnostic
from cbslint.parsing.braces import BraceKind, iter_brace_tokens, mask_nested_tags

# ' : ' written where '::' was meant
INVALID_SEPARATOR_PATTERN = re.compile(r"\s:\s")


def has_separator_typo(content: str) -> bool:
    """
    Check a tag's trimmed content for the ' : ' separator typo.

    Only the tag's own top-level text is inspected; nested tags are masked
    out. Expression tags ('?...') may legitimately contain ' : '.

    Params:
        content: Trimmed inner content of a tag

    Returns:
        True when the content uses ' : ' as a separator
    """
    if content.startswith("?"):
        return False
    return INVALID_SEPARATOR_PATTERN.search(mask_nested_tags(content)) is not None


def check_general_syntax(context: LintContext) -> list[Diagnostic]:
    """
    Report brace imbalance, empty tags and separator typos.

    Separator typos are only looked for in tags nested at most
    ``config.max_depth`` levels deep.

    Params:
        context: Lint context of the document

    Returns:
        Diagnostics in the order the problems were encountered, followed by
        one error per `{{` still open at the end of the document
    """
    text = context.text
    diagnostics = []
    open_braces: list[int] = []
    # Set while the latest token is an opener; such a pair has no nested pairs
    leaf = False

    for kind, offset in iter_brace_tokens(text):
        if kind is BraceKind.OPEN:
            open_braces.append(offset)
            leaf = True
            continue
        is_leaf, leaf = leaf, False

        if not open_braces:
            diagnostics.append(
                context.error(
                    offset,
                    offset + 2,
                    "Unexpected closing braces '}}'.",
                    Category.STRUCTURAL,
                )
            )
            continue

        open_offset = open_braces.pop()
        if is_leaf and not text[open_offset + 2 : offset].strip():
            diagnostics.append(
                context.warning(
                    open_offset, offset + 2, "Empty CBS tag '{{}}'.", Category.STYLE
                )
            )
        elif len(open_braces) <= context.config.max_depth and has_separator_typo(
            text[open_offset + 2 : offset].strip()
        ):
            diagnostics.append(
                context.error(
                    open_offset,
                    offset + 2,
                    "Invalid separator ' : ' found. Use '::' instead.",
                    Category.STYLE,
                )
            )

    for open_offset in open_braces:
        diagnostics.append(
            context.error(
                open_offset,
                open_offset + 2,
                "Unclosed opening braces '{{'.",
                Category.STRUCTURAL,
            )
        )

    return diagnostics
