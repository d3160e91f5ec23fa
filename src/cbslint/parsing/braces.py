"""
Nested-brace walking primitives.

Every part of the engine that needs to know where a tag starts or ends, or
whether a separator sits at the top level of a tag, goes through these
helpers. `{{` and `}}` are always matched as atomic two-character tokens,
scanning left to right, so `{{{` is an opener followed by a literal brace.
"""

# Group 2: External from imports (alphabetical by source module)
from collections.abc import Iterator
from enum import Enum

OPEN = "{{"
CLOSE = "}}"


class BraceKind(Enum):
    """Kind of brace token."""

    OPEN = "open"
    CLOSE = "close"


def iter_brace_tokens(
    text: str, start: int = 0, end: int | None = None
) -> Iterator[tuple[BraceKind, int]]:
    """
    Yield every brace token in a slice of text.

    Params:
        text: Text to scan
        start: Offset to start scanning at
        end: Offset to stop scanning at (exclusive), defaults to the end

    Returns:
        Iterator of (kind, offset) pairs in document order
    """
    limit = len(text) if end is None else min(end, len(text))
    index = start
    while index < limit - 1:
        pair = text[index : index + 2]
        if pair == OPEN:
            yield BraceKind.OPEN, index
            index += 2
        elif pair == CLOSE:
            yield BraceKind.CLOSE, index
            index += 2
        else:
            index += 1


def find_top_level(text: str, separator: str, start: int = 0) -> int:
    """
    Find the first occurrence of a separator outside nested tags.

    Brace depth is tracked with `{{`/`}}` tokens; a separator inside a nested
    tag used as a parameter value is never returned.

    Params:
        text: Text to search, typically a tag's inner content
        separator: Separator to look for, e.g. '::'
        start: Offset to start searching at

    Returns:
        Offset of the separator, or -1 when there is none at depth 0
    """
    depth = 0
    index = start
    width = len(separator)
    while index <= len(text) - width:
        pair = text[index : index + 2]
        if pair == OPEN:
            depth += 1
            index += 2
        elif pair == CLOSE:
            depth = max(depth - 1, 0)
            index += 2
        elif depth == 0 and text[index : index + width] == separator:
            return index
        else:
            index += 1
    return -1


def find_top_level_colon(text: str) -> int:
    """Find the first top-level ':' that is not part of a '::' pair."""
    index = 0
    while True:
        index = find_top_level(text, ":", index)
        if index == -1:
            return -1
        if text[index : index + 2] == "::":
            index += 2
            continue
        return index


def split_top_level(text: str, separator: str) -> list[str]:
    """
    Split text on top-level occurrences of a separator.

    Whitespace around each piece is preserved, so
    ``separator.join(split_top_level(text, separator)) == text`` always holds.

    Params:
        text: Text to split
        separator: Separator to split on

    Returns:
        List of pieces, at least one (possibly empty) element
    """
    pieces = []
    piece_start = 0
    while True:
        found = find_top_level(text, separator, piece_start)
        if found == -1:
            break
        pieces.append(text[piece_start:found])
        piece_start = found + len(separator)
    pieces.append(text[piece_start:])
    return pieces


def find_matching_close(text: str, open_offset: int) -> int:
    """
    Find the end of the balanced tag opened at an offset.

    Params:
        text: Text containing the tag
        open_offset: Offset of the opening `{{`

    Returns:
        Offset just past the matching `}}`, or -1 when the tag never closes
    """
    if text[open_offset : open_offset + 2] != OPEN:
        return -1
    depth = 0
    for kind, offset in iter_brace_tokens(text, open_offset):
        if kind is BraceKind.OPEN:
            depth += 1
        else:
            depth -= 1
            if depth == 0:
                return offset + 2
    return -1


def is_single_tag(text: str) -> bool:
    """Check whether text is exactly one balanced `{{...}}` span."""
    return text.startswith(OPEN) and find_matching_close(text, 0) == len(text)


def mask_nested_tags(text: str, fill: str = "_") -> str:
    """
    Blank out balanced nested tags, keeping offsets intact.

    Used by checks that should only look at a tag's own top-level text.
    Unbalanced braces are left untouched.

    Params:
        text: Inner content of a tag
        fill: Replacement character for masked characters

    Returns:
        Text of the same length with nested spans replaced by `fill`
    """
    chars = list(text)
    depth = 0
    span_start = 0
    for kind, offset in iter_brace_tokens(text):
        if kind is BraceKind.OPEN:
            if depth == 0:
                span_start = offset
            depth += 1
        elif depth > 0:
            depth -= 1
            if depth == 0:
                chars[span_start : offset + 2] = fill * (offset + 2 - span_start)
    return "".join(chars)
