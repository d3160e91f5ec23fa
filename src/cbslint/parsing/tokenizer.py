"""
Brace tokenizer for CBS documents.

Scans raw text and yields the balanced top-level `{{...}}` spans with their
absolute offsets. Nested pairs stay inside the captured span; descending
into them is left to the callers.
"""

# Group 1: External direct imports (alphabetical)
import logging

# Group 2: External from imports (alphabetical by source module)
from collections.abc import Iterator
from dataclasses import dataclass

# Group 4: Internal from imports (alphabetical by source module)
from cbslint.parsing.braces import BraceKind, iter_brace_tokens

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagSpan:
    """
    One balanced `{{...}}` span.

    Params:
        start: Absolute offset of the opening `{{`
        end: Absolute offset just past the closing `}}`
        text: The span's text, braces included
        depth: Nesting level, 0 for spans found directly in the document
    """

    start: int
    end: int
    text: str
    depth: int = 0

    @property
    def inner(self) -> str:
        """Raw content between the braces, whitespace untouched."""
        return self.text[2:-2]

    @property
    def content(self) -> str:
        """Trimmed content between the braces."""
        return self.inner.strip()

    @property
    def content_offset(self) -> int:
        """Offset of the trimmed content relative to `start`."""
        inner = self.inner
        return 2 + len(inner) - len(inner.lstrip())

    def child(self, start: int, text: str) -> "TagSpan":
        """Create the span of a tag nested one level below this one."""
        return TagSpan(start=start, end=start + len(text), text=text, depth=self.depth + 1)


def tokenize(text: str, base_offset: int = 0, depth: int = 0) -> Iterator[TagSpan]:
    """
    Yield the balanced top-level tags of a text.

    A span is captured from a depth 0 to 1 transition up to its matching
    1 to 0 transition. A stray `}}` at depth 0 is ignored. When the text
    ends while a tag is still open, scanning resumes right after that
    opener so the tags following it are still reported.

    Params:
        text: Text to scan
        base_offset: Added to every offset, for scanning a slice of a document
        depth: Depth recorded on the produced spans

    Returns:
        Iterator of TagSpan in document order
    """
    position = 0
    while position < len(text):
        level = 0
        open_offset = -1
        for kind, offset in iter_brace_tokens(text, position):
            if kind is BraceKind.OPEN:
                if level == 0:
                    open_offset = offset
                level += 1
            elif level > 0:
                level -= 1
                if level == 0:
                    yield TagSpan(
                        start=base_offset + open_offset,
                        end=base_offset + offset + 2,
                        text=text[open_offset : offset + 2],
                        depth=depth,
                    )
        if level == 0:
            return
        logger.debug(
            "Unterminated '{{' at offset %d, rescanning after it",
            base_offset + open_offset,
        )
        position = open_offset + 2


def iter_all_spans(
    text: str, base_offset: int = 0, max_depth: int | None = None
) -> Iterator[TagSpan]:
    """
    Yield every balanced span at any nesting level, outermost first.

    Params:
        text: Text to scan
        base_offset: Added to every offset
        max_depth: Deepest nesting level yielded; spans below it are not
            descended into. None walks every level

    Returns:
        Iterator of TagSpan; nested spans carry their nesting depth
    """
    pending = list(tokenize(text, base_offset))
    pending.reverse()
    while pending:
        span = pending.pop()
        yield span
        if max_depth is not None and span.depth >= max_depth:
            continue
        children = list(tokenize(span.inner, span.start + 2, span.depth + 1))
        pending.extend(reversed(children))
