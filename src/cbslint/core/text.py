"""
Offset to line/character mapping.

Checkers work on absolute character offsets into the document; editors want
zero-based line/character positions. LineIndex performs the conversion with
a binary search over precomputed line starts.
"""

from bisect import bisect_right

from cbslint.core.types import Position, Range


class LineIndex:
    """Maps absolute offsets of one document snapshot to positions.

    Lines are split on ``\\n``; a preceding ``\\r`` counts as a character on
    the line it terminates, matching how editors report CRLF documents.
    """

    def __init__(self, text: str):
        self.text = text
        self._line_starts = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._line_starts.append(index + 1)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def position_at(self, offset: int) -> Position:
        """
        Convert an absolute offset to a position.

        Params:
            offset: Character offset, clamped to the document bounds

        Returns:
            Zero-based Position of the offset
        """
        offset = max(0, min(offset, len(self.text)))
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line, offset - self._line_starts[line])

    def range_at(self, start: int, end: int) -> Range:
        """Convert a pair of absolute offsets to a Range."""
        return Range(self.position_at(start), self.position_at(end))

    def offset_at(self, position: Position) -> int:
        """Convert a position back to an absolute offset."""
        if position.line >= len(self._line_starts):
            return len(self.text)
        line_start = self._line_starts[max(position.line, 0)]
        return min(line_start + max(position.character, 0), len(self.text))

    def line_of(self, offset: int) -> int:
        """Return the zero-based line number containing an offset."""
        return self.position_at(offset).line
