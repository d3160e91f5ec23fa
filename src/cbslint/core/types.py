"""
Core type definitions for CBS diagnostics.

This module contains the value types every checker produces: positions and
ranges expressed as zero-based line/character pairs, and the Diagnostic
record that is the final output unit of a lint pass.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity of a diagnostic."""

    ERROR = "error"
    WARNING = "warning"


class Category(Enum):
    """Kind of problem a diagnostic reports."""

    STRUCTURAL = "structural"  # Brace imbalance, unmatched/unclosed blocks
    SEMANTIC = "semantic"  # Unknown command, wrong parameter count
    STYLE = "style"  # Deprecations, typos, empty tags, undefined variables


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line and character position inside a document."""

    line: int
    character: int

    def __str__(self) -> str:
        return f"{self.line + 1}:{self.character + 1}"


@dataclass(frozen=True)
class Range:
    """Half-open range between two positions."""

    start: Position
    end: Position

    def contains(self, position: Position) -> bool:
        """Check whether a position falls inside the range."""
        return self.start <= position < self.end


@dataclass(frozen=True)
class Diagnostic:
    """
    A single finding reported for a document.

    Params:
        range: Line/character range the finding is anchored to
        message: Human readable description of the problem
        severity: ERROR or WARNING
        category: Which part of the taxonomy the finding belongs to
        source: Producer tag shown by editors next to the message
    """

    range: Range
    message: str
    severity: Severity
    category: Category
    source: str = "cbs"

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable representation of the diagnostic."""
        return {
            "range": {
                "start": {
                    "line": self.range.start.line,
                    "character": self.range.start.character,
                },
                "end": {
                    "line": self.range.end.line,
                    "character": self.range.end.character,
                },
            },
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "source": self.source,
        }

    def __str__(self) -> str:
        return f"{self.range.start}: {self.severity.value}: {self.message}"
