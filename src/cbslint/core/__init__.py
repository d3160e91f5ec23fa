"""
Core cbslint components.

This package provides the value types shared by every checker and the
offset-to-position mapping used to anchor diagnostics.
"""

from cbslint.core.text import LineIndex
from cbslint.core.types import Category, Diagnostic, Position, Range, Severity

__all__ = [
    "Category",
    "Diagnostic",
    "LineIndex",
    "Position",
    "Range",
    "Severity",
]
