"""
Shared state for the checkers of one lint pass.
"""

from dataclasses import dataclass, field

from cbslint.config import LinterConfig
from cbslint.core.text import LineIndex
from cbslint.core.types import Category, Diagnostic, Severity
from cbslint.registry.registry import CommandRegistry, default_registry


@dataclass
class LintContext:
    """
    Everything a checker needs to inspect one document snapshot.

    Built fresh for every pass and discarded afterwards.

    Params:
        text: Full document text
        registry: Command registry used for lookups
        config: Linter settings
    """

    text: str
    registry: CommandRegistry = field(default_factory=default_registry)
    config: LinterConfig = field(default_factory=LinterConfig)
    lines: LineIndex = field(init=False)

    def __post_init__(self):
        self.lines = LineIndex(self.text)

    def diagnostic(
        self,
        start: int,
        end: int,
        message: str,
        severity: Severity,
        category: Category,
    ) -> Diagnostic:
        """Create a diagnostic anchored to an absolute offset range."""
        return Diagnostic(
            range=self.lines.range_at(start, end),
            message=message,
            severity=severity,
            category=category,
        )

    def error(self, start: int, end: int, message: str, category: Category) -> Diagnostic:
        return self.diagnostic(start, end, message, Severity.ERROR, category)

    def warning(self, start: int, end: int, message: str, category: Category) -> Diagnostic:
        return self.diagnostic(start, end, message, Severity.WARNING, category)
