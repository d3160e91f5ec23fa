"""
Diagnostic aggregation for CBS documents.

CbsLinter runs every checker over one document snapshot and concatenates
their findings. A pass is a pure function of the text, the registry and the
configuration; nothing is kept between passes.
"""

# Group 1: External direct imports (alphabetical)
import logging

# Group 2: External from imports (alphabetical by source module)
from collections.abc import Callable

# Group 4: Internal from imports (alphabetical by source module)
from cbslint.checks.base import LintContext
from cbslint.checks.blocks import check_block_structure
from cbslint.checks.commands import check_command_usage
from cbslint.checks.syntax import check_general_syntax
from cbslint.checks.variables import check_variable_usage
from cbslint.config import LinterConfig
from cbslint.core.types import Diagnostic
from cbslint.registry.registry import CommandRegistry, default_registry

logger = logging.getLogger(__name__)

Checker = Callable[[LintContext], list[Diagnostic]]

# Order in which findings are reported
CHECKERS: tuple[tuple[str, Checker], ...] = (
    ("blocks", check_block_structure),
    ("commands", check_command_usage),
    ("variables", check_variable_usage),
    ("syntax", check_general_syntax),
)


class CbsLinter:
    """Runs all CBS checkers over a document.

    Stateless between calls: instantiate once and call ``lint`` for every
    snapshot, from any number of threads.
    """

    def __init__(
        self,
        registry: CommandRegistry | None = None,
        config: LinterConfig | None = None,
    ):
        self.registry = registry if registry is not None else default_registry()
        self.config = config or LinterConfig()

    def lint(self, text: str) -> list[Diagnostic]:
        """
        Lint one document snapshot.

        Checkers run independently and their findings are concatenated
        without suppression, so one malformed region may be reported by
        several checkers. A checker that fails is logged and skipped; the
        pass always completes.

        Params:
            text: Full document text

        Returns:
            Ordered diagnostics: block structure, command usage, variable
            usage, then general syntax
        """
        context = LintContext(text=text, registry=self.registry, config=self.config)
        diagnostics: list[Diagnostic] = []
        for name, checker in CHECKERS:
            try:
                diagnostics.extend(checker(context))
            except Exception:
                logger.exception("Checker '%s' failed; its findings are omitted", name)
        logger.debug("Lint pass over %d characters: %d diagnostics", len(text), len(diagnostics))
        return diagnostics


def lint_text(
    text: str,
    registry: CommandRegistry | None = None,
    config: LinterConfig | None = None,
) -> list[Diagnostic]:
    """Lint a text with a one-off linter."""
    return CbsLinter(registry, config).lint(text)
