"""
cbslint - Parsing and diagnostics for the Curly Braced Syntax (CBS) template language

cbslint tokenizes CBS tags, validates command usage against a declarative
command registry, matches block tags, and tracks variable definitions and
references, producing range-anchored diagnostics for editors and the
command line.
"""

from importlib.metadata import version

from cbslint.config import LinterConfig
from cbslint.core.types import Diagnostic, Severity
from cbslint.linter import CbsLinter, lint_text
from cbslint.registry import CommandRegistry, default_registry

__version__ = version("cbs-lint")

__all__ = [
    "__version__",
    "CbsLinter",
    "CommandRegistry",
    "Diagnostic",
    "LinterConfig",
    "Severity",
    "default_registry",
    "lint_text",
]
