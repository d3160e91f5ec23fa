"""
CBS document checkers.

Each checker takes a LintContext and returns its diagnostics independently
of the others.
"""

from cbslint.checks.base import LintContext
from cbslint.checks.blocks import BlockFrame, check_block_structure
from cbslint.checks.commands import check_command_usage, validate_tag
from cbslint.checks.syntax import check_general_syntax, has_separator_typo
from cbslint.checks.variables import (
    VariableFlowAnalyzer,
    VariableKind,
    VariableRef,
    VariableStorage,
    check_variable_usage,
)

__all__ = [
    "BlockFrame",
    "LintContext",
    "VariableFlowAnalyzer",
    "VariableKind",
    "VariableRef",
    "VariableStorage",
    "check_block_structure",
    "check_command_usage",
    "check_general_syntax",
    "check_variable_usage",
    "has_separator_typo",
    "validate_tag",
]
