"""
CBS command registry.

This package contains the declarative command signatures, the built-in
command table, and the registry used to resolve names and check arity.
"""

from cbslint.registry.commands import BUILTIN_COMMANDS
from cbslint.registry.registry import (
    CommandRegistry,
    count_parameters_in_current_tag,
    default_registry,
    extract_command_identifier,
)
from cbslint.registry.signatures import CommandSignature, Deprecation, ParameterSpec

__all__ = [
    "BUILTIN_COMMANDS",
    "CommandRegistry",
    "CommandSignature",
    "Deprecation",
    "ParameterSpec",
    "count_parameters_in_current_tag",
    "default_registry",
    "extract_command_identifier",
]
