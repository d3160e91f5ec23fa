"""
Exception classes for CBS linting.

This module defines the exception types raised while building the command
registry and while mapping tag parameters back to document offsets. A lint
pass itself never raises: checkers turn problems in the linted text into
diagnostics instead.
"""


class CbsLintError(Exception):
    """Base exception for all cbslint errors."""

    pass


class RegistryError(CbsLintError):
    """Raised when the command registry cannot be built from its signatures."""

    def __init__(self, name: str, reason: str):
        """
        Initialize the exception.

        Params:
            name: The command name the problem was found on
            reason: Why the registry rejected the signature
        """
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid command registry entry '{name}': {reason}")


class SignatureError(CbsLintError, ValueError):
    """Raised when a command signature declares inconsistent parameters."""

    def __init__(self, name: str, reason: str):
        """
        Initialize the exception.

        Subclasses ValueError so pydantic validators can surface it as a
        regular validation error.

        Params:
            name: The command name of the offending signature
            reason: Description of the inconsistency
        """
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid signature for command '{name}': {reason}")


class OffsetMappingError(CbsLintError):
    """Raised when a nested parameter cannot be mapped back to the document."""

    def __init__(self, parameter: str, offset: int):
        """
        Initialize the exception.

        Params:
            parameter: The parameter text that was being located
            offset: The absolute offset the parameter was expected at
        """
        self.parameter = parameter
        self.offset = offset
        super().__init__(
            f"Parameter '{parameter}' does not appear at document offset {offset}"
        )
