"""
cbslint exception classes.

This package provides all exception types used throughout cbslint for
consistent error handling and reporting.
"""

from cbslint.exceptions.core import (
    CbsLintError,
    OffsetMappingError,
    RegistryError,
    SignatureError,
)

__all__ = [
    "CbsLintError",
    "RegistryError",
    "SignatureError",
    "OffsetMappingError",
]
