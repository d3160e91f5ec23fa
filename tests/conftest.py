"""
Shared test fixtures and utilities for the cbslint test suite.
"""

import pytest

from cbslint.checks.base import LintContext
from cbslint.config import LinterConfig
from cbslint.linter import CbsLinter
from cbslint.registry import default_registry


@pytest.fixture
def registry():
    """The built-in command registry."""
    return default_registry()


@pytest.fixture
def linter():
    """Linter with default configuration."""
    return CbsLinter()


@pytest.fixture
def make_context():
    """Factory building a LintContext for a text, optionally with a config.

    Usage:
        def test_something(make_context):
            context = make_context("{{user}}", LinterConfig(max_depth=2))
    """

    def _make(text: str, config: LinterConfig | None = None) -> LintContext:
        return LintContext(text=text, config=config or LinterConfig())

    return _make