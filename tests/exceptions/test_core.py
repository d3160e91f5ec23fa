"""
Tests for the cbslint exception hierarchy.

This module tests the messages and attributes carried by the exceptions
raised while building the command registry and mapping nested parameters.
"""

import pytest
from pydantic import ValidationError

from cbslint.exceptions import (
    CbsLintError,
    OffsetMappingError,
    RegistryError,
    SignatureError,
)
from cbslint.registry.signatures import CommandSignature, ParameterSpec


class TestRegistryError:
    """Tests for RegistryError."""

    def test_message_and_attributes(self):
        """Test the message names the command and the reason."""
        error = RegistryError("slot", "duplicate signature 'slot'")
        assert str(error) == "Invalid command registry entry 'slot': duplicate signature 'slot'"
        assert error.name == "slot"
        assert error.reason == "duplicate signature 'slot'"

    def test_is_cbslint_error(self):
        assert isinstance(RegistryError("x", "y"), CbsLintError)


class TestSignatureError:
    """Tests for SignatureError."""

    def test_message_and_attributes(self):
        error = SignatureError("replace", "required parameter after optional one")
        assert str(error) == (
            "Invalid signature for command 'replace': required parameter after optional one"
        )
        assert error.name == "replace"

    def test_is_value_error(self):
        """Test SignatureError can be caught as a ValueError."""
        error = SignatureError("x", "y")
        assert isinstance(error, ValueError)
        assert isinstance(error, CbsLintError)

    def test_surfaces_through_model_validation(self):
        """Test an inconsistent signature is rejected when the model is built."""
        with pytest.raises(ValidationError, match="Invalid signature for command 'broken'"):
            CommandSignature(
                name="broken",
                parameters=(ParameterSpec(label="A", optional=True), ParameterSpec(label="B")),
            )


class TestOffsetMappingError:
    """Tests for OffsetMappingError."""

    def test_message_and_attributes(self):
        error = OffsetMappingError("{{user}}", 42)
        assert str(error) == "Parameter '{{user}}' does not appear at document offset 42"
        assert error.parameter == "{{user}}"
        assert error.offset == 42
