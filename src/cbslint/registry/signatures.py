"""
Declarative command signatures for the CBS command registry.

Each signature states its parameters explicitly (required or optional) and
whether trailing parameters may repeat, so arity checks never depend on the
wording of presentation labels.
"""

# Group 2: External from imports (alphabetical by source module)
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Group 4: Internal from imports (alphabetical by source module)
from cbslint.exceptions import SignatureError


class ParameterSpec(BaseModel):
    """One positional parameter of a command."""

    model_config = ConfigDict(frozen=True)

    label: str
    optional: bool = False
    documentation: str | None = None


class Deprecation(BaseModel):
    """Deprecation marker attached to a command signature."""

    model_config = ConfigDict(frozen=True)

    message: str
    replacement: str | None = None


class CommandSignature(BaseModel):
    """
    Signature of a single CBS command overload.

    Params:
        name: Primary command name, including the '#' sigil for blocks
        aliases: Alternative names resolving to this signature
        signature_label: Display form, e.g. 'replace::A::B::C'
        description: Short human readable description
        parameters: Positional parameter specs in call order
        variadic: Whether the last parameter may repeat without bound
        is_prefix: Invoked as 'name:param' with one unsplit parameter
        is_block: Opens a '{{#name}}...{{/name}}' region
        deprecated: Deprecation marker, None when the command is current
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    aliases: tuple[str, ...] = ()
    signature_label: str = ""
    description: str = ""
    parameters: tuple[ParameterSpec, ...] = ()
    variadic: bool = False
    is_prefix: bool = False
    is_block: bool = False
    deprecated: Deprecation | None = None

    @field_validator("name", "aliases", mode="after")
    @classmethod
    def _strip_names(cls, value):
        if isinstance(value, str):
            return value.strip()
        return tuple(alias.strip() for alias in value)

    @model_validator(mode="after")
    def _check_consistency(self) -> "CommandSignature":
        seen_optional = False
        for spec in self.parameters:
            if spec.optional:
                seen_optional = True
            elif seen_optional:
                raise SignatureError(
                    self.name,
                    f"required parameter '{spec.label}' follows an optional one",
                )

        if self.variadic and not self.parameters:
            raise SignatureError(self.name, "variadic signature declares no parameters")

        if self.is_prefix and len(self.parameters) > 1:
            raise SignatureError(
                self.name, "prefix-style commands take a single unsplit parameter"
            )

        if self.is_block != self.name.startswith("#"):
            raise SignatureError(
                self.name, "block commands and only block commands start with '#'"
            )

        return self

    @property
    def label(self) -> str:
        """Declared signature label, or one derived from the parameter specs."""
        if self.signature_label:
            return self.signature_label
        if not self.parameters:
            return self.name
        separator = ":" if self.is_prefix else "::"
        labels = [
            f"[{spec.label}]" if spec.optional else spec.label
            for spec in self.parameters
        ]
        if self.variadic:
            labels[-1] = labels[-1] + "..."
        return self.name + separator + "::".join(labels)

    @property
    def required_count(self) -> int:
        """Number of parameters that must be supplied."""
        return sum(1 for spec in self.parameters if not spec.optional)

    @property
    def max_count(self) -> int | None:
        """Largest accepted parameter count, None when unbounded."""
        if self.variadic:
            return None
        return len(self.parameters)

    @property
    def display(self) -> str:
        """Signature label wrapped in tag braces, as shown in diagnostics."""
        return "{{" + self.label + "}}"

    def accepts(self, provided: int) -> bool:
        """
        Check whether this overload accepts a parameter count.

        Variadic signatures only enforce the lower bound.

        Params:
            provided: Number of parameters found in the tag

        Returns:
            True when the count is within this overload's arity
        """
        if provided < self.required_count:
            return False
        return self.max_count is None or provided <= self.max_count

    def matches(self, identifier: str, include_aliases: bool = True) -> bool:
        """Case-insensitive match against the primary name and, optionally, aliases."""
        lowered = identifier.lower()
        if self.name.lower() == lowered:
            return True
        if include_aliases:
            return any(alias.lower() == lowered for alias in self.aliases)
        return False
