"""
Command registry for CBS.

The registry is a read-only table of command signatures built once at
startup. Checkers use it to resolve command names (including aliases and
overloads) and to validate parameter counts; editor features use the
cursor helpers at the bottom of this module to find which command a
partially typed tag belongs to.
"""

# Group 1: External direct imports (alphabetical)
import re

# Group 2: External from imports (alphabetical by source module)
from collections.abc import Iterable, Iterator
from functools import lru_cache

# Group 4: Internal from imports (alphabetical by source module)
from cbslint.exceptions import RegistryError
from cbslint.parsing.braces import BraceKind, find_top_level, iter_brace_tokens
from cbslint.registry.commands import BUILTIN_COMMANDS
from cbslint.registry.signatures import CommandSignature

# Identifiers starting with these never resolve through aliases
SIGIL_PREFIXES = ("#", "?", "/")

COMMAND_IDENTIFIER_PATTERN = re.compile(r"\{\{\s*(?:([#?/])\s*)?([\w-]+)?")


class CommandRegistry:
    """Lookup table of CBS command signatures.

    Lookups are case-insensitive over primary names and aliases. One name
    may resolve to several overloaded signatures (e.g. parameterless
    ``slot`` and ``slot::A``); a usage is valid when any overload accepts it.
    """

    def __init__(self, signatures: Iterable[CommandSignature]):
        self._signatures: list[CommandSignature] = []
        seen: set[tuple[str, str]] = set()
        for signature in signatures:
            key = (signature.name.lower(), signature.label)
            if key in seen:
                raise RegistryError(
                    signature.name, f"duplicate signature '{signature.label}'"
                )
            seen.add(key)
            self._signatures.append(signature)

    @classmethod
    def from_signatures(cls, *groups: Iterable[CommandSignature]) -> "CommandRegistry":
        """Build a registry from one or more groups of signatures."""
        return cls(signature for group in groups for signature in group)

    def __len__(self) -> int:
        return len(self._signatures)

    def __iter__(self) -> Iterator[CommandSignature]:
        return iter(self._signatures)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and bool(self.lookup_all(identifier))

    def names(self) -> list[str]:
        """Primary names of all registered commands, without duplicates."""
        return list(dict.fromkeys(signature.name for signature in self._signatures))

    @staticmethod
    def resolves_aliases(identifier: str) -> bool:
        """
        Whether aliases take part in resolving an identifier.

        Sigil-prefixed identifiers ('#if', '?', '/if') and identifiers that
        themselves carry prefix-call syntax ('random:a') only match primary
        names.

        Params:
            identifier: Command identifier under test

        Returns:
            False when alias resolution is suppressed
        """
        return not identifier.startswith(SIGIL_PREFIXES) and ":" not in identifier

    def lookup_all(self, identifier: str) -> list[CommandSignature]:
        """
        Find every signature registered under a name or alias.

        Params:
            identifier: Command name as written in the tag

        Returns:
            All matching overloads in registration order, empty when unknown
        """
        identifier = identifier.strip()
        if not identifier:
            return []
        include_aliases = self.resolves_aliases(identifier)
        return [
            signature
            for signature in self._signatures
            if signature.matches(identifier, include_aliases=include_aliases)
        ]

    def lookup(self, identifier: str) -> CommandSignature | None:
        """Find the first signature registered under a name or alias."""
        matches = self.lookup_all(identifier)
        return matches[0] if matches else None

    def accepts(self, identifier: str, provided: int) -> bool:
        """
        Check whether any overload of a command accepts a parameter count.

        Params:
            identifier: Command name or alias
            provided: Number of parameters supplied in the tag

        Returns:
            True when at least one overload accepts the count
        """
        return any(signature.accepts(provided) for signature in self.lookup_all(identifier))


@lru_cache(maxsize=1)
def default_registry() -> CommandRegistry:
    """Registry of the built-in CBS commands, built on first use."""
    return CommandRegistry(BUILTIN_COMMANDS)


def _innermost_open_tag(text_before_cursor: str) -> int:
    stack = []
    for kind, offset in iter_brace_tokens(text_before_cursor):
        if kind is BraceKind.OPEN:
            stack.append(offset)
        elif stack:
            stack.pop()
    return stack[-1] if stack else -1


def extract_command_identifier(text_before_cursor: str) -> str | None:
    """
    Identify the command of the tag the cursor is currently inside.

    Params:
        text_before_cursor: Document text from any earlier point up to the cursor

    Returns:
        Identifier such as 'replace', '#if' or '?', or None when the cursor
        is not inside a tag that names a command yet
    """
    tag_start = _innermost_open_tag(text_before_cursor)
    if tag_start == -1:
        return None
    match = COMMAND_IDENTIFIER_PATTERN.match(text_before_cursor, tag_start)
    if not match:
        return None
    sigil, name = match.group(1) or "", match.group(2)
    if sigil == "?":
        return "?"
    if not name:
        return None
    return sigil + name


def count_parameters_in_current_tag(text_before_cursor: str) -> int:
    """
    Count the '::' separators typed so far in the tag around the cursor.

    Separators inside nested tags are not counted. The result is the
    zero-based index of the parameter being typed.

    Params:
        text_before_cursor: Document text up to the cursor

    Returns:
        Number of top-level separators after the command name
    """
    tag_start = _innermost_open_tag(text_before_cursor)
    if tag_start == -1:
        return 0
    body = text_before_cursor[tag_start + 2 :]
    count = 0
    index = find_top_level(body, "::")
    while index != -1:
        count += 1
        index = find_top_level(body, "::", index + 2)
    return count
