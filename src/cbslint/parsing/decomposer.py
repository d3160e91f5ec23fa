"""
Tag decomposition for CBS tags.

Splits the trimmed inner content of one tag into a command name and its raw
parameters according to the tag's calling convention:

- ``{{#name cond}}`` / ``{{#name::cond}}``: block header
- ``{{name::a::b}}``: double-colon parameters
- ``{{name:a,b}}``: prefix-style call with a single unsplit parameter
- ``{{name}}``: bare command

Parameters keep their surrounding whitespace; callers trim them when they
need to, so offsets computed from them stay exact.
"""

# Group 1: External direct imports (alphabetical)
import re

# Group 2: External from imports (alphabetical by source module)
from dataclasses import dataclass, field
from enum import Enum

# Group 4: Internal from imports (alphabetical by source module)
from cbslint.parsing.braces import find_top_level, find_top_level_colon, split_top_level

WHITESPACE_PATTERN = re.compile(r"\s")

# Leading characters of tag content that is not a value command
NON_COMMAND_PREFIXES = ("/", "?")


class CallingConvention(Enum):
    """How a tag passes parameters to its command."""

    DOUBLE_COLON = "double_colon"
    SINGLE_COLON_PREFIX = "single_colon_prefix"
    BLOCK_HEADER = "block_header"
    BARE = "bare"


@dataclass
class ParsedTag:
    """
    A tag split into command name and raw parameters.

    Params:
        content: The trimmed tag content the tag was parsed from
        command_name: Command name with surrounding whitespace removed
        convention: Calling convention the tag uses
        raw_params: Parameters exactly as written, whitespace preserved
        separator: Separator the parameters were split on
        params_offset: Offset of the parameter string within `content`
    """

    content: str
    command_name: str
    convention: CallingConvention
    raw_params: list[str] = field(default_factory=list)
    separator: str = ""
    params_offset: int = -1

    @property
    def is_block(self) -> bool:
        return self.convention is CallingConvention.BLOCK_HEADER

    @property
    def param_string(self) -> str:
        """The original parameter region of the content."""
        if self.params_offset < 0:
            return ""
        return self.content[self.params_offset :]

    @property
    def param_count(self) -> int:
        """Number of parameters for arity checks; a blank region counts as none."""
        if not self.param_string.strip():
            return 0
        return len(self.raw_params)

    def param_offsets(self) -> list[int]:
        """
        Offsets of each raw parameter relative to `content`.

        Returns:
            One offset per entry of `raw_params`
        """
        offsets = []
        cursor = self.params_offset
        for param in self.raw_params:
            offsets.append(cursor)
            cursor += len(param) + len(self.separator)
        return offsets


def _block_header(content: str) -> ParsedTag:
    separator_at = find_top_level(content, "::")
    space = WHITESPACE_PATTERN.search(content)
    if separator_at != -1 and (space is None or space.start() > separator_at):
        return ParsedTag(
            content=content,
            command_name=content[:separator_at].strip(),
            convention=CallingConvention.BLOCK_HEADER,
            raw_params=split_top_level(content[separator_at + 2 :], "::"),
            separator="::",
            params_offset=separator_at + 2,
        )

    # Legacy form: {{#each items item}}, also when the condition holds '::'
    if space:
        return ParsedTag(
            content=content,
            command_name=content[: space.start()],
            convention=CallingConvention.BLOCK_HEADER,
            raw_params=split_top_level(content[space.start() + 1 :], " "),
            separator=" ",
            params_offset=space.start() + 1,
        )

    return ParsedTag(
        content=content,
        command_name=content,
        convention=CallingConvention.BLOCK_HEADER,
    )


def decompose(content: str) -> ParsedTag | None:
    """
    Decompose trimmed tag content into command name and raw parameters.

    Separator searches skip nested `{{...}}` tags, so a separator inside a
    tag used as a parameter value never splits the outer tag.

    Params:
        content: Inner content of a tag, already trimmed

    Returns:
        ParsedTag, or None for empty content, closing tags ('/...') and
        expression tags ('?...'), which are not value commands
    """
    if not content or content.startswith(NON_COMMAND_PREFIXES):
        return None

    if content.startswith("#"):
        return _block_header(content)

    separator_at = find_top_level(content, "::")
    if separator_at != -1:
        return ParsedTag(
            content=content,
            command_name=content[:separator_at].strip(),
            convention=CallingConvention.DOUBLE_COLON,
            raw_params=split_top_level(content[separator_at + 2 :], "::"),
            separator="::",
            params_offset=separator_at + 2,
        )

    # A leading ':' belongs to the name, as in {{:else}}
    colon_at = find_top_level_colon(content)
    if colon_at > 0:
        return ParsedTag(
            content=content,
            command_name=content[:colon_at].strip(),
            convention=CallingConvention.SINGLE_COLON_PREFIX,
            raw_params=[content[colon_at + 1 :]],
            separator=":",
            params_offset=colon_at + 1,
        )

    return ParsedTag(content=content, command_name=content, convention=CallingConvention.BARE)
