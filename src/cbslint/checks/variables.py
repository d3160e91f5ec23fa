"""
Variable flow analysis for CBS documents.

Collects where variables are defined (``setvar``/``settempvar``) and where
they are read (``getvar``, ``gettempvar``, ``getglobalvar`` and ``$name``
inside expression tags). A read of a name that is defined nowhere in the
document is reported as a warning: globals can be injected by the engine,
and definition order is not taken into account.

The same location list backs go-to-definition and find-references.
"""

# Group 1: External direct imports (alphabetical)
import re

# Group 2: External from imports (alphabetical by source module)
from dataclasses import dataclass
from enum import Enum

# Group 4: Internal from imports (alphabetical by source module)
from cbslint.checks.base import LintContext
from cbslint.config import LinterConfig
from cbslint.core.text import LineIndex
from cbslint.core.types import Category, Diagnostic, Range
from cbslint.parsing.tokenizer import iter_all_spans

DEFINITION_PATTERN = re.compile(
    r"\{\{\s*(setvar|settempvar)::([a-zA-Z0-9_]+)::", re.IGNORECASE
)
REFERENCE_PATTERN = re.compile(
    r"\{\{\s*(getvar|gettempvar|getglobalvar)::([a-zA-Z0-9_]+)\s*\}\}", re.IGNORECASE
)
DOLLAR_REFERENCE_PATTERN = re.compile(r"\$([a-zA-Z0-9_]+)")


class VariableKind(Enum):
    DEFINITION = "definition"
    REFERENCE = "reference"


class VariableStorage(Enum):
    """Where the engine keeps a variable."""

    CHAT = "chat"
    TEMP = "temp"
    GLOBAL = "global"


STORAGE_BY_COMMAND = {
    "setvar": VariableStorage.CHAT,
    "getvar": VariableStorage.CHAT,
    "settempvar": VariableStorage.TEMP,
    "gettempvar": VariableStorage.TEMP,
    "getglobalvar": VariableStorage.GLOBAL,
}


@dataclass(frozen=True)
class VariableRef:
    """
    One occurrence of a variable name.

    Params:
        name: Variable name
        start: Absolute offset of the first character of the name
        end: Absolute offset just past the name
        range: Line/character range of the name
        kind: DEFINITION or REFERENCE
        storage: Storage class implied by the command used
    """

    name: str
    start: int
    end: int
    range: Range
    kind: VariableKind
    storage: VariableStorage

    @property
    def is_definition(self) -> bool:
        return self.kind is VariableKind.DEFINITION


def is_expression_tag(content: str) -> bool:
    """Whether trimmed tag content is a '?' or 'calc::' expression."""
    return content.startswith("?") or content.lower().startswith("calc::")


class VariableFlowAnalyzer:
    """Definition and reference sites of every variable in one document.

    Built from a single text snapshot; build a new analyzer after edits.
    Expression tags nested deeper than `max_depth` are not searched on
    their own; a shallower enclosing expression tag still covers them.
    """

    def __init__(
        self, text: str, lines: LineIndex | None = None, max_depth: int | None = None
    ):
        self.text = text
        self.lines = lines or LineIndex(text)
        self.max_depth = max_depth
        self.locations: list[VariableRef] = self._collect()

    def _ref(
        self, name: str, start: int, kind: VariableKind, storage: VariableStorage
    ) -> VariableRef:
        end = start + len(name)
        return VariableRef(
            name=name,
            start=start,
            end=end,
            range=self.lines.range_at(start, end),
            kind=kind,
            storage=storage,
        )

    def _collect(self) -> list[VariableRef]:
        locations = []

        for match in DEFINITION_PATTERN.finditer(self.text):
            storage = STORAGE_BY_COMMAND[match.group(1).lower()]
            locations.append(
                self._ref(match.group(2), match.start(2), VariableKind.DEFINITION, storage)
            )

        for match in REFERENCE_PATTERN.finditer(self.text):
            storage = STORAGE_BY_COMMAND[match.group(1).lower()]
            locations.append(
                self._ref(match.group(2), match.start(2), VariableKind.REFERENCE, storage)
            )

        # Nested expression tags would report the same '$name' twice
        seen_offsets = set()
        for span in iter_all_spans(self.text, max_depth=self.max_depth):
            if not is_expression_tag(span.content):
                continue
            inner_start = span.start + 2
            for match in DOLLAR_REFERENCE_PATTERN.finditer(span.inner):
                start = inner_start + match.start(1)
                if start in seen_offsets:
                    continue
                seen_offsets.add(start)
                locations.append(
                    self._ref(
                        match.group(1), start, VariableKind.REFERENCE, VariableStorage.CHAT
                    )
                )

        return locations

    def defined_names(self) -> set[str]:
        return {ref.name for ref in self.locations if ref.is_definition}

    def definitions(self, name: str | None = None) -> list[VariableRef]:
        """Definition sites, optionally restricted to one name."""
        return [
            ref
            for ref in self.locations
            if ref.is_definition and (name is None or ref.name == name)
        ]

    def references(self, name: str | None = None) -> list[VariableRef]:
        """Read sites, optionally restricted to one name."""
        return [
            ref
            for ref in self.locations
            if not ref.is_definition and (name is None or ref.name == name)
        ]

    def occurrences(self, name: str) -> list[VariableRef]:
        """Every definition and read of a name, in document order."""
        return sorted(
            (ref for ref in self.locations if ref.name == name), key=lambda ref: ref.start
        )

    def name_at(self, offset: int) -> str | None:
        """
        Find the variable whose name covers an offset.

        Params:
            offset: Absolute offset, e.g. of the editor cursor

        Returns:
            The variable name, or None when the offset is not on a variable
        """
        for ref in self.locations:
            if ref.start <= offset <= ref.end:
                return ref.name
        return None

    def undefined_references(self, config: LinterConfig | None = None) -> list[VariableRef]:
        """
        References to names that no definition in the document provides.

        Params:
            config: Settings naming engine-injected variables that are never
                reported; defaults to LinterConfig()

        Returns:
            Offending references in collection order
        """
        config = config or LinterConfig()
        defined = self.defined_names()
        return [
            ref
            for ref in self.references()
            if ref.name not in defined and not config.is_exempt_variable(ref.name)
        ]


def check_variable_usage(context: LintContext) -> list[Diagnostic]:
    """
    Warn about variables that are read but never defined in the document.

    Params:
        context: Lint context of the document

    Returns:
        One warning per undefined reference, anchored to the variable name
    """
    analyzer = VariableFlowAnalyzer(
        context.text, context.lines, max_depth=context.config.max_depth
    )
    return [
        context.warning(
            ref.start,
            ref.end,
            f"Variable '{ref.name}' is used but not defined (with setvar/settempvar).",
            Category.STYLE,
        )
        for ref in analyzer.undefined_references(context.config)
    ]
