"""
Linter configuration.

LinterConfig is an immutable value object handed to the linter and the
re-lint scheduler. Defaults reproduce the behaviour editors ship with; the
command line overrides individual fields.
"""

from attrs import field, frozen, validators

# Variable commands accepted even when a registry does not list them
DEFAULT_BUILTIN_COMMANDS = frozenset(
    {"setvar", "settempvar", "getvar", "gettempvar", "getglobalvar"}
)


@frozen
class LinterConfig:
    """Settings for one linter instance.

    Attributes:
        max_depth: Deepest nested tag level that is still validated
        debounce_delay: Seconds to wait after the last edit before re-linting
        builtin_commands: Command names never reported as unknown
        exempt_variable_marker: Variables whose name contains it are engine-injected
    """

    max_depth: int = field(default=10, validator=validators.ge(0))
    debounce_delay: float = field(default=0.5, validator=validators.ge(0))
    builtin_commands: frozenset[str] = field(
        default=DEFAULT_BUILTIN_COMMANDS, converter=frozenset
    )
    exempt_variable_marker: str = "toggle_"

    def is_builtin(self, command_name: str) -> bool:
        return command_name.lower() in self.builtin_commands

    def is_exempt_variable(self, name: str) -> bool:
        return bool(self.exempt_variable_marker) and self.exempt_variable_marker in name
