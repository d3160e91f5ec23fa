"""cbs-lint command-line interface."""

# Group 1: External direct imports (alphabetical)
import json
import logging
import sys

# Group 2: External from imports (alphabetical by source module)
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

# Group 4: Internal from imports (alphabetical by source module)
from cbslint import __version__
from cbslint.config import LinterConfig
from cbslint.core.types import Diagnostic, Severity
from cbslint.linter import CbsLinter

console = Console(highlight=False)

SEVERITY_STYLES = {Severity.ERROR: "bold red", Severity.WARNING: "yellow"}


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _render_text(path: str, diagnostics: list[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        style = SEVERITY_STYLES[diagnostic.severity]
        console.print(
            f"{escape(path)}:{diagnostic.range.start}: "
            f"[{style}]{diagnostic.severity.value}[/{style}]: {escape(diagnostic.message)}",
            soft_wrap=True,
        )


@click.command()
@click.version_option(version=__version__, prog_name="cbs-lint")
@click.argument("paths", nargs=-1, required=True)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=0),
    default=LinterConfig().max_depth,
    show_default=True,
    help="Deepest nested tag level to validate",
)
@click.option("--no-warnings", is_flag=True, help="Only report errors")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    paths: tuple[str, ...],
    output_format: str,
    max_depth: int,
    no_warnings: bool,
    verbose: bool,
) -> None:
    """Lint CBS template files.

    PATHS are files to lint; use '-' to read from standard input. Exits with
    status 1 when any error is reported and 2 when an input cannot be read.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    linter = CbsLinter(config=LinterConfig(max_depth=max_depth))

    results: dict[str, list[Diagnostic]] = {}
    for path in paths:
        try:
            text = _read_source(path)
        except (OSError, UnicodeDecodeError) as exc:
            error = click.FileError(path, hint=str(exc))
            error.exit_code = 2
            raise error from exc
        diagnostics = linter.lint(text)
        if no_warnings:
            diagnostics = [diagnostic for diagnostic in diagnostics if diagnostic.is_error]
        results[path] = diagnostics

    if output_format == "json":
        payload = {
            path: [diagnostic.to_dict() for diagnostic in diagnostics]
            for path, diagnostics in results.items()
        }
        click.echo(json.dumps(payload, indent=2))
    else:
        for path, diagnostics in results.items():
            _render_text(path, diagnostics)

    if any(diagnostic.is_error for diagnostics in results.values() for diagnostic in diagnostics):
        sys.exit(1)


if __name__ == "__main__":
    main()
