import platform
from pathlib import Path

import typer
from rich import print
from rich.markup import escape

from cff_core import __version__
from cff_core.errors import CffError, Finding, Severity
from cff_core.loader import DEFAULT_FILENAME, load

STYLES = {Severity.ERROR: "red", Severity.WARNING: "yellow", Severity.INFO: "blue"}


def _show(finding: Finding):
    style = STYLES[finding.severity]
    where = f"{finding.path}: " if finding.loc else ""
    print(
        f"[{style}]{finding.severity.value}[/{style}] "
        f"[b]{finding.kind.value}[/b] {escape(where + finding.message)}"
    )


def check(
    path: Path = typer.Argument(
        Path(DEFAULT_FILENAME), help="Citation file, or directory containing one."
    ),
    strict: bool = typer.Option(False, "--strict", help="Unknown keys are errors."),
):
    """Check that a citation file is valid and report all problems."""
    try:
        report = load(path, strict=strict)
    except CffError as e:
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(2)

    for finding in report.findings:
        _show(finding)

    if not report.ok:
        print(f"[b][red]{len(report.errors)} error(s) found.[/red][/b]")
        raise typer.Exit(1)
    print(f"[b][green]{escape(report.unwrap().title)}: valid citation file.[/green][/b]")


def info():
    """Show information about the system and Python environment."""
    un = platform.uname()
    print(f"[b]System:[/b] {un.system} {un.release} {un.version}")
    print(
        f"[b]Python:[/b] {platform.python_version()} ({platform.python_implementation()})"
    )
    print("cff-core", __version__)
