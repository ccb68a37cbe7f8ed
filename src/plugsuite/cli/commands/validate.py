"""
Validate Command - Check a repository is releasable.

Usage:
    plugsuite validate                  # Validate all suites
    plugsuite validate --single-suite   # Require exactly one suite
"""

from __future__ import annotations

import click

from ...core.errors import PlugsuiteError
from ...core.validation import validate_release
from ..utils import console, fail, load_descriptor


@click.command()
@click.option(
    "--project-dir",
    "-p",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Project directory containing plugsuite.toml",
)
@click.option(
    "--single-suite",
    is_flag=True,
    help="Fail unless the modules form exactly one suite",
)
def validate(project_dir: str, single_suite: bool):
    """
    Validate suites and their metadata.

    Checks that at least one suite is found, that members of a suite
    target the same release line, and that every root declares its
    name, descriptions, category, license and authors.
    """
    try:
        descriptor = load_descriptor(project_dir)
        report = validate_release(descriptor, single_suite=single_suite)
    except PlugsuiteError as e:
        fail(str(e))

    for warning in report.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")

    for entry in report.classification:
        console.print(f"  [green]✓[/green] {entry.root.name}")
        for child in entry.absorbed:
            console.print(f"    [dim]'{child.name}' is a dependency[/dim]")

    console.print(f"[green]✓ {report.suite_count} plugin(s) ready to release[/green]")
