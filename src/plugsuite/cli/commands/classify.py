"""
Classify Command - Show the suites of a repository.

Usage:
    plugsuite classify              # Show suites of the current directory
    plugsuite classify -p ./repo    # Show suites of another project
"""

from __future__ import annotations

import click
from rich.tree import Tree

from ...core.classifier import classify as classify_modules
from ...core.errors import PlugsuiteError
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
    "--show-unresolved",
    is_flag=True,
    help="List dependencies that match no module of the project",
)
def classify(project_dir: str, show_unresolved: bool):
    """
    Show which modules ship as plugins.

    Each root is published on its own; the modules below it are
    bundled into its archive.
    """
    try:
        descriptor = load_descriptor(project_dir)
        result = classify_modules(descriptor.all_modules)
    except PlugsuiteError as e:
        fail(str(e))

    tree = Tree(f"📦 [bold]{descriptor.root.name}[/bold] ({len(result)} plugins)")
    if result.is_empty:
        tree.add("[dim]No modules declared[/dim]")

    for entry in result:
        kind = "suite" if entry.is_suite else "module"
        branch = tree.add(f"[cyan]{entry.root.identity}[/cyan] [dim]({kind})[/dim]")
        for member in entry.absorbed:
            branch.add(f"{member.identity}")

    console.print(tree)

    for warning in result.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")

    if result.unresolved:
        console.print(f"[dim]{len(result.unresolved)} dependencies outside the project[/dim]")
        if show_unresolved:
            for unresolved in result.unresolved:
                console.print(f"  [dim]{unresolved.module.name} → {unresolved.dependency}[/dim]")
