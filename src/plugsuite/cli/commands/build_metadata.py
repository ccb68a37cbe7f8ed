"""
Build Metadata Command - Merge release metadata into plugins.json.

Classifies the project's modules, then records a new version entry for
every plugin whose version changed on the release line. Unchanged
plugins are skipped; the optional skip report tells the packaging step
which artifacts to reuse instead of copying.

Usage:
    plugsuite build-metadata                      # Update plugins.json
    plugsuite build-metadata --dry-run            # Show what would change
    plugsuite build-metadata --skip-report s.json # Also write skip flags
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.table import Table

from ...core.classifier import classify
from ...core.errors import PlugsuiteError
from ...core.manifest import DescriptorMetadataProvider
from ...core.merge import MergeCoordinator, MergeReport
from ...core.registry import load_registry_file
from ...core.validation import require_forest
from ...core.versions import is_snapshot, minor_version, select_modules
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
    "--registry",
    "registry_file",
    type=click.Path(dir_okay=False),
    help="Registry file to update (defaults to [release].registry)",
)
@click.option(
    "--release-line",
    help="Release line to record versions under (defaults to [release].line)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would change without writing",
)
@click.option(
    "--skip-report",
    type=click.Path(dir_okay=False),
    help="Write per-module skip flags as JSON",
)
def build_metadata(
    project_dir: str,
    registry_file: str | None,
    release_line: str | None,
    dry_run: bool,
    skip_report: str | None,
):
    """
    Merge release metadata into the plugins registry.

    \b
    Examples:
        plugsuite build-metadata
        plugsuite build-metadata --registry site/plugins.json
        plugsuite build-metadata --dry-run
    """
    try:
        descriptor = load_descriptor(project_dir)
        line = release_line or descriptor.release_line
        if not line:
            fail("No release line given, set [release].line or pass --release-line")
        minor_version(line)

        # Dry run for development lines
        if is_snapshot(line) and not dry_run:
            console.print(f"[yellow]Running in dry-run mode because '{line}' is a snapshot[/yellow]")
            dry_run = True

        modules = select_modules(descriptor.all_modules, line)
        result = classify(modules)
        require_forest(result)

        registry_path = Path(registry_file).resolve() if registry_file else descriptor.registry_path
        registry = load_registry_file(registry_path)

        coordinator = MergeCoordinator(registry, line, DescriptorMetadataProvider(descriptor))
        report = coordinator.run(result.forest)
    except PlugsuiteError as e:
        fail(str(e))

    _print_report(report)

    if skip_report:
        _write_skip_report(Path(skip_report), line, result.forest, report)
        console.print(f"[dim]Skip report written to {skip_report}[/dim]")

    if dry_run:
        console.print(f"[yellow]Would write {len(report.registry.plugins)} plugins[/yellow]")
        return

    report.registry.save(registry_path)
    console.print(
        f"[green]✓ {registry_path.name} written with {len(report.registry.plugins)} plugins[/green]"
    )


def _print_report(report: MergeReport) -> None:
    """Print a table of updated and skipped plugins."""
    table = Table(title="Plugins")
    table.add_column("Plugin", style="cyan")
    table.add_column("Version")
    table.add_column("File", style="dim")
    table.add_column("Status")

    for plugin_id, outcome in report.outcomes.items():
        status = "[dim]unchanged[/dim]" if outcome.skipped else "[green]updated[/green]"
        entry = outcome.record.versions.get(report.release_line)
        table.add_row(
            plugin_id,
            entry.plugin_version if entry else "-",
            report.filenames.get(plugin_id, "-"),
            status,
        )

    console.print(table)


def _write_skip_report(path: Path, line: str, forest, report: MergeReport) -> None:
    """Write skip flags for every module, keyed by coordinate."""
    modules = {}
    for entry in forest:
        for member in entry.members:
            modules[str(member.identity)] = {
                "suite": entry.root.name,
                "skipped": report.is_skipped(member),
                "file": report.filenames[entry.root.name],
            }

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"release_line": line, "modules": modules}, indent=2) + "\n")
