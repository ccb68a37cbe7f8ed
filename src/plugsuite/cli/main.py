"""
plugsuite CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .commands import build_metadata, classify, validate


@click.group()
@click.version_option(package_name="plugsuite")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """plugsuite: Release packaging for plugin suites.

    Detects which modules ship as plugins and which are bundled
    dependencies, then merges release metadata into plugins.json.

    \b
    Quick Start:
      plugsuite classify -p .
      plugsuite validate -p .
      plugsuite build-metadata -p . --skip-report skipped.json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="[%X]",
    )


# Register commands
main.add_command(classify.classify)
main.add_command(validate.validate)
main.add_command(build_metadata.build_metadata, name="build-metadata")

if __name__ == "__main__":
    main()
