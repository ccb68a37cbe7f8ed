"""
CLI Utilities - Shared helper functions for command line operations.

Loading the release descriptor and reporting fatal errors are the same
for every command, so they live here.
"""

import sys
from pathlib import Path
from typing import NoReturn

from rich.console import Console
from rich.markup import escape

from ..config import DESCRIPTOR_FILE_NAME
from ..core.manifest import ReleaseDescriptor

console = Console()


def fail(message: str) -> NoReturn:
    """
    Print an error message and exit with status 1.

    Args:
        message (str): The error message to display.
    """
    console.print(f"[red]Error:[/red] {escape(message)}")
    sys.exit(1)


def load_descriptor(project_dir: str) -> ReleaseDescriptor:
    """
    Load the release descriptor of a project directory, or exit.

    Args:
        project_dir (str): Directory expected to contain plugsuite.toml.

    Returns:
        ReleaseDescriptor: The parsed descriptor.
    """
    project_root = Path(project_dir).resolve()
    if not (project_root / DESCRIPTOR_FILE_NAME).exists():
        fail(f"No {DESCRIPTOR_FILE_NAME} found in '{project_root}'")
    return ReleaseDescriptor.find(project_root)
