"""
Global Configuration and Release Defaults.

This module centralizes the fixed conventions of the plugin release
pipeline: file names, artifact extensions and the set of categories a
plugin may be published under. Per-project settings live in the release
descriptor (see ``core.manifest``).
"""

from pathlib import Path
from typing import Set, Tuple

# --- File Names ---

# Release descriptor looked up in the project directory
DESCRIPTOR_FILE_NAME = "plugsuite.toml"

# Persisted registry of all published plugins
REGISTRY_FILE_NAME = "plugins.json"

# Readme attached to a plugin when the descriptor does not name one
DEFAULT_README_FILE = "README.md"

# --- Artifacts ---

# A module built on its own
SINGLE_ARTIFACT_EXTENSION = "nbm"

# A suite: one archive holding a single artifact per member
BUNDLE_EXTENSION = "zip"

# --- Images ---

# Published screenshots live under imgs/<plugin id>/
IMAGES_DIRECTORY = "imgs"

THUMBNAIL_SUFFIX = "-thumbnail"

# Source image formats accepted for screenshots (all are published as PNG)
IMAGE_EXTENSIONS: Set[str] = {
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
}

# --- Categories ---

# Display categories a plugin may be listed under
ALLOWED_CATEGORIES: Tuple[str, ...] = (
    "Layout",
    "Export",
    "Import",
    "Data Laboratory",
    "Filter",
    "Generator",
    "Metric",
    "Preview",
    "Tool",
    "Appearance",
    "Clustering",
    "Other Category",
)

# --- Release lines ---

# A release line with this suffix is a development line (dry run)
SNAPSHOT_SUFFIX = "-SNAPSHOT"


def is_allowed_category(category: str) -> bool:
    """Check if a display category is in the allow list."""
    return category in ALLOWED_CATEGORIES


def is_image_file(path: Path) -> bool:
    """Check if a path looks like a publishable screenshot."""
    return (
        path.suffix.lower() in IMAGE_EXTENSIONS
        and not path.name.startswith(".")
        and THUMBNAIL_SUFFIX not in path.name
    )
