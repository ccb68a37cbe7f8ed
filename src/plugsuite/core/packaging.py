"""
Packaging Path Resolver.

Decides the file a suite is distributed as. A lone module ships as its
own artifact; a suite ships as a bundle that holds one artifact per
member.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from ..config import BUNDLE_EXTENSION, SINGLE_ARTIFACT_EXTENSION
from .types import Module
from .versions import minor_version

logger = logging.getLogger(__name__)


def artifact_filename(module: Module, extension: str = SINGLE_ARTIFACT_EXTENSION) -> str:
    """File name of a module's built artifact, e.g. ``foo-1.2.3.nbm``."""
    return f"{module.name}-{module.version}.{extension}"


def resolve_path(
    root: Module,
    members: Sequence[Module],
    single_extension: str = SINGLE_ARTIFACT_EXTENSION,
    bundle_extension: str = BUNDLE_EXTENSION,
) -> str:
    """
    Resolve the distributable file name of a suite.

    The per-member artifacts a bundle is made of are assumed to exist;
    checking them is up to whoever builds the archive.

    Args:
        root: The suite root.
        members: All members of the suite, root included.

    Returns:
        ``{name}-{version}.{single_extension}`` for a single module,
        ``{name}-{version}.{bundle_extension}`` for a multi-module suite.
    """
    if len(members) > 1:
        filename = artifact_filename(root, bundle_extension)
        logger.debug(f"The plugin '{root.name}' is a suite, bundling {len(members)} modules in '{filename}'")
    else:
        filename = artifact_filename(root, single_extension)
        logger.debug(f"The plugin '{root.name}' is not a suite, using '{filename}'")
    return filename


def bundle_contents(members: Sequence[Module]) -> List[str]:
    """Artifact file names a suite bundle must contain, in member order."""
    return [artifact_filename(member) for member in members]


def download_path(release_line: str, filename: str) -> str:
    """Download path of a file relative to the site root, grouped by minor line."""
    return f"{minor_version(release_line)}/{filename}"
