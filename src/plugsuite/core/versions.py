"""
Release line helpers.

A release line is the host platform version a module targets, such as
``0.9.3`` or ``0.9.3-SNAPSHOT``. Registry history is keyed by the full
release line, while published files are grouped by its minor line
(``0.9``).
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from ..config import SNAPSHOT_SUFFIX
from .errors import InvalidReleaseLineError
from .types import Module

logger = logging.getLogger(__name__)

_RELEASE_LINE_PATTERN = re.compile(r"^(\d+)\.(\d+)(?:\.\d+)*(-SNAPSHOT)?$")


def minor_version(release_line: str) -> str:
    """
    Reduce a release line to its ``major.minor`` line.

    The snapshot marker is kept so development lines never share a
    directory with released ones.

    Examples:
        >>> minor_version("0.9.3")
        '0.9'
        >>> minor_version("0.9.3-SNAPSHOT")
        '0.9-SNAPSHOT'

    Raises:
        InvalidReleaseLineError: If the value is not a dotted numeric version.
    """
    match = _RELEASE_LINE_PATTERN.match(release_line or "")
    if not match:
        raise InvalidReleaseLineError(
            f"Release line '{release_line}' should look like 'major.minor.patch'"
        )
    major, minor, snapshot = match.groups()
    return f"{major}.{minor}{snapshot or ''}"


def is_snapshot(release_line: str) -> bool:
    """Check if a release line is a development (snapshot) line."""
    return release_line.endswith(SNAPSHOT_SUFFIX)


def select_modules(modules: Sequence[Module], release_line: str) -> List[Module]:
    """
    Keep the modules that target the same minor line as ``release_line``.

    Modules built for another line are dropped with a warning; they are
    released from that line's own run.
    """
    target = minor_version(release_line)
    selected = []
    for module in modules:
        if minor_version(module.release_line) == target:
            logger.debug(f"Selected module '{module.identity}' for release line {target}")
            selected.append(module)
        else:
            logger.warning(
                f"Ignored module '{module.name}' based on release line "
                f"'{module.release_line}' ({target} expected)"
            )
    return selected
