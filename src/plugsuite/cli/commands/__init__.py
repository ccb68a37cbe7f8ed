"""
CLI Commands Package.

Each command is implemented in its own module for maintainability.
"""

from . import build_metadata
from . import classify
from . import validate

__all__ = [
    "build_metadata",
    "classify",
    "validate",
]
