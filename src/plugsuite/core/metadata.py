"""
Plugin metadata supplied for a release.

``PluginMetadata`` is what a metadata provider returns for a suite root
that is about to be (re)published. Providers are plain callables so the
merge does not care whether the data comes from a descriptor file, a
build tool or a test fixture.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..config import ALLOWED_CATEGORIES, is_allowed_category
from .errors import MissingMandatoryMetadataError
from .registry import Author, ImageRef
from .types import Module


@dataclass
class PluginMetadata:
    """
    Descriptive fields of a plugin.

    Attributes:
        name: Display name.
        short_description: One-line description.
        long_description: Full description.
        category: Display category, one of ``config.ALLOWED_CATEGORIES``.
        license: License name.
        authors: Plugin authors.
        homepage: Project homepage URL.
        sourcecode: Source code URL.
        readme: Readme text, if any.
        images: Published screenshots.
    """

    name: Optional[str] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    category: Optional[str] = None
    license: Optional[str] = None
    authors: Optional[List[Author]] = None
    homepage: Optional[str] = None
    sourcecode: Optional[str] = None
    readme: Optional[str] = None
    images: Optional[List[ImageRef]] = field(default=None)


# Callback returning the metadata of a suite root
MetadataProvider = Callable[[Module], PluginMetadata]

_MANDATORY_FIELDS = ("name", "short_description", "long_description", "category")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_metadata(module: Module, metadata: PluginMetadata, strict: bool = False) -> None:
    """
    Check the mandatory metadata of a suite root.

    Args:
        module: The module the metadata describes.
        metadata: The metadata to check.
        strict: Also require a license and at least one author.

    Raises:
        MissingMandatoryMetadataError: On the first missing or invalid field.
    """
    for name in _MANDATORY_FIELDS:
        if _is_blank(getattr(metadata, name)):
            raise MissingMandatoryMetadataError(module.name, name)

    if not is_allowed_category(metadata.category):
        raise MissingMandatoryMetadataError(
            module.name,
            "category",
            f"'category' should be one of the following values: {', '.join(ALLOWED_CATEGORIES)}",
        )

    if strict:
        if _is_blank(metadata.license):
            raise MissingMandatoryMetadataError(module.name, "license")
        if not metadata.authors:
            raise MissingMandatoryMetadataError(module.name, "authors")
