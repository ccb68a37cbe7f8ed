"""
Release descriptor definition and parsing for plugsuite.toml.

The descriptor lists the modules a plugin repository builds, the
dependencies each of them declares and the metadata published for the
suite roots. It is the already-parsed view of the build the rest of the
pipeline works from.

Example:
    [release]
    line = "0.9.3"
    registry = "site/plugins.json"

    [[modules]]
    namespace = "org.example"
    name = "my-layout"
    version = "1.0.2"
    dependencies = ["org.example:my-layout-api:1.0.2"]
    path = "modules/my-layout"

    [modules.metadata]
    name = "My Layout"
    category = "Layout"
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..config import (
    DEFAULT_README_FILE,
    DESCRIPTOR_FILE_NAME,
    IMAGES_DIRECTORY,
    REGISTRY_FILE_NAME,
    THUMBNAIL_SUFFIX,
    is_image_file,
)
from .errors import DescriptorError, MissingMandatoryMetadataError
from .metadata import PluginMetadata
from .registry import Author, ImageRef
from .types import ArtifactIdentity, Module

logger = logging.getLogger(__name__)


@dataclass
class ModuleSpec:
    """
    A single ``[[modules]]`` entry.

    Attributes:
        module: The module built from the entry.
        base_dir: Module directory, used to locate the readme and images.
        metadata: Raw ``[modules.metadata]`` table.
    """

    module: Module
    base_dir: Path
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ReleaseDescriptor:
    """
    Represents the parsed content of a plugsuite.toml file.

    Attributes:
        root: Directory containing the descriptor.
        release_line: Release line of the run (``[release].line``).
        registry_path: Where the registry is read from and written to.
        output_dir: Where distributables are expected.
        modules: Module entries in declaration order.
    """

    root: Path
    release_line: str = ""
    registry_path: Optional[Path] = None
    output_dir: Optional[Path] = None
    modules: List[ModuleSpec] = field(default_factory=list)

    @classmethod
    def load(cls, path: Path) -> "ReleaseDescriptor":
        """
        Load and parse a plugsuite.toml file.

        Args:
            path: Path to the descriptor.

        Returns:
            ReleaseDescriptor: Parsed descriptor, empty if the file does not exist.

        Raises:
            DescriptorError: If the TOML is malformed or an entry is invalid.
        """
        root = path.parent.resolve()
        if not path.exists():
            return cls(root=root)

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except Exception as e:
            raise DescriptorError(f"Failed to parse {path}: {e}") from e

        release = data.get("release", {})
        if not isinstance(release, dict):
            raise DescriptorError(f"Invalid [release] in {path}: expected a table")
        raw_modules = data.get("modules", [])
        if not isinstance(raw_modules, list):
            raise DescriptorError(f"Invalid modules in {path}: expected an array of tables")

        release_line = str(release.get("line", ""))

        modules = []
        for position, raw in enumerate(raw_modules):
            try:
                modules.append(cls._parse_module(raw, root, release_line))
            except (KeyError, TypeError, ValueError) as e:
                raise DescriptorError(f"Invalid module #{position + 1} in {path}: {e}") from e

        registry = release.get("registry", REGISTRY_FILE_NAME)
        output_dir = release.get("output_dir")
        return cls(
            root=root,
            release_line=release_line,
            registry_path=(root / registry),
            output_dir=(root / output_dir) if output_dir else None,
            modules=modules,
        )

    @classmethod
    def find(cls, project_dir: Path) -> "ReleaseDescriptor":
        """Load the descriptor of a project directory."""
        return cls.load(project_dir / DESCRIPTOR_FILE_NAME)

    @staticmethod
    def _parse_module(raw: Dict[str, Any], root: Path, release_line: str) -> ModuleSpec:
        identity = ArtifactIdentity(
            namespace=raw["namespace"],
            name=raw["name"],
            version=str(raw["version"]),
        )
        dependencies = tuple(ArtifactIdentity.parse(d) for d in raw.get("dependencies", []))
        module = Module(
            identity=identity,
            dependencies=dependencies,
            release_line=str(raw.get("release_line", release_line)),
        )
        return ModuleSpec(
            module=module,
            base_dir=root / raw.get("path", identity.name),
            metadata=dict(raw.get("metadata", {})),
        )

    @property
    def all_modules(self) -> List[Module]:
        return [spec.module for spec in self.modules]

    def has_modules(self) -> bool:
        """Check if any module is declared."""
        return len(self.modules) > 0

    def get_spec(self, module: Module) -> Optional[ModuleSpec]:
        """Find the entry a module was declared by."""
        for spec in self.modules:
            if spec.module.identity == module.identity:
                return spec
        return None


class DescriptorMetadataProvider:
    """
    Metadata provider backed by the ``[modules.metadata]`` tables.

    Called by the merge for suite roots that are not skipped.
    """

    def __init__(self, descriptor: ReleaseDescriptor):
        self.descriptor = descriptor

    def __call__(self, module: Module) -> PluginMetadata:
        spec = self.descriptor.get_spec(module)
        if spec is None:
            raise MissingMandatoryMetadataError(module.name, "metadata", "no descriptor entry found")
        raw = spec.metadata

        return PluginMetadata(
            name=raw.get("name"),
            short_description=raw.get("short_description"),
            long_description=raw.get("long_description"),
            category=raw.get("category"),
            license=raw.get("license"),
            authors=self._authors(module, raw.get("authors")),
            homepage=raw.get("homepage"),
            sourcecode=raw.get("sourcecode"),
            readme=self._readme(spec, raw.get("readme")),
            images=self._images(module, raw.get("images")),
        )

    @staticmethod
    def _authors(module: Module, raw: Any) -> Optional[List[Author]]:
        if not raw:
            return None
        if isinstance(raw, str):
            return [Author(name=name.strip()) for name in raw.split(",") if name.strip()]
        if not isinstance(raw, list):
            raw = [raw]

        authors = []
        for author in raw:
            if isinstance(author, str):
                authors.append(Author(name=author.strip()))
            elif isinstance(author, dict):
                try:
                    authors.append(Author.model_validate(author))
                except ValidationError as e:
                    raise MissingMandatoryMetadataError(
                        module.name, "authors", f"Invalid author entry {author!r}: {e}"
                    ) from e
            else:
                raise MissingMandatoryMetadataError(
                    module.name,
                    "authors",
                    f"Invalid author entry {author!r}, expected a name or a table",
                )
        return authors

    @staticmethod
    def _readme(spec: ModuleSpec, configured: Optional[str]) -> Optional[str]:
        readme_path = spec.base_dir / (configured or DEFAULT_README_FILE)
        if not readme_path.is_file():
            if configured:
                logger.warning(f"Readme '{readme_path}' not found for module '{spec.module.name}'")
            return None
        text = readme_path.read_text(encoding="utf-8")
        logger.info(
            f"File {readme_path.name} with {len(text)} characters has been attached "
            f"to module '{spec.module.name}'"
        )
        return text

    @staticmethod
    def _images(module: Module, raw: Any) -> Optional[List[ImageRef]]:
        if not raw:
            return None
        prefix = f"{IMAGES_DIRECTORY}/{module.name}/"
        images = []
        for entry in sorted(raw, key=lambda p: Path(p).name):
            path = Path(entry)
            if " " in path.name:
                raise MissingMandatoryMetadataError(
                    module.name,
                    "images",
                    f"Image file '{entry}' contains spaces. Please rename image and try again",
                )
            if not is_image_file(path):
                logger.debug(f"Ignored image entry '{entry}' for module '{module.name}'")
                continue
            images.append(
                ImageRef(
                    image=f"{prefix}{path.stem}.png",
                    thumbnail=f"{prefix}{path.stem}{THUMBNAIL_SUFFIX}.png",
                )
            )
        return images
