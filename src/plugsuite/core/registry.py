"""
Metadata Registry Store.

In-memory model of the persisted ``plugins.json`` registry. The registry
lists every published plugin with its descriptive metadata and, per
release line, the version entry last published for that line.

The JSON form is rendered statically by downstream consumers, so every
known field is always written (``null`` when unset) and fields this
version does not know about are carried through untouched.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import MalformedRegistryError
from .result import Absent, Found, Lookup

logger = logging.getLogger(__name__)


class Author(BaseModel):
    """A plugin author."""
    name: Optional[str] = None
    email: Optional[str] = None
    link: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class ImageRef(BaseModel):
    """A published screenshot and its thumbnail, relative to the site root."""
    image: Optional[str] = None
    thumbnail: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class VersionEntry(BaseModel):
    """
    The version of a plugin published for one release line.

    Attributes:
        last_update: Human-readable publication date.
        url: Download path relative to the site root.
        plugin_version: Module version string, compared verbatim for skips.
    """
    last_update: Optional[str] = None
    url: Optional[str] = None
    plugin_version: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class PluginRecord(BaseModel):
    """
    A plugin as listed in the registry. Identity is ``id``.
    """
    id: str
    name: Optional[str] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    category: Optional[str] = None
    license: Optional[str] = None
    authors: Optional[List[Author]] = None
    last_update: Optional[str] = None
    readme: Optional[str] = None
    images: Optional[List[ImageRef]] = None
    homepage: Optional[str] = None
    sourcecode: Optional[str] = None
    versions: Dict[str, VersionEntry] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    @field_validator("versions", mode="before")
    @classmethod
    def _null_versions(cls, value: Any) -> Any:
        return {} if value is None else value

    def version_for(self, release_line: str) -> Lookup[VersionEntry]:
        """Look up the version entry recorded for a release line."""
        for index, (line, entry) in enumerate(self.versions.items()):
            if line == release_line:
                return Found(entry, index)
        return Absent(release_line)


class Registry(BaseModel):
    """
    The full registry, plugins in insertion order.

    Example:
        ```python
        registry = Registry.load(previous_text)
        registry.upsert("my-plugin", lambda record: record)
        path.write_text(registry.to_json())
        ```
    """
    plugins: List[PluginRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")

    @classmethod
    def load(cls, text: Optional[str]) -> "Registry":
        """
        Parse a previous registry snapshot.

        Args:
            text: Serialized registry, or None when no snapshot exists.

        Returns:
            Registry: The parsed registry, empty on first run.

        Raises:
            MalformedRegistryError: If the text is not a valid registry.
        """
        if text is None or not text.strip():
            logger.debug("No previous registry, starting from an empty one")
            return cls()

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedRegistryError(f"Error while reading previous registry: {e}") from e

        if not isinstance(data, dict):
            raise MalformedRegistryError(
                f"Error while reading previous registry: expected an object, got {type(data).__name__}"
            )

        try:
            registry = cls.model_validate(data)
        except ValidationError as e:
            raise MalformedRegistryError(f"Error while reading previous registry: {e}") from e

        logger.debug(f"Read previous registry with {len(registry.plugins)} plugins")
        return registry

    def find_by_id(self, plugin_id: str) -> Lookup[PluginRecord]:
        """
        Find a plugin by exact id. The first match wins.

        Returns:
            Found with the record and its position, or Absent.
        """
        for index, record in enumerate(self.plugins):
            if record.id == plugin_id:
                return Found(record, index)
        return Absent(plugin_id)

    def upsert(
        self,
        plugin_id: str,
        builder: Callable[[PluginRecord], PluginRecord],
    ) -> PluginRecord:
        """
        Update a plugin in place, or append it if it is new.

        ``builder`` receives the existing record (so previously stored
        fields persist) or a fresh record holding only the id, and returns
        the record to store.

        Returns:
            The stored record.
        """
        lookup = self.find_by_id(plugin_id)
        if isinstance(lookup, Found):
            record = builder(lookup.value)
            self.plugins[lookup.index] = record
            logger.debug(f"Updated plugin id={plugin_id} at position {lookup.index}")
        else:
            record = builder(PluginRecord(id=plugin_id))
            self.plugins.append(record)
            logger.debug(f"Added plugin id={plugin_id}")
        return record

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict, nulls included."""
        return self.model_dump(mode="json", exclude_none=False)

    def to_json(self) -> str:
        """Serialize to pretty-printed JSON text."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def save(self, path: Path) -> None:
        """Write the registry to ``path``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json() + "\n", encoding="utf-8")
        logger.info(f"Registry written with {len(self.plugins)} plugins to '{path}'")


def load_registry_file(path: Path) -> Registry:
    """
    Load a registry from disk.

    Returns:
        Registry: Parsed registry, or an empty one if the file does not exist.

    Raises:
        MalformedRegistryError: If the file exists but cannot be parsed.
    """
    if not path.exists():
        logger.debug(f"Registry file '{path}' not found, creating a new registry")
        return Registry()
    return Registry.load(path.read_text(encoding="utf-8"))
