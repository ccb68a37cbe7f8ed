"""
Core type definitions for plugsuite.

Artifact identities are plain value objects: two identities are equal
only when namespace, name and version all match exactly. There is no
range or partial matching anywhere in the pipeline.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class ArtifactIdentity:
    """
    Identifies a module or a declared dependency.

    Attributes:
        namespace: Group the artifact is published under (e.g. "org.gephi").
        name: Artifact name, also used as the plugin id.
        version: Exact version string.
    """

    namespace: str
    name: str
    version: str

    @classmethod
    def parse(cls, coordinate: str) -> "ArtifactIdentity":
        """
        Parse a ``namespace:name:version`` coordinate.

        Raises:
            ValueError: If the coordinate does not have exactly three parts.
        """
        parts = coordinate.strip().split(":")
        if len(parts) != 3 or not all(parts):
            raise ValueError(
                f"Invalid artifact coordinate '{coordinate}', expected 'namespace:name:version'"
            )
        return cls(namespace=parts[0], name=parts[1], version=parts[2])

    def __str__(self) -> str:
        return f"{self.namespace}:{self.name}:{self.version}"


@dataclass(frozen=True)
class Module:
    """
    A buildable module of the plugin repository.

    Attributes:
        identity: The module's own artifact identity.
        dependencies: Declared dependencies, in declaration order.
        release_line: Host platform line the module targets. Used for
            grouping and validation only, never for identity comparison.
    """

    identity: ArtifactIdentity
    dependencies: Tuple[ArtifactIdentity, ...] = field(default_factory=tuple)
    release_line: str = ""

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def version(self) -> str:
        return self.identity.version

    def declares(self, identity: ArtifactIdentity) -> bool:
        """Check if this module declares a dependency on ``identity``."""
        return identity in self.dependencies
