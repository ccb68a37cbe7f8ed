"""
Error types raised by the release pipeline.

Every problem detected while classifying modules or merging metadata is
fatal for the run: errors propagate to the caller and no partial
registry is ever written.
"""

from typing import Optional


class PlugsuiteError(Exception):
    """Base class for all release pipeline errors."""


class MalformedRegistryError(PlugsuiteError):
    """Raised when a previous registry snapshot cannot be parsed."""


class MissingMandatoryMetadataError(PlugsuiteError):
    """
    Raised when a required metadata field is absent, blank or invalid.

    Attributes:
        module: Name of the module the metadata belongs to.
        field: Name of the offending field.
    """

    def __init__(self, module: str, field: str, message: Optional[str] = None):
        self.module = module
        self.field = field
        self.message = message or f"'{field}' should be set"
        super().__init__(f"Module '{module}': {self.message}")


class NoDistributableModulesError(PlugsuiteError):
    """Raised when classification produced no suite at all."""


class AmbiguousSuiteError(PlugsuiteError):
    """Raised when several unrelated suites are found where one was expected."""


class InconsistentSuiteError(PlugsuiteError):
    """Raised when the members of one suite target different release lines."""


class InvalidReleaseLineError(PlugsuiteError, ValueError):
    """Raised when a release line is not a dotted numeric version."""


class DescriptorError(PlugsuiteError, ValueError):
    """Raised when the release descriptor is malformed."""


class DuplicatePluginError(PlugsuiteError):
    """Raised when two suite roots would be published under the same plugin id."""
