"""
plugsuite Core Module.

Building blocks of the release pipeline:

Classification:
    - ArtifactIdentity, Module: Value types for modules and dependencies
    - classify: Splits modules into distributable suites

Registry:
    - Registry, PluginRecord, VersionEntry: The plugins.json model
    - Found, Absent: Explicit lookup results

Merge & Packaging:
    - merge_one, MergeCoordinator: Incremental, skip-unchanged merge
    - resolve_path: Distributable file naming

Descriptor & Validation:
    - ReleaseDescriptor: Parse plugsuite.toml
    - validate_release: Pre-build checks
"""

from .classifier import (
    ClassificationResult,
    ForestEntry,
    UnresolvedDependency,
    build_dependency_graph,
    classify,
)
from .errors import (
    AmbiguousSuiteError,
    DescriptorError,
    DuplicatePluginError,
    InconsistentSuiteError,
    InvalidReleaseLineError,
    MalformedRegistryError,
    MissingMandatoryMetadataError,
    NoDistributableModulesError,
    PlugsuiteError,
)
from .manifest import DescriptorMetadataProvider, ModuleSpec, ReleaseDescriptor
from .merge import (
    MergeCoordinator,
    MergeOutcome,
    MergeReport,
    format_date,
    merge_one,
    should_skip,
)
from .metadata import MetadataProvider, PluginMetadata, validate_metadata
from .packaging import artifact_filename, bundle_contents, download_path, resolve_path
from .registry import (
    Author,
    ImageRef,
    PluginRecord,
    Registry,
    VersionEntry,
    load_registry_file,
)
from .result import Absent, Found, Lookup
from .types import ArtifactIdentity, Module
from .validation import (
    ValidationReport,
    check_suite_release_lines,
    require_forest,
    require_single_suite,
    validate_release,
)
from .versions import is_snapshot, minor_version, select_modules

__all__ = [
    # Types
    "ArtifactIdentity",
    "Module",
    # Classification
    "ClassificationResult",
    "ForestEntry",
    "UnresolvedDependency",
    "build_dependency_graph",
    "classify",
    # Errors
    "AmbiguousSuiteError",
    "DescriptorError",
    "DuplicatePluginError",
    "InconsistentSuiteError",
    "InvalidReleaseLineError",
    "MalformedRegistryError",
    "MissingMandatoryMetadataError",
    "NoDistributableModulesError",
    "PlugsuiteError",
    # Descriptor
    "DescriptorMetadataProvider",
    "ModuleSpec",
    "ReleaseDescriptor",
    # Merge
    "MergeCoordinator",
    "MergeOutcome",
    "MergeReport",
    "format_date",
    "merge_one",
    "should_skip",
    # Metadata
    "MetadataProvider",
    "PluginMetadata",
    "validate_metadata",
    # Packaging
    "artifact_filename",
    "bundle_contents",
    "download_path",
    "resolve_path",
    # Registry
    "Author",
    "ImageRef",
    "PluginRecord",
    "Registry",
    "VersionEntry",
    "load_registry_file",
    "Absent",
    "Found",
    "Lookup",
    # Validation
    "ValidationReport",
    "check_suite_release_lines",
    "require_forest",
    "require_single_suite",
    "validate_release",
    # Release lines
    "is_snapshot",
    "minor_version",
    "select_modules",
]
