"""
plugsuite - Release packaging for plugin suites.

plugsuite takes the flat list of modules a plugin repository builds and
works out which of them ship as independent plugins ("suites") and which
are only dependencies bundled into a suite. It then merges the per-plugin
release metadata into a persisted, versioned ``plugins.json`` registry,
skipping plugins whose version has not changed since the last release.

Key Components:
- core.classifier: Suite detection over declared module dependencies
- core.registry: The plugins.json registry model and store operations
- core.merge: Incremental merge with skip-unchanged semantics
- core.packaging: Distributable file naming

Usage:
    from plugsuite import classify, MergeCoordinator, Registry

    result = classify(modules)
    report = MergeCoordinator(Registry.load(text), "0.9.3", provider).run(result.forest)
    print(report.registry.to_json())
"""

__version__ = "0.1.0"

from .core.classifier import ClassificationResult, ForestEntry, classify
from .core.merge import MergeCoordinator, MergeOutcome, MergeReport, merge_one
from .core.registry import PluginRecord, Registry, VersionEntry
from .core.types import ArtifactIdentity, Module

__all__ = [
    "__version__",
    "ArtifactIdentity",
    "Module",
    "ClassificationResult",
    "ForestEntry",
    "classify",
    "MergeCoordinator",
    "MergeOutcome",
    "MergeReport",
    "merge_one",
    "PluginRecord",
    "Registry",
    "VersionEntry",
]
