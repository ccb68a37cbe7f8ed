"""
Incremental Merge Coordinator.

Reconciles freshly computed plugin metadata with the previous registry.
A suite root is skipped when the registry already records its exact
module version for the current release line; otherwise its metadata is
collected and a new version entry replaces the one for that line. Entries
of other release lines are never touched.

A skip covers the whole suite: every member is reported as skipped so
the packaging step can reuse the previously published file instead of
rebuilding it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from .classifier import ForestEntry
from .errors import DuplicatePluginError
from .metadata import MetadataProvider, PluginMetadata, validate_metadata
from .packaging import download_path, resolve_path
from .registry import PluginRecord, Registry, VersionEntry
from .result import Found
from .types import ArtifactIdentity, Module

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_date(moment: datetime) -> str:
    """Render a date the way the registry shows it, e.g. ``October 19, 2026``."""
    return f"{_MONTHS[moment.month - 1]} {moment.day}, {moment.year}"


@dataclass
class MergeOutcome:
    """
    Result of merging one suite root.

    Attributes:
        record: The plugin record after the merge (unmodified when skipped).
        skipped: True when the recorded version for the line is unchanged.
        filename: Distributable file name; None when skipped.
    """

    record: PluginRecord
    skipped: bool
    filename: Optional[str] = None


@dataclass
class MergeReport:
    """
    Result container for a batch merge.

    Attributes:
        registry: The updated registry, ready to be serialized.
        release_line: Release line the entries were recorded under.
        outcomes: Outcome per suite root id, in forest order.
        skipped_modules: Skip flag for every member of every suite.
        filenames: Distributable file name per suite root id.
    """

    registry: Registry
    release_line: str = ""
    outcomes: Dict[str, MergeOutcome] = field(default_factory=dict)
    skipped_modules: Dict[ArtifactIdentity, bool] = field(default_factory=dict)
    filenames: Dict[str, str] = field(default_factory=dict)

    def is_skipped(self, module: Module) -> bool:
        """Check if a module (root or absorbed member) was skipped."""
        return self.skipped_modules.get(module.identity, False)

    @property
    def updated(self) -> List[str]:
        return [pid for pid, outcome in self.outcomes.items() if not outcome.skipped]

    @property
    def skipped(self) -> List[str]:
        return [pid for pid, outcome in self.outcomes.items() if outcome.skipped]


def should_skip(registry: Registry, root: Module, release_line: str) -> bool:
    """
    Decide whether a root's release line entry is already up to date.

    True only when the plugin exists, has an entry for ``release_line``
    and that entry's version string equals the root's version exactly.
    """
    lookup = registry.find_by_id(root.name)
    if not isinstance(lookup, Found):
        return False
    entry = lookup.value.version_for(release_line)
    if not isinstance(entry, Found):
        return False
    return entry.value.plugin_version == root.version


def _apply_metadata(record: PluginRecord, metadata: PluginMetadata, last_update: str) -> None:
    record.name = metadata.name
    record.short_description = metadata.short_description
    record.long_description = metadata.long_description
    record.category = metadata.category
    record.license = metadata.license
    record.authors = metadata.authors
    record.homepage = metadata.homepage
    record.sourcecode = metadata.sourcecode
    record.readme = metadata.readme
    record.images = metadata.images
    record.last_update = last_update


def merge_one(
    root: Module,
    registry: Registry,
    release_line: str,
    new_data: MetadataProvider,
    members: Optional[Sequence[Module]] = None,
    clock: Clock = utc_now,
) -> MergeOutcome:
    """
    Merge one suite root into the registry.

    Args:
        root: The suite root; its name is the plugin id.
        registry: Registry to update in place.
        release_line: Release line the version entry is recorded under.
        new_data: Provider called for the root when it is not skipped.
        members: Suite members, root included. Defaults to ``[root]``.
        clock: Source of the publication timestamp.

    Returns:
        MergeOutcome with the stored record and the skip decision.

    Raises:
        MissingMandatoryMetadataError: If the provider returns incomplete metadata.
    """
    if should_skip(registry, root, release_line):
        logger.info(
            f"Skipped plugin id={root.name} because the version for release line "
            f"{release_line} hasn't changed ({root.version})"
        )
        return MergeOutcome(record=registry.find_by_id(root.name).unwrap(), skipped=True)

    logger.info(f"Updating plugin id={root.name} to version '{root.version}'")
    metadata = new_data(root)
    validate_metadata(root, metadata)

    filename = resolve_path(root, members if members else [root])
    last_update = format_date(clock())
    entry = VersionEntry(
        last_update=last_update,
        url=download_path(release_line, filename),
        plugin_version=root.version,
    )

    def build(record: PluginRecord) -> PluginRecord:
        _apply_metadata(record, metadata, last_update)
        record.versions[release_line] = entry
        return record

    record = registry.upsert(root.name, build)
    return MergeOutcome(record=record, skipped=False, filename=filename)


def check_unique_plugin_ids(forest: Sequence[ForestEntry]) -> None:
    """
    Raises:
        DuplicatePluginError: If two suite roots share a name, the registry id.
    """
    seen: Dict[str, ArtifactIdentity] = {}
    for entry in forest:
        identity = entry.root.identity
        other = seen.setdefault(identity.name, identity)
        if other != identity:
            raise DuplicatePluginError(
                f"Roots '{other}' and '{identity}' would both be published "
                f"as plugin id='{identity.name}'"
            )


class MergeCoordinator:
    """
    Runs the merge for a whole forest, all or nothing.

    The coordinator works on a copy of the registry it was given. If any
    root fails, the exception propagates and the original registry is left
    untouched; a half-merged registry is never produced.

    Example:
        ```python
        coordinator = MergeCoordinator(registry, "0.9.3", provider)
        report = coordinator.run(result.forest)
        report.registry.save(path)
        ```
    """

    def __init__(
        self,
        registry: Registry,
        release_line: str,
        provider: MetadataProvider,
        clock: Clock = utc_now,
    ):
        self.registry = registry
        self.release_line = release_line
        self.provider = provider
        self.clock = clock

    def run(self, forest: Sequence[ForestEntry]) -> MergeReport:
        """
        Merge every suite of the forest.

        Returns:
            MergeReport with the updated registry and per-module skip flags.

        Raises:
            DuplicatePluginError: If two roots share a plugin id.
        """
        check_unique_plugin_ids(forest)

        report = MergeReport(
            registry=self.registry.model_copy(deep=True),
            release_line=self.release_line,
        )

        for entry in forest:
            outcome = merge_one(
                entry.root,
                report.registry,
                self.release_line,
                self.provider,
                members=entry.members,
                clock=self.clock,
            )
            report.outcomes[entry.root.name] = outcome
            for member in entry.members:
                report.skipped_modules[member.identity] = outcome.skipped
            report.filenames[entry.root.name] = outcome.filename or resolve_path(
                entry.root, entry.members
            )

        logger.info(
            f"Merged {len(report.outcomes)} plugins "
            f"({len(report.updated)} updated, {len(report.skipped)} skipped)"
        )
        return report
