"""
Release validation.

Checks a repository is releasable before anything is built: at least
one suite must be found, members of a suite must target one release
line, and every suite root must carry its mandatory metadata.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .classifier import ClassificationResult, ForestEntry, classify
from .errors import AmbiguousSuiteError, InconsistentSuiteError, NoDistributableModulesError
from .manifest import DescriptorMetadataProvider, ReleaseDescriptor
from .metadata import validate_metadata
from .versions import minor_version

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    """
    Result container for a validation run.

    Attributes:
        classification: The suites that were checked.
        warnings: Non-fatal findings.
    """

    classification: ClassificationResult
    warnings: List[str] = field(default_factory=list)

    @property
    def suite_count(self) -> int:
        return len(self.classification)


def require_forest(result: ClassificationResult) -> None:
    """
    Raises:
        NoDistributableModulesError: If no suite was found.
    """
    if result.is_empty:
        raise NoDistributableModulesError(
            "No distributable modules have been detected, make sure the project declares modules"
        )


def require_single_suite(result: ClassificationResult) -> ForestEntry:
    """
    Return the only suite of a release that must contain exactly one.

    Raises:
        NoDistributableModulesError: If no suite was found.
        AmbiguousSuiteError: If several unrelated suites were found.
    """
    require_forest(result)
    if len(result) > 1:
        names = ", ".join(f"'{root.name}'" for root in result.roots)
        raise AmbiguousSuiteError(
            f"Expected a single suite but found {len(result)}: {names}. "
            f"Make sure one of the modules depends on the others"
        )
    return result.forest[0]


def check_suite_release_lines(entry: ForestEntry) -> None:
    """
    Raises:
        InconsistentSuiteError: If members of the suite target different release lines.
    """
    expected: Optional[str] = None
    for member in entry.members:
        if expected is None:
            expected = member.release_line
        elif member.release_line != expected:
            raise InconsistentSuiteError(
                f"Inconsistent release line between modules of suite '{entry.root.name}': "
                f"'{member.name}' targets '{member.release_line}' but '{expected}' is expected"
            )


def validate_release(
    descriptor: ReleaseDescriptor,
    single_suite: bool = False,
) -> ValidationReport:
    """
    Validate a release descriptor end to end.

    Args:
        descriptor: The parsed descriptor.
        single_suite: Require the release to consist of exactly one suite.

    Returns:
        ValidationReport describing the checked suites.

    Raises:
        PlugsuiteError: On the first problem found.
    """
    result = classify(descriptor.all_modules)
    report = ValidationReport(classification=result, warnings=list(result.warnings))

    if single_suite:
        require_single_suite(result)
    else:
        require_forest(result)

    provider = DescriptorMetadataProvider(descriptor)
    target = minor_version(descriptor.release_line) if descriptor.release_line else None

    for entry in result:
        logger.info(f"Suite of modules found: '{entry.root.name}'")
        check_suite_release_lines(entry)
        for member in entry.members:
            if target is not None and minor_version(member.release_line) != target:
                message = (
                    f"The module '{member.name}' targets release line '{member.release_line}' "
                    f"but '{descriptor.release_line}' is expected, it will be ignored"
                )
                logger.warning(message)
                report.warnings.append(message)
        for child in entry.absorbed:
            logger.info(f"   '{child.name}' is a dependency")
        validate_metadata(entry.root, provider(entry.root), strict=True)

    return report
