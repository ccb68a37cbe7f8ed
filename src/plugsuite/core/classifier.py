"""
Module Dependency Classifier.

Turns the flat module list of a plugin repository into a forest of
suites. A suite is one root module plus the in-scope modules it directly
declares as dependencies ("absorbs"); only roots are distributed.

Algorithm:
    1. Every in-scope module gets an arena index. A declared dependency
       that equals another module's identity becomes an edge A -> B in a
       rustworkx digraph (edge weight = declaration position).
    2. The absorption set of A is {A} plus its direct successors, kept
       as an integer bit set over arena indices. Matching is one hop;
       dependencies on modules outside the set are reported, not followed.
    3. A is a root unless another module's absorption set is a strict
       superset of A's. Set-equal absorption sets keep both modules as
       roots.
    4. Members of a root are the root followed by its absorbed modules in
       declaration order. Modules that are roots themselves, or that an
       earlier root already claimed, are left out so every module lands
       in exactly one entry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

import rustworkx as rx

from .types import ArtifactIdentity, Module

logger = logging.getLogger(__name__)


@dataclass
class ForestEntry:
    """
    One distributable suite.

    Attributes:
        root: The module the suite is published as.
        members: The root first, then its absorbed modules.
    """

    root: Module
    members: List[Module] = field(default_factory=list)

    @property
    def is_suite(self) -> bool:
        """True when the root ships together with absorbed modules."""
        return len(self.members) > 1

    @property
    def absorbed(self) -> List[Module]:
        """Members other than the root."""
        return self.members[1:]

    def __contains__(self, module: Module) -> bool:
        return any(m.identity == module.identity for m in self.members)


@dataclass
class UnresolvedDependency:
    """A declared dependency that matches no module in scope."""

    module: Module
    dependency: ArtifactIdentity


@dataclass
class ClassificationResult:
    """
    Result container for the classification process.

    Attributes:
        forest: Suites in input order of their roots.
        unresolved: Declared dependencies pointing outside the module set.
        warnings: Non-fatal anomalies (duplicates, cycles, overlaps).
    """

    forest: List[ForestEntry] = field(default_factory=list)
    unresolved: List[UnresolvedDependency] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_warning(self, message: str) -> None:
        """Record and log a warning."""
        logger.warning(message)
        self.warnings.append(message)

    @property
    def roots(self) -> List[Module]:
        return [entry.root for entry in self.forest]

    @property
    def is_empty(self) -> bool:
        return not self.forest

    def entry_for(self, module: Module) -> Optional[ForestEntry]:
        """Find the suite a module belongs to."""
        for entry in self.forest:
            if module in entry:
                return entry
        return None

    def __iter__(self) -> Iterator[ForestEntry]:
        return iter(self.forest)

    def __len__(self) -> int:
        return len(self.forest)


def _bits(indices: Iterable[int]) -> int:
    mask = 0
    for idx in indices:
        mask |= 1 << idx
    return mask


def _strictly_contains(outer: int, inner: int) -> bool:
    return outer != inner and (outer & inner) == inner


def build_dependency_graph(
    modules: Sequence[Module],
    result: ClassificationResult,
) -> rx.PyDiGraph:
    """
    Build the "absorbs" digraph over the module arena.

    Node index ``i`` holds ``modules[i]``. Dependencies that match no
    module are recorded on ``result`` as unresolved.
    """
    graph = rx.PyDiGraph(multigraph=False)
    index: Dict[ArtifactIdentity, int] = {}
    for module in modules:
        index[module.identity] = graph.add_node(module)

    for idx, module in enumerate(modules):
        logger.debug(
            f"Investigating the {len(module.dependencies)} dependencies of module '{module.name}'"
        )
        for position, dependency in enumerate(module.dependencies):
            target = index.get(dependency)
            if target is None:
                result.unresolved.append(UnresolvedDependency(module, dependency))
                continue
            if target == idx or graph.has_edge(idx, target):
                continue
            logger.debug(
                f"Found a dependency that matches another module '{module.name}' -> "
                f"'{modules[target].name}'"
            )
            graph.add_edge(idx, target, position)

    return graph


def _deduplicate(modules: Iterable[Module], result: ClassificationResult) -> List[Module]:
    seen = set()
    unique = []
    for module in modules:
        if module.identity in seen:
            result.add_warning(f"Duplicate module '{module.identity}' ignored")
            continue
        seen.add(module.identity)
        unique.append(module)
    return unique


def classify(modules: Iterable[Module]) -> ClassificationResult:
    """
    Classify modules into distributable suites.

    Never fails: cycles, redundant declarations and dependencies outside
    the module set are reported on the result. Callers decide whether an
    empty forest is an error (see ``validation.require_forest``).

    Args:
        modules: The in-scope modules, in a stable order.

    Returns:
        ClassificationResult whose forest covers every module exactly once.
    """
    result = ClassificationResult()
    arena = _deduplicate(modules, result)
    graph = build_dependency_graph(arena, result)

    if not rx.is_directed_acyclic_graph(graph):
        result.add_warning("Modules declare circular dependencies on each other")

    # Successors ordered by declaration position
    absorbed: List[List[int]] = [
        [target for _, target, _ in sorted(graph.out_edges(idx), key=lambda e: e[2])]
        for idx in range(len(arena))
    ]
    masks = [(1 << idx) | _bits(absorbed[idx]) for idx in range(len(arena))]

    roots = [
        idx
        for idx in range(len(arena))
        if not any(_strictly_contains(masks[other], masks[idx]) for other in range(len(arena)))
    ]
    root_mask = _bits(roots)

    claimed = 0
    for idx in roots:
        members = [idx]
        for target in absorbed[idx]:
            bit = 1 << target
            if bit & root_mask:
                result.add_warning(
                    f"Module '{arena[target].name}' is absorbed by '{arena[idx].name}' "
                    f"but is also distributed on its own"
                )
                continue
            if bit & claimed:
                result.add_warning(
                    f"Module '{arena[target].name}' is shared by several suites, "
                    f"kept in the first one only"
                )
                continue
            members.append(target)
        claimed |= _bits(members)
        result.forest.append(ForestEntry(root=arena[idx], members=[arena[i] for i in members]))

    for entry in result.forest:
        if entry.is_suite:
            logger.info(
                f"Suite of modules found: '{entry.root.name}' with "
                f"{len(entry.absorbed)} dependencies"
            )
        else:
            logger.debug(f"Single module found: '{entry.root.name}'")

    return result
