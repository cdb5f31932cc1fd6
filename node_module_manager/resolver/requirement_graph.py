# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Graph of every version range requested for every package reachable from the project"""

import threading
import typing as t

from node_module_tools.errors import (
    InternalError,
    NoSatisfyingVersionError,
    UnresolvableRangeError,
)
from node_module_tools.messages import debug
from node_module_tools.registry.api_models import PackageMetadata
from node_module_tools.semver import max_satisfying

from .metadata_cache import MetadataCache


def resolve_range(name: str, version_range: str, metadata: PackageMetadata) -> str:
    """Highest published version satisfying the range"""
    published = metadata.published_versions()
    if not published:
        raise NoSatisfyingVersionError(name)

    version = max_satisfying(published, version_range)
    if version is None:
        raise UnresolvableRangeError(name, version_range, available=published)

    return version


class RequirementNode:
    """All the ranges a package was requested with, and the ranges it requests itself"""

    def __init__(self, name: str, metadata: PackageMetadata) -> None:
        self.name = name
        self.metadata = metadata

        self._ranges: t.Set[str] = set()
        self._dependencies: t.Dict[str, t.Set[str]] = {}
        self._lock = threading.Lock()
        self._frozen = False

    def __repr__(self) -> str:
        return 'RequirementNode({}, ranges={})'.format(self.name, sorted(self._ranges))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            raise InternalError(f'Requirement node "{self.name}" is modified after the graph was built')

    def add_range(self, version_range: str) -> None:
        with self._lock:
            self._check_not_frozen()
            self._ranges.add(version_range)

    def add_dependency(self, name: str, version_range: str) -> None:
        with self._lock:
            self._check_not_frozen()
            self._dependencies.setdefault(name, set()).add(version_range)

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    @property
    def ranges(self) -> t.FrozenSet[str]:
        return frozenset(self._ranges)

    @property
    def dependencies(self) -> t.Dict[str, t.FrozenSet[str]]:
        return {name: frozenset(ranges) for name, ranges in self._dependencies.items()}

    @property
    def published_versions(self) -> t.List[str]:
        return self.metadata.published_versions()


class RequirementGraph:
    def __init__(self, declared: t.Mapping[str, str]) -> None:
        self.declared: t.Dict[str, str] = dict(declared)
        self._nodes: t.Dict[str, RequirementNode] = {}
        self._lock = threading.Lock()

    def __contains__(self, name: str) -> bool:
        return name in self._nodes

    def __iter__(self) -> t.Iterator[RequirementNode]:
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, name: str) -> RequirementNode:
        return self._nodes[name]

    def node(self, name: str, metadata: PackageMetadata) -> RequirementNode:
        """Get existing node or create the new one"""
        with self._lock:
            if name not in self._nodes:
                self._nodes[name] = RequirementNode(name, metadata)

            return self._nodes[name]

    def metadata(self) -> t.Dict[str, PackageMetadata]:
        return {name: node.metadata for name, node in self._nodes.items()}

    def freeze(self) -> None:
        for node in self:
            node.freeze()


class RequirementGraphBuilder:
    """
    Walks the declared dependencies and everything they depend on.

    Every (consumer, package, range) edge is recorded, but a (package, range) pair is expanded
    only once. It keeps cyclic dependencies finite and deep chains don't hit the recursion limit,
    since the walk uses its own stack. Packages are visited depth-first in declaration order.
    """

    def __init__(self, cache: MetadataCache) -> None:
        self.cache = cache

    def build(self, declared: t.Mapping[str, str]) -> RequirementGraph:
        graph = RequirementGraph(declared)
        expanded: t.Set[t.Tuple[str, str]] = set()

        # (consumer, name, range), consumer is None for the declared dependencies
        stack: t.List[t.Tuple[t.Optional[str], str, str]] = [
            (None, name, version_range) for name, version_range in reversed(list(declared.items()))
        ]

        while stack:
            consumer, name, version_range = stack.pop()

            metadata = self.cache.get(name)
            node = graph.node(name, metadata)
            version = resolve_range(name, version_range, metadata)

            node.add_range(version_range)
            if consumer is not None:
                graph[consumer].add_dependency(name, version_range)

            if (name, version_range) in expanded:
                continue

            expanded.add((name, version_range))
            debug(f'"{name}@{version_range}" resolved to {version}')

            dependencies = metadata.dependencies_of(version)
            for dep_name, dep_range in reversed(list(dependencies.items())):
                stack.append((name, dep_name, dep_range))

        graph.freeze()
        return graph
