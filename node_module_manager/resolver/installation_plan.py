# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Placement of every package occurrence: hoisted to the root node_modules or nested"""

import typing as t
from dataclasses import dataclass

from node_module_tools.constants import NODE_MODULES_DIR
from node_module_tools.errors import InternalError
from node_module_tools.messages import debug
from node_module_tools.semver import satisfies

from .requirement_graph import RequirementGraph, resolve_range

# Names of the packages whose node_modules contain the entry, outermost first.
# Empty tuple is the project root node_modules.
InstallPath = t.Tuple[str, ...]

_SEPARATOR = f'/{NODE_MODULES_DIR}/'


def parent_directory_of(path: InstallPath) -> t.Optional[str]:
    """("a", "b") -> "a/node_modules/b/node_modules" """
    if not path:
        return None

    return _SEPARATOR.join(path) + f'/{NODE_MODULES_DIR}'


def lock_path_of(path: InstallPath) -> str:
    """("a", "b") -> "node_modules/a/node_modules/b" """
    return NODE_MODULES_DIR + '/' + _SEPARATOR.join(path)


def parse_lock_path(lock_path: str) -> InstallPath:
    """Reverse of lock_path_of"""
    prefix = f'{NODE_MODULES_DIR}/'
    if not lock_path.startswith(prefix) or len(lock_path) == len(prefix):
        raise ValueError(f'Package path must start with "{prefix}": {lock_path}')

    path = tuple(lock_path[len(prefix) :].split(_SEPARATOR))
    if not all(path):
        raise ValueError(f'Empty package name in the path: {lock_path}')

    return path


@dataclass(frozen=True)
class InstallationEntry:
    name: str
    version: str
    parent: InstallPath = ()

    def __str__(self) -> str:
        location = self.parent_directory or 'root'
        return f'{self.name}@{self.version} ({location})'

    @property
    def is_root(self) -> bool:
        return not self.parent

    @property
    def depth(self) -> int:
        return len(self.parent)

    @property
    def parent_directory(self) -> t.Optional[str]:
        return parent_directory_of(self.parent)

    @property
    def install_path(self) -> InstallPath:
        return self.parent + (self.name,)

    @property
    def lock_path(self) -> str:
        return lock_path_of(self.install_path)


class InstallationPlan:
    """Ordered entries, one per physical install location"""

    def __init__(self, entries: t.Optional[t.Iterable[InstallationEntry]] = None) -> None:
        self._entries: t.List[InstallationEntry] = []
        self._root_names: t.Set[str] = set()

        for entry in entries or []:
            self.append(entry)

    def append(self, entry: InstallationEntry) -> None:
        if entry.is_root:
            if entry.name in self._root_names:
                raise InternalError(f'Package "{entry.name}" is already placed at the root')
            self._root_names.add(entry.name)

        self._entries.append(entry)

    def __iter__(self) -> t.Iterator[InstallationEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InstallationPlan):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return 'InstallationPlan([{}])'.format(', '.join(str(e) for e in self._entries))

    @property
    def root_entries(self) -> t.List[InstallationEntry]:
        return [entry for entry in self._entries if entry.is_root]

    @property
    def nested_entries(self) -> t.List[InstallationEntry]:
        return [entry for entry in self._entries if not entry.is_root]

    def root_entry(self, name: str) -> t.Optional[InstallationEntry]:
        for entry in self._entries:
            if entry.is_root and entry.name == name:
                return entry

        return None


class InstallationPlanBuilder:
    """
    Decides where every occurrence of a package is installed.

    An occurrence reuses the copy already visible from its consumer directory when the version
    matches. Otherwise the optimal version is hoisted to the root if nothing with the same name
    is visible yet, and any other case is nested into the consumer's own node_modules.
    Declared dependencies always own the root slot of their name.
    """

    def __init__(self, graph: RequirementGraph, optimal_versions: t.Mapping[str, str]) -> None:
        self.graph = graph
        self.optimal_versions = optimal_versions

        # directory -> {name: version}, the root directory is ()
        self._directories: t.Dict[InstallPath, t.Dict[str, str]] = {}

    def _version_for(self, name: str, version_range: str) -> t.Tuple[str, bool]:
        """Version to install for the range, and whether it is the optimal one"""
        try:
            optimal = self.optimal_versions[name]
        except KeyError:
            raise InternalError(f'No optimal version selected for "{name}"')

        if satisfies(optimal, version_range):
            return optimal, True

        return resolve_range(name, version_range, self.graph[name].metadata), False

    def _visible_version(self, container: InstallPath, name: str) -> t.Optional[str]:
        """Version the consumer installed in `container` would load, like node module lookup"""
        for depth in range(len(container), -1, -1):
            version = self._directories.get(container[:depth], {}).get(name)
            if version is not None:
                return version

        return None

    def _place(self, entry: InstallationEntry, plan: InstallationPlan) -> None:
        directory = self._directories.setdefault(entry.parent, {})
        if entry.parent and entry.name in directory:
            raise InternalError(f'Directory of {entry} already contains "{entry.name}"')

        directory[entry.name] = entry.version
        plan.append(entry)

    def _place_dependency(
        self, name: str, version_range: str, consumer: InstallationEntry, plan: InstallationPlan
    ) -> t.Optional[InstallationEntry]:
        """Place one dependency of the consumer, None when the visible copy is reused"""
        version, is_optimal = self._version_for(name, version_range)
        visible = self._visible_version(consumer.install_path, name)

        if visible == version:
            debug(f'"{name}@{version_range}" of {consumer} reuses visible {name}@{version}')
            return None

        if visible is None and is_optimal:
            entry = InstallationEntry(name, version)
        else:
            entry = InstallationEntry(name, version, consumer.install_path)

        self._place(entry, plan)
        debug(f'Placing "{name}@{version_range}" of {consumer} as {entry}')
        return entry

    def build(self, declared: t.Optional[t.Mapping[str, str]] = None) -> InstallationPlan:
        if declared is None:
            declared = self.graph.declared

        plan = InstallationPlan()
        self._directories = {(): {}}

        root = self._directories[()]
        declared_entries = []
        for name, version_range in declared.items():
            root[name], _ = self._version_for(name, version_range)
            entry = InstallationEntry(name, root[name])
            plan.append(entry)
            declared_entries.append(entry)
            debug(f'Placing declared "{name}@{version_range}" as {entry}')

        # (placed entry, ancestors (name, version)) whose dependencies are not placed yet
        stack: t.List[t.Tuple[InstallationEntry, t.FrozenSet[t.Tuple[str, str]]]] = [
            (entry, frozenset()) for entry in reversed(declared_entries)
        ]

        while stack:
            consumer, ancestors = stack.pop()

            if (consumer.name, consumer.version) in ancestors:
                # circular dependency, the contents were already placed for the ancestor
                debug(f'Circular dependency on {consumer.name}@{consumer.version}, not descending')
                continue

            # All direct dependencies go first, so the consumer's node_modules is complete
            # before any package below it looks up through that directory
            placed = []
            dependencies = self.graph[consumer.name].metadata.dependencies_of(consumer.version)
            for dep_name, dep_range in dependencies.items():
                entry = self._place_dependency(dep_name, dep_range, consumer, plan)
                if entry is not None:
                    placed.append(entry)

            child_ancestors = ancestors | {(consumer.name, consumer.version)}
            for entry in reversed(placed):
                stack.append((entry, child_ancestors))

        return plan
