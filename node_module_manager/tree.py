# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Text rendering of the node_modules layout described by an installation plan"""

import typing as t
from dataclasses import dataclass

from node_module_tools.constants import NODE_MODULES_DIR

from .resolver.installation_plan import InstallationEntry, InstallationPlan, InstallPath

BRANCH = '├── '
LAST_BRANCH = '└── '
PIPE = '│   '
SPACE = '    '


@dataclass
class PlanStats:
    total: int
    root: int
    nested: int
    max_depth: int

    @property
    def hoist_ratio(self) -> float:
        if not self.total:
            return 0.0

        return self.root / self.total


def plan_stats(plan: InstallationPlan) -> PlanStats:
    return PlanStats(
        total=len(plan),
        root=len(plan.root_entries),
        nested=len(plan.nested_entries),
        max_depth=max((entry.depth for entry in plan), default=0),
    )


def _group_by_parent(plan: InstallationPlan) -> t.Dict[InstallPath, t.List[InstallationEntry]]:
    groups: t.Dict[InstallPath, t.List[InstallationEntry]] = {}
    for entry in plan:
        groups.setdefault(entry.parent, []).append(entry)

    for entries in groups.values():
        entries.sort(key=lambda e: e.name)

    return groups


def render_tree(plan: InstallationPlan) -> str:
    """
    Render plan like

        node_modules
        ├── a@1.0.0
        │   └── node_modules
        │       └── b@1.0.0
        └── b@2.0.0

    followed by the statistics of the layout.
    """
    groups = _group_by_parent(plan)
    lines = [NODE_MODULES_DIR]

    # (entry, prefix of the line, is last child)
    stack: t.List[t.Tuple[InstallationEntry, str, bool]] = []

    def push_children(path: InstallPath, prefix: str) -> None:
        children = groups.get(path, [])
        for i, child in reversed(list(enumerate(children))):
            stack.append((child, prefix, i == len(children) - 1))

    push_children((), '')
    while stack:
        entry, prefix, is_last = stack.pop()
        lines.append(f'{prefix}{LAST_BRANCH if is_last else BRANCH}{entry.name}@{entry.version}')

        if entry.install_path in groups:
            child_prefix = prefix + (SPACE if is_last else PIPE)
            lines.append(f'{child_prefix}{LAST_BRANCH}{NODE_MODULES_DIR}')
            push_children(entry.install_path, child_prefix + SPACE)

    stats = plan_stats(plan)
    lines.extend([
        '',
        f'Total packages: {stats.total}',
        f'Root packages: {stats.root}',
        f'Nested packages: {stats.nested}',
        f'Max nesting depth: {stats.max_depth}',
        f'Hoist ratio: {stats.hoist_ratio:.1%}',
    ])

    return '\n'.join(lines)
