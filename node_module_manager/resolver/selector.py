# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Choice of the version which is going to be hoisted to the root node_modules"""

import typing as t

from node_module_tools.errors import NoSatisfyingVersionError
from node_module_tools.messages import debug, warn
from node_module_tools.semver import satisfies

from .requirement_graph import RequirementGraph, RequirementNode


class VersionSelector:
    """Policy picking one preferred version per package"""

    def select_optimal(self, node: RequirementNode) -> str:
        raise NotImplementedError


class MostSatisfiedRangesSelector(VersionSelector):
    """
    The version satisfying the biggest number of requested ranges wins,
    the higher version wins when the numbers are equal.

    Consumers whose ranges are not satisfied get their own nested copies later,
    so not covering every range is not an error.
    """

    def select_optimal(self, node: RequirementNode) -> str:
        published = node.published_versions
        if not published:
            raise NoSatisfyingVersionError(node.name)

        ranges = sorted(node.ranges)
        best_version = published[0]
        best_count = -1

        # ascending order, so the later version wins the tie
        for version in published:
            count = sum(1 for version_range in ranges if satisfies(version, version_range))
            if count >= best_count:
                best_version = version
                best_count = count

        if best_count < len(ranges):
            unsatisfied = [r for r in ranges if not satisfies(best_version, r)]
            warn(
                f'Version {best_version} of "{node.name}" satisfies {best_count} of '
                f'{len(ranges)} requested ranges. Consumers requesting '
                '{} will get nested copies.'.format(', '.join(f'"{r}"' for r in unsatisfied))
            )
        else:
            debug(f'Version {best_version} of "{node.name}" satisfies all requested ranges')

        return best_version


def select_optimal_versions(
    graph: RequirementGraph, selector: t.Optional[VersionSelector] = None
) -> t.Dict[str, str]:
    selector = selector or MostSatisfiedRangesSelector()
    return {node.name: selector.select_optimal(node) for node in graph}
