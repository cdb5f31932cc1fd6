# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import typing as t
from dataclasses import dataclass, field

from node_module_tools.messages import debug
from node_module_tools.registry.api_models import PackageMetadata

from .installation_plan import InstallationPlan, InstallationPlanBuilder
from .metadata_cache import MetadataCache, MetadataFetcher
from .requirement_graph import RequirementGraph, RequirementGraphBuilder
from .selector import VersionSelector, select_optimal_versions


@dataclass
class ResolutionResult:
    graph: RequirementGraph
    optimal_versions: t.Dict[str, str]
    plan: InstallationPlan
    metadata: t.Dict[str, PackageMetadata] = field(default_factory=dict)
    fetch_count: int = 0


class DependencyResolver:
    """
    Turns the declared dependencies into an installation plan.

    Either any callable returning the package metadata by name, or an object with
    ``get_package_metadata`` method, like RegistryClient, can be used as the metadata source.
    Every call to ``resolve`` starts with the empty metadata cache.
    """

    def __init__(self, fetcher: t.Any, selector: t.Optional[VersionSelector] = None) -> None:
        if hasattr(fetcher, 'get_package_metadata'):
            fetcher = fetcher.get_package_metadata

        self._fetcher: MetadataFetcher = fetcher
        self.selector = selector

    def resolve(self, declared: t.Mapping[str, str]) -> ResolutionResult:
        cache = MetadataCache(self._fetcher)

        graph = RequirementGraphBuilder(cache).build(declared)
        debug(f'Requirement graph contains {len(graph)} packages')

        optimal_versions = select_optimal_versions(graph, self.selector)
        plan = InstallationPlanBuilder(graph, optimal_versions).build(declared)
        debug(f'Installation plan contains {len(plan)} entries')

        return ResolutionResult(
            graph=graph,
            optimal_versions=optimal_versions,
            plan=plan,
            metadata=cache.snapshot(),
            fetch_count=cache.fetch_count,
        )
