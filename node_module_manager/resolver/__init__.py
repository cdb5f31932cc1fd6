# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
from .dependency_resolver import DependencyResolver, ResolutionResult
from .installation_plan import InstallationEntry, InstallationPlan, InstallationPlanBuilder
from .metadata_cache import MetadataCache
from .requirement_graph import RequirementGraph, RequirementGraphBuilder, RequirementNode
from .selector import MostSatisfiedRangesSelector, VersionSelector, select_optimal_versions

__all__ = [
    'DependencyResolver',
    'InstallationEntry',
    'InstallationPlan',
    'InstallationPlanBuilder',
    'MetadataCache',
    'MostSatisfiedRangesSelector',
    'RequirementGraph',
    'RequirementGraphBuilder',
    'RequirementNode',
    'ResolutionResult',
    'VersionSelector',
    'select_optimal_versions',
]
