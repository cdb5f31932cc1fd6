# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import typing as t
from dataclasses import dataclass

from node_module_tools.errors import InvalidLockFileError
from node_module_tools.lock import LockManager, PackageLock
from node_module_tools.manifest import ProjectManifest
from node_module_tools.messages import debug, notice, warn

from .lock import IntegrityProvider, decode_lock, encode_lock
from .resolver import DependencyResolver, InstallationPlan, VersionSelector
from .tree import render_tree


@dataclass
class SolvedDependencies:
    plan: InstallationPlan
    lock: PackageLock
    # dependencies were solved again instead of reading the lock file
    solved: bool = False
    lock_updated: bool = False
    fetch_count: int = 0


def load_locked_plan(
    lock_manager: LockManager, declared: t.Mapping[str, str]
) -> t.Optional[t.Tuple[PackageLock, InstallationPlan]]:
    """Lock record and the plan restored from it, None if dependencies should be solved"""
    try:
        lock = lock_manager.load()
    except InvalidLockFileError as e:
        warn(f'{e}\nRecreating lock file.')
        return None

    if lock is None:
        notice("Lock file doesn't exist, solving dependencies.")
        return None

    try:
        plan = decode_lock(lock, declared)
    except InvalidLockFileError as e:
        warn(f'{e}\nRecreating lock file.')
        return None

    if plan is None:
        notice('Dependencies have changed, solving dependencies.')
        return None

    return lock, plan


def solve_project_dependencies(
    manifest: ProjectManifest,
    lock_path: str,
    fetcher: t.Any,
    integrity: t.Optional[IntegrityProvider] = None,
    registry_url: t.Optional[str] = None,
    selector: t.Optional[VersionSelector] = None,
) -> SolvedDependencies:
    """
    Get installation plan of the project.

    The process is:
    - read existing lock file, if it still matches the declared dependencies it's used as is
    - otherwise solve dependencies, fetching the metadata from the registry
    - dump the lock file, file won't be touched if content is the same

    :param fetcher: registry client, or a callable returning the package metadata by name
    """
    lock_manager = LockManager(lock_path)
    declared = manifest.dependencies

    locked = load_locked_plan(lock_manager, declared)
    if locked is not None:
        lock, plan = locked
        debug(f'Using {len(plan)} packages from the lock file {lock_path}')
        return SolvedDependencies(plan=plan, lock=lock)

    result = DependencyResolver(fetcher, selector=selector).resolve(declared)
    lock = encode_lock(
        result.plan,
        result.metadata,
        declared,
        project_name=manifest.name,
        project_version=manifest.version,
        integrity=integrity,
        registry_url=registry_url,
    )

    lock_updated = lock_manager.dump(lock)
    debug(f'Installation layout:\n{render_tree(result.plan)}')

    return SolvedDependencies(
        plan=result.plan,
        lock=lock,
        solved=True,
        lock_updated=lock_updated,
        fetch_count=result.fetch_count,
    )
