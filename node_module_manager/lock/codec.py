# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Conversion between installation plans and lock records"""

import typing as t

from node_module_tools.constants import DEFAULT_REGISTRY_URL, LOCKFILE_VERSION
from node_module_tools.errors import InternalError, InvalidLockFileError
from node_module_tools.lock import ROOT_PACKAGE_PATH, PackageLock, PackageLockEntry
from node_module_tools.messages import debug, notice
from node_module_tools.registry.api_client import RegistryClient
from node_module_tools.registry.api_models import PackageMetadata
from node_module_tools.semver import satisfies

from ..resolver.installation_plan import InstallationEntry, InstallationPlan, parse_lock_path

# (name, version, tarball url) -> "sha512-..."
IntegrityProvider = t.Callable[[str, str, t.Optional[str]], str]


def _resolved_url(
    entry: InstallationEntry,
    metadata: t.Mapping[str, PackageMetadata],
    client: RegistryClient,
) -> str:
    package_metadata = metadata.get(entry.name)
    if package_metadata is not None:
        tarball = package_metadata.tarball_of(entry.version)
        if tarball:
            return tarball

    return client.tarball_url(entry.name, entry.version)


def _integrity(
    entry: InstallationEntry,
    metadata: t.Mapping[str, PackageMetadata],
    resolved: str,
    integrity: t.Optional[IntegrityProvider],
) -> t.Optional[str]:
    package_metadata = metadata.get(entry.name)
    if package_metadata is not None:
        version_metadata = package_metadata.versions.get(entry.version)
        if version_metadata and version_metadata.dist and version_metadata.dist.integrity:
            return version_metadata.dist.integrity

    if integrity is None:
        return None

    return integrity(entry.name, entry.version, resolved)


def encode_lock(
    plan: InstallationPlan,
    metadata: t.Mapping[str, PackageMetadata],
    declared: t.Mapping[str, str],
    project_name: str,
    project_version: str,
    integrity: t.Optional[IntegrityProvider] = None,
    registry_url: t.Optional[str] = None,
) -> PackageLock:
    """
    Create lock record of the plan.

    Integrity reported by the registry is used when it is available,
    otherwise it's calculated by the `integrity` callable, if any.
    """
    client = RegistryClient(registry_url=registry_url or DEFAULT_REGISTRY_URL)

    root_dependencies = {}
    for name in declared:
        entry = plan.root_entry(name)
        if entry is None:
            raise InternalError(f'Declared dependency "{name}" is not installed to the root')
        root_dependencies[name] = entry.version

    packages = {
        ROOT_PACKAGE_PATH: PackageLockEntry(
            name=project_name,
            version=project_version,
            dependencies=root_dependencies,
        )
    }

    for entry in plan:
        resolved = _resolved_url(entry, metadata, client)
        package_metadata = metadata.get(entry.name)
        dependencies = package_metadata.dependencies_of(entry.version) if package_metadata else {}

        packages[entry.lock_path] = PackageLockEntry(
            version=entry.version,
            resolved=resolved,
            integrity=_integrity(entry, metadata, resolved, integrity),
            dependencies=dependencies or None,
        )

    return PackageLock(
        name=project_name,
        version=project_version,
        lockfileVersion=LOCKFILE_VERSION,
        requires=True,
        packages=packages,
    )


def decode_lock(lock: PackageLock, declared: t.Mapping[str, str]) -> t.Optional[InstallationPlan]:
    """
    Restore installation plan from the lock record.

    :return: None if the lock doesn't match the declared dependencies
        and dependencies should be solved again
    :raises InvalidLockFileError: if a package record is malformed
    """
    if lock.lockfile_version != LOCKFILE_VERSION:
        notice(
            f'Lock file version {lock.lockfile_version} is not supported, '
            f'expected {LOCKFILE_VERSION}. Dependencies will be solved again'
        )
        return None

    root = lock.root
    if root is None or root.dependencies is None:
        debug('Lock file has no record of the project dependencies')
        return None

    locked = root.dependencies
    if set(locked) != set(declared):
        debug('Dependencies of the project were changed since the lock file was created')
        return None

    for name, version_range in declared.items():
        if not satisfies(locked[name], version_range):
            debug(
                f'Locked version {locked[name]} of "{name}" '
                f'does not satisfy the range "{version_range}"'
            )
            return None

    plan = InstallationPlan()
    for lock_path, record in lock.packages.items():
        if lock_path == ROOT_PACKAGE_PATH:
            continue

        try:
            install_path = parse_lock_path(lock_path)
        except ValueError as e:
            raise InvalidLockFileError(f'Invalid package path in the lock file: {e}')

        if not record.version:
            raise InvalidLockFileError(f'Package "{lock_path}" has no version in the lock file')

        entry = InstallationEntry(install_path[-1], record.version, install_path[:-1])
        plan.append(entry)

    for name, version in locked.items():
        entry = plan.root_entry(name)
        if entry is None or entry.version != version:
            raise InvalidLockFileError(
                f'Lock file has no record of the dependency "{name}@{version}"'
            )

    return plan
