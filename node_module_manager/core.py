# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Core module of the node module manager"""

import functools
import os
import typing as t
from pathlib import Path

from node_module_tools.constants import LOCK_FILENAME, MANIFEST_FILENAME, NODE_MODULES_DIR
from node_module_tools.errors import (
    FatalError,
    NoSatisfyingVersionError,
    UnresolvableRangeError,
)
from node_module_tools.file_cache import FileCache
from node_module_tools.hash_tools.integrity import IntegrityCalculator
from node_module_tools.lock import LockManager
from node_module_tools.manifest import ManifestManager, parse_dependency_spec
from node_module_tools.messages import hint, notice
from node_module_tools.registry.client_errors import APIClientError, NetworkConnectionError
from node_module_tools.registry.service_details import get_registry_client
from node_module_tools.semver import max_satisfying

from .dependencies import SolvedDependencies, solve_project_dependencies
from .lock import decode_lock
from .materializer import ModulesMaterializer
from .tree import render_tree


def general_error_handler(func):
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except NetworkConnectionError as e:
            raise FatalError(
                '\n'.join(
                    [
                        'Cannot establish a connection to the package registry. '
                        'Are you connected to the internet?',
                    ]
                    + e.request_info()
                )
            )

        except APIClientError as e:
            raise FatalError('\n'.join([str(e)] + e.request_info()))

    return wrapper


class ModuleManager:
    def __init__(
        self,
        path: str,
        lock_path: t.Optional[str] = None,
        manifest_path: t.Optional[str] = None,
    ) -> None:
        # Project directory
        self.path = Path(path).resolve()

        if not manifest_path:
            self.manifest_path = self.path / MANIFEST_FILENAME
        else:
            self.manifest_path = Path(manifest_path)

        if not lock_path:
            self.lock_path = self.path / LOCK_FILENAME
        elif os.path.isabs(lock_path):
            self.lock_path = Path(lock_path)
        else:
            self.lock_path = self.path / lock_path

        self.node_modules_path = self.path / NODE_MODULES_DIR

    def _manifest_manager(self) -> ManifestManager:
        manifest_manager = ManifestManager(self.manifest_path, name=self.path.name)
        manifest_manager.create_if_missing()
        return manifest_manager

    @general_error_handler
    def install(
        self,
        profile_name: t.Optional[str] = None,
        registry_url: t.Optional[str] = None,
        lock_only: bool = False,
        calculate_integrity: bool = True,
    ) -> SolvedDependencies:
        """
        Solve dependencies declared in package.json, or reuse the lock file,
        and recreate node_modules directory.
        """
        manifest = self._manifest_manager().load()
        client = get_registry_client(profile_name=profile_name, registry_url=registry_url)
        cache = FileCache()

        solved = solve_project_dependencies(
            manifest,
            str(self.lock_path),
            client,
            integrity=IntegrityCalculator(client, cache) if calculate_integrity else None,
            registry_url=client.registry_url,
        )

        if lock_only:
            notice(f'Lock file {self.lock_path} contains {len(solved.plan)} packages')
            return solved

        ModulesMaterializer(client, cache).materialize(solved.plan, solved.lock, str(self.path))
        notice(f'Installed {len(solved.plan)} packages')
        return solved

    @general_error_handler
    def add_dependency(
        self,
        dependency: str,
        profile_name: t.Optional[str] = None,
        registry_url: t.Optional[str] = None,
        lock_only: bool = False,
    ) -> SolvedDependencies:
        """Add dependency "name[@range]" to package.json and install dependencies again"""
        name, version_range = parse_dependency_spec(dependency)

        manifest_manager = self._manifest_manager()
        manifest = manifest_manager.load()
        if name in manifest.dependencies:
            raise FatalError(
                f'Dependency "{name}" already exists in manifest "{self.manifest_path}"'
            )

        # Check if the package exists in the registry
        client = get_registry_client(profile_name=profile_name, registry_url=registry_url)
        metadata = client.get_package_metadata(name)

        if not version_range:
            latest = metadata.latest()
            if latest is None:
                raise NoSatisfyingVersionError(name)
            version_range = f'^{latest}'
        elif max_satisfying(metadata.published_versions(), version_range) is None:
            raise UnresolvableRangeError(
                name, version_range, available=metadata.published_versions()
            )

        manifest_manager.add_dependency(name, version_range)
        notice(f'Successfully added dependency "{name}": "{version_range}" to {self.manifest_path}')

        return self.install(
            profile_name=profile_name, registry_url=registry_url, lock_only=lock_only
        )

    @general_error_handler
    def tree(self) -> str:
        """Layout of node_modules recorded in the lock file. Registry is not used"""
        lock = LockManager(self.lock_path).load()
        if lock is None:
            hint('Run "nmm install" to solve dependencies and create the lock file')
            raise FatalError(f"Lock file {self.lock_path} doesn't exist")

        locked = lock.root.dependencies if lock.root else None
        plan = decode_lock(lock, locked or {})
        if plan is None:
            raise FatalError(f'Lock file {self.lock_path} has no record of the project dependencies')

        return render_tree(plan)
