# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Creation of the node_modules directory from the installation plan"""

import os
import shutil
import typing as t

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from node_module_tools import get_logger
from node_module_tools.archive_tools import unpack_package_archive
from node_module_tools.constants import NODE_MODULES_DIR
from node_module_tools.errors import FetchingError
from node_module_tools.file_cache import FileCache
from node_module_tools.hash_tools.integrity import verify_integrity
from node_module_tools.lock import PackageLock, PackageLockEntry
from node_module_tools.messages import debug, notice
from node_module_tools.registry.api_client import RegistryClient
from node_module_tools.registry.client_errors import APIClientError

from .resolver import InstallationEntry, InstallationPlan

LOGGER = get_logger()


class ModulesMaterializer:
    """Downloads locked archives, through the cache, and unpacks them into node_modules"""

    def __init__(self, client: RegistryClient, cache: t.Optional[FileCache] = None) -> None:
        self.client = client
        self.cache = cache or FileCache()

    def _fetch_archive(self, entry: InstallationEntry, record: PackageLockEntry) -> str:
        url = record.resolved or self.client.tarball_url(entry.name, entry.version)
        archive_path = self.cache.archive_path(entry.name, entry.version)

        if os.path.isfile(archive_path):
            if not record.integrity or verify_integrity(archive_path, record.integrity):
                debug(f'Using cached archive of {entry.name}@{entry.version}')
                return archive_path

            debug(f'Cached archive of {entry.name}@{entry.version} is corrupted, downloading again')
            os.remove(archive_path)

        try:
            self.client.download_archive(url, archive_path)
        except APIClientError as e:
            raise FetchingError(
                '\n'.join(
                    [f'Cannot download archive of "{entry.name}@{entry.version}": {e}']
                    + e.request_info()
                )
            )

        if record.integrity and not verify_integrity(archive_path, record.integrity):
            os.remove(archive_path)
            raise FetchingError(
                f'Integrity of the downloaded archive of "{entry.name}@{entry.version}" '
                f'does not match the lock file. Expected: {record.integrity}'
            )

        return archive_path

    def materialize(
        self, plan: InstallationPlan, lock: PackageLock, project_path: str
    ) -> t.List[str]:
        """
        Recreate node_modules directory of the project.

        :return: installed package directories
        """
        node_modules = os.path.join(project_path, NODE_MODULES_DIR)
        if os.path.exists(node_modules):
            shutil.rmtree(node_modules)
        os.makedirs(node_modules)

        # containers have to be unpacked before packages nested into them
        entries = sorted(plan, key=lambda e: e.depth)
        installed = []

        notice(f'Installing {len(entries)} packages into {node_modules}')
        with logging_redirect_tqdm(loggers=[LOGGER]):
            with tqdm(total=len(entries), unit='package', leave=False) as progress_bar:
                for entry in entries:
                    record = lock.packages.get(entry.lock_path) or PackageLockEntry(
                        version=entry.version
                    )
                    archive_path = self._fetch_archive(entry, record)

                    destination = os.path.join(project_path, *entry.lock_path.split('/'))
                    unpack_package_archive(archive_path, destination)
                    installed.append(destination)

                    progress_bar.set_description(entry.name)
                    progress_bar.update(1)

        return installed
