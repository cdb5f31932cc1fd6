# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Subresource integrity digests of package archives"""

import base64
import hashlib
import os
import typing as t
from pathlib import Path

from node_module_tools.errors import LockError, ProcessingError
from node_module_tools.file_cache import FileCache
from node_module_tools.messages import debug
from node_module_tools.registry.client_errors import APIClientError

from .constants import BLOCK_SIZE, INTEGRITY_ALGORITHM

if t.TYPE_CHECKING:
    from node_module_tools.registry.api_client import RegistryClient


def integrity_of_file(
    file_path: t.Union[str, Path], algorithm: str = INTEGRITY_ALGORITHM
) -> str:
    """Calculate integrity string, like "sha512-<base64 digest>", of file"""
    digest = hashlib.new(algorithm)

    try:
        with open(Path(file_path).as_posix(), 'rb') as f:
            while True:
                block = f.read(BLOCK_SIZE)
                if not block:
                    break
                digest.update(block)
    except FileNotFoundError:
        raise ProcessingError(f'Path {file_path} does not exist or is a broken symbolic link')

    return '{}-{}'.format(algorithm, base64.b64encode(digest.digest()).decode('ascii'))


def verify_integrity(file_path: t.Union[str, Path], expected: str) -> bool:
    """
    Check file against integrity string.
    The string may contain several space separated digests, any of them should match.
    """
    for item in expected.split():
        algorithm, _, _ = item.partition('-')
        if algorithm not in hashlib.algorithms_available:
            continue

        if integrity_of_file(file_path, algorithm) == item:
            return True

    return False


class IntegrityCalculator:
    """Downloads package archives into the cache and calculates their digests"""

    def __init__(self, client: 'RegistryClient', cache: t.Optional[FileCache] = None) -> None:
        self.client = client
        self.cache = cache or FileCache()

    def __call__(self, name: str, version: str, tarball_url: t.Optional[str] = None) -> str:
        return self.integrity(name, version, tarball_url)

    def integrity(self, name: str, version: str, tarball_url: t.Optional[str] = None) -> str:
        url = tarball_url or self.client.tarball_url(name, version)
        archive_path = self.cache.archive_path(name, version)

        try:
            if not os.path.isfile(archive_path):
                debug(f'Downloading {url}')
                self.client.download_archive(url, archive_path)
        except APIClientError as e:
            raise LockError(
                '\n'.join([f'Cannot download archive of "{name}@{version}": {e}'] + e.request_info())
            )

        return integrity_of_file(archive_path)
