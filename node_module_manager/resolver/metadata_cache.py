# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Per-run memoization of registry metadata"""

import threading
import typing as t

from node_module_tools.errors import MetadataFetchError
from node_module_tools.messages import debug
from node_module_tools.registry.api_models import PackageMetadata
from node_module_tools.registry.client_errors import APIClientError

MetadataFetcher = t.Callable[[str], PackageMetadata]


class MetadataCache:
    """
    Fetches metadata of every package at most once.

    Concurrent callers asking for the same name wait for the single in-flight fetch.
    A failed fetch is not cached, the next call tries again.
    """

    def __init__(self, fetcher: MetadataFetcher) -> None:
        self._fetcher = fetcher
        self._metadata: t.Dict[str, PackageMetadata] = {}
        self._locks: t.Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()
        self.fetch_count = 0

    def _lock_for(self, name: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(name, threading.Lock())

    def __contains__(self, name: str) -> bool:
        return name in self._metadata

    def get(self, name: str) -> PackageMetadata:
        try:
            return self._metadata[name]
        except KeyError:
            pass

        with self._lock_for(name):
            if name not in self._metadata:
                self._metadata[name] = self._fetch(name)

        return self._metadata[name]

    def _fetch(self, name: str) -> PackageMetadata:
        debug(f'Fetching metadata of "{name}"')
        self.fetch_count += 1
        try:
            metadata = self._fetcher(name)
        except APIClientError as e:
            raise MetadataFetchError(name, '\n'.join([str(e)] + e.request_info()))

        if metadata is None:
            raise MetadataFetchError(name, 'registry returned no document')

        return metadata

    def snapshot(self) -> t.Dict[str, PackageMetadata]:
        """Copy of everything fetched so far"""
        return dict(self._metadata)
