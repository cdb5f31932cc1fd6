# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Classes to work with file cache"""

import os
import shutil
import sys
import typing as t

from node_module_tools import NodeModuleManagerSettings
from node_module_tools.errors import FatalError
from node_module_tools.file_tools import directory_size


def system_cache_path() -> str:
    """Path of system cache directory"""
    if sys.platform.startswith('win'):
        cache_directory = os.getenv('LOCALAPPDATA') or os.path.expanduser('~\\AppData\\Local')
        return os.path.join(cache_directory, 'NodeModuleManager', 'Cache')

    if sys.platform == 'darwin':
        cache_directory = os.path.expanduser('~/Library/Caches')
    else:
        cache_directory = os.getenv('XDG_CACHE_HOME') or os.path.expanduser('~/.cache')

    return os.path.join(cache_directory, 'NodeModuleManager')


def archive_filename(name: str, version: str) -> str:
    # scoped packages get a flat file name
    return '{}-{}.tgz'.format(name.replace('/', '__').lstrip('@'), version)


class FileCache:
    """Common functions to work with archives cache"""

    def __init__(self, path: t.Optional[str] = None) -> None:
        self._path: t.Optional[str] = path

    def path(self) -> str:
        """Path of cache directory. Make directory if it doesn't exist"""
        if not self._path:
            self._path = NodeModuleManagerSettings().CACHE_PATH

        if not self._path:
            self._path = system_cache_path()

        try:
            os.makedirs(self._path, exist_ok=True)
        except OSError:
            raise FatalError(f'Failed to create cache directory: {self._path}')

        return self._path

    def archive_path(self, name: str, version: str) -> str:
        return os.path.join(self.path(), 'archives', archive_filename(name, version))

    def clear(self) -> None:
        """Clear cache directory"""
        shutil.rmtree(self.path())

    def size(self) -> int:
        """Disk usage of cache directory"""
        return directory_size(self.path())
