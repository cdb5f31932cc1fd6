# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import click

from node_module_tools import notice
from node_module_tools.file_cache import FileCache
from node_module_tools.file_tools import human_readable_size


def init_cache():
    @click.group()
    def cache():
        """
        Group of commands for managing the cache of downloaded package archives.
        """
        pass

    @cache.command()
    def clear():
        """
        Clear the archive cache.
        """
        FileCache().clear()
        notice(f'Successfully cleared cache at\n\t{FileCache().path()}')

    @cache.command()
    def path():
        """
        Print the cache path.
        """
        print(FileCache().path())

    @cache.command()
    @click.option('--bytes', is_flag=True, default=False, help='Print size in bytes')
    def size(bytes):
        """
        Print the cache size in a human-readable format.
        """
        size = FileCache().size()
        if bytes:
            print(str(size))
        else:
            print(human_readable_size(size))

    return cache
