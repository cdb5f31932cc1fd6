# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Set of tools and constants to work with files and directories"""

import os
from pathlib import Path
from shutil import rmtree

from .errors import FatalError


def prepare_empty_directory(directory: str) -> None:
    """Prepare directory empty"""
    dir_exist = os.path.exists(directory)

    # Delete path if it's not empty
    if dir_exist and os.listdir(directory):
        rmtree(directory)
        dir_exist = False

    if not dir_exist:
        try:
            os.makedirs(directory)
        except NotADirectoryError:
            raise FatalError(f'Not a directory in the path. Cannot create directory: {directory}')
        except PermissionError:
            raise FatalError(f'Permission denied. Cannot create directory: {directory}')


def directory_size(dir_path: str) -> int:
    """Return the total size of all files in the directory tree"""
    total_size = 0
    directory = Path(dir_path)
    for file in directory.glob('**/*'):
        try:
            total_size += os.stat(str(file)).st_size
        except OSError:
            pass
    return total_size


def human_readable_size(size: int) -> str:
    """Return a human readable string representation of a data size"""
    if size < 0:
        raise ValueError('size must be non-negative')

    if size < 1024:
        return '{} bytes'.format(size)

    if size < 1024**2:
        return '{:.2f} KB'.format(size / 1024.0)

    if size < 1024**3:
        return '{:.2f} MB'.format(size / (1024.0**2))

    return '{:.2f} GB'.format(size / (1024.0**3))
