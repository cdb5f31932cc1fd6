# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Set of tools to work with package archives"""

import os
import tarfile
import typing as t
from pathlib import Path

from .errors import FatalError
from .file_tools import prepare_empty_directory


class ArchiveError(FatalError):
    pass


def _strip_root_dir(archive: tarfile.TarFile) -> t.Iterator[tarfile.TarInfo]:
    """Members without the top level folder, npm archives usually keep files in "package/" """
    for member in archive.getmembers():
        if not (member.isfile() or member.isdir()):
            continue

        parts = Path(member.name).parts
        if len(parts) < 2:
            continue

        relative = os.path.join(*parts[1:])
        if os.path.isabs(relative) or '..' in Path(relative).parts:
            raise ArchiveError(f'Archive member "{member.name}" is outside of the package folder')

        member.name = relative
        yield member


def unpack_package_archive(file: t.Union[str, Path], destination_directory: str) -> None:
    """Unpack .tgz package archive into the empty destination directory"""
    try:
        archive = tarfile.open(file, 'r:*')
    except tarfile.TarError:
        raise ArchiveError(f'{file} is not a valid tar archive')

    extract_kwargs: t.Dict[str, t.Any] = {}
    if hasattr(tarfile, 'data_filter'):
        extract_kwargs['filter'] = 'data'

    prepare_empty_directory(destination_directory)
    try:
        archive.extractall(
            destination_directory, members=_strip_root_dir(archive), **extract_kwargs
        )  # noqa: S202
    except tarfile.TarError as e:
        raise ArchiveError(f'Cannot unpack {file}: {e}')
    finally:
        archive.close()

