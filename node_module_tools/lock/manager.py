# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import json
import os
import typing as t

from pydantic import ValidationError

from node_module_tools.errors import InvalidLockFileError
from node_module_tools.messages import debug, notice
from node_module_tools.utils import polish_validation_error

from .models import PackageLock


def lock_to_text(lock: PackageLock) -> str:
    return json.dumps(lock.serialize(), indent=2, ensure_ascii=False) + '\n'


class LockManager:
    def __init__(self, path: t.Union[str, 'os.PathLike[str]']) -> None:
        self._path = str(path)

    @property
    def path(self) -> str:
        return self._path

    def exists(self) -> bool:
        return os.path.isfile(self._path)

    def dump(self, lock: PackageLock) -> bool:
        """
        Writes lock file to disk. Won't write if lock file is already up to date.

        :param lock: lock record of the resolved installation plan
        :return: True if lock file was updated, False otherwise
        """
        new_lock_content = lock_to_text(lock)

        if self.exists():
            with open(self._path, encoding='utf-8') as f:
                if f.read() == new_lock_content:
                    debug(f'Lock file {self._path} is up to date')
                    return False

        with open(self._path, mode='w', encoding='utf-8') as fw:
            fw.write(new_lock_content)

        notice(f'Updating lock file at {self._path}')
        return True

    def load(self) -> t.Optional[PackageLock]:
        """
        Read lock file from disk.

        :return: None if there is no lock file
        :raises InvalidLockFileError: if lock file is malformed
        """
        if not self.exists():
            return None

        try:
            with open(self._path, encoding='utf-8') as f:
                data = json.load(f)
        except ValueError as e:
            raise InvalidLockFileError(
                f'Cannot parse lock file {self._path}, it is not a valid JSON: {e}'
            )

        if not isinstance(data, dict):
            raise InvalidLockFileError(f'Invalid lock file {self._path}: JSON object expected')

        try:
            lock = PackageLock.model_validate(data)
        except ValidationError as e:
            raise InvalidLockFileError(
                f'Invalid lock file {self._path}:\n{polish_validation_error(e)}'
            )

        debug(f'Successfully read lock file from {self._path}')
        return lock
