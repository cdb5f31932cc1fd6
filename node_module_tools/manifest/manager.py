# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import json
import os
import typing as t

from pydantic import ValidationError

from node_module_tools.constants import DEFAULT_PROJECT_VERSION
from node_module_tools.errors import ManifestError
from node_module_tools.messages import notice
from node_module_tools.utils import polish_validation_error

from .models import ProjectManifest


class ManifestManager:
    """Reads and updates package.json of the project"""

    def __init__(self, path: t.Union[str, 'os.PathLike[str]'], name: t.Optional[str] = None) -> None:
        self.path = str(path)
        self.name = name or os.path.basename(os.path.dirname(os.path.abspath(self.path)))

    def exists(self) -> bool:
        return os.path.isfile(self.path)

    def _read(self) -> t.Dict[str, t.Any]:
        try:
            with open(self.path, encoding='utf-8') as f:
                data = json.load(f)
        except ValueError as e:
            raise ManifestError(f'Cannot parse manifest file {self.path}: {e}')

        if not isinstance(data, dict):
            raise ManifestError(f'Invalid manifest file {self.path}: JSON object expected')

        return data

    def _write(self, data: t.Dict[str, t.Any]) -> None:
        with open(self.path, mode='w', encoding='utf-8') as f:
            f.write(json.dumps(data, indent=2, ensure_ascii=False) + '\n')

    def create_if_missing(self) -> bool:
        if self.exists():
            return False

        self._write({'name': self.name, 'version': DEFAULT_PROJECT_VERSION, 'dependencies': {}})
        notice(f'Created "{self.path}"')
        return True

    def load(self) -> ProjectManifest:
        data = self._read()
        data.setdefault('name', self.name)

        try:
            return ProjectManifest.model_validate(data)
        except ValidationError as e:
            raise ManifestError(
                f'Invalid manifest file {self.path}:\n{polish_validation_error(e)}'
            )

    def add_dependency(self, name: str, version_range: str) -> None:
        """Set dependency, keeping the rest of the file untouched"""
        data = self._read()
        dependencies = data.get('dependencies') or {}
        dependencies[name] = version_range
        data['dependencies'] = dependencies

        try:
            ProjectManifest.model_validate({'name': self.name, **data})
        except ValidationError as e:
            raise ManifestError(polish_validation_error(e))

        self._write(data)
