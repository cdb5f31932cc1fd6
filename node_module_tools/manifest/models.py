# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import re
import typing as t

from pydantic import ConfigDict, field_validator

from node_module_tools.constants import DEFAULT_PROJECT_VERSION
from node_module_tools.errors import ManifestError
from node_module_tools.semver import is_valid_range
from node_module_tools.utils import BaseModel

# name, optionally scoped, and optional range after "@": "@scope/name@^1.0.0"
DEPENDENCY_SPEC_RE = r'^((?:@[a-z0-9][\w.-]*/)?[a-z0-9][\w.-]*)(?:@(.+))?$'


def parse_dependency_spec(spec: str) -> t.Tuple[str, t.Optional[str]]:
    match = re.match(DEPENDENCY_SPEC_RE, spec.strip(), flags=re.IGNORECASE)
    if not match:
        raise ManifestError(
            f'Invalid dependency "{spec}". Use "name" or "name@range", like "lodash@^4.17.0"'
        )

    name, version_range = match.groups()
    return name, version_range


class ProjectManifest(BaseModel):
    """The part of package.json the resolution cares about"""

    model_config = ConfigDict(extra='ignore')

    name: str
    version: str = DEFAULT_PROJECT_VERSION
    dependencies: t.Dict[str, str] = {}

    @field_validator('dependencies')
    @classmethod
    def validate_dependencies(cls, v: t.Dict[str, str]) -> t.Dict[str, str]:
        for name, version_range in v.items():
            if not is_valid_range(version_range):
                raise ValueError(f'Invalid version range "{version_range}" of dependency "{name}"')

        return v
