# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import typing as t

from pydantic import ConfigDict, Field, StrictBool, StrictInt

from node_module_tools.utils import BaseModel

# key of the project itself in the "packages" mapping
ROOT_PACKAGE_PATH = ''


class PackageLockEntry(BaseModel):
    model_config = ConfigDict(extra='ignore')

    name: t.Optional[str] = None
    version: t.Optional[str] = None
    resolved: t.Optional[str] = None
    integrity: t.Optional[str] = None
    dependencies: t.Optional[t.Dict[str, str]] = None


class PackageLock(BaseModel):
    model_config = ConfigDict(extra='ignore')

    name: str
    version: str
    lockfile_version: StrictInt = Field(alias='lockfileVersion')
    requires: StrictBool = True
    packages: t.Dict[str, PackageLockEntry]

    @property
    def root(self) -> t.Optional[PackageLockEntry]:
        return self.packages.get(ROOT_PACKAGE_PATH)

    def serialize(self) -> t.Dict[str, t.Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
