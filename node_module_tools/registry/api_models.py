# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import typing as t

from pydantic import BaseModel, ConfigDict, Field

from node_module_tools.semver import sort_versions
from node_module_tools.utils import Self, dict_drop_none


# use pydantic BaseModel
class ApiBaseModel(BaseModel):
    model_config = ConfigDict(
        validate_assignment=True,
        extra='ignore',
        populate_by_name=True,
        frozen=True,
    )

    @classmethod
    def fromdict(cls, d: t.Dict[str, t.Any]) -> Self:
        return cls.model_validate(dict_drop_none(d))

    def model_dump(self, **kwargs) -> t.Dict[str, t.Any]:  # default to True unless explicitly set
        kwargs.setdefault('by_alias', True)
        kwargs.setdefault('exclude_none', True)
        return super().model_dump(**kwargs)


class DistMetadata(ApiBaseModel):
    tarball: t.Optional[str] = None
    integrity: t.Optional[str] = None
    shasum: t.Optional[str] = None


class VersionMetadata(ApiBaseModel):
    """Manifest of a single published version"""

    name: t.Optional[str] = None
    version: t.Optional[str] = None
    dependencies: t.Dict[str, str] = {}
    dist: t.Optional[DistMetadata] = None


class PackageMetadata(ApiBaseModel):
    """Registry document of a package, with all published versions"""

    name: t.Optional[str] = None
    dist_tags: t.Dict[str, str] = Field(default={}, alias='dist-tags')
    versions: t.Dict[str, VersionMetadata] = {}

    def published_versions(self) -> t.List[str]:
        """Valid semver versions, ascending"""
        return sort_versions(self.versions.keys())

    def dependencies_of(self, version: str) -> t.Dict[str, str]:
        try:
            return dict(self.versions[version].dependencies)
        except KeyError:
            return {}

    def tarball_of(self, version: str) -> t.Optional[str]:
        version_metadata = self.versions.get(version)
        if version_metadata is None or version_metadata.dist is None:
            return None

        return version_metadata.dist.tarball

    def latest(self) -> t.Optional[str]:
        latest = self.dist_tags.get('latest')
        if latest in self.versions:
            return latest

        versions = self.published_versions()
        return versions[-1] if versions else None
