# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import json
import tarfile
import typing as t
from pathlib import Path

import pytest

from node_module_tools import HINT_LEVEL, NodeModuleManagerSettings, get_logger
from node_module_tools.registry.api_models import PackageMetadata
from node_module_tools.registry.client_errors import PackageNotFound

# name -> version -> dependencies
REGISTRY_PACKAGES: t.Dict[str, t.Dict[str, t.Dict[str, str]]] = {
    'simple-package': {
        '1.0.0': {},
        '1.1.0': {},
    },
    'package-a': {
        '1.0.0': {},
        '2.0.0': {'package-b': '^1.0.0'},
    },
    'package-b': {
        '1.0.0': {},
        '1.2.0': {},
    },
    'complex-package': {
        '3.0.0': {'package-a': '^1.0.0', 'package-b': '^1.0.0'},
    },
    'package-c': {
        '1.0.0': {'shared-dep': '^1.0.0'},
    },
    'package-d': {
        '1.0.0': {'shared-dep': '^2.0.0'},
    },
    'shared-dep': {
        '1.0.0': {},
        '1.5.0': {},
        '2.0.0': {},
    },
    'package-e': {
        '1.0.0': {'shared-dep-2': '^1.0.0'},
    },
    'package-f': {
        '1.0.0': {'shared-dep-2': '^1.0.0'},
    },
    'root-package': {
        '1.0.0': {'shared-dep-2': '^2.0.0', 'package-e': '^1.0.0', 'package-f': '^1.0.0'},
    },
    'shared-dep-2': {
        '1.0.0': {},
        '1.2.0': {},
        '2.0.0': {},
    },
    'multi-req-a': {
        '1.0.0': {'shared-package': '^1.5.0'},
    },
    'multi-req-b': {
        '1.0.0': {'shared-package': '^1.2.0'},
    },
    'multi-req-c': {
        '1.0.0': {'shared-package': '^1.0.0'},
    },
    'multi-req-d': {
        '1.0.0': {'shared-package': '^2.0.0'},
    },
    'shared-package': {
        '1.0.0': {},
        '1.2.0': {},
        '1.5.0': {},
        '1.7.0': {},
        '2.0.0': {},
    },
    # circular dependencies
    'cycle-a': {
        '1.0.0': {'cycle-b': '^1.0.0'},
    },
    'cycle-b': {
        '1.0.0': {'cycle-a': '^1.0.0'},
    },
    'no-versions': {},
    'broken-dependency': {
        '1.0.0': {'shared-dep': '^9.0.0'},
    },
}


def package_document(
    name: str,
    versions: t.Dict[str, t.Dict[str, str]],
    tarball_base: t.Optional[str] = None,
) -> t.Dict[str, t.Any]:
    """Registry document like the one served by npm registries"""
    document: t.Dict[str, t.Any] = {'name': name, 'versions': {}}
    for version, dependencies in versions.items():
        version_document: t.Dict[str, t.Any] = {
            'name': name,
            'version': version,
            'dependencies': dependencies,
        }
        if tarball_base:
            version_document['dist'] = {'tarball': f'{tarball_base}/{name}-{version}.tgz'}

        document['versions'][version] = version_document

    published = sorted(versions)
    if published:
        document['dist-tags'] = {'latest': published[-1]}

    return document


class FakeRegistry:
    """In-memory registry, remembers every requested package name"""

    def __init__(self, packages: t.Dict[str, t.Dict[str, t.Dict[str, str]]]) -> None:
        self.packages = packages
        self.calls: t.List[str] = []

    def get_package_metadata(self, name: str) -> PackageMetadata:
        self.calls.append(name)
        if name not in self.packages:
            raise PackageNotFound('Not found in the registry', endpoint=f'fake://{name}')

        return PackageMetadata.fromdict(package_document(name, self.packages[name]))

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def registry_packages():
    return {name: dict(versions) for name, versions in REGISTRY_PACKAGES.items()}


@pytest.fixture
def fake_registry(registry_packages):
    return FakeRegistry(registry_packages)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    for env_var in NodeModuleManagerSettings.known_env_vars():
        monkeypatch.delenv(env_var, raising=False)

    monkeypatch.setenv('NMM_HOME_PATH', str(tmp_path / 'nmm_home'))
    monkeypatch.setenv('NMM_CACHE_PATH', str(tmp_path / 'nmm_cache'))


@pytest.fixture(autouse=True)
def reset_logger():
    yield

    logger = get_logger()
    logger.setLevel(HINT_LEVEL)
    logger.handlers.clear()
    logger.propagate = True


@pytest.fixture()
def plan_layout():
    """(name, version, parent directory) of every plan entry, in plan order"""

    def layout(plan) -> t.List[t.Tuple[str, str, t.Optional[str]]]:
        return [(entry.name, entry.version, entry.parent_directory) for entry in plan]

    return layout


@pytest.fixture()
def file_with_size():
    def file_builder(path: t.Union[str, Path], size: int) -> None:
        with open(str(path), 'w') as f:
            f.write('x' * size)

    return file_builder


@pytest.fixture()
def package_archive(tmp_path):
    """Build npm-like archive, all files are under the "package" folder"""

    def archive_builder(
        name: str,
        version: str,
        dependencies: t.Optional[t.Dict[str, str]] = None,
        directory: t.Optional[Path] = None,
    ) -> Path:
        directory = directory or tmp_path / 'archives'
        source = tmp_path / 'sources' / f'{name}-{version}'
        source.mkdir(parents=True, exist_ok=True)

        with open(source / 'package.json', 'w', encoding='utf-8') as f:
            json.dump(
                {'name': name, 'version': version, 'dependencies': dependencies or {}}, f
            )
        with open(source / 'index.js', 'w', encoding='utf-8') as f:
            f.write(f'module.exports = "{name}@{version}"\n')

        directory.mkdir(parents=True, exist_ok=True)
        archive_path = directory / f'{name}-{version}.tgz'
        with tarfile.open(archive_path, 'w:gz') as archive:
            archive.add(str(source), arcname='package')

        return archive_path

    return archive_builder


@pytest.fixture()
def local_registry(tmp_path, package_archive):
    """
    Registry on the file system, served with file:// URLs.
    Metadata documents are in "metadata/<name>", archives in "tarballs/<name>-<version>.tgz".
    """

    def registry_builder(packages: t.Dict[str, t.Dict[str, t.Dict[str, str]]]) -> str:
        root = tmp_path / 'registry'
        metadata_dir = root / 'metadata'
        tarballs_dir = root / 'tarballs'
        metadata_dir.mkdir(parents=True, exist_ok=True)

        tarball_base = tarballs_dir.as_uri()
        for name, versions in packages.items():
            for version, dependencies in versions.items():
                package_archive(name, version, dependencies, directory=tarballs_dir)

            with open(metadata_dir / name, 'w', encoding='utf-8') as f:
                json.dump(package_document(name, versions, tarball_base=tarball_base), f)

        return metadata_dir.as_uri()

    return registry_builder


@pytest.fixture()
def project_dir(tmp_path):
    def project_builder(dependencies: t.Dict[str, str], name: str = 'test-project') -> Path:
        path = tmp_path / name
        path.mkdir(parents=True, exist_ok=True)
        with open(path / 'package.json', 'w', encoding='utf-8') as f:
            json.dump({'name': name, 'version': '1.0.0', 'dependencies': dependencies}, f, indent=2)

        return path

    return project_builder

