# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import json

import pytest

from node_module_tools.errors import ManifestError
from node_module_tools.manifest import ManifestManager, parse_dependency_spec


@pytest.fixture
def manifest_path(tmp_path):
    path = tmp_path / 'my-project' / 'package.json'
    path.parent.mkdir()
    return path


def write_manifest(path, data):
    path.write_text(json.dumps(data, indent=2))


@pytest.mark.parametrize(
    'spec, expected',
    [
        ('lodash', ('lodash', None)),
        ('lodash@^4.17.0', ('lodash', '^4.17.0')),
        ('@types/node', ('@types/node', None)),
        ('@types/node@>=18.0.0 <20.0.0', ('@types/node', '>=18.0.0 <20.0.0')),
        ('  left-pad@1.3.0 ', ('left-pad', '1.3.0')),
    ],
)
def test_parse_dependency_spec(spec, expected):
    assert parse_dependency_spec(spec) == expected


@pytest.mark.parametrize('spec', ['', '@', '@scope', '../evil', 'name@'])
def test_parse_invalid_dependency_spec(spec):
    with pytest.raises(ManifestError):
        parse_dependency_spec(spec)


class TestManifestManager:
    def test_load(self, manifest_path):
        write_manifest(
            manifest_path,
            {
                'name': 'app',
                'version': '2.0.0',
                'scripts': {'test': 'jest'},
                'dependencies': {'package-a': '^1.0.0', '@scope/b': '~2.1.0'},
                'devDependencies': {'jest': '*'},
            },
        )

        manifest = ManifestManager(manifest_path).load()

        assert manifest.name == 'app'
        assert manifest.version == '2.0.0'
        assert manifest.dependencies == {'package-a': '^1.0.0', '@scope/b': '~2.1.0'}

    def test_load_defaults(self, manifest_path):
        write_manifest(manifest_path, {})

        manifest = ManifestManager(manifest_path).load()

        assert manifest.name == 'my-project'
        assert manifest.version == '1.0.0'
        assert manifest.dependencies == {}

    @pytest.mark.parametrize(
        'content, message',
        [
            ('{broken', 'Cannot parse manifest file'),
            ('[]', 'JSON object expected'),
            ('{"dependencies": {"package-a": "not a range"}}', 'Invalid version range'),
            ('{"dependencies": ["package-a"]}', 'dependencies'),
        ],
    )
    def test_load_invalid(self, manifest_path, content, message):
        manifest_path.write_text(content)

        with pytest.raises(ManifestError, match=message):
            ManifestManager(manifest_path).load()

    def test_create_if_missing(self, manifest_path):
        manager = ManifestManager(manifest_path)

        assert manager.create_if_missing()
        assert not manager.create_if_missing()

        assert json.loads(manifest_path.read_text()) == {
            'name': 'my-project',
            'version': '1.0.0',
            'dependencies': {},
        }

    def test_add_dependency_keeps_other_fields(self, manifest_path):
        write_manifest(
            manifest_path,
            {
                'name': 'app',
                'private': True,
                'dependencies': {'package-a': '^1.0.0'},
                'scripts': {'start': 'node index.js'},
            },
        )

        ManifestManager(manifest_path).add_dependency('package-b', '^2.0.0')

        data = json.loads(manifest_path.read_text())
        assert list(data) == ['name', 'private', 'dependencies', 'scripts']
        assert data['dependencies'] == {'package-a': '^1.0.0', 'package-b': '^2.0.0'}
        assert data['scripts'] == {'start': 'node index.js'}
        assert manifest_path.read_text().endswith('}\n')

    def test_add_dependency_without_dependencies_section(self, manifest_path):
        write_manifest(manifest_path, {'name': 'app'})

        ManifestManager(manifest_path).add_dependency('package-b', '1.0.0')

        assert json.loads(manifest_path.read_text())['dependencies'] == {'package-b': '1.0.0'}

    def test_add_dependency_invalid_range(self, manifest_path):
        write_manifest(manifest_path, {'name': 'app'})

        with pytest.raises(ManifestError, match='Invalid version range'):
            ManifestManager(manifest_path).add_dependency('package-b', 'not a range')

        assert 'dependencies' not in json.loads(manifest_path.read_text())
