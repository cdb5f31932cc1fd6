# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import io
import json
import tarfile

import pytest

from node_module_tools.archive_tools import ArchiveError, unpack_package_archive


def add_file(archive, name, content=b''):
    info = tarfile.TarInfo(name)
    info.size = len(content)
    archive.addfile(info, io.BytesIO(content))


class TestPackageArchive:
    def test_unpack_strips_root_folder(self, package_archive, tmp_path):
        archive = package_archive('package-a', '1.0.0')
        destination = tmp_path / 'node_modules' / 'package-a'

        unpack_package_archive(archive, str(destination))

        assert sorted(p.name for p in destination.iterdir()) == ['index.js', 'package.json']
        with open(destination / 'package.json') as f:
            assert json.load(f)['version'] == '1.0.0'

    def test_unpack_other_root_folder_name(self, tmp_path):
        archive_path = tmp_path / 'types.tgz'
        with tarfile.open(archive_path, 'w:gz') as archive:
            add_file(archive, 'node/package.json', b'{}')
            add_file(archive, 'node/lib/index.d.ts', b'export {}')

        destination = tmp_path / 'out'
        unpack_package_archive(archive_path, str(destination))

        assert (destination / 'package.json').is_file()
        assert (destination / 'lib' / 'index.d.ts').is_file()

    def test_unpack_replaces_directory_content(self, package_archive, tmp_path):
        destination = tmp_path / 'out'
        destination.mkdir()
        (destination / 'stale.js').write_text('')

        unpack_package_archive(package_archive('package-a', '1.0.0'), str(destination))

        assert not (destination / 'stale.js').exists()

    def test_unpack_rejects_path_traversal(self, tmp_path):
        archive_path = tmp_path / 'evil.tgz'
        with tarfile.open(archive_path, 'w:gz') as archive:
            add_file(archive, 'package/../../evil.js', b'evil')

        with pytest.raises(ArchiveError, match='outside of the package folder'):
            unpack_package_archive(archive_path, str(tmp_path / 'out'))

        assert not (tmp_path / 'evil.js').exists()

    def test_unpack_invalid_archive(self, tmp_path):
        archive_path = tmp_path / 'broken.tgz'
        archive_path.write_text('not an archive')

        with pytest.raises(ArchiveError, match='not a valid tar archive'):
            unpack_package_archive(archive_path, str(tmp_path / 'out'))
