# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import pytest

from node_module_tools.errors import FatalError
from node_module_tools.file_cache import FileCache, archive_filename
from node_module_tools.file_tools import (
    directory_size,
    human_readable_size,
    prepare_empty_directory,
)


def test_prepare_empty_directory(tmp_path):
    directory = tmp_path / 'node_modules'

    prepare_empty_directory(str(directory))
    assert directory.is_dir()

    (directory / 'package').mkdir()
    prepare_empty_directory(str(directory))
    assert list(directory.iterdir()) == []


def test_prepare_empty_directory_under_file(tmp_path):
    (tmp_path / 'file').write_text('')

    with pytest.raises(FatalError, match='Not a directory'):
        prepare_empty_directory(str(tmp_path / 'file' / 'node_modules'))


def test_directory_size(tmp_path, file_with_size):
    file_with_size(tmp_path / 'file1.txt', 14)
    file_with_size(tmp_path / 'file2.txt', 14)

    assert directory_size(str(tmp_path)) == 28


@pytest.mark.parametrize(
    ('size', 'expected'),
    [
        (123, '123 bytes'),
        (1523, '1.49 KB'),
        (1052523, '1.00 MB'),
        (1100523000, '1.02 GB'),
    ],
)
def test_human_readable_size(size, expected):
    assert human_readable_size(size) == expected


def test_human_readable_size_with_negative_size():
    with pytest.raises(ValueError):
        human_readable_size(-1)


@pytest.mark.parametrize(
    ('name', 'version', 'expected'),
    [
        ('lodash', '4.17.21', 'lodash-4.17.21.tgz'),
        ('@types/node', '18.0.0', 'types__node-18.0.0.tgz'),
    ],
)
def test_archive_filename(name, version, expected):
    assert archive_filename(name, version) == expected


def test_file_cache_path(tmp_path, monkeypatch):
    monkeypatch.setenv('NMM_CACHE_PATH', str(tmp_path / 'from_env'))

    assert FileCache().path() == str(tmp_path / 'from_env')
    assert FileCache(str(tmp_path / 'explicit')).archive_path('a', '1.0.0') == str(
        tmp_path / 'explicit' / 'archives' / 'a-1.0.0.tgz'
    )
