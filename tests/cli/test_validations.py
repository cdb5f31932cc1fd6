# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0

import click
import pytest

from node_module_manager.cli.validations import (
    combined_callback,
    validate_dependency,
    validate_existing_dir,
    validate_url,
)

# Group of tests for callbacks used in click options


def test_validate_existing_dir(tmp_path):
    temp_dir = tmp_path / 'valid_dir'
    temp_dir.mkdir()
    assert validate_existing_dir(None, None, str(temp_dir)) == str(temp_dir)


@pytest.mark.parametrize(
    'invalid_dir',
    [
        '/path/to/nonexistent/dir',  # Non-existent directory
        '',  # Empty path
    ],
)
def test_validate_existing_dir_invalid_input(invalid_dir):
    with pytest.raises(click.BadParameter) as exc_info:
        validate_existing_dir(None, None, invalid_dir)
    assert f'"{invalid_dir}" directory does not exist.' in str(exc_info.value)


@pytest.mark.parametrize(
    'url',
    [
        'https://registry.npmjs.org/',
        'http://localhost:4873',
        'file:///srv/registry/metadata',
        None,
    ],
)
def test_validate_url(url):
    assert validate_url(None, None, url) == url


@pytest.mark.parametrize('url', ['registry.npmjs.org', 'http://', 'https:///path'])
def test_validate_url_invalid_input(url):
    with pytest.raises(click.BadParameter, match='Invalid URL'):
        validate_url(None, None, url)


@pytest.mark.parametrize(
    'dependency',
    ['lodash', 'lodash@^4.17.0', '@types/node', '@types/node@~18.11.0', 'left-pad@1.x'],
)
def test_validate_dependency(dependency):
    assert validate_dependency(None, None, dependency) == dependency


@pytest.mark.parametrize(
    'dependency, message',
    [
        ('lodash@not a range', 'Invalid version range'),
        ('../lodash', 'Invalid dependency'),
        ('lodash@', 'Invalid dependency'),
    ],
)
def test_validate_dependency_invalid_input(dependency, message):
    with pytest.raises(click.BadParameter, match=message):
        validate_dependency(None, None, dependency)


def test_combined_callback():
    callback = combined_callback(
        lambda ctx, param, value: value.strip(),  # noqa: ARG005
        lambda ctx, param, value: value.upper(),  # noqa: ARG005
    )

    assert callback(None, None, ' lodash ') == 'LODASH'
