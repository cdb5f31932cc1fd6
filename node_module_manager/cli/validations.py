# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import re
from pathlib import Path
from urllib.parse import urlparse

import click

from node_module_tools.manifest import DEPENDENCY_SPEC_RE
from node_module_tools.semver import is_valid_range


def validate_existing_dir(ctx, param, value):  # noqa: ARG001
    if value is not None:
        if not value or not Path(value).is_dir():
            raise click.BadParameter(f'"{value}" directory does not exist.')
    return value


def validate_url(ctx, param, value):  # noqa: ARG001
    if value:
        result = urlparse(value)
        if result.scheme == 'file':
            return value

        if not result.scheme or not result.hostname:
            raise click.BadParameter('Invalid URL.')
    return value


def validate_dependency(ctx, param, value):  # noqa: ARG001
    match = re.match(DEPENDENCY_SPEC_RE, value.strip(), flags=re.IGNORECASE)
    if not match:
        raise click.BadParameter(
            f'Invalid dependency "{value}". Use "name" or "name@range", like "lodash@^4.17.0".'
        )

    _, version_range = match.groups()
    if version_range and not is_valid_range(version_range):
        raise click.BadParameter(f'Invalid version range "{version_range}".')

    return value


def combined_callback(*callbacks):
    def wrapper(ctx, param, value):
        for callback in callbacks:
            value = callback(ctx, param, value)
        return value

    return wrapper
