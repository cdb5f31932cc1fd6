# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import os
import typing as t

import click
from click.decorators import FC

from node_module_manager.cli.validations import (
    combined_callback,
    validate_existing_dir,
    validate_url,
)
from node_module_manager.core import ModuleManager


def get_project_dir_option() -> t.List[FC]:
    return [
        click.option(
            '--project-dir',
            'manager',
            default=os.getcwd(),
            help='Directory with the package.json of the project.',
            callback=combined_callback(
                validate_existing_dir,
                lambda ctx, param, value: ModuleManager(value),  # noqa: ARG005
            ),
        ),
    ]


def get_profile_option() -> t.List[FC]:
    return [
        click.option(
            '--profile',
            'profile_name',
            envvar='NMM_PROFILE',
            default='default',
            help='Specifies the profile of the config file to use for this command.',
        ),
    ]


def get_registry_url_option() -> t.List[FC]:
    return [
        click.option(
            '--registry-url',
            default=None,
            callback=validate_url,
            help='URL of the package registry. Overrides the one from the profile.',
        ),
    ]


def get_lock_only_option() -> t.List[FC]:
    return [
        click.option(
            '--lock-only',
            is_flag=True,
            default=False,
            help='Only update the lock file, do not create node_modules directory.',
        ),
    ]


def get_project_options() -> t.List[FC]:
    return get_project_dir_option() + get_profile_option() + get_registry_url_option()
