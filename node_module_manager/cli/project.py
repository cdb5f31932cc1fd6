# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import click

from node_module_manager.cli.validations import validate_dependency

from .constants import get_lock_only_option, get_project_dir_option, get_project_options
from .utils import add_options


def init_project_commands(cli):
    PROJECT_DIR_OPTION = get_project_dir_option()
    PROJECT_OPTIONS = get_project_options()
    LOCK_ONLY_OPTION = get_lock_only_option()

    @cli.command()
    @add_options(PROJECT_OPTIONS + LOCK_ONLY_OPTION)
    @click.option(
        '--no-integrity',
        is_flag=True,
        default=False,
        help='Do not download archives to calculate integrity of packages '
        'which have no integrity reported by the registry.',
    )
    def install(manager, profile_name, registry_url, lock_only, no_integrity):
        """
        Install dependencies from package.json into node_modules.

        The lock file is used when it matches the declared dependencies,
        otherwise dependencies are solved again and the lock file is updated.
        """
        manager.install(
            profile_name=profile_name,
            registry_url=registry_url,
            lock_only=lock_only,
            calculate_integrity=not no_integrity,
        )

    @cli.command()
    @add_options(PROJECT_OPTIONS + LOCK_ONLY_OPTION)
    @click.argument('dependency', required=True, callback=validate_dependency)
    def add(manager, profile_name, registry_url, lock_only, dependency):
        """
        Add a dependency to package.json and install dependencies.

        You can specify DEPENDENCY in the following format:

        name@range

        An example command:

        nmm add lodash@^4.17.0

        Without a range, the caret range of the latest version is used.
        """
        manager.add_dependency(
            dependency,
            profile_name=profile_name,
            registry_url=registry_url,
            lock_only=lock_only,
        )

    @cli.command()
    @add_options(PROJECT_DIR_OPTION)
    def tree(manager):
        """
        Print the layout of node_modules recorded in the lock file.
        """
        print(manager.tree())
