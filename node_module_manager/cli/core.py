# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import sys
import typing as t

import click

from node_module_tools import error, setup_logging
from node_module_tools.__version__ import __version__ as node_module_manager_version
from node_module_tools.errors import FatalError, WarningAsExceptionError

from .cache import init_cache
from .project import init_project_commands

DEFAULT_SETTINGS: t.Dict[str, t.Any] = {
    'help_option_names': ['-h', '--help'],
    'show_default': True,
}


def initialize_cli():
    """
    Initialize the CLI.
    """

    @click.group(context_settings=DEFAULT_SETTINGS)
    @click.option(
        '--warnings-as-errors',
        '-W',
        is_flag=True,
        default=False,
        help='Treat warnings as errors.',
    )
    def cli(warnings_as_errors):
        setup_logging(warnings_as_errors)

    @cli.command()
    def version():
        """
        Print the version of the Node Module Manager.
        """
        print(node_module_manager_version)

    init_project_commands(cli)
    cli.add_command(init_cache())

    return cli


def safe_cli():
    """
    CLI entry point with error handling.
    """
    try:
        cli = initialize_cli()
        cli()
    except WarningAsExceptionError as e:
        error(str(e))
        sys.exit(1)
    except FatalError as e:
        error(str(e))
        sys.exit(e.exit_code)
