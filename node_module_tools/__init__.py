# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import logging as lib_logging

LOGGING_NAMESPACE = __package__
HINT_LEVEL = 15


def get_logger() -> lib_logging.Logger:
    """
    Get logger for the node module manager.

    Use this instead of `logging.getLogger(__package__)` to get the universal logger for both
    node_module_manager and node_module_tools
    """
    return lib_logging.getLogger(LOGGING_NAMESPACE)


from node_module_tools.environment import NodeModuleManagerSettings  # noqa: E402
from node_module_tools.logging import setup_logging  # noqa: E402
from node_module_tools.messages import (  # noqa: E402
    debug,
    error,
    hint,
    notice,
    warn,
)

__all__ = [
    'NodeModuleManagerSettings',
    'debug',
    'error',
    'get_logger',
    'hint',
    'notice',
    'setup_logging',
    'warn',
]
