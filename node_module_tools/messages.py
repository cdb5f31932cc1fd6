# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Messages shown to the nmm user, all go through the node_module_tools logger"""

from node_module_tools import HINT_LEVEL, get_logger


def debug(message: str, *args, **kwargs) -> None:
    """Log in level 10 (DEBUG), shown with NMM_DEBUG_MODE"""
    get_logger().debug(message, *args, **kwargs)


def hint(message: str, *args, **kwargs) -> None:
    """Log in level 15 (HINT), muted with NMM_NO_HINTS"""
    get_logger().log(HINT_LEVEL, message, *args, **kwargs)


def notice(message: str, *args, **kwargs) -> None:
    """Log in level 20 (INFO)"""
    get_logger().info(message, *args, **kwargs)


def warn(message: str, *args, **kwargs) -> None:
    """Log in level 30 (WARNING), fatal when warnings are errors (nmm -W)"""
    get_logger().warning(message, *args, **kwargs)


def error(message: str, *args, **kwargs) -> None:
    """Log in level 40 (ERROR)"""
    get_logger().error(message, *args, **kwargs)
