# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import logging
import sys

from colorama import Fore

from node_module_tools import HINT_LEVEL, get_logger
from node_module_tools.environment import NodeModuleManagerSettings
from node_module_tools.errors import WarningAsExceptionError


class NodeModuleManagerStdoutFilter(logging.Filter):
    """
    In node module manager, we write debug, hint, info to stdout
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


class NodeModuleManagerStderrFilter(logging.Filter):
    """
    In node module manager, we write warning, error, critical to stderr
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.WARNING


class NodeModuleManagerWarningsAsErrorsFilter(logging.Filter):
    """
    Treat warnings as errors with exception when -W flag is passed.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno == logging.WARNING:
            raise WarningAsExceptionError(record.getMessage())

        return True


class NodeModuleManagerFormatter(logging.Formatter):
    """
    In node module manager, we have the following logging levels

    -  10 -> debug
    -  15 -> hint (custom level, default)
    -  20 -> info (notice)
    -  30 -> warning
    -  40 -> error
    -  50 -> critical
    """

    fmt: str = '%(message)s'

    PREFIX = {
        logging.DEBUG: 'DEBUG',
        HINT_LEVEL: 'HINT',
        logging.INFO: 'NOTICE',
        logging.WARNING: 'WARNING',
        logging.ERROR: 'ERROR',
        logging.CRITICAL: 'FATAL',
    }

    COLOR = {
        logging.DEBUG: Fore.LIGHTBLACK_EX,
        HINT_LEVEL: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED,
    }

    def __init__(self, colored: bool = True) -> None:
        self.colored = colored

        super().__init__(fmt=self.fmt)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        prefix = self.PREFIX.get(record.levelno, record.levelname)
        if self.colored and sys.stdout.isatty() and sys.stderr.isatty():
            return f'{self.COLOR.get(record.levelno, "")}{prefix}: {message}{Fore.RESET}'

        return f'{prefix}: {message}'


def setup_logging(warnings_as_errors: bool = False) -> None:
    """setup logger for the node module manager"""
    logger = get_logger()
    settings = NodeModuleManagerSettings()

    if settings.DEBUG_MODE:
        logger.setLevel(logging.DEBUG)
    elif settings.NO_HINTS:
        logger.setLevel(logging.INFO)
    else:
        logger.setLevel(HINT_LEVEL)

    # cleanup first
    logger.handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(NodeModuleManagerStdoutFilter())
    stdout_handler.setFormatter(NodeModuleManagerFormatter(colored=(not settings.NO_COLORS)))
    logger.addHandler(stdout_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.addFilter(NodeModuleManagerStderrFilter())
    stderr_handler.setFormatter(NodeModuleManagerFormatter(colored=(not settings.NO_COLORS)))
    logger.addHandler(stderr_handler)

    if warnings_as_errors:
        stderr_handler.addFilter(NodeModuleManagerWarningsAsErrorsFilter())

    logger.propagate = False  # ends here, don't propagate to root logger, we're client code
