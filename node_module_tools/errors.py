# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0


import typing as t


class FatalError(RuntimeError):
    """Generic unrecoverable runtime error"""

    exit_code = 2

    def __init__(self, *args: t.Any, **kwargs: t.Any) -> None:
        super().__init__(*args)
        exit_code = kwargs.pop('exit_code', None)
        if exit_code:
            self.exit_code = exit_code


class InternalError(RuntimeError):
    """Internal Error, should report to us"""

    def __init__(self, extra_msg: t.Optional[str] = None):
        err = (
            'This is an internal error. Please report it '
            'with your operating system, node-module-manager version, '
            'and the traceback log. Thanks for reporting! '
        )

        if extra_msg:
            err = extra_msg + '\n' + err

        super().__init__(err)


class ResolutionError(FatalError):
    """Dependency resolution was aborted, nothing was installed"""


class UnresolvableRangeError(ResolutionError):
    def __init__(self, name: str, version_range: str, available: t.Optional[t.List[str]] = None):
        message = f'No version of "{name}" satisfies the range "{version_range}"'
        if available:
            message += '\nAvailable versions: {}'.format(', '.join(available))

        super().__init__(message)
        self.name = name
        self.range = version_range


class MetadataFetchError(ResolutionError):
    def __init__(self, name: str, reason: t.Any = None):
        message = f'Cannot fetch metadata of the package "{name}" from the registry'
        if reason:
            message += f': {reason}'

        super().__init__(message)
        self.name = name


class NoSatisfyingVersionError(ResolutionError):
    def __init__(self, name: str):
        super().__init__(f'Package "{name}" has no published versions')
        self.name = name


class ProcessingError(FatalError):
    pass


class FetchingError(ProcessingError):
    pass


class ManifestError(ProcessingError):
    pass


class LockError(ProcessingError):
    pass


class InvalidLockFileError(LockError):
    """Lock file exists but cannot be used. Recovered by solving dependencies again"""


class WarningAsExceptionError(FatalError):
    pass


class NoSuchProfile(FatalError):
    pass
