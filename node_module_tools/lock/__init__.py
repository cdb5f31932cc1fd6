# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
from .manager import LockManager
from .models import ROOT_PACKAGE_PATH, PackageLock, PackageLockEntry

__all__ = [
    'LockManager',
    'PackageLock',
    'PackageLockEntry',
    'ROOT_PACKAGE_PATH',
]
