# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
from .manager import ManifestManager
from .models import DEPENDENCY_SPEC_RE, ProjectManifest, parse_dependency_spec

__all__ = [
    'DEPENDENCY_SPEC_RE',
    'ManifestManager',
    'ProjectManifest',
    'parse_dependency_spec',
]
