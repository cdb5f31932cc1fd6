# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
DEFAULT_REGISTRY_URL = 'https://registry.npmjs.org/'

MANIFEST_FILENAME = 'package.json'
LOCK_FILENAME = 'package-lock.json'
NODE_MODULES_DIR = 'node_modules'

LOCKFILE_VERSION = 3

DEFAULT_PROJECT_VERSION = '1.0.0'
