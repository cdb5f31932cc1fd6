# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
BLOCK_SIZE = 65536
INTEGRITY_ALGORITHM = 'sha512'
