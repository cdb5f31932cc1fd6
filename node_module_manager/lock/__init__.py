# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
from .codec import IntegrityProvider, decode_lock, encode_lock

__all__ = [
    'IntegrityProvider',
    'decode_lock',
    'encode_lock',
]
