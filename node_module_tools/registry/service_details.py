# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import typing as t

from node_module_tools.config import get_profile
from node_module_tools.messages import debug

from .api_client import RegistryClient


def get_registry_client(
    profile_name: t.Optional[str] = None,
    registry_url: t.Optional[str] = None,
    config_path: t.Optional[str] = None,
) -> RegistryClient:
    """Registry client configured from the profile, explicit registry URL has a priority"""
    profile = get_profile(profile_name, config_path=config_path)
    url = registry_url or profile.get_registry_url()
    debug(f'Using package registry {url}')

    return RegistryClient(registry_url=url, api_token=profile.api_token)
