# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import platform
import typing as t
from functools import lru_cache
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter
from requests.auth import AuthBase
from requests_file import FileAdapter

from node_module_tools.__version__ import __version__
from node_module_tools.environment import detect_ci

MAX_RETRIES = 3


@lru_cache(maxsize=None)
def create_session(
    token: t.Optional[str] = None,
    registry_url: t.Optional[str] = None,
) -> requests.Session:
    api_adapter = HTTPAdapter(max_retries=MAX_RETRIES)

    session = requests.Session()
    session.headers['User-Agent'] = user_agent()
    session.auth = TokenAuth(token, registry_url)

    session.mount('http://', api_adapter)
    session.mount('https://', api_adapter)
    session.mount('file://', FileAdapter())

    return session


def user_agent() -> str:
    """
    Returns user agent string, like npm does:
    nmm/0.1.0 node-module-manager (Linux/6.1.0 x86_64; python/3.12.1; ci/github_actions)
    """

    environment_info = [
        f'{platform.system()}/{platform.release()} {platform.machine()}',
        f'python/{platform.python_version()}',
    ]

    ci_name = detect_ci()
    if ci_name:
        environment_info.append(f'ci/{ci_name}')

    user_agent = 'nmm/{version} node-module-manager ({env})'.format(
        version=__version__,
        env='; '.join(environment_info),
    )

    return user_agent


class TokenAuth(AuthBase):
    """
    Bearer token of the registry.
    Tarballs may be served by other hosts, those requests go without the token.
    """

    def __init__(self, token: t.Optional[str], registry_url: t.Optional[str] = None) -> None:
        self.token = token
        self.registry_host = urlparse(registry_url).netloc if registry_url else None

    def __call__(self, request):
        if not self.token:
            return request

        if self.registry_host is None or urlparse(request.url).netloc == self.registry_host:
            request.headers['Authorization'] = f'Bearer {self.token}'

        return request
