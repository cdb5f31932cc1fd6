# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import typing as t
from http import HTTPStatus

import requests
from requests import Response

from node_module_tools import NodeModuleManagerSettings, debug

from .client_errors import (
    APIClientError,
    NetworkConnectionError,
    PackageNotFound,
    RegistryResponseError,
)

DEFAULT_REQUEST_TIMEOUT = (
    10.05,  # Connect timeout
    60.1,  # Read timeout
)


def join_url(*args) -> str:
    """
    Joins given arguments into an url
    """
    parts = [part[:-1] if part and part[-1] == '/' else part for part in args]
    return '/'.join(parts)


def request_timeout() -> t.Union[float, t.Tuple[float, float]]:
    return NodeModuleManagerSettings().API_TIMEOUT or DEFAULT_REQUEST_TIMEOUT


def make_request(
    session: requests.Session,
    endpoint: str,
    headers: t.Optional[t.Dict] = None,
    timeout: t.Optional[t.Union[float, t.Tuple[float, float]]] = None,
    method: str = 'GET',
    stream: bool = False,
) -> Response:
    try:
        debug(f'HTTP request: {method.upper()} {endpoint}')
        response = session.request(
            method,
            endpoint,
            headers=headers,
            timeout=timeout or request_timeout(),
            allow_redirects=True,
            stream=stream,
            verify=NodeModuleManagerSettings().VERIFY_SSL,
        )
    except requests.exceptions.Timeout as e:
        raise NetworkConnectionError(f'HTTP request timed out: {e}', endpoint=endpoint)
    except requests.exceptions.ConnectionError as e:
        raise NetworkConnectionError(str(e), endpoint=endpoint)
    except requests.exceptions.RequestException as e:
        raise APIClientError(f'HTTP request error {e}', endpoint=endpoint)

    return response


def handle_response_errors(response: Response, endpoint: str) -> None:
    if response.status_code == HTTPStatus.NOT_FOUND:
        raise PackageNotFound(
            'Not found in the registry', endpoint=endpoint, status_code=response.status_code
        )

    if response.status_code >= HTTPStatus.BAD_REQUEST:
        raise APIClientError(
            'Registry request failed', endpoint=endpoint, status_code=response.status_code
        )


def base_request(
    session: requests.Session,
    url: str,
    path: t.List[str],
    headers: t.Optional[t.Dict] = None,
    method: str = 'GET',
) -> t.Dict[str, t.Any]:
    endpoint = join_url(url, *path)
    response = make_request(session, endpoint, headers=headers, method=method)
    handle_response_errors(response, endpoint)

    try:
        data = response.json()
    except ValueError:
        raise RegistryResponseError(
            'Registry returned invalid JSON', endpoint=endpoint, status_code=response.status_code
        )

    if not isinstance(data, dict):
        raise RegistryResponseError(
            'Registry returned unexpected document', endpoint=endpoint, status_code=response.status_code
        )

    return data
