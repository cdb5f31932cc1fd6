# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""Client of npm compatible package registries"""

import os
import shutil
import typing as t

from pydantic import ValidationError

from node_module_tools.constants import DEFAULT_REGISTRY_URL
from node_module_tools.messages import debug

from .api_models import PackageMetadata
from .base_client import create_session
from .client_errors import RegistryResponseError
from .request_processor import base_request, handle_response_errors, join_url, make_request

# abbreviated metadata, carries everything needed for the installation
INSTALL_ACCEPT_HEADER = (
    'application/vnd.npm.install-v1+json; q=1.0, application/json; q=0.8, */*'
)

DOWNLOAD_CHUNK_SIZE = 65536


def encode_package_name(name: str) -> str:
    """Scoped packages are requested as @scope%2fname"""
    return name.replace('/', '%2f')


def package_basename(name: str) -> str:
    return name.rsplit('/', 1)[-1]


class RegistryClient:
    def __init__(
        self,
        registry_url: t.Optional[str] = None,
        api_token: t.Optional[str] = None,
    ) -> None:
        self.registry_url = registry_url or DEFAULT_REGISTRY_URL
        self.api_token = api_token

    @property
    def session(self):
        return create_session(token=self.api_token, registry_url=self.registry_url)

    def get_package_metadata(self, name: str) -> PackageMetadata:
        """Document with all published versions of the package and their dependencies"""
        data = base_request(
            self.session,
            self.registry_url,
            [encode_package_name(name)],
            headers={'Accept': INSTALL_ACCEPT_HEADER},
        )

        try:
            metadata = PackageMetadata.fromdict(data)
        except ValidationError as e:
            raise RegistryResponseError(
                f'Invalid metadata of the package "{name}": {e}',
                endpoint=join_url(self.registry_url, encode_package_name(name)),
            )

        debug(f'Fetched metadata of "{name}", {len(metadata.versions)} versions')
        return metadata

    def tarball_url(self, name: str, version: str) -> str:
        """Conventional archive location, when the registry doesn't report one"""
        return join_url(
            self.registry_url, name, '-', f'{package_basename(name)}-{version}.tgz'
        )

    def download_archive(self, url: str, file_path: str) -> str:
        """Download archive following redirects. The file appears only when download is complete"""
        response = make_request(self.session, url, stream=True)
        with response:
            handle_response_errors(response, url)

            tmp_file_path = f'{file_path}.tmp'
            os.makedirs(os.path.dirname(file_path) or '.', exist_ok=True)
            with open(tmp_file_path, 'wb') as f:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)

        shutil.move(tmp_file_path, file_path)
        return file_path
