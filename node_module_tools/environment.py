# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
"""
This module contains utility functions for working with environment variables.
"""

import os
import typing as t
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_core.core_schema import ValidationInfo, ValidatorFunctionWrapHandler
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

KNOWN_CI_ENVIRONMENTS = {
    'GITHUB_ACTIONS': 'github-actions',
    'GITLAB_CI': 'gitlab-ci',
    'CIRCLECI': 'circle-ci',
    'TRAVIS': 'travis',
    'JENKINS_URL': 'jenkins',
    'BITBUCKET_COMMIT': 'bitbucket-pipelines',
    'CI': 'unknown',
}


def _env_to_bool(value: str) -> bool:
    """Returns True if environment variable is set to 1, t, y, yes, true, or False otherwise"""

    return value.lower() in {'1', 't', 'true', 'y', 'yes'}


def _env_to_bool_or_string(value: str) -> t.Union[bool, str]:
    """Returns
    - True if environment variable is set to 1, t, y, yes, true,
    - False if environment variable is set to 0, f, n, no, false
    - or the string value otherwise
    """
    if value.lower() in {'1', 't', 'true', 'y', 'yes'}:
        return True
    elif value.lower() in {'0', 'f', 'false', 'n', 'no'}:
        return False
    else:
        return value


def detect_ci() -> t.Optional[str]:
    """Returns the name of CI environment if running in a CI environment"""
    for env_var, name in KNOWN_CI_ENVIRONMENTS.items():
        if os.getenv(env_var):
            return name

    return None


class NodeModuleManagerSettings(BaseSettings):
    """
    Node Module Manager settings.

    All the settings are read from environment variables with the ``NMM_`` prefix.
    """

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_prefix='NMM_',
    )

    # LOGGING

    # by default log-level is hint(15)
    DEBUG_MODE: bool = Field(False, description='Enable debug mode.')  # log-level: debug(10)

    NO_HINTS: bool = Field(
        False, description='Disable hints in the output.'
    )  # log-level: notice/info(20)

    NO_COLORS: bool = Field(False, description='Disable colored output.')  # with colorama or not

    # GENERAL

    HOME_PATH: t.Optional[str] = Field(
        None,
        description="""
            | Directory with the config file.
            | **Default:** ~/.nmm
        """,
    )

    CACHE_PATH: t.Optional[str] = Field(
        None,
        description="""
            | Cache directory for downloaded package archives.
            | **Default:** Depends on OS
        """,
    )

    # NETWORK

    REGISTRY_URL: t.Optional[str] = Field(
        None,
        description="""
            | URL of the package registry.
            | **Default:** https://registry.npmjs.org/
        """,
    )

    API_TOKEN: t.Optional[str] = Field(None, description='Token to access the package registry.')

    API_TIMEOUT: t.Optional[float] = Field(
        None,
        description="""
            | Deadline for a single request to the package registry in seconds.
            | If not set, the default timeout of the registry client will be used.
        """,
    )

    VERIFY_SSL: t.Union[bool, str] = Field(
        True,
        description="""
            | Verify SSL certificates when making requests to the package registry.
            | Set 0 to disable or provide a CA bundle path.
        """,
    )

    PROFILE: t.Optional[str] = Field(
        None,
        description="""
            | Profile in the config file to use.
            | **Default:** default
        """,
    )

    @field_validator('*', mode='wrap')
    @classmethod
    def fallback_to_default(
        cls, v: t.Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> t.Any:
        field = cls.model_fields.get(info.field_name)

        try:
            if v is None:
                return field.default

            if field.annotation is bool and isinstance(v, str):
                return _env_to_bool(v)
            elif field.annotation is t.Union[bool, str] and isinstance(v, str):
                return _env_to_bool_or_string(v)
            else:
                return handler(v)
        except Exception:  # all exceptions will fall back to default
            return field.default

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: t.Type[BaseSettings],  # noqa: ARG003
        init_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> t.Tuple[PydanticBaseSettingsSource, ...]:
        # we only want to use the env_settings
        return (env_settings,)

    @classmethod
    @lru_cache(1)
    def known_env_vars(cls) -> t.List[str]:
        prefix = NodeModuleManagerSettings.model_config.get('env_prefix', '')
        return sorted(prefix + name for name in NodeModuleManagerSettings.model_fields)
