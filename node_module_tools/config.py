# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import typing as t
from pathlib import Path

from pydantic import Field, ValidationError, field_validator, model_validator
from ruamel.yaml import YAML, CommentedMap, YAMLError

from node_module_tools.constants import DEFAULT_REGISTRY_URL
from node_module_tools.errors import FatalError, NoSuchProfile
from node_module_tools.utils import BaseModel, polish_validation_error

from .environment import NodeModuleManagerSettings


class ProfileItem(BaseModel):
    registry_url: t.Optional[str] = Field(None, json_schema_extra={'use_env': True})
    api_token: t.Optional[str] = Field(None, json_schema_extra={'use_env': True})

    @model_validator(mode='before')
    @classmethod
    def validate_profile_item(cls, data: t.Any) -> t.Any:
        # Trying to read values from environment variables
        if isinstance(data, dict):
            data = dict(data)
            for field, field_info in cls.model_fields.items():
                field_extra_params = field_info.json_schema_extra or {}

                if not isinstance(field_extra_params, dict):
                    continue

                if not field_extra_params.get('use_env'):
                    continue

                env_value = getattr(NodeModuleManagerSettings(), field.upper())
                if env_value:
                    data[field] = env_value

        return data

    @field_validator('registry_url')
    @classmethod
    def validate_registry_url(cls, v):
        if v == 'default' or not v:
            return DEFAULT_REGISTRY_URL

        if not v.startswith(('http://', 'https://', 'file://')):
            raise ValueError(f'Registry URL must be http(s) or file URL, got "{v}"')

        return v

    def get_registry_url(self) -> str:
        return self.registry_url or DEFAULT_REGISTRY_URL


class Config(BaseModel):
    profiles: t.Dict[str, t.Optional[ProfileItem]] = {}


def config_dir() -> Path:
    return Path(NodeModuleManagerSettings().HOME_PATH or Path.home() / '.nmm')


def config_file() -> Path:
    return config_dir() / 'config.yml'


class ConfigError(FatalError):
    pass


class ConfigManager:
    def __init__(self, path=None):
        self.config_path = Path(path) if path else config_file()
        self._yaml = YAML()

    def load(self) -> Config:
        """Loads config from disk"""
        if not self.config_path.is_file():
            return Config()

        with open(self.config_path, encoding='utf-8') as f:
            try:
                raw_data = self._yaml.load(f) or CommentedMap()
            except YAMLError:
                raise ConfigError(
                    f'Invalid config file: {self.config_path}\n'
                    f'Please check if the file is in valid YAML format'
                )

        try:
            return self.validate(raw_data)
        except ConfigError as e:
            raise ConfigError(f'Invalid config file: {self.config_path}\n{e}')

    @classmethod
    def validate(cls, data: t.Any) -> Config:
        try:
            return Config.model_validate(data)
        except ValidationError as e:
            raise ConfigError(polish_validation_error(e))


def get_profile(
    profile_name: t.Optional[str] = None,
    config_path: t.Optional[str] = None,
) -> ProfileItem:
    config_manager = ConfigManager(path=config_path)
    config = config_manager.load()
    _profile_name = NodeModuleManagerSettings().PROFILE or profile_name or 'default'

    if _profile_name == 'default' and config.profiles.get(_profile_name) is None:
        return ProfileItem()  # empty profile, environment only

    if _profile_name in config.profiles:
        return config.profiles[_profile_name] or ProfileItem()

    raise NoSuchProfile(
        f'Profile "{_profile_name}" not found in config file: {config_manager.config_path}'
    )
