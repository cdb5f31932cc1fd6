# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import pytest

from node_module_tools.config import (
    ConfigError,
    ConfigManager,
    ProfileItem,
    config_file,
    get_profile,
)
from node_module_tools.constants import DEFAULT_REGISTRY_URL
from node_module_tools.environment import NodeModuleManagerSettings
from node_module_tools.errors import NoSuchProfile
from node_module_tools.registry.service_details import get_registry_client

CONFIG = """
profiles:
  default:
    registry_url: https://registry.example.com/
  in_office:
    registry_url: http://npm.office.local:4873/
    api_token: office-token
  empty:
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / 'nmm_home' / 'config.yml'
    path.parent.mkdir(parents=True)
    path.write_text(CONFIG)
    return path


def test_config_validation():
    ConfigManager.validate({})

    assert ConfigManager.validate({
        'profiles': {
            'default': {'registry_url': 'default'},
            'local': {'registry_url': 'file:///srv/registry/'},
        }
    })

    with pytest.raises(ConfigError):
        ConfigManager.validate('asdf')

    with pytest.raises(ConfigError):
        ConfigManager.validate({
            'profiles': {'in_office': {'registry_url': 'pptp://npm.office.local:4873/'}}
        })

    with pytest.raises(ConfigError):
        ConfigManager.validate({'profiles': {'in_office': {'unknown_field': 'asdf'}}})


def test_config_file_location(config_path):
    assert config_file() == config_path


def test_invalid_yaml(tmp_path):
    path = tmp_path / 'config.yml'
    path.write_text('profiles: [')

    with pytest.raises(ConfigError, match='valid YAML'):
        ConfigManager(path=str(path)).load()


def test_missing_config_file(tmp_path):
    assert ConfigManager(path=str(tmp_path / 'missing.yml')).load().profiles == {}


class TestProfiles:
    def test_default_profile(self, config_path):  # noqa: ARG002
        profile = get_profile()

        assert profile.get_registry_url() == 'https://registry.example.com/'
        assert profile.api_token is None

    def test_named_profile(self, config_path):  # noqa: ARG002
        profile = get_profile('in_office')

        assert profile.registry_url == 'http://npm.office.local:4873/'
        assert profile.api_token == 'office-token'

    def test_empty_profile(self, config_path):  # noqa: ARG002
        assert get_profile('empty').get_registry_url() == DEFAULT_REGISTRY_URL

    def test_no_config_file(self):
        assert get_profile().get_registry_url() == DEFAULT_REGISTRY_URL

    def test_missing_profile(self, config_path):  # noqa: ARG002
        with pytest.raises(NoSuchProfile, match='Profile "remote" not found'):
            get_profile('remote')

    def test_profile_from_environment(self, monkeypatch, config_path):  # noqa: ARG002
        monkeypatch.setenv('NMM_PROFILE', 'in_office')

        assert get_profile().api_token == 'office-token'

    def test_environment_overrides_profile(self, monkeypatch, config_path):  # noqa: ARG002
        monkeypatch.setenv('NMM_REGISTRY_URL', 'https://env.example.com/')
        monkeypatch.setenv('NMM_API_TOKEN', 'env-token')

        profile = get_profile('in_office')

        assert profile.registry_url == 'https://env.example.com/'
        assert profile.api_token == 'env-token'

    def test_profile_item_defaults(self):
        assert ProfileItem(registry_url='default').registry_url == DEFAULT_REGISTRY_URL


class TestRegistryClient:
    def test_client_from_profile(self, config_path):  # noqa: ARG002
        client = get_registry_client('in_office')

        assert client.registry_url == 'http://npm.office.local:4873/'
        assert client.api_token == 'office-token'

    def test_explicit_registry_url(self, config_path):  # noqa: ARG002
        client = get_registry_client('in_office', registry_url='http://localhost:4873/')

        assert client.registry_url == 'http://localhost:4873/'
        assert client.api_token == 'office-token'


class TestSettings:
    def test_invalid_values_fall_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv('NMM_API_TIMEOUT', 'not a number')
        monkeypatch.setenv('NMM_DEBUG_MODE', 'yes')
        monkeypatch.setenv('NMM_VERIFY_SSL', '0')

        settings = NodeModuleManagerSettings()

        assert settings.API_TIMEOUT is None
        assert settings.DEBUG_MODE is True
        assert settings.VERIFY_SSL is False

    def test_ca_bundle_path(self, monkeypatch):
        monkeypatch.setenv('NMM_VERIFY_SSL', '/etc/ssl/bundle.pem')

        assert NodeModuleManagerSettings().VERIFY_SSL == '/etc/ssl/bundle.pem'

    def test_known_env_vars(self):
        known = NodeModuleManagerSettings.known_env_vars()

        assert 'NMM_CACHE_PATH' in known
        assert 'NMM_REGISTRY_URL' in known
        assert all(name.startswith('NMM_') for name in known)
