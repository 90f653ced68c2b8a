"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env() correctly reads APP_ENV (lower-cased, defaulting to local).

2. Backend name parsing
   - Ensures names are case-insensitive and unknown names raise BadConfigurationError.

3. Environment-based configuration
   - Ensures DB_TYPE defaults to the memory backend.
   - Ensures per-backend defaults (ports, users, TLS) and overrides.
   - Confirms malformed integers / booleans raise BadConfigurationError.

4. AppConfig-based configuration
   - Ensures load_config() prefers AppConfig when its identifiers are set.
   - Ensures the active backend section is extracted.
   - Confirms malformed documents raise BadConfigurationError.
   - Confirms AppConfig client errors propagate.
   - Confirms missing identifiers raise MissingEnvironmentVariableError.
"""

import os
import json
from io import BytesIO
from unittest.mock import MagicMock

import pytest
import botocore

from linkregistry.utils import config
from linkregistry.exceptions import BadConfigurationError, MissingEnvironmentVariableError


ENV_NAMES = (
    'DB_TYPE',
    'DB_HOST',
    'DB_PORT',
    'DB_USER',
    'DB_PASSWORD',
    'DB_NAME',
    'DB_POOL_SIZE',
    'DB_TLS',
    'DB_CREATE_TABLES',
    'APPCONFIG_APP_ID',
    'APPCONFIG_ENV_ID',
    'APPCONFIG_PROFILE_ID',
)


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Start every test without any configuration environment variables."""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def appconfig_env(monkeypatch):
    monkeypatch.setenv('APPCONFIG_APP_ID', 'app123')
    monkeypatch.setenv('APPCONFIG_ENV_ID', 'env123')
    monkeypatch.setenv('APPCONFIG_PROFILE_ID', 'prof123')


@pytest.fixture
def appconfig_payload():
    """Provide a default AppConfig payload used by multiple tests."""
    # fmt: off
    return {
        'build': 42,
        'active_backend': 'postgres',
        'configs': {
            'memory': {},
            'postgres': {
                'host': 'monkey',
                'port': 6543,
                'password': 'secret'
            },
        },
    }
    # fmt: on


@pytest.fixture
def appconfig_client(monkeypatch):
    """Mock the AppConfig Data client created through boto3.client()."""
    client = MagicMock()
    client.start_configuration_session.return_value = {'InitialConfigurationToken': 'monkey_token'}
    monkeypatch.setattr(config.boto3, 'client', MagicMock(return_value=client))
    return client


def serve(client, payload):
    raw = payload if isinstance(payload, bytes) else json.dumps(payload).encode('utf-8')
    client.get_latest_configuration.return_value = {'Configuration': BytesIO(raw)}


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env(monkeypatch):
    """Ensure app_env() returns the lower-cased value of APP_ENV"""
    monkeypatch.setitem(os.environ, 'APP_ENV', 'TEST')
    assert config.app_env() == 'test'


def test_app_env_default(monkeypatch):
    monkeypatch.delitem(os.environ, 'APP_ENV', raising=False)
    assert config.app_env() == 'local'


# -------------------------------
# 2. Backend name parsing
# -------------------------------


@pytest.mark.parametrize('name, expected', [('memory', 'memory'), ('Postgres', 'postgres'), (' MYSQL ', 'mysql')])
def test_parse_backend(name, expected):
    assert config.parse_backend(name) == expected


@pytest.mark.parametrize('name', ['redis', '', None])
def test_parse_unknown_backend(name):
    with pytest.raises(BadConfigurationError):
        config.parse_backend(name)


# -------------------------------
# 3. Environment-based configuration
# -------------------------------


def test_load_config_defaults_to_memory():
    assert config.load_config() == {'memory': {}}


def test_load_postgres_config_defaults(monkeypatch):
    monkeypatch.setenv('DB_TYPE', 'postgres')

    assert config.load_config() == {
        'postgres': {
            'host': 'localhost',
            'port': 5432,
            'user': 'postgres',
            'password': None,
            'database': 'url_shortener',
            'pool_size': 10,
            'create_tables': False,
            'tls': True,
        }
    }


def test_load_mysql_config_overrides(monkeypatch):
    monkeypatch.setenv('DB_TYPE', 'mysql')
    monkeypatch.setenv('DB_HOST', 'db.test')
    monkeypatch.setenv('DB_PORT', '3307')
    monkeypatch.setenv('DB_USER', 'app')
    monkeypatch.setenv('DB_PASSWORD', 'secret')
    monkeypatch.setenv('DB_NAME', 'links')
    monkeypatch.setenv('DB_POOL_SIZE', '25')
    monkeypatch.setenv('DB_CREATE_TABLES', 'true')
    monkeypatch.setenv('DB_TLS', 'false')

    result = config.load_config()

    assert result == {
        'mysql': {
            'host': 'db.test',
            'port': 3307,
            'user': 'app',
            'password': 'secret',
            'database': 'links',
            'pool_size': 25,
            'create_tables': True,
        }
    }


def test_load_postgres_config_without_tls(monkeypatch):
    monkeypatch.setenv('DB_TYPE', 'postgres')
    monkeypatch.setenv('DB_TLS', '0')
    assert config.load_config()['postgres']['tls'] is False


@pytest.mark.parametrize('name, value', [('DB_PORT', 'abc'), ('DB_POOL_SIZE', '0'), ('DB_TLS', 'maybe')])
def test_load_config_with_malformed_values(monkeypatch, name, value):
    monkeypatch.setenv('DB_TYPE', 'postgres')
    monkeypatch.setenv(name, value)
    with pytest.raises(BadConfigurationError):
        config.load_config()


def test_load_config_with_unknown_backend(monkeypatch):
    monkeypatch.setenv('DB_TYPE', 'redis')
    with pytest.raises(BadConfigurationError):
        config.load_config()


# -------------------------------
# 4. AppConfig-based configuration
# -------------------------------


@pytest.mark.usefixtures('appconfig_env')
def test_load_config_from_appconfig(monkeypatch, appconfig_client, appconfig_payload):
    """Ensure load_config() returns the active backend section from AppConfig."""
    monkeypatch.setenv('DB_TYPE', 'mysql')
    serve(appconfig_client, appconfig_payload)

    result = config.load_config()

    assert result == {'postgres': {'host': 'monkey', 'port': 6543, 'password': 'secret'}}
    config.boto3.client.assert_called_once_with('appconfigdata')
    appconfig_client.start_configuration_session.assert_called_once_with(
        ApplicationIdentifier='app123',
        EnvironmentIdentifier='env123',
        ConfigurationProfileIdentifier='prof123',
    )
    appconfig_client.get_latest_configuration.assert_called_once_with(ConfigurationToken='monkey_token')


@pytest.mark.usefixtures('appconfig_env')
@pytest.mark.parametrize(
    'payload',
    [
        b'not json',
        {'configs': {'memory': {}}},
        {'active_backend': 'mysql', 'configs': {'memory': {}}},
        {'active_backend': 'redis', 'configs': {'redis': {}}},
        {'active_backend': 'memory', 'configs': {'memory': 'nope'}},
    ],
)
def test_load_config_with_malformed_appconfig(appconfig_client, payload):
    serve(appconfig_client, payload)
    with pytest.raises(BadConfigurationError):
        config.load_config()


@pytest.mark.usefixtures('appconfig_env')
def test_appconfig_client_error_propagates(appconfig_client):
    appconfig_client.start_configuration_session.side_effect = botocore.exceptions.ClientError(
        {'Error': {'Code': 'ResourceNotFoundException'}}, 'StartConfigurationSession'
    )
    with pytest.raises(botocore.exceptions.ClientError):
        config.load_config()


def test_load_appconfig_without_identifiers(monkeypatch, appconfig_client):
    """Ensure a partial AppConfig setup falls back to env vars, but direct loading fails."""
    monkeypatch.setenv('APPCONFIG_APP_ID', 'app123')

    assert config.load_config() == {'memory': {}}
    with pytest.raises(MissingEnvironmentVariableError):
        config.load_appconfig()
    appconfig_client.start_configuration_session.assert_not_called()
