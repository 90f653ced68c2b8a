"""Utility functions for application configuration management.

The storage backend is configured from one of two sources:

1. **AWS AppConfig**, when `APPCONFIG_APP_ID`, `APPCONFIG_ENV_ID` and
   `APPCONFIG_PROFILE_ID` are all set. The configuration profile holds a JSON
   document of this shape:

    {
        "active_backend": "postgres",
        "configs": {
            "memory": {},
            "postgres": {"host": "db.internal", "port": 5432, "user": "app", ...},
            "mysql": {"host": "db.internal", "port": 3306, "user": "app", ...}
        }
    }

2. **Environment variables** otherwise: `DB_TYPE`, `DB_HOST`, `DB_PORT`,
   `DB_USER`, `DB_PASSWORD`, `DB_NAME`, `DB_POOL_SIZE`, `DB_TLS` and
   `DB_CREATE_TABLES`.

Both sources yield the same structure, `{<active backend>: <its parameters>}`,
which is what `linkregistry.dao.factory.create_backend()` consumes.

Typical usage at process startup:
    >>> from linkregistry.utils.config import load_config
    >>> config = load_config()
    >>> config
    {'postgres': {'host': 'db.internal', 'port': 5432, ...}}
"""

import os
import json
import logging

import boto3

from linkregistry.types import BackendConfiguration, AppConfig
from linkregistry.constants import ENV, Backend
from linkregistry.utils.helpers import require_environment
from linkregistry.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)

TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
FALSY = frozenset({'0', 'false', 'no', 'off'})

# fmt: off
DEFAULT_PORTS = {Backend.POSTGRES: 5432,       Backend.MYSQL: 3306}
DEFAULT_USERS = {Backend.POSTGRES: 'postgres', Backend.MYSQL: 'root'}
# fmt: on
DEFAULT_DATABASE = 'url_shortener'
DEFAULT_POOL_SIZE = 10


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def parse_backend(name: str | None) -> Backend:
    """Resolve a backend name (case-insensitive) to a Backend member.

    Raises:
        BadConfigurationError: If the name is not one of memory, postgres, mysql.
    """
    try:
        return Backend((name or '').strip().lower())
    except ValueError as e:
        choices = ', '.join(backend.value for backend in Backend)
        raise BadConfigurationError(f"Unknown storage backend '{name}' (expected one of: {choices}).") from e


def _parse_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    if value.strip().lower() in TRUTHY:
        return True
    if value.strip().lower() in FALSY:
        return False
    raise BadConfigurationError(f"Environment variable '{name}' must be a boolean (given value: {value!r}).")


def _parse_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except ValueError as e:
        raise BadConfigurationError(f"Environment variable '{name}' must be an integer (given value: {value!r}).") from e
    if parsed <= 0:
        raise BadConfigurationError(f"Environment variable '{name}' must be positive (given value: {value!r}).")
    return parsed


def load_environment_config() -> BackendConfiguration:
    """Assemble the backend configuration from DB_* environment variables.

    `DB_TYPE` defaults to 'memory', which needs no further parameters.
    """
    backend = parse_backend(os.environ.get(ENV.Database.TYPE, Backend.MEMORY))
    if backend == Backend.MEMORY:
        logger.debug('Loaded configuration from environment.', extra={'backend': backend.value})
        return {backend.value: {}}

    params = {
        'host': os.environ.get(ENV.Database.HOST, 'localhost'),
        'port': _parse_int(ENV.Database.PORT, DEFAULT_PORTS[backend]),
        'user': os.environ.get(ENV.Database.USER, DEFAULT_USERS[backend]),
        'password': os.environ.get(ENV.Database.PASSWORD),
        'database': os.environ.get(ENV.Database.NAME, DEFAULT_DATABASE),
        'pool_size': _parse_int(ENV.Database.POOL_SIZE, DEFAULT_POOL_SIZE),
        'create_tables': _parse_bool(ENV.Database.CREATE_TABLES, False),
    }
    if backend == Backend.POSTGRES:
        params['tls'] = _parse_bool(ENV.Database.TLS, True)

    logger.debug('Loaded configuration from environment.', extra={'backend': backend.value, 'host': params['host']})
    return {backend.value: params}


def _active_section(document: AppConfig) -> BackendConfiguration:
    try:
        backend = parse_backend(document['active_backend'])
        section = document['configs'][backend.value]
    except (KeyError, TypeError) as e:
        raise BadConfigurationError('AppConfig document must define "active_backend" and its "configs" section.') from e

    if not isinstance(section, dict):
        raise BadConfigurationError(f'AppConfig section for backend "{backend.value}" must be a JSON object.')
    return {backend.value: section}


@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_appconfig() -> BackendConfiguration:
    """Load the backend configuration from AWS AppConfig.

    Fetches the AppConfig JSON once and returns the section of the active backend.

    Raises:
        MissingEnvironmentVariableError:
            If any of the APPCONFIG_* identifiers is not set.
        BadConfigurationError:
            If the document is not valid JSON or lacks the active backend section.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'appEnv': app_env()})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    try:
        document = json.loads(content.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BadConfigurationError('AppConfig document is not valid JSON.') from e

    data = _active_section(document)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'backend': next(iter(data)), 'build': document.get('build')})
    return data


def load_config() -> BackendConfiguration:
    """Load the storage backend configuration.

    AWS AppConfig wins when all of its identifiers are present in the
    environment; DB_* environment variables are used otherwise.
    """
    if all(os.environ.get(name) for name in ENV.AppConfig):
        return load_appconfig()
    return load_environment_config()
