"""Backend selector: build the storage backend chosen by configuration.

This is the only module that knows about concrete backend classes. Everything
else talks to the DAO contracts in `linkregistry.dao.base`.

Example:
    >>> from linkregistry.utils import load_config
    >>> from linkregistry.dao.factory import create_backend
    >>> backend = create_backend(load_config())
    >>> backend.name
    'postgres'
    >>> backend.close()
"""

import logging
from dataclasses import dataclass, field
from collections.abc import Callable

from sqlalchemy.engine import Engine

from linkregistry.types import BackendConfiguration
from linkregistry.constants import Backend
from linkregistry.dao.base import ShortURLBaseDAO, UserBaseDAO, CategoryBaseDAO
from linkregistry.dao.memory import MemoryDataStore, ShortURLMemoryDAO, UserMemoryDAO, CategoryMemoryDAO
from linkregistry.dao.postgres import ShortURLPostgresDAO, UserPostgresDAO, CategoryPostgresDAO
from linkregistry.dao.mysql import ShortURLMySQLDAO, UserMySQLDAO, CategoryMySQLDAO
from linkregistry.exceptions import BadConfigurationError
from linkregistry.utils.config import parse_backend


logger = logging.getLogger(__name__)


@dataclass
class StorageBackend:
    """The live DAOs of one backend, shared by every registry call.

    Attributes:
        name (str):
            Backend name ('memory', 'postgres' or 'mysql').
        short_urls (ShortURLBaseDAO):
            Short URL DAO.
        users (UserBaseDAO):
            User account DAO.
        categories (CategoryBaseDAO):
            Category DAO.
    """

    name: str
    short_urls: ShortURLBaseDAO
    users: UserBaseDAO
    categories: CategoryBaseDAO
    _close: Callable[[], None] = field(default=lambda: None, repr=False)

    def close(self) -> None:
        """Release pooled connections (no-op for the memory backend)."""
        self._close()


def _memory_backend() -> StorageBackend:
    store = MemoryDataStore()
    return StorageBackend(
        name=Backend.MEMORY.value,
        short_urls=ShortURLMemoryDAO(store=store),
        users=UserMemoryDAO(store=store),
        categories=CategoryMemoryDAO(store=store),
    )


def _sql_backend(backend: Backend, params: dict, daos: tuple[type, type, type]) -> StorageBackend:
    params = dict(params)
    create_tables = bool(params.pop('create_tables', False))
    prefix = backend.value

    short_url_cls, user_cls, category_cls = daos
    try:
        short_urls = short_url_cls(create_tables=create_tables, **{f'{prefix}_{k}': v for k, v in params.items()})
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f'Invalid {prefix} configuration parameters: {sorted(params)}.') from e

    # The remaining DAOs share the first DAO's engine (one pool per process)
    engine: Engine = short_urls.engine
    shared = {f'{prefix}_engine': engine}

    return StorageBackend(
        name=prefix,
        short_urls=short_urls,
        users=user_cls(**shared),
        categories=category_cls(**shared),
        _close=engine.dispose,
    )


def create_backend(config: BackendConfiguration) -> StorageBackend:
    """Build the storage backend described by `config`

    Args:
        config (dict):
            `{<backend name>: <parameters>}` as returned by `load_config()`.
            Parameters are the unprefixed client mixin arguments, e.g.
            `{'postgres': {'host': 'db', 'port': 5432, 'password': '...'}}`.

    Returns:
        StorageBackend: URL, user and category DAOs over one store or engine.

    Raises:
        BadConfigurationError:
            If the configuration does not name exactly one known backend
            or carries unknown parameters.
        DataStoreError:
            If a relational backend fails its connectivity healthcheck.
    """
    if not isinstance(config, dict) or len(config) != 1:
        raise BadConfigurationError('Backend configuration must contain exactly one backend section.')

    [(name, params)] = config.items()
    backend = parse_backend(name)
    params = params or {}

    match backend:
        case Backend.MEMORY:
            storage = _memory_backend()
        case Backend.POSTGRES:
            storage = _sql_backend(backend, params, (ShortURLPostgresDAO, UserPostgresDAO, CategoryPostgresDAO))
        case Backend.MYSQL:
            storage = _sql_backend(backend, params, (ShortURLMySQLDAO, UserMySQLDAO, CategoryMySQLDAO))

    logger.info('Storage backend initialized.', extra={'backend': storage.name})
    return storage
