from linkregistry.dao.postgres.mixins import PostgresClientMixin
from linkregistry.dao.postgres.postgres_daos import ShortURLPostgresDAO, UserPostgresDAO, CategoryPostgresDAO


__all__ = [
    'PostgresClientMixin',
    'ShortURLPostgresDAO',
    'UserPostgresDAO',
    'CategoryPostgresDAO',
]
