from linkregistry.dao.sql import ShortURLSQLDAO, UserSQLDAO, CategorySQLDAO
from linkregistry.dao.postgres.mixins import PostgresClientMixin


class ShortURLPostgresDAO(PostgresClientMixin, ShortURLSQLDAO):
    """PostgreSQL-backed short URL DAO."""


class UserPostgresDAO(PostgresClientMixin, UserSQLDAO):
    """PostgreSQL-backed user DAO."""


class CategoryPostgresDAO(PostgresClientMixin, CategorySQLDAO):
    """PostgreSQL-backed category DAO."""
