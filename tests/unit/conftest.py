"""Shared fixtures for the unit test suite.

Model builders, plus an in-memory SQLite engine and SQLite flavours of the
SQL DAOs. The SQL DAOs only need an engine and an insert-or-ignore statement
from their client mixin, so SQLite (with foreign keys enabled, so cascades
behave like PostgreSQL / MySQL) stands in for a database server.
"""

import uuid
from datetime import datetime, timedelta, UTC

import pytest
from sqlalchemy import Table, create_engine, event
from sqlalchemy.dialects import sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql.dml import Insert

from linkregistry.models import ShortURLModel, UserModel, CategoryModel
from linkregistry.dao.sql import SQLClientMixin, ShortURLSQLDAO, UserSQLDAO, CategorySQLDAO
from linkregistry.dao.factory import StorageBackend


BASE_TIME = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


class SQLiteClientMixin(SQLClientMixin):
    def __init__(self, sqlite_engine: Engine, create_tables: bool = False):
        self._init_engine(sqlite_engine, create_tables=create_tables)

    def _insert_ignore(self, table: Table) -> Insert:
        return sqlite.insert(table).on_conflict_do_nothing()


class ShortURLSQLiteDAO(SQLiteClientMixin, ShortURLSQLDAO):
    pass


class UserSQLiteDAO(SQLiteClientMixin, UserSQLDAO):
    pass


class CategorySQLiteDAO(SQLiteClientMixin, CategorySQLDAO):
    pass


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


@pytest.fixture
def engine():
    """Provide a fresh in-memory SQLite engine shared by all connections."""
    _engine = create_engine('sqlite://', poolclass=StaticPool, connect_args={'check_same_thread': False})
    event.listen(_engine, 'connect', _enable_foreign_keys)
    yield _engine
    _engine.dispose()


@pytest.fixture
def sqlite_backend(engine):
    """Bundle SQLite DAOs sharing one engine (schema created) into a StorageBackend."""
    # fmt: off
    return StorageBackend(name='sqlite',
                          short_urls=ShortURLSQLiteDAO(sqlite_engine=engine, create_tables=True),
                          users=UserSQLiteDAO(sqlite_engine=engine),
                          categories=CategorySQLiteDAO(sqlite_engine=engine))
    # fmt: on


@pytest.fixture
def make_user():
    """Build UserModel instances with sensible defaults."""

    def _make_user(email: str = 'alice@example.com', user_id: str | None = None, **overrides) -> UserModel:
        fields = {
            'id': user_id or str(uuid.uuid4()),
            'email': email,
            'password_hash': 'hashed:secret123',
            'created_at': BASE_TIME,
            'updated_at': BASE_TIME,
        }
        fields.update(overrides)
        return UserModel(**fields)

    return _make_user


@pytest.fixture
def make_short_url():
    """Build ShortURLModel instances; `minutes` shifts the creation time."""

    def _make_short_url(shortcode: str = 'abc123', user_id: str | None = None, minutes: int = 0, **overrides) -> ShortURLModel:
        created_at = BASE_TIME + timedelta(minutes=minutes)
        fields = {
            'target': f'https://example.com/{shortcode}',
            'shortcode': shortcode,
            'id': str(uuid.uuid4()),
            'created_at': created_at,
            'updated_at': created_at,
            'access_count': 0,
            'user_id': user_id,
        }
        fields.update(overrides)
        return ShortURLModel(**fields)

    return _make_short_url


@pytest.fixture
def make_category():
    """Build CategoryModel instances owned by `user_id`."""

    def _make_category(name: str, user_id: str, **overrides) -> CategoryModel:
        fields = {
            'id': str(uuid.uuid4()),
            'name': name,
            'user_id': user_id,
            'created_at': BASE_TIME,
            'updated_at': BASE_TIME,
        }
        fields.update(overrides)
        return CategoryModel(**fields)

    return _make_category
