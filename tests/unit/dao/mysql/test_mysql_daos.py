"""Unit tests for the MySQL client mixin and DAOs

Test coverage includes:

1. Engine construction
   - Ensures connection parameters land in a `mysql+pymysql` URL with utf8mb4.
   - Ensures a provided engine is reused instead of creating a new one.

2. Dialect-specific statements
   - Ensures bulk association inserts compile to INSERT IGNORE.
   - Ensures timestamps keep microseconds on MySQL.
   - Ensures shortcodes and lower-cased keys use a binary collation (no case or accent folding).
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import mysql
from sqlalchemy.schema import CreateTable

from linkregistry.dao.mysql import MySQLClientMixin, ShortURLMySQLDAO, UserMySQLDAO, CategoryMySQLDAO
from linkregistry.dao.mysql import mixins
from linkregistry.dao.sql.schema import url_categories, urls, users, categories


@pytest.fixture
def create_engine(monkeypatch):
    """Capture create_engine() calls and return a healthy mock engine."""
    engine = MagicMock()
    factory = MagicMock(return_value=engine)
    monkeypatch.setattr(mixins, 'create_engine', factory)
    return factory


# -------------------------------
# 1. Engine construction
# -------------------------------


def test_engine_url_from_parameters(create_engine):
    # fmt: off
    dao = ShortURLMySQLDAO(mysql_host='db.test', mysql_port=3307, mysql_user='app',
                           mysql_password='secret', mysql_database='links')
    # fmt: on

    url = create_engine.call_args.args[0]
    assert url.drivername == 'mysql+pymysql'
    assert (url.host, url.port, url.username, url.password, url.database) == ('db.test', 3307, 'app', 'secret', 'links')
    assert url.query == {'charset': 'utf8mb4'}
    assert create_engine.call_args.kwargs['pool_size'] == 10
    assert dao.engine is create_engine.return_value


def test_defaults(create_engine):
    UserMySQLDAO()
    url = create_engine.call_args.args[0]
    assert (url.host, url.port, url.username, url.database) == ('localhost', 3306, 'root', 'url_shortener')


def test_existing_engine_is_reused(create_engine):
    engine = MagicMock()
    dao = CategoryMySQLDAO(mysql_engine=engine)

    create_engine.assert_not_called()
    assert dao.engine is engine


# -------------------------------
# 2. Dialect-specific statements
# -------------------------------


def test_insert_ignore_compiles_to_insert_ignore(create_engine):
    statement = MySQLClientMixin()._insert_ignore(url_categories)
    sql = str(statement.compile(dialect=mysql.dialect()))
    assert sql.startswith('INSERT IGNORE INTO url_categories')


def test_schema_compiles_for_mysql():
    ddl = str(CreateTable(urls).compile(dialect=mysql.dialect()))
    assert 'DATETIME(fsp=6)' in ddl or 'DATETIME(6)' in ddl
    assert 'url VARCHAR(2048) NOT NULL' in ddl


def _column_line(ddl: str, column: str) -> str:
    return next(line for line in ddl.splitlines() if line.strip().startswith(f'{column} '))


def test_shortcode_column_is_case_sensitive_on_mysql():
    """Ensure 'ABC123' can never match a row stored under 'abc123'."""
    ddl = str(CreateTable(urls).compile(dialect=mysql.dialect()))
    assert 'utf8mb4_bin' in _column_line(ddl, 'short_code')
    assert 'utf8mb4_bin' not in _column_line(ddl, 'url')


@pytest.mark.parametrize('table, column', [(users, 'email_key'), (categories, 'name_key')])
def test_key_columns_do_not_fold_accents_on_mysql(table, column):
    ddl = str(CreateTable(table).compile(dialect=mysql.dialect()))
    assert 'utf8mb4_bin' in _column_line(ddl, column)
