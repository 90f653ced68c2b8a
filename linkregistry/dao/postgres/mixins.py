"""PostgreSQL mixin providing engine initialization and dialect hooks.

Classes:
    - PostgresClientMixin: Injects a psycopg-backed SQLAlchemy engine into SQL DAOs.

Example:
    >>> class CategoryPostgresDAO(PostgresClientMixin, CategorySQLDAO):
    ...     pass
    ...
    >>> dao = CategoryPostgresDAO(postgres_host='db.internal', postgres_password='secret')
    >>> dao._healthcheck()
    True
"""

from typing import Optional

from sqlalchemy import Table, create_engine
from sqlalchemy.engine import Engine, URL
from sqlalchemy.dialects import postgresql
from sqlalchemy.sql.dml import Insert

from linkregistry.dao.sql.mixins import SQLClientMixin


class PostgresClientMixin(SQLClientMixin):
    """Mixin with PostgreSQL engine setup for SQL-backed DAOs.

    Attributes:
        engine (sqlalchemy.engine.Engine):
            Pooled engine using the psycopg (v3) driver.
    """

    def __init__(
        self,
        postgres_host: Optional[str] = 'localhost',
        postgres_port: Optional[int] = 5432,
        postgres_user: Optional[str] = 'postgres',
        postgres_password: Optional[str] = None,
        postgres_database: Optional[str] = 'url_shortener',
        postgres_tls: Optional[bool] = True,
        postgres_pool_size: Optional[int] = 10,
        postgres_engine: Optional[Engine] = None,
        create_tables: bool = False,
    ):
        """Initialize a PostgreSQL-based DAO

        The option is given to either share an existing engine (and its pool)
        or create one via the appropriate connection parameters.

        Args:
            postgres_host (Optional[str]):
                Hostname of the PostgreSQL server. Defaults to 'localhost'.

            postgres_port (Optional[int]):
                Server port. Defaults to 5432.

            postgres_user (Optional[str]):
                Login role. Defaults to 'postgres'.

            postgres_password (Optional[str]):
                Password of the login role (if required).

            postgres_database (Optional[str]):
                Database name. Defaults to 'url_shortener'.

            postgres_tls (Optional[bool]):
                If True, require an encrypted connection (sslmode=require). Defaults to True.

            postgres_pool_size (Optional[int]):
                Number of pooled connections. Defaults to 10.

            postgres_engine (Optional[sqlalchemy.engine.Engine]):
                Pre-initialized engine. If None, a new engine is created.

            create_tables (bool):
                If True, create missing tables after connecting. Defaults to False.

        Raises:
            DataStoreError:
                If the healthcheck fails (connectivity issues).
        """
        if postgres_engine is None:
            url = URL.create(
                'postgresql+psycopg',
                username=postgres_user,
                password=postgres_password,
                host=postgres_host,
                port=int(postgres_port),
                database=postgres_database,
                query={'sslmode': 'require'} if postgres_tls else {},
            )
            postgres_engine = create_engine(url, pool_size=int(postgres_pool_size), pool_pre_ping=True)

        self._init_engine(postgres_engine, create_tables=create_tables)

    def _insert_ignore(self, table: Table) -> Insert:
        return postgresql.insert(table).on_conflict_do_nothing()
