"""SQL mixin providing shared engine handling and connectivity checks.

Responsibilities:
    - Hold the SQLAlchemy engine shared by the relational DAOs of one backend
    - Healthcheck the database
    - Create the schema on demand
    - Declare the dialect hook for bulk insert-or-ignore statements

Classes:
    - SQLClientMixin: Base mixin for the PostgreSQL and MySQL client mixins.

Example:
    Typical usage with a DAO implementation:

        >>> class ShortURLPostgresDAO(PostgresClientMixin, ShortURLSQLDAO):
        ...     pass
        ...
        >>> dao = ShortURLPostgresDAO(postgres_host='localhost', postgres_password='secret')
        >>> dao._healthcheck()
        True
"""

from sqlalchemy import Table, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.dml import Insert

from linkregistry.dao.sql.schema import metadata
from linkregistry.dao.exceptions import DataStoreError


class SQLClientMixin:
    """Mixin with SQLAlchemy engine setup and health check for SQL-backed DAOs.

    Attributes:
        engine (sqlalchemy.engine.Engine):
            Engine (and connection pool) used by subclasses. One engine is
            shared by all DAOs of a backend.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Run `SELECT 1` to verify connectivity.
            Optionally raise a DataStoreError if unreachable.

        create_schema() -> None:
            Create all tables and indexes that don't exist yet.

        _insert_ignore(table: Table) -> Insert:
            Dialect-specific INSERT that skips rows violating a unique key.
    """

    engine: Engine

    def _init_engine(self, engine: Engine, create_tables: bool = False) -> None:
        self.engine = engine
        self._healthcheck()
        if create_tables:
            self.create_schema()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """Run a trivial query to healthcheck connectivity

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to True.

        Returns:
            bool:
                True if the database is reachable, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If a connection cannot be established and raise_error=True.
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text('SELECT 1'))
        except SQLAlchemyError as e:
            if raise_error:
                url = self.engine.url
                raise DataStoreError(
                    f"Can't connect to {url.get_backend_name()} at {url.host}:{url.port}/{url.database}. Check the provided configuration parameters."
                ) from e
            return False
        else:
            return True

    def create_schema(self) -> None:
        """Create the tables from `linkregistry.dao.sql.schema` (no-op for existing ones)."""
        try:
            metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise DataStoreError(f'Failed to create schema on {self.engine.url.get_backend_name()}.') from e

    def _insert_ignore(self, table: Table) -> Insert:
        raise NotImplementedError(f'{type(self).__name__} does not define an insert-or-ignore statement.')
