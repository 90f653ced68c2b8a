"""MySQL mixin providing engine initialization and dialect hooks.

Classes:
    - MySQLClientMixin: Injects a PyMySQL-backed SQLAlchemy engine into SQL DAOs.

NOTE:
    PyMySQL reports matched (not changed) rows for UPDATE statements, so
    `rowcount == 0` reliably means "no such row" for the SQL DAOs.
"""

from typing import Optional

from sqlalchemy import Table, create_engine
from sqlalchemy.engine import Engine, URL
from sqlalchemy.sql.dml import Insert

from linkregistry.dao.sql.mixins import SQLClientMixin


class MySQLClientMixin(SQLClientMixin):
    """Mixin with MySQL engine setup for SQL-backed DAOs.

    Attributes:
        engine (sqlalchemy.engine.Engine):
            Pooled engine using the PyMySQL driver and the utf8mb4 charset.
    """

    def __init__(
        self,
        mysql_host: Optional[str] = 'localhost',
        mysql_port: Optional[int] = 3306,
        mysql_user: Optional[str] = 'root',
        mysql_password: Optional[str] = None,
        mysql_database: Optional[str] = 'url_shortener',
        mysql_pool_size: Optional[int] = 10,
        mysql_engine: Optional[Engine] = None,
        create_tables: bool = False,
    ):
        """Initialize a MySQL-based DAO

        Args:
            mysql_host (Optional[str]):
                Hostname of the MySQL server. Defaults to 'localhost'.

            mysql_port (Optional[int]):
                Server port. Defaults to 3306.

            mysql_user (Optional[str]):
                Login user. Defaults to 'root'.

            mysql_password (Optional[str]):
                Password of the login user (if required).

            mysql_database (Optional[str]):
                Database name. Defaults to 'url_shortener'.

            mysql_pool_size (Optional[int]):
                Number of pooled connections. Defaults to 10.

            mysql_engine (Optional[sqlalchemy.engine.Engine]):
                Pre-initialized engine. If None, a new engine is created.

            create_tables (bool):
                If True, create missing tables after connecting. Defaults to False.

        Raises:
            DataStoreError:
                If the healthcheck fails (connectivity issues).
        """
        if mysql_engine is None:
            url = URL.create(
                'mysql+pymysql',
                username=mysql_user,
                password=mysql_password,
                host=mysql_host,
                port=int(mysql_port),
                database=mysql_database,
                query={'charset': 'utf8mb4'},
            )
            mysql_engine = create_engine(url, pool_size=int(mysql_pool_size), pool_pre_ping=True, pool_recycle=3600)

        self._init_engine(mysql_engine, create_tables=create_tables)

    def _insert_ignore(self, table: Table) -> Insert:
        return table.insert().prefix_with('IGNORE', dialect='mysql')
