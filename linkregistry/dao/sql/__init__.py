from linkregistry.dao.sql.mixins import SQLClientMixin
from linkregistry.dao.sql.short_url_sql_dao import ShortURLSQLDAO
from linkregistry.dao.sql.user_sql_dao import UserSQLDAO
from linkregistry.dao.sql.category_sql_dao import CategorySQLDAO


__all__ = [
    'SQLClientMixin',
    'ShortURLSQLDAO',
    'UserSQLDAO',
    'CategorySQLDAO',
]
