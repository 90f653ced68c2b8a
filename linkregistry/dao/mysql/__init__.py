from linkregistry.dao.mysql.mixins import MySQLClientMixin
from linkregistry.dao.mysql.mysql_daos import ShortURLMySQLDAO, UserMySQLDAO, CategoryMySQLDAO


__all__ = [
    'MySQLClientMixin',
    'ShortURLMySQLDAO',
    'UserMySQLDAO',
    'CategoryMySQLDAO',
]
