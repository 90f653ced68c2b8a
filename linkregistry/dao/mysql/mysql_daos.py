from linkregistry.dao.sql import ShortURLSQLDAO, UserSQLDAO, CategorySQLDAO
from linkregistry.dao.mysql.mixins import MySQLClientMixin


class ShortURLMySQLDAO(MySQLClientMixin, ShortURLSQLDAO):
    """MySQL-backed short URL DAO."""


class UserMySQLDAO(MySQLClientMixin, UserSQLDAO):
    """MySQL-backed user DAO."""


class CategoryMySQLDAO(MySQLClientMixin, CategorySQLDAO):
    """MySQL-backed category DAO."""
