"""Relational schema shared by the PostgreSQL and MySQL backends.

Four tables:
    users           unique index on lower-cased email (`email_key`)
    urls            unique index on short_code, nullable FK to users
    categories      unique (user_id, lower-cased name) via `name_key`, FK to users
    url_categories  composite PK (url_id, category_id), cascading deletes from both parents

The lower-cased key columns are written by the DAOs, which keeps the
case-insensitive uniqueness rules portable across both database engines.
"""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects import mysql

from linkregistry.constants import Limits, Shortcode, CategoryDefaults


metadata = MetaData()

# MySQL DATETIME drops fractional seconds unless asked for them
Timestamp = DateTime(timezone=True).with_variant(mysql.DATETIME(fsp=6), 'mysql')
Identifier = String(36)  # UUID4 text form


def exact_string(length: int) -> String:
    """String compared byte-for-byte on every engine.

    MySQL's default utf8mb4 collations fold case and accents, so shortcodes and
    the lower-cased key columns are pinned to `utf8mb4_bin` there.
    """
    return String(length).with_variant(mysql.VARCHAR(length, collation='utf8mb4_bin'), 'mysql')


# fmt: off
users = Table(
    'users',
    metadata,
    Column('id', Identifier, primary_key=True),
    Column('email', String(Limits.EMAIL_LENGTH), nullable=False),
    Column('email_key', exact_string(Limits.EMAIL_LENGTH), nullable=False),
    Column('password_hash', String(255), nullable=False),
    Column('created_at', Timestamp, nullable=False),
    Column('updated_at', Timestamp, nullable=False),
    Index('ux_users_email_key', 'email_key', unique=True),
)

urls = Table(
    'urls',
    metadata,
    Column('id', Identifier, primary_key=True),
    Column('url', String(Limits.URL_LENGTH), nullable=False),
    Column('short_code', exact_string(max(10, Shortcode.LENGTH)), nullable=False),
    Column('user_id', Identifier, ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
    Column('created_at', Timestamp, nullable=False),
    Column('updated_at', Timestamp, nullable=False),
    Column('access_count', Integer, nullable=False, default=0),
    Index('ux_urls_short_code', 'short_code', unique=True),
    Index('ix_urls_user_id', 'user_id'),
    Index('ix_urls_created_at', 'created_at'),
)

categories = Table(
    'categories',
    metadata,
    Column('id', Identifier, primary_key=True),
    Column('name', String(Limits.CATEGORY_NAME_LENGTH), nullable=False),
    Column('name_key', exact_string(Limits.CATEGORY_NAME_LENGTH), nullable=False),
    Column('description', String(Limits.CATEGORY_DESCRIPTION_LENGTH), nullable=True),
    Column('icon', String(Limits.CATEGORY_TOKEN_LENGTH), nullable=False, default=CategoryDefaults.ICON),
    Column('color', String(Limits.CATEGORY_TOKEN_LENGTH), nullable=False, default=CategoryDefaults.COLOR),
    Column('user_id', Identifier, ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
    Column('created_at', Timestamp, nullable=False),
    Column('updated_at', Timestamp, nullable=False),
    UniqueConstraint('user_id', 'name_key', name='ux_categories_user_name'),
    Index('ix_categories_user_id', 'user_id'),
)

url_categories = Table(
    'url_categories',
    metadata,
    Column('url_id', Identifier, ForeignKey('urls.id', ondelete='CASCADE'), nullable=False),
    Column('category_id', Identifier, ForeignKey('categories.id', ondelete='CASCADE'), nullable=False),
    Column('created_at', Timestamp, nullable=False),
    PrimaryKeyConstraint('url_id', 'category_id'),
    Index('ix_url_categories_category_id', 'category_id'),
)
# fmt: on
