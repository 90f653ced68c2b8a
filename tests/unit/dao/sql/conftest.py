"""DAO fixtures for the dialect-neutral SQL DAOs (on the shared SQLite backend)."""

import pytest


@pytest.fixture
def url_dao(sqlite_backend):
    return sqlite_backend.short_urls


@pytest.fixture
def user_dao(sqlite_backend):
    return sqlite_backend.users


@pytest.fixture
def category_dao(sqlite_backend):
    return sqlite_backend.categories


@pytest.fixture
def owner(user_dao, make_user):
    """Persist the account owning most test records."""
    return user_dao.insert(make_user('owner@example.com', user_id='owner-1'))


@pytest.fixture
def other_owner(user_dao, make_user):
    return user_dao.insert(make_user('other@example.com', user_id='owner-2'))
