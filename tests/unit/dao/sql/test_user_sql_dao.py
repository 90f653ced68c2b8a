"""Unit tests for the UserSQLDAO (on in-memory SQLite)

Test coverage includes:

1. Insertion and lookup by id / email
2. Case-insensitive email uniqueness through the `email_key` unique index
"""

import pytest

from linkregistry.dao.exceptions import UserAlreadyExistsError


def test_insert_and_get_user(user_dao, make_user):
    user = make_user('alice@example.com')

    assert user_dao.insert(user) == user
    assert user_dao.get(user.id) == user
    assert user_dao.get_by_email('alice@example.com') == user


def test_get_by_email_is_case_insensitive(user_dao, make_user):
    user = user_dao.insert(make_user('Alice@Example.com'))

    found = user_dao.get_by_email('alice@example.com')
    assert found == user
    assert found.email == 'Alice@Example.com'


def test_missing_user(user_dao):
    assert user_dao.get('no-such-id') is None
    assert user_dao.get_by_email('nobody@example.com') is None


def test_insert_duplicate_email(user_dao, make_user):
    user_dao.insert(make_user('A@x.com'))
    with pytest.raises(UserAlreadyExistsError):
        user_dao.insert(make_user('a@x.com'))
