"""Unit tests for the ShortURLMemoryDAO

Test coverage includes:

1. Insertion behavior
   - Ensures inserted URLs are reachable by shortcode and by id.
   - Confirms duplicate shortcodes raise ShortURLAlreadyExistsError without touching either index.
   - Ensures invalid types raise TypeError or BeartypeCallHintParamViolation.

2. Update behavior
   - Ensures only target and updated_at are applied.
   - Confirms missing shortcodes raise ShortURLNotFoundError.

3. Deletion behavior
   - Ensures both indexes and the category associations are dropped.
   - Confirms missing shortcodes raise ShortURLNotFoundError.

4. Access counter
   - Ensures hit() increments the counter and advances updated_at only.
   - Confirms missing shortcodes raise ShortURLNotFoundError.

5. Listings
   - Ensures owner-scoped listings are newest first and filter by category.

6. Category associations
   - Ensures adding is idempotent and empty id lists are no-ops.
   - Confirms unknown URLs / categories raise the matching NotFound errors.
   - Ensures categories() is ordered by name.
"""

import dataclasses
from datetime import datetime, UTC

import pytest
from beartype.roar import BeartypeCallHintParamViolation
from freezegun import freeze_time

from linkregistry.dao.memory import MemoryDataStore, ShortURLMemoryDAO, CategoryMemoryDAO
from linkregistry.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, CategoryNotFoundError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def store():
    return MemoryDataStore()


@pytest.fixture
def dao(store):
    return ShortURLMemoryDAO(store=store)


@pytest.fixture
def category_dao(store):
    return CategoryMemoryDAO(store=store)


# -------------------------------
# 1. Insertion behavior
# -------------------------------


def test_insert_short_url(dao, store, make_short_url):
    """Ensure an inserted URL is reachable through both indexes."""
    short_url = make_short_url('abc123')

    assert dao.insert(short_url) == short_url
    assert dao.get('abc123') == short_url
    assert dao.get_by_id(short_url.id) == short_url
    assert dao.exists('abc123') is True
    assert len(store.urls_by_code) == 1


def test_insert_duplicate_shortcode(dao, store, make_short_url):
    """Ensure a duplicate shortcode fails before either index is written."""
    original = make_short_url('abc123')
    duplicate = make_short_url('abc123', target='https://example.com/other')
    dao.insert(original)

    with pytest.raises(ShortURLAlreadyExistsError):
        dao.insert(duplicate)

    assert dao.get('abc123') == original
    assert dao.get_by_id(duplicate.id) is None
    assert len(store.urls_by_code) == 1


def test_insert_short_url_with_invalid_type(dao):
    """Ensure inserting invalid types raises TypeError or Beartype error."""
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.insert('https://example.com/notamodel')


def test_get_missing_short_url(dao):
    assert dao.get('zzzzzz') is None
    assert dao.get_by_id('no-such-id') is None
    assert dao.exists('zzzzzz') is False


# -------------------------------
# 2. Update behavior
# -------------------------------


def test_update_applies_target_and_timestamp_only(dao, make_short_url):
    """Ensure update() ignores every field except target and updated_at."""
    short_url = make_short_url('abc123', user_id='owner-1', access_count=5)
    dao.insert(short_url)

    new_time = datetime(2025, 11, 1, tzinfo=UTC)
    # fmt: off
    payload = dataclasses.replace(short_url, target='https://example.org/new', updated_at=new_time,
                                  access_count=0, user_id='intruder', id='other-id')
    # fmt: on
    updated = dao.update('abc123', payload)

    assert updated.target == 'https://example.org/new'
    assert updated.updated_at == new_time
    assert updated.access_count == 5
    assert updated.user_id == 'owner-1'
    assert updated.id == short_url.id
    assert dao.get('abc123') == updated


def test_update_missing_short_url(dao, make_short_url):
    with pytest.raises(ShortURLNotFoundError):
        dao.update('abc123', make_short_url('abc123'))


# -------------------------------
# 3. Deletion behavior
# -------------------------------


def test_delete_drops_indexes_and_associations(dao, category_dao, store, make_short_url, make_category):
    """Ensure delete() removes the URL from both indexes and its associations."""
    short_url = dao.insert(make_short_url('abc123', user_id='owner-1'))
    category = category_dao.insert(make_category('Work', 'owner-1'))
    dao.add_categories(short_url.id, [category.id])

    dao.delete('abc123')

    assert dao.get('abc123') is None
    assert dao.get_by_id(short_url.id) is None
    assert short_url.id not in store.url_categories
    assert category_dao.get(category.id) == category


def test_delete_missing_short_url(dao):
    with pytest.raises(ShortURLNotFoundError):
        dao.delete('abc123')


# -------------------------------
# 4. Access counter
# -------------------------------


@freeze_time('2025-12-01 08:30:00')
def test_hit_increments_counter(dao, make_short_url):
    """Ensure hit() increments access_count and advances updated_at."""
    short_url = dao.insert(make_short_url('abc123'))

    dao.hit('abc123')
    dao.hit('abc123')

    stored = dao.get('abc123')
    assert stored.access_count == 2
    assert stored.updated_at == datetime(2025, 12, 1, 8, 30, tzinfo=UTC)
    assert stored.target == short_url.target
    assert stored.created_at == short_url.created_at


def test_hit_missing_short_url(dao):
    with pytest.raises(ShortURLNotFoundError):
        dao.hit('abc123')


def test_returned_models_are_snapshots(dao, make_short_url):
    """Ensure a model read before hit() keeps its old value."""
    dao.insert(make_short_url('abc123'))
    before = dao.get('abc123')

    dao.hit('abc123')

    assert before.access_count == 0
    assert dao.get('abc123').access_count == 1


# -------------------------------
# 5. Listings
# -------------------------------


def test_list_by_user_newest_first(dao, make_short_url):
    """Ensure list_by_user() only returns the owner's URLs, newest first."""
    oldest = dao.insert(make_short_url('aaa111', user_id='owner-1', minutes=0))
    newest = dao.insert(make_short_url('ccc333', user_id='owner-1', minutes=10))
    middle = dao.insert(make_short_url('bbb222', user_id='owner-1', minutes=5))
    dao.insert(make_short_url('ddd444', user_id='owner-2', minutes=20))
    dao.insert(make_short_url('eee555', user_id=None, minutes=30))

    assert dao.list_by_user('owner-1') == [newest, middle, oldest]
    assert dao.list_by_user('nobody') == []


def test_list_by_category(dao, category_dao, make_short_url, make_category):
    """Ensure list_by_category() filters by category and owner."""
    work = category_dao.insert(make_category('Work', 'owner-1'))
    tagged_old = dao.insert(make_short_url('aaa111', user_id='owner-1', minutes=0))
    tagged_new = dao.insert(make_short_url('bbb222', user_id='owner-1', minutes=5))
    dao.insert(make_short_url('ccc333', user_id='owner-1', minutes=10))
    foreign = dao.insert(make_short_url('ddd444', user_id='owner-2', minutes=15))

    for url in (tagged_old, tagged_new, foreign):
        dao.add_categories(url.id, [work.id])

    assert dao.list_by_category(work.id, 'owner-1') == [tagged_new, tagged_old]


# -------------------------------
# 6. Category associations
# -------------------------------


def test_add_categories_is_idempotent(dao, category_dao, make_short_url, make_category):
    """Ensure adding the same pair twice yields one association and no error."""
    short_url = dao.insert(make_short_url('abc123', user_id='owner-1'))
    work = category_dao.insert(make_category('Work', 'owner-1'))

    dao.add_categories(short_url.id, [work.id])
    dao.add_categories(short_url.id, [work.id, work.id])

    assert dao.categories(short_url.id) == [work]


def test_add_categories_with_empty_list(dao, make_short_url):
    """Ensure an empty id list is a no-op, even for an unknown URL."""
    dao.add_categories('no-such-id', [])
    assert dao.categories('no-such-id') == []


def test_add_categories_to_missing_url(dao, category_dao, make_category):
    work = category_dao.insert(make_category('Work', 'owner-1'))
    with pytest.raises(ShortURLNotFoundError):
        dao.add_categories('no-such-id', [work.id])


def test_add_missing_category(dao, category_dao, make_short_url, make_category):
    """Ensure an unknown category fails the whole call."""
    short_url = dao.insert(make_short_url('abc123'))
    work = category_dao.insert(make_category('Work', 'owner-1'))

    with pytest.raises(CategoryNotFoundError):
        dao.add_categories(short_url.id, [work.id, 'no-such-category'])

    assert dao.categories(short_url.id) == []


def test_remove_categories(dao, category_dao, make_short_url, make_category):
    short_url = dao.insert(make_short_url('abc123', user_id='owner-1'))
    work = category_dao.insert(make_category('Work', 'owner-1'))
    home = category_dao.insert(make_category('Home', 'owner-1'))
    dao.add_categories(short_url.id, [work.id, home.id])

    dao.remove_categories(short_url.id, [work.id, 'not-associated'])

    assert dao.categories(short_url.id) == [home]


def test_categories_ordered_by_name(dao, category_dao, make_short_url, make_category):
    """Ensure categories() sorts case-insensitively by name."""
    short_url = dao.insert(make_short_url('abc123', user_id='owner-1'))
    zeta = category_dao.insert(make_category('zeta', 'owner-1'))
    alpha = category_dao.insert(make_category('Alpha', 'owner-1'))
    beta = category_dao.insert(make_category('beta', 'owner-1'))
    dao.add_categories(short_url.id, [zeta.id, alpha.id, beta.id])

    assert dao.categories(short_url.id) == [alpha, beta, zeta]
