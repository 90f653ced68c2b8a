"""Data Access Object (DAO) implementation for short URLs kept in process memory

This is the reference implementation of ShortURLBaseDAO: the relational DAOs
reproduce its return shapes and error conditions.

Classes:
    ShortURLMemoryDAO:
        DAO for storing and retrieving ShortURLModel in a MemoryDataStore.

Example:
    >>> store = MemoryDataStore()
    >>> dao = ShortURLMemoryDAO(store=store)
    >>> dao.insert(short_url)
    ShortURLModel(target='https://example.com/page', shortcode='abc123', ...)
    >>> dao.hit('abc123')
    >>> dao.get('abc123').access_count
    1
"""

import dataclasses

from beartype import beartype

from linkregistry.models import ShortURLModel, CategoryModel
from linkregistry.dao.base import ShortURLBaseDAO
from linkregistry.dao.memory.store import MemoryDataStore
from linkregistry.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, CategoryNotFoundError
from linkregistry.utils.helpers import utcnow


class ShortURLMemoryDAO(ShortURLBaseDAO):
    """In-process Data Access Object (DAO) for managing short URL mappings

    Attributes:
        store (MemoryDataStore):
            Shared state (indexes + lock) of the memory backend.
    """

    def __init__(self, store: MemoryDataStore | None = None):
        self.store = store if store is not None else MemoryDataStore()

    @beartype
    def insert(self, short_url: ShortURLModel) -> ShortURLModel:
        """Insert a short URL mapping into both URL indexes

        The uniqueness check and both index writes happen in one critical
        section. On a collision neither index is touched.

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
        """
        store = self.store
        with store.lock:
            if short_url.shortcode in store.urls_by_code:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
            store.urls_by_code[short_url.shortcode] = short_url
            store.code_by_id[short_url.id] = short_url.shortcode
        return short_url

    @beartype
    def get(self, shortcode: str) -> ShortURLModel | None:
        with self.store.lock:
            return self.store.urls_by_code.get(shortcode)

    @beartype
    def get_by_id(self, url_id: str) -> ShortURLModel | None:
        store = self.store
        with store.lock:
            shortcode = store.code_by_id.get(url_id)
            return None if shortcode is None else store.urls_by_code.get(shortcode)

    @beartype
    def update(self, shortcode: str, short_url: ShortURLModel) -> ShortURLModel:
        store = self.store
        with store.lock:
            existing = store.urls_by_code.get(shortcode)
            if existing is None:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
            updated = dataclasses.replace(existing, target=short_url.target, updated_at=short_url.updated_at)
            store.urls_by_code[shortcode] = updated
        return updated

    @beartype
    def delete(self, shortcode: str) -> None:
        store = self.store
        with store.lock:
            existing = store.urls_by_code.pop(shortcode, None)
            if existing is None:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
            store.code_by_id.pop(existing.id, None)
            store.url_categories.pop(existing.id, None)

    @beartype
    def hit(self, shortcode: str) -> None:
        """Increment the access counter of a short URL

        The record is re-read inside the critical section, so a concurrent
        update() of the target URL is never overwritten by a stale copy.

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist.
        """
        store = self.store
        with store.lock:
            existing = store.urls_by_code.get(shortcode)
            if existing is None:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
            # fmt: off
            store.urls_by_code[shortcode] = dataclasses.replace(existing,
                                                                access_count=existing.access_count + 1,
                                                                updated_at=utcnow())
            # fmt: on

    @beartype
    def exists(self, shortcode: str) -> bool:
        with self.store.lock:
            return shortcode in self.store.urls_by_code

    @beartype
    def list_by_user(self, user_id: str) -> list[ShortURLModel]:
        with self.store.lock:
            urls = [url for url in self.store.urls_by_code.values() if url.user_id == user_id]
        return sorted(urls, key=lambda url: url.created_at, reverse=True)

    @beartype
    def list_by_category(self, category_id: str, user_id: str) -> list[ShortURLModel]:
        store = self.store
        with store.lock:
            # fmt: off
            urls = [url for url in store.urls_by_code.values()
                    if url.user_id == user_id and category_id in store.url_categories.get(url.id, ())]
            # fmt: on
        return sorted(urls, key=lambda url: url.created_at, reverse=True)

    @beartype
    def add_categories(self, url_id: str, category_ids: list[str]) -> None:
        if not category_ids:
            return

        store = self.store
        with store.lock:
            if url_id not in store.code_by_id:
                raise ShortURLNotFoundError(f"Short URL with id '{url_id}' not found.")
            missing = [category_id for category_id in category_ids if category_id not in store.categories_by_id]
            if missing:
                raise CategoryNotFoundError(f"Category with id '{missing[0]}' not found.")
            store.url_categories.setdefault(url_id, set()).update(category_ids)

    @beartype
    def remove_categories(self, url_id: str, category_ids: list[str]) -> None:
        if not category_ids:
            return

        with self.store.lock:
            associated = self.store.url_categories.get(url_id)
            if associated is not None:
                associated.difference_update(category_ids)

    @beartype
    def categories(self, url_id: str) -> list[CategoryModel]:
        store = self.store
        with store.lock:
            # fmt: off
            found = [store.categories_by_id[category_id]
                     for category_id in store.url_categories.get(url_id, ())
                     if category_id in store.categories_by_id]
            # fmt: on
        return sorted(found, key=lambda category: category.name.lower())
