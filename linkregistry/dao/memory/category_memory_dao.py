"""Data Access Object (DAO) implementation for categories kept in process memory

Classes:
    CategoryMemoryDAO:
        DAO for storing and retrieving CategoryModel in a MemoryDataStore.
"""

import dataclasses

from beartype import beartype

from linkregistry.models import CategoryModel, CategoryWithCountModel
from linkregistry.dao.base import CategoryBaseDAO
from linkregistry.dao.memory.store import MemoryDataStore
from linkregistry.dao.exceptions import CategoryAlreadyExistsError, CategoryNotFoundError


class CategoryMemoryDAO(CategoryBaseDAO):
    """In-process Data Access Object (DAO) for categories

    Attributes:
        store (MemoryDataStore):
            Shared state of the memory backend. Category deletion also
            clears the URL association sets kept there.
    """

    def __init__(self, store: MemoryDataStore | None = None):
        self.store = store if store is not None else MemoryDataStore()

    def _find_by_name(self, user_id: str, name: str) -> CategoryModel | None:
        # Caller must hold the store lock
        name_key = name.lower()
        for category in self.store.categories_by_id.values():
            if category.user_id == user_id and category.name.lower() == name_key:
                return category
        return None

    @beartype
    def insert(self, category: CategoryModel) -> CategoryModel:
        with self.store.lock:
            if self._find_by_name(category.user_id, category.name) is not None:
                raise CategoryAlreadyExistsError(f"Category with name '{category.name}' already exists.")
            self.store.categories_by_id[category.id] = category
        return category

    @beartype
    def get(self, category_id: str) -> CategoryModel | None:
        with self.store.lock:
            return self.store.categories_by_id.get(category_id)

    @beartype
    def get_by_name(self, user_id: str, name: str) -> CategoryModel | None:
        with self.store.lock:
            return self._find_by_name(user_id, name)

    @beartype
    def update(self, category_id: str, category: CategoryModel) -> CategoryModel:
        store = self.store
        with store.lock:
            existing = store.categories_by_id.get(category_id)
            if existing is None:
                raise CategoryNotFoundError(f"Category with id '{category_id}' not found.")

            duplicate = self._find_by_name(existing.user_id, category.name)
            if duplicate is not None and duplicate.id != category_id:
                raise CategoryAlreadyExistsError(f"Category with name '{category.name}' already exists.")

            # fmt: off
            updated = dataclasses.replace(existing,
                                          name=category.name,
                                          description=category.description,
                                          icon=category.icon,
                                          color=category.color,
                                          updated_at=category.updated_at)
            # fmt: on
            store.categories_by_id[category_id] = updated
        return updated

    @beartype
    def delete(self, category_id: str) -> None:
        store = self.store
        with store.lock:
            if store.categories_by_id.pop(category_id, None) is None:
                raise CategoryNotFoundError(f"Category with id '{category_id}' not found.")
            for associated in store.url_categories.values():
                associated.discard(category_id)

    @beartype
    def list_by_user(self, user_id: str) -> list[CategoryModel]:
        with self.store.lock:
            categories = [category for category in self.store.categories_by_id.values() if category.user_id == user_id]
        return sorted(categories, key=lambda category: category.name.lower())

    @beartype
    def list_by_user_with_counts(self, user_id: str) -> list[CategoryWithCountModel]:
        store = self.store
        with store.lock:
            counts: dict[str, int] = {}
            for url in store.urls_by_code.values():
                if url.user_id != user_id:
                    continue
                for category_id in store.url_categories.get(url.id, ()):
                    counts[category_id] = counts.get(category_id, 0) + 1

            # fmt: off
            results = [CategoryWithCountModel(**dataclasses.asdict(category), url_count=counts.get(category.id, 0))
                       for category in store.categories_by_id.values()
                       if category.user_id == user_id]
            # fmt: on
        return sorted(results, key=lambda category: category.name.lower())
