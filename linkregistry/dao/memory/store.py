"""Shared in-process state for the volatile (memory) backend.

All three memory DAOs of one backend operate on the same MemoryDataStore,
so URL deletion can drop associations and category counts can look at URLs.

Structures:
    urls_by_code:      shortcode -> ShortURLModel   (primary index)
    code_by_id:        url id -> shortcode          (secondary index)
    url_categories:    url id -> set of category ids
    users_by_id:       user id -> UserModel
    user_id_by_email:  lower-cased email -> user id
    categories_by_id:  category id -> CategoryModel

NOTE:
    Every structural mutation (and every read spanning more than one
    structure) must happen while holding `lock`. The primary and secondary
    URL indexes are only ever changed together inside one critical section,
    so they can never disagree.
"""

import threading

from linkregistry.models import ShortURLModel, UserModel, CategoryModel


class MemoryDataStore:
    """Volatile data store shared by the memory DAOs."""

    def __init__(self):
        self.lock = threading.RLock()
        self.urls_by_code: dict[str, ShortURLModel] = {}
        self.code_by_id: dict[str, str] = {}
        self.url_categories: dict[str, set[str]] = {}
        self.users_by_id: dict[str, UserModel] = {}
        self.user_id_by_email: dict[str, str] = {}
        self.categories_by_id: dict[str, CategoryModel] = {}
