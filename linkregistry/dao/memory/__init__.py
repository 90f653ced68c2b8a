from linkregistry.dao.memory.store import MemoryDataStore
from linkregistry.dao.memory.short_url_memory_dao import ShortURLMemoryDAO
from linkregistry.dao.memory.user_memory_dao import UserMemoryDAO
from linkregistry.dao.memory.category_memory_dao import CategoryMemoryDAO


__all__ = [
    'MemoryDataStore',
    'ShortURLMemoryDAO',
    'UserMemoryDAO',
    'CategoryMemoryDAO',
]
