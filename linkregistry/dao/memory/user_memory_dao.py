from beartype import beartype

from linkregistry.models import UserModel
from linkregistry.dao.base import UserBaseDAO
from linkregistry.dao.memory.store import MemoryDataStore
from linkregistry.dao.exceptions import UserAlreadyExistsError


class UserMemoryDAO(UserBaseDAO):
    """In-process Data Access Object (DAO) for user accounts

    Emails are indexed lower-cased, so lookups and the uniqueness check are
    case-insensitive.
    """

    def __init__(self, store: MemoryDataStore | None = None):
        self.store = store if store is not None else MemoryDataStore()

    @beartype
    def insert(self, user: UserModel) -> UserModel:
        email_key = user.email.lower()
        store = self.store
        with store.lock:
            if email_key in store.user_id_by_email:
                raise UserAlreadyExistsError(f"User with email '{user.email}' already exists.")
            store.users_by_id[user.id] = user
            store.user_id_by_email[email_key] = user.id
        return user

    @beartype
    def get_by_email(self, email: str) -> UserModel | None:
        store = self.store
        with store.lock:
            user_id = store.user_id_by_email.get(email.lower())
            return None if user_id is None else store.users_by_id.get(user_id)

    @beartype
    def get(self, user_id: str) -> UserModel | None:
        with self.store.lock:
            return self.store.users_by_id.get(user_id)
