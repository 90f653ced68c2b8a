"""Abstract base class for user account data access objects (DAOs).

This interface defines the contract for storing and reading accounts across
different storage systems. Accounts are created once at registration and are
read-only afterwards.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkregistry.dao.memory import MemoryDataStore, UserMemoryDAO
        >>> dao = UserMemoryDAO(store=MemoryDataStore())

        >>> dao.insert(user)
        UserModel(id='...', email='alice@example.com', ...)

        >>> dao.get_by_email('ALICE@example.com').id == user.id
        True
"""

from abc import ABC, abstractmethod

from linkregistry.models import UserModel


class UserBaseDAO(ABC):
    """Interface for user account data access objects (DAOs)

    Methods:
        insert(user: UserModel) -> UserModel:
            Store a new account.
            Raises UserAlreadyExistsError if the email (case-insensitive) is taken.
            Raises DataStoreError on write failure.

        get_by_email(email: str) -> UserModel | None:
            Case-insensitive lookup by email. Returns None if not found.

        get(user_id: str) -> UserModel | None:
            Lookup by identifier. Returns None if not found.
    """

    @abstractmethod
    def insert(self, user: UserModel) -> UserModel:
        """Store a new account.

        Args:
            user (UserModel):
                The account to store.

        Returns:
            UserModel:
                The stored account.

        Raises:
            UserAlreadyExistsError:
                If an account with the same (case-insensitive) email exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> UserModel | None:
        """Retrieve an account by email (case-insensitive).

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, user_id: str) -> UserModel | None:
        """Retrieve an account by identifier.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
