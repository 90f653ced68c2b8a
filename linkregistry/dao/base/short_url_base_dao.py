"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (in-process memory, PostgreSQL, MySQL).

Responsibilities:
    - Provide an interface for inserting, retrieving, updating and deleting ShortURLModel objects.
    - Maintain the URL <-> category association (keyed by URL id, not by shortcode).
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkregistry.dao.memory import MemoryDataStore, ShortURLMemoryDAO

        >>> dao = ShortURLMemoryDAO(store=MemoryDataStore())
        >>> dao.insert(short_url)
        ShortURLModel(target='https://example.com/blog/article-123', shortcode='a1b2c3', ...)

        >>> dao.get('a1b2c3').target
        'https://example.com/blog/article-123'

        >>> dao.get('zzzzzz') is None
        True
"""

from abc import ABC, abstractmethod

from linkregistry.models import ShortURLModel, CategoryModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel) -> ShortURLModel:
            Insert a new ShortURLModel into the data store.
            Raises ShortURLAlreadyExistsError if the short code already exists.

        get(shortcode: str) -> ShortURLModel | None:
            Retrieve a ShortURLModel by short code. Returns None if not found.

        get_by_id(url_id: str) -> ShortURLModel | None:
            Retrieve a ShortURLModel by identifier. Returns None if not found.

        update(shortcode: str, short_url: ShortURLModel) -> ShortURLModel:
            Replace target URL and modification timestamp.
            Raises ShortURLNotFoundError if the short code does not exist.

        delete(shortcode: str) -> None:
            Hard-delete a ShortURLModel together with its category associations.
            Raises ShortURLNotFoundError if the short code does not exist.

        hit(shortcode: str) -> None:
            Atomically increment the access counter.
            Raises ShortURLNotFoundError if the short code does not exist.

        exists(shortcode: str) -> bool:
            Check whether a short code is taken.

        list_by_user(user_id: str) -> list[ShortURLModel]:
        list_by_category(category_id: str, user_id: str) -> list[ShortURLModel]:
            Owner-scoped listings, newest first.

        add_categories(url_id: str, category_ids: list[str]) -> None:
        remove_categories(url_id: str, category_ids: list[str]) -> None:
        categories(url_id: str) -> list[CategoryModel]:
            Manage and read the URL <-> category association.

    All methods raise DataStoreError on connectivity or other unexpected
    data store failures.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLMemoryDAO or
        ShortURLPostgresDAO) must extend this class and implement all
        abstract methods with identical return shapes and error conditions.

    NOTE:
        - Returned models are immutable; callers cannot alter stored state through them.
        - `update()` deliberately applies only `target` and `updated_at`. Every other
          field of the passed model is ignored.
        - `hit()` must never overwrite a concurrently written target URL.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel) -> ShortURLModel:
        """Insert a new ShortURLModel into the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

        Returns:
            ShortURLModel: the stored record.

        Raises:
            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same short code already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str) -> ShortURLModel | None:
        """Retrieve a ShortURLModel from the data store by its short code.

        Args:
            shortcode (str):
                The short code of the ShortURLModel to be retrieved.

        Returns:
            ShortURLModel | None: The ShortURLModel instance if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get_by_id(self, url_id: str) -> ShortURLModel | None:
        """Retrieve a ShortURLModel from the data store by its identifier.

        Args:
            url_id (str):
                The identifier of the ShortURLModel to be retrieved.

        Returns:
            ShortURLModel | None: The ShortURLModel instance if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def update(self, shortcode: str, short_url: ShortURLModel) -> ShortURLModel:
        """Update the target URL of an existing short URL.

        Only `short_url.target` and `short_url.updated_at` are persisted.

        Args:
            shortcode (str):
                The short code of the record to update.

            short_url (ShortURLModel):
                Model carrying the new target URL and modification timestamp.

        Returns:
            ShortURLModel: the record as stored after the update.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, shortcode: str) -> None:
        """Delete a short URL and all of its category associations.

        Args:
            shortcode (str):
                The short code of the record to delete.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def hit(self, shortcode: str) -> None:
        """Increment the access counter of a short URL by one.

        The increment is atomic with respect to other increments on the same
        short code and touches only the counter and the modification timestamp.

        Args:
            shortcode (str):
                The short code that was accessed.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def exists(self, shortcode: str) -> bool:
        """Check whether a short code is already taken.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[ShortURLModel]:
        """List all short URLs owned by a user, newest first.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def list_by_category(self, category_id: str, user_id: str) -> list[ShortURLModel]:
        """List short URLs owned by a user and tagged with a category, newest first.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def add_categories(self, url_id: str, category_ids: list[str]) -> None:
        """Associate categories with a short URL.

        Adding an already present (url, category) pair is a no-op.

        Args:
            url_id (str):
                Identifier (not short code) of the short URL.

            category_ids (list[str]):
                Identifiers of the categories to associate.

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist.

            CategoryNotFoundError:
                If any of the categories does not exist.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def remove_categories(self, url_id: str, category_ids: list[str]) -> None:
        """Dissociate categories from a short URL. Missing pairs are ignored.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def categories(self, url_id: str) -> list[CategoryModel]:
        """Return the categories associated with a short URL, ordered by name.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
