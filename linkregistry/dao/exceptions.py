"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a ShortURLModel is not found in the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a ShortURLModel whose shortcode already exists.

    UserAlreadyExistsError:
        Raised when attempting to insert a user whose email is already registered.

    CategoryNotFoundError:
        Raised when a category is not found in the data store.

    CategoryAlreadyExistsError:
        Raised when a user already owns a category with the same (case-insensitive) name.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, etc.).

Example:
    >>> from linkregistry.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    linkregistry.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc123' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortURLNotFoundError(DAOError):
    """Exception raised when a ShortURLModel is not found in the data store."""

    pass


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a ShortURLModel that already exists in the data store."""

    pass


class UserAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a user with an already registered email."""

    pass


class CategoryNotFoundError(DAOError):
    """Exception raised when a category is not found in the data store."""

    pass


class CategoryAlreadyExistsError(DAOError):
    """Exception raised when the owner already has a category with the same name."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, constraint violations that don't map
    to a more specific condition, etc.
    """

    pass
