"""Identifier registry: the orchestration layer over the storage backend.

LinkRegistry validates caller input, draws shortcodes, enforces ownership and
delegates persistence to the DAOs of the active StorageBackend. Every failure
leaves as one of the `linkregistry.exceptions` kinds:

    DAO condition                                  -> registry error
    ---------------------------------------------------------------------
    ShortURLNotFoundError, CategoryNotFoundError   -> NotFoundError
    ShortURLAlreadyExistsError,
    UserAlreadyExistsError,
    CategoryAlreadyExistsError                     -> ConflictError
    DataStoreError (any other DAOError)            -> StorageError (cause logged)

Ownership policy:
    A record with no owner (legacy data) is open to every caller. A record
    with an owner is open for mutation and detailed reads to that owner only.
    Mutations without a caller identity are rejected with ForbiddenError.
    lookup() and resolve() are intentionally ownerless (redirect path).

Example:
    >>> from linkregistry.dao.factory import create_backend
    >>> registry = LinkRegistry(create_backend({'memory': {}}))
    >>> user = registry.register_user('alice@example.com', 'correct horse', hash_password)
    >>> caller = Identity(user_id=user.id, email=user.email)
    >>> url = registry.create_url(caller, 'https://example.org/a')
    >>> registry.resolve(url.shortcode).target
    'https://example.org/a'
"""

import logging
import functools
import dataclasses
from typing import TypeVar, Any
from collections.abc import Callable

from linkregistry.constants import Shortcode
from linkregistry.types import BackendConfiguration, PasswordHasher, PasswordVerifier
from linkregistry.models import ShortURLModel, UserModel, CategoryModel, CategoryWithCountModel, Identity
from linkregistry.dao.factory import StorageBackend, create_backend
from linkregistry.dao.exceptions import (
    DAOError,
    ShortURLNotFoundError,
    ShortURLAlreadyExistsError,
    UserAlreadyExistsError,
    CategoryNotFoundError,
    CategoryAlreadyExistsError,
)
from linkregistry.exceptions import (
    NotFoundError,
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    StorageError,
)
from linkregistry.utils.config import app_env, load_config
from linkregistry.utils.helpers import utcnow, new_id
from linkregistry.utils.logging import initialize_logging
from linkregistry.utils.shortener import generate_unique_shortcode
from linkregistry.utils.validators import validate_url, validate_credentials, validate_category


logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def translate_dao_errors[F](method: F) -> F:
    """Wrap registry operations to turn DAO conditions into registry errors

    Storage internals never reach the caller: unrecognized failures become a
    generic StorageError while the original exception is logged with its traceback.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (ShortURLNotFoundError, CategoryNotFoundError) as e:
            raise NotFoundError(str(e)) from e
        except (ShortURLAlreadyExistsError, UserAlreadyExistsError, CategoryAlreadyExistsError) as e:
            raise ConflictError(str(e)) from e
        except DAOError as e:
            logger.exception('Storage backend failure.', extra={'operation': method.__name__, 'backend': self.backend.name})
            raise StorageError('Storage backend failure. Please try again later.') from e

    return wrapper


def require_caller(caller: Identity | None) -> Identity:
    if caller is None:
        raise ForbiddenError('Authentication is required for this operation.')
    return caller


def check_ownership(owner_id: str | None, caller: Identity | None) -> None:
    """Grant access to ownerless records and to the record's owner, deny everyone else.

    Raises:
        ForbiddenError: If the record has an owner other than the caller.
    """
    if owner_id is None:
        return
    if caller is None or caller.user_id != owner_id:
        raise ForbiddenError('You do not have access to this resource.')


class LinkRegistry:
    """Orchestrates shortcodes, URLs, accounts and categories over a StorageBackend.

    The registry holds no per-request state and is safe to share between
    concurrent callers; all shared state lives in the backend.

    Attributes:
        backend (StorageBackend):
            The live backend (one per process, see `create_backend()`).
        shortcode_length (int):
            Length of generated shortcodes. Defaults to 6.
        max_attempts (int):
            Shortcode collision retries before GenerationExhaustedError. Defaults to 10.
    """

    def __init__(
        self,
        backend: StorageBackend,
        shortcode_length: int = Shortcode.LENGTH,
        max_attempts: int = Shortcode.MAX_ATTEMPTS,
    ):
        self.backend = backend
        self.shortcode_length = shortcode_length
        self.max_attempts = max_attempts

    # -------------------------------
    # Internal lookups
    # -------------------------------

    def _url(self, shortcode: str) -> ShortURLModel:
        short_url = self.backend.short_urls.get(shortcode)
        if short_url is None:
            raise NotFoundError(f"Short URL '{shortcode}' not found.")
        return short_url

    def _owned_url(self, caller: Identity | None, shortcode: str) -> ShortURLModel:
        short_url = self._url(shortcode)
        check_ownership(short_url.user_id, caller)
        return short_url

    def _owned_category(self, caller: Identity | None, category_id: str) -> CategoryModel:
        category = self.backend.categories.get(category_id)
        if category is None:
            raise NotFoundError(f"Category '{category_id}' not found.")
        check_ownership(category.user_id, caller)
        return category

    def _owned_category_ids(self, caller: Identity, category_ids: list[str]) -> list[str]:
        unique_ids = list(dict.fromkeys(category_ids))
        for category_id in unique_ids:
            self._owned_category(caller, category_id)
        return unique_ids

    # -------------------------------
    # Short URLs
    # -------------------------------

    @translate_dao_errors
    def create_url(self, caller: Identity | None, target: str, category_ids: list[str] | None = None) -> ShortURLModel:
        """Shorten a destination URL on behalf of the caller

        Args:
            caller (Identity | None):
                Verified caller; becomes the record owner.
            target (str):
                Destination URL (http/https, at most 2048 characters).
            category_ids (list[str] | None):
                Categories (owned by the caller) to tag the new URL with.

        Returns:
            ShortURLModel: The stored record (access count 0).

        Raises:
            ForbiddenError: If there is no caller or a category belongs to someone else.
            ValidationError: If the destination URL is malformed.
            NotFoundError: If a category does not exist.
            GenerationExhaustedError: If no free shortcode was found.
            ConflictError: If a concurrent insert took the drawn shortcode first.
        """
        caller = require_caller(caller)
        target = validate_url(target)
        category_ids = self._owned_category_ids(caller, category_ids or [])

        shortcode = generate_unique_shortcode(
            self.backend.short_urls.exists,
            length=self.shortcode_length,
            max_attempts=self.max_attempts,
        )
        now = utcnow()
        short_url = ShortURLModel(
            target=target,
            shortcode=shortcode,
            id=new_id(),
            created_at=now,
            updated_at=now,
            access_count=0,
            user_id=caller.user_id,
        )
        short_url = self.backend.short_urls.insert(short_url)
        if category_ids:
            try:
                self.backend.short_urls.add_categories(short_url.id, category_ids)
            except DAOError:
                # drop the record if a category disappeared after the ownership check
                self.backend.short_urls.delete(shortcode)
                raise

        logger.info('Short URL created.', extra={'shortcode': shortcode, 'userId': caller.user_id})
        return short_url

    @translate_dao_errors
    def lookup(self, shortcode: str) -> ShortURLModel:
        """Resolve a shortcode for any caller, including anonymous ones.

        Raises:
            NotFoundError: If the shortcode does not exist.
        """
        return self._url(shortcode)

    @translate_dao_errors
    def get_url(self, caller: Identity | None, shortcode: str) -> ShortURLModel:
        """Detailed (statistics) read, restricted to the owner."""
        return self._owned_url(caller, shortcode)

    @translate_dao_errors
    def update_url(
        self,
        caller: Identity | None,
        shortcode: str,
        target: str,
        category_ids: list[str] | None = None,
    ) -> ShortURLModel:
        """Point a shortcode at a new destination

        The access count and shortcode are preserved, the modification
        timestamp advances.

        Args:
            caller (Identity | None):
                Verified caller; must own the record (or the record is ownerless).
            shortcode (str):
                Shortcode of the record to update.
            target (str):
                New destination URL.
            category_ids (list[str] | None):
                If given, replaces the URL's categories with exactly these.

        Raises:
            NotFoundError: If the shortcode or a category does not exist.
            ForbiddenError: If the caller does not own the record or a category.
            ValidationError: If the destination URL is malformed.
        """
        caller = require_caller(caller)
        short_url = self._owned_url(caller, shortcode)
        target = validate_url(target)
        wanted = None if category_ids is None else self._owned_category_ids(caller, category_ids)

        # a failed add leaves the target and the category set untouched
        if wanted is not None:
            current = [category.id for category in self.backend.short_urls.categories(short_url.id)]
            self.backend.short_urls.add_categories(short_url.id, [cid for cid in wanted if cid not in current])
            self.backend.short_urls.remove_categories(short_url.id, [cid for cid in current if cid not in wanted])

        updated = self.backend.short_urls.update(shortcode, dataclasses.replace(short_url, target=target, updated_at=utcnow()))

        logger.info('Short URL updated.', extra={'shortcode': shortcode, 'userId': caller.user_id})
        return updated

    @translate_dao_errors
    def delete_url(self, caller: Identity | None, shortcode: str) -> None:
        caller = require_caller(caller)
        self._owned_url(caller, shortcode)
        self.backend.short_urls.delete(shortcode)
        logger.info('Short URL deleted.', extra={'shortcode': shortcode, 'userId': caller.user_id})

    def record_access(self, shortcode: str) -> bool:
        """Count one redirect of `shortcode`

        Never raises: a failed increment must not break the redirect it belongs to.

        Returns:
            bool: True if the access was recorded, False otherwise.
        """
        try:
            self.backend.short_urls.hit(shortcode)
        except ShortURLNotFoundError:
            logger.warning('Access recorded for unknown shortcode.', extra={'shortcode': shortcode})
            return False
        except Exception:
            logger.exception('Failed to record access.', extra={'shortcode': shortcode, 'backend': self.backend.name})
            return False
        else:
            return True

    def resolve(self, shortcode: str) -> ShortURLModel:
        """Redirect helper: look up a shortcode and record the access

        Returns:
            ShortURLModel: The record as read before the increment.

        Raises:
            NotFoundError: If the shortcode does not exist.
        """
        short_url = self.lookup(shortcode)
        self.record_access(shortcode)
        return short_url

    @translate_dao_errors
    def list_urls(self, caller: Identity | None, category_id: str | None = None) -> list[ShortURLModel]:
        """List the caller's URLs (newest first), optionally filtered by one of their categories."""
        caller = require_caller(caller)
        if category_id is None:
            return self.backend.short_urls.list_by_user(caller.user_id)

        self._owned_category(caller, category_id)
        return self.backend.short_urls.list_by_category(category_id, caller.user_id)

    # -------------------------------
    # Accounts
    # -------------------------------

    @translate_dao_errors
    def register_user(self, email: str, password: str, hash_password: PasswordHasher) -> UserModel:
        """Create an account

        Args:
            email (str):
                Email address; stored lower-cased and unique (case-insensitive).
            password (str):
                Plaintext password, at least 8 characters.
            hash_password (Callable[[str], str]):
                Credential hashing collaborator; its output is stored as-is.

        Raises:
            ValidationError: If the email or password is malformed.
            ConflictError: If the email is already registered.
        """
        email, password = validate_credentials(email, password)
        if self.backend.users.get_by_email(email) is not None:
            raise ConflictError('Email is already registered.')

        now = utcnow()
        user = UserModel(id=new_id(), email=email, password_hash=hash_password(password), created_at=now, updated_at=now)
        user = self.backend.users.insert(user)

        logger.info('User registered.', extra={'userId': user.id})
        return user

    @translate_dao_errors
    def authenticate(self, email: str, password: str, verify_password: PasswordVerifier) -> UserModel:
        """Check an email/password pair

        Raises:
            ValidationError: If the email or password is malformed.
            InvalidCredentialsError: If the email is unknown or the password does not match.
        """
        email, password = validate_credentials(email, password)
        user = self.backend.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info('Failed login attempt.')
            raise InvalidCredentialsError('Invalid email or password.')
        return user

    @translate_dao_errors
    def get_user(self, user_id: str) -> UserModel:
        user = self.backend.users.get(user_id)
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found.")
        return user

    # -------------------------------
    # Categories
    # -------------------------------

    @translate_dao_errors
    def create_category(
        self,
        caller: Identity | None,
        name: str,
        description: str | None = None,
        icon: str | None = None,
        color: str | None = None,
    ) -> CategoryModel:
        """Create a category owned by the caller

        Raises:
            ForbiddenError: If there is no caller.
            ValidationError: If a field is missing or too long.
            ConflictError: If the caller already has a category with this name (case-insensitive).
        """
        caller = require_caller(caller)
        fields = validate_category(name, description, icon, color)

        now = utcnow()
        category = CategoryModel(id=new_id(), user_id=caller.user_id, created_at=now, updated_at=now, **fields)
        category = self.backend.categories.insert(category)

        logger.info('Category created.', extra={'categoryId': category.id, 'userId': caller.user_id})
        return category

    @translate_dao_errors
    def update_category(
        self,
        caller: Identity | None,
        category_id: str,
        name: str | None = None,
        description: str | None = None,
        icon: str | None = None,
        color: str | None = None,
    ) -> CategoryModel:
        """Rename or restyle a category

        Fields left as None keep their current value; an empty description clears it.

        Raises:
            NotFoundError: If the category does not exist.
            ForbiddenError: If the caller does not own the category.
            ValidationError: If a field is too long or the name is blank.
            ConflictError: If the new name is taken by another of the caller's categories.
        """
        caller = require_caller(caller)
        category = self._owned_category(caller, category_id)

        # fmt: off
        fields = validate_category(
            category.name        if name is None        else name,
            category.description if description is None else description,
            category.icon        if icon is None        else icon,
            category.color       if color is None       else color,
        )
        # fmt: on
        updated = self.backend.categories.update(category_id, dataclasses.replace(category, updated_at=utcnow(), **fields))

        logger.info('Category updated.', extra={'categoryId': category_id, 'userId': caller.user_id})
        return updated

    @translate_dao_errors
    def delete_category(self, caller: Identity | None, category_id: str) -> None:
        """Delete a category together with all of its URL associations."""
        caller = require_caller(caller)
        self._owned_category(caller, category_id)
        self.backend.categories.delete(category_id)
        logger.info('Category deleted.', extra={'categoryId': category_id, 'userId': caller.user_id})

    @translate_dao_errors
    def get_category(self, caller: Identity | None, category_id: str) -> CategoryModel:
        return self._owned_category(caller, category_id)

    @translate_dao_errors
    def list_categories(self, caller: Identity | None) -> list[CategoryModel]:
        caller = require_caller(caller)
        return self.backend.categories.list_by_user(caller.user_id)

    @translate_dao_errors
    def list_categories_with_counts(self, caller: Identity | None) -> list[CategoryWithCountModel]:
        """List the caller's categories, each with the number of the caller's URLs tagged with it."""
        caller = require_caller(caller)
        return self.backend.categories.list_by_user_with_counts(caller.user_id)

    # -------------------------------
    # URL <-> category associations
    # -------------------------------

    @translate_dao_errors
    def add_categories_to_url(self, caller: Identity | None, shortcode: str, category_ids: list[str]) -> None:
        """Tag a URL with categories; already present pairs are left as they are.

        Raises:
            NotFoundError: If the shortcode or a category does not exist.
            ForbiddenError: If the caller owns neither the URL nor every category.
        """
        caller = require_caller(caller)
        short_url = self._owned_url(caller, shortcode)
        category_ids = self._owned_category_ids(caller, category_ids)
        self.backend.short_urls.add_categories(short_url.id, category_ids)

    @translate_dao_errors
    def remove_categories_from_url(self, caller: Identity | None, shortcode: str, category_ids: list[str]) -> None:
        caller = require_caller(caller)
        short_url = self._owned_url(caller, shortcode)
        category_ids = self._owned_category_ids(caller, category_ids)
        self.backend.short_urls.remove_categories(short_url.id, category_ids)

    @translate_dao_errors
    def get_url_categories(self, caller: Identity | None, shortcode: str) -> list[CategoryModel]:
        short_url = self._owned_url(caller, shortcode)
        return self.backend.short_urls.categories(short_url.id)


def create_registry(config: BackendConfiguration | None = None, **options: Any) -> LinkRegistry:
    """Process entry point: set up logging, build the configured backend, wrap it in a registry

    Args:
        config (BackendConfiguration | None):
            `{<backend name>: <parameters>}`; read with `load_config()` when omitted.
        **options:
            Forwarded to LinkRegistry (`shortcode_length`, `max_attempts`).

    Returns:
        LinkRegistry: Registry over a backend that lives as long as the process.

    Raises:
        ConfigurationError: If the configuration or log level is invalid.
        DataStoreError: If a relational backend is unreachable.

    Example:
        >>> registry = create_registry()  # DB_TYPE unset -> memory backend
        >>> registry.backend.name
        'memory'
    """
    initialize_logging()
    backend = create_backend(load_config() if config is None else config)
    logger.info('Link registry ready.', extra={'backend': backend.name, 'appEnv': app_env()})
    return LinkRegistry(backend, **options)
