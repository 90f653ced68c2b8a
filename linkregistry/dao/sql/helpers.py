import functools
from datetime import datetime, UTC
from typing import TypeVar, Any
from collections.abc import Callable, Mapping

from sqlalchemy.exc import SQLAlchemyError

from linkregistry.models import ShortURLModel, UserModel, CategoryModel, CategoryWithCountModel
from linkregistry.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_sql_error[F](method: F) -> F:
    """Wrap SQL-interacting DAO methods to normalize database errors

    Args:
        method (Callable[..., Any]):
            DAO method performing SQL operations which may raise sqlalchemy.exc.SQLAlchemyError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on any database failure.
            DAOError subclasses raised by the method itself pass through untouched.

    Example:
        >>> @handle_sql_error
        ... def exists(self, shortcode):
        ...     with self.engine.connect() as conn:
        ...         ...
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            url = self.engine.url
            raise DataStoreError(
                f"Operation '{method.__name__}' failed on {url.get_backend_name()} at {url.host}:{url.port}/{url.database}."
            ) from e

    return wrapper


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from MySQL / SQLite."""
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


def to_short_url(row: Mapping[str, Any]) -> ShortURLModel:
    return ShortURLModel(
        target=row['url'],
        shortcode=row['short_code'],
        id=row['id'],
        created_at=as_utc(row['created_at']),
        updated_at=as_utc(row['updated_at']),
        access_count=int(row['access_count']),
        user_id=row['user_id'],
    )


def to_user(row: Mapping[str, Any]) -> UserModel:
    return UserModel(
        id=row['id'],
        email=row['email'],
        password_hash=row['password_hash'],
        created_at=as_utc(row['created_at']),
        updated_at=as_utc(row['updated_at']),
    )


def _category_fields(row: Mapping[str, Any]) -> dict[str, Any]:
    return {
        'id': row['id'],
        'name': row['name'],
        'user_id': row['user_id'],
        'created_at': as_utc(row['created_at']),
        'updated_at': as_utc(row['updated_at']),
        'description': row['description'],
        'icon': row['icon'],
        'color': row['color'],
    }


def to_category(row: Mapping[str, Any]) -> CategoryModel:
    return CategoryModel(**_category_fields(row))


def to_category_with_count(row: Mapping[str, Any]) -> CategoryWithCountModel:
    return CategoryWithCountModel(**_category_fields(row), url_count=int(row['url_count'] or 0))
