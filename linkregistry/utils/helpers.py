"""Small helpers shared across the package.

Functions:
    utcnow() -> datetime
        Current time as a timezone-aware UTC datetime
    new_id() -> str
        Fresh random record identifier
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present

Example:
    >>> from linkregistry.utils.helpers import utcnow, new_id
    >>> utcnow().tzinfo
    datetime.timezone.utc
    >>> len(new_id())
    36
"""

import os
import uuid
import functools
from datetime import datetime, UTC
from collections.abc import Callable

from linkregistry.exceptions import MissingEnvironmentVariableError


def utcnow() -> datetime:
    return datetime.now(UTC)


def new_id() -> str:
    """Generate a record identifier (UUID4 in canonical text form, 36 characters)."""
    return str(uuid.uuid4())


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('DB_HOST', 'DB_PASSWORD')
        ... def connect():
        ...     pass
        >>> connect()
        MissingEnvironmentVariableError: Missing required environment variables: 'DB_HOST', 'DB_PASSWORD'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator
