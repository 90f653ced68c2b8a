"""Input validators for registry operations.

Each validator returns the normalized value (trimmed, lower-cased email, ...)
or raises ValidationError carrying every individual problem in `details`.

Functions:
    validate_url(url) -> str
    validate_email(email) -> str
    validate_password(password) -> str
    validate_credentials(email, password) -> tuple[str, str]
    validate_category(name, description, icon, color) -> dict[str, str | None]

Example:
    >>> validate_url('  https://example.org/a ')
    'https://example.org/a'
    >>> validate_url('javascript:alert(1)')
    Traceback (most recent call last):
        ...
    linkregistry.exceptions.ValidationError: Validation failed
"""

import re
from typing import Any
from urllib.parse import urlsplit

from linkregistry.constants import Limits, CategoryDefaults
from linkregistry.exceptions import ValidationError


ALLOWED_SCHEMES = frozenset({'http', 'https'})
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def _url_errors(url: Any) -> list[str]:
    if not url or not isinstance(url, str):
        return ['URL is required and must be a string']

    trimmed = url.strip()
    if not trimmed:
        return ['URL cannot be empty']

    errors = []
    if len(trimmed) > Limits.URL_LENGTH:
        errors.append(f'URL is too long (maximum {Limits.URL_LENGTH} characters)')

    try:
        components = urlsplit(trimmed)
        components.port  # noqa: B018 raises ValueError on a malformed port
    except ValueError:
        errors.append('URL is not valid')
        return errors

    if components.scheme.lower() not in ALLOWED_SCHEMES:
        errors.append('URL must use HTTP or HTTPS protocol')
    if not components.hostname:
        errors.append('URL must have a valid hostname')
    return errors


def _email_errors(email: Any) -> list[str]:
    if not email or not isinstance(email, str):
        return ['Email is required and must be a string']

    normalized = email.strip().lower()
    errors = []
    if not normalized:
        errors.append('Email cannot be empty')
    if len(normalized) > Limits.EMAIL_LENGTH:
        errors.append(f'Email is too long (maximum {Limits.EMAIL_LENGTH} characters)')
    if not EMAIL_PATTERN.match(normalized):
        errors.append('Email is not valid')
    return errors


def _password_errors(password: Any) -> list[str]:
    if not password or not isinstance(password, str):
        return ['Password is required and must be a string']
    if len(password) < Limits.PASSWORD_MIN_LENGTH:
        return [f'Password must be at least {Limits.PASSWORD_MIN_LENGTH} characters long']
    return []


def validate_url(url: Any) -> str:
    """Validate a destination URL

    Args:
        url (Any):
            Candidate destination URL.

    Returns:
        str: The trimmed URL.

    Raises:
        ValidationError:
            If the URL is empty, longer than 2048 characters, unparseable,
            not http(s) or without a hostname.
    """
    errors = _url_errors(url)
    if errors:
        raise ValidationError('Validation failed', errors)
    return url.strip()


def validate_email(email: Any) -> str:
    errors = _email_errors(email)
    if errors:
        raise ValidationError('Validation failed', errors)
    return email.strip().lower()


def validate_password(password: Any) -> str:
    errors = _password_errors(password)
    if errors:
        raise ValidationError('Validation failed', errors)
    return password


def validate_credentials(email: Any, password: Any) -> tuple[str, str]:
    """Validate an email/password pair, reporting the problems of both at once."""
    errors = _email_errors(email) + _password_errors(password)
    if errors:
        raise ValidationError('Validation failed', errors)
    return email.strip().lower(), password


def validate_category(
    name: Any,
    description: Any = None,
    icon: Any = None,
    color: Any = None,
) -> dict[str, str | None]:
    """Validate and normalize category fields

    Empty icon / color fall back to the defaults ('folder' / 'primary'),
    an empty description is stored as None.

    Returns:
        dict[str, str | None]:
            Keyword arguments for CategoryModel: name, description, icon, color.

    Raises:
        ValidationError:
            If the name is missing or any field exceeds its column width.
    """
    errors = []

    if not name or not isinstance(name, str) or not name.strip():
        errors.append('Category name is required')
    elif len(name.strip()) > Limits.CATEGORY_NAME_LENGTH:
        errors.append(f'Category name is too long (maximum {Limits.CATEGORY_NAME_LENGTH} characters)')

    # fmt: off
    optional = {'description': (description, Limits.CATEGORY_DESCRIPTION_LENGTH),
                'icon':        (icon,        Limits.CATEGORY_TOKEN_LENGTH),
                'color':       (color,       Limits.CATEGORY_TOKEN_LENGTH)}
    # fmt: on
    for field, (value, limit) in optional.items():
        if value is None:
            continue
        if not isinstance(value, str):
            errors.append(f'Category {field} must be a string')
        elif len(value.strip()) > limit:
            errors.append(f'Category {field} is too long (maximum {limit} characters)')

    if errors:
        raise ValidationError('Validation failed', errors)

    return {
        'name': name.strip(),
        'description': (description or '').strip() or None,
        'icon': (icon or '').strip() or CategoryDefaults.ICON,
        'color': (color or '').strip() or CategoryDefaults.COLOR,
    }
