"""Shortcode generation utility

This module draws random shortcodes from the Base62 alphabet and resolves
collisions against the active storage backend.

Functions:
    generate_shortcode(length=6, alphabet=Shortcode.ALPHABET):
        Draw one random candidate shortcode.

    generate_unique_shortcode(exists, length=6, max_attempts=10):
        Draw candidates until one is reported free by `exists`.

Example:
    >>> from linkregistry.utils import generate_unique_shortcode
    >>> generate_unique_shortcode(short_url_dao.exists)
    'x4Gk9Q'

NOTE:
    - Every symbol comes from `secrets` (a CSPRNG), so codes cannot be
      enumerated from a known one.
    - 62^6 (about 5.7e10) codes make a collision on a healthy store
      practically impossible. Exhausting the attempts points at a broken
      random source or a near-full code space and is logged as an error.
    - The existence check is only advisory: two callers may draw the same
      free code concurrently. The backend's insert() is authoritative and
      reports the loser with ShortURLAlreadyExistsError.
"""

import logging
import secrets
from collections.abc import Callable

from linkregistry.constants import Shortcode
from linkregistry.exceptions import GenerationExhaustedError


logger = logging.getLogger(__name__)


def generate_shortcode(length: int = Shortcode.LENGTH, alphabet: str = Shortcode.ALPHABET) -> str:
    """Draw a random shortcode

    Args:
        length (int, optional):
            Number of symbols. Defaults to 6.

        alphabet (str, optional):
            Symbols to draw from. Defaults to the Base62 alphabet [0-9a-zA-Z].

    Returns:
        str: A random code of exactly `length` symbols.

    Raises:
        ValueError: If length is not positive or the alphabet is empty.
    """
    if length <= 0:
        raise ValueError(f'Shortcode length must be a positive integer (given value: {length}).')
    if not alphabet:
        raise ValueError('Shortcode alphabet must be a non-empty string.')

    return ''.join(secrets.choice(alphabet) for _ in range(length))


def generate_unique_shortcode(
    exists: Callable[[str], bool],
    length: int = Shortcode.LENGTH,
    max_attempts: int = Shortcode.MAX_ATTEMPTS,
) -> str:
    """Draw shortcodes until one is not taken

    Args:
        exists (Callable[[str], bool]):
            Existence check against the storage backend (e.g., ShortURLBaseDAO.exists).

        length (int, optional):
            Shortcode length. Defaults to 6.

        max_attempts (int, optional):
            Number of candidates to try before giving up. Defaults to 10.

    Returns:
        str: A shortcode the backend reported as free.

    Raises:
        GenerationExhaustedError:
            If every one of the `max_attempts` candidates was taken.
    """
    for attempt in range(1, max_attempts + 1):
        shortcode = generate_shortcode(length)
        if not exists(shortcode):
            return shortcode
        logger.warning('Shortcode collision.', extra={'shortcode': shortcode, 'attempt': attempt})

    logger.error('Shortcode generation exhausted.', extra={'attempts': max_attempts, 'length': length})
    raise GenerationExhaustedError(f'Failed to generate a unique shortcode after {max_attempts} attempts.')
