from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL mapping.

    Instances are immutable: DAOs hand out values that cannot be used to
    mutate their internal state. Derive modified copies with `dataclasses.replace()`.

    Attributes:
        target (str):
            The original long URL that the short code redirects to.
        shortcode (str):
            The unique short identifier representing the shortened URL.
        id (str):
            Globally unique identifier of the record (UUID4 string).
        created_at (datetime):
            Creation timestamp (UTC).
        updated_at (datetime):
            Last modification timestamp (UTC), advanced on every change
            including access count increments.
        access_count (int):
            Number of recorded redirects; never decreases.
        user_id (str | None):
            Owning account identifier. None for legacy (ownerless) records.

    Example:
        >>> from datetime import datetime, UTC
        >>> now = datetime.now(UTC)
        >>> url = ShortURLModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="aB3xY9",
        ...     id="2f1c6f0e-9a53-4c1e-8d0e-1f6b2a8f4c11",
        ...     created_at=now,
        ...     updated_at=now,
        ... )
        >>> url.access_count
        0
        >>> url.user_id is None
        True
    """

    target: str
    shortcode: str
    id: str
    created_at: datetime
    updated_at: datetime
    access_count: int = 0
    user_id: str | None = None
