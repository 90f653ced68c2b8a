from dataclasses import dataclass
from datetime import datetime

from linkregistry.constants import CategoryDefaults


@dataclass(frozen=True)
class CategoryModel:
    """Represent a named, owner-scoped tag for short URLs.

    Attributes:
        id (str):
            Category identifier (UUID4 string).
        name (str):
            Display name. Unique per owner, compared case-insensitively.
        user_id (str):
            Owning account identifier.
        created_at (datetime):
            Creation timestamp (UTC).
        updated_at (datetime):
            Last modification timestamp (UTC).
        description (str | None):
            Optional free-form description.
        icon (str):
            Icon token used by the UI. Defaults to 'folder'.
        color (str):
            Color token used by the UI. Defaults to 'primary'.
    """

    id: str
    name: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    icon: str = CategoryDefaults.ICON
    color: str = CategoryDefaults.COLOR


@dataclass(frozen=True)
class CategoryWithCountModel(CategoryModel):
    """CategoryModel plus the number of URLs (owned by the same account) tagged with it."""

    url_count: int = 0
