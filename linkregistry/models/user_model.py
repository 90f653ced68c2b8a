from dataclasses import dataclass
from datetime import datetime


# fmt: off
@dataclass(frozen=True)
class UserModel:
    id: str                 # Account identifier (UUID4 string)
    email: str              # Lower-cased, unique email address
    password_hash: str      # Opaque credential hash, never inspected by the registry
    created_at: datetime
    updated_at: datetime
# fmt: on
