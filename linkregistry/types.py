from typing import Any
from collections.abc import Callable


# Type aliases for Python dictionaries
type BackendConfiguration = dict[str, Any]
type AppConfig = dict[str, Any]

# Credential hashing collaborators
type PasswordHasher = Callable[[str], str]
type PasswordVerifier = Callable[[str, str], bool]
