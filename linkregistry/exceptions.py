"""Caller-facing error taxonomy of the link registry.

Every failure surfaced by LinkRegistry is one of the classes below. Storage
internals (SQL error text, driver exceptions) never appear in these messages;
they stay in the exception chain and in the server-side log.

Classes:
    LinkRegistryError:
        Base exception for all application-specific errors.

    ValidationError:
        Malformed input (destination URL shape, missing required field).

    NotFoundError:
        Referenced short code, identifier or category does not exist.

    ConflictError:
        Short code, email or category name collides with an existing unique key.

    ForbiddenError:
        Caller does not own the targeted record.

    GenerationExhaustedError:
        No free short code found within the generator's retry budget.

    StorageError:
        Any unrecognized backend failure.

    InvalidCredentialsError:
        Login attempt with unknown email or wrong password.

    ConfigurationError:
        Base exception for all configuration errors.
"""


class LinkRegistryError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:link_registry_error'


class ValidationError(LinkRegistryError):
    """Raised when caller input is malformed.

    Attributes:
        details (list[str]):
            Individual validation failures, suitable for showing to the caller.
    """

    error_code = 'app:validation_error'

    def __init__(self, message: str, details: list[str] | None = None):
        super().__init__(message)
        self.details = list(details or [])


class NotFoundError(LinkRegistryError):
    """Raised when a referenced record does not exist."""

    error_code = 'app:not_found_error'


class ConflictError(LinkRegistryError):
    """Raised when a unique key (short code, email, category name) is taken."""

    error_code = 'app:conflict_error'


class ForbiddenError(LinkRegistryError):
    """Raised when the caller does not own the targeted record."""

    error_code = 'app:forbidden_error'


class InvalidCredentialsError(LinkRegistryError):
    """Raised when an email/password pair does not match a stored account."""

    error_code = 'app:invalid_credentials_error'


class GenerationExhaustedError(LinkRegistryError):
    """Raised when the shortcode generator runs out of attempts."""

    error_code = 'app:generation_exhausted_error'


class StorageError(LinkRegistryError):
    """Raised when the storage backend fails for an unrecognized reason."""

    error_code = 'app:storage_error'


class ConfigurationError(LinkRegistryError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
