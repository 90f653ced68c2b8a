import string
from enum import StrEnum


class Shortcode:
    """Shortcode generation parameters."""

    # Base62 alphabet: digits, lowercase, uppercase
    ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
    LENGTH = 6
    MAX_ATTEMPTS = 10


class Limits:
    """Input size limits (mirrors column widths of the relational schema)."""

    URL_LENGTH = 2048
    EMAIL_LENGTH = 255
    PASSWORD_MIN_LENGTH = 8
    CATEGORY_NAME_LENGTH = 100
    CATEGORY_DESCRIPTION_LENGTH = 500
    CATEGORY_TOKEN_LENGTH = 50  # icon & color tokens


class CategoryDefaults:
    ICON = 'folder'
    COLOR = 'primary'


class Backend(StrEnum):
    MEMORY = 'memory'
    POSTGRES = 'postgres'
    MYSQL = 'mysql'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'

    class Database(StrEnum):
        TYPE = 'DB_TYPE'
        HOST = 'DB_HOST'
        PORT = 'DB_PORT'
        USER = 'DB_USER'
        PASSWORD = 'DB_PASSWORD'  # noqa: S105
        NAME = 'DB_NAME'
        POOL_SIZE = 'DB_POOL_SIZE'
        TLS = 'DB_TLS'
        CREATE_TABLES = 'DB_CREATE_TABLES'
