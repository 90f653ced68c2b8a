"""Process-wide JSON logging

`create_registry()` calls `initialize_logging()` once at process startup; a
process that wires its own LinkRegistry should call it before logging anything.

One JSON object per line:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "linkregistry.registry",
    "message": "Short URL created.",
    "shortcode": "x4Gk9Q",
    "userId": "8b0c..."
}

Fields passed via `extra=` are merged at the top level. A traceback from
`logger.exception()` lands under "exception", `stack_info=True` under "stack".
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkregistry.constants import ENV
from linkregistry.exceptions import BadConfigurationError


# Attributes every LogRecord carries; anything else came in through `extra=`
RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Render a record as single-line JSON with its `extra` fields inlined"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': self.timestamp(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        entry.update((key, value) for key, value in vars(record).items() if key not in RECORD_ATTRS)

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            entry['stack'] = self.formatStack(record.stack_info)

        # ids and enums in `extra` are not always JSON-native
        return json.dumps(entry, default=str)

    @staticmethod
    def timestamp(record: logging.LogRecord) -> str:
        moment = datetime.fromtimestamp(record.created, tz=UTC)
        return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def initialize_logging(level: str | None = None) -> None:
    """Send JSON logs to stdout

    Args:
        level (str | None):
            Level of the `linkregistry` loggers. Defaults to $LOG_LEVEL, then INFO.
            Everything else (SQLAlchemy, botocore, ...) logs at WARNING and above.

    Raises:
        BadConfigurationError: If the level name is not a logging level.
    """
    level = (level or os.getenv(ENV.App.LOG_LEVEL) or 'INFO').upper()
    if level not in logging.getLevelNamesMapping():
        raise BadConfigurationError(f"Unknown log level '{level}'.")

    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'loggers': {
                'linkregistry': {
                    'level': level,
                }
            },
            'root': {
                'level': 'WARNING',
                'handlers': ['stdout'],
            },
        }
    )
