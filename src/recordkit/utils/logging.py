"""Logging setup for applications and test suites using recordkit.

Library modules only create `logging.getLogger(__name__)` loggers under the
`recordkit` namespace and never install handlers themselves. Messages about
record declarations (accessor tables, registrations, schemas) are only
interesting while debugging, so they stay quiet unless the level is DEBUG.
Record construction failures are logged at ERROR and always pass through.
"""

import logging
import os
import sys

LOG_LEVEL_ENV_VAR = "RECORDKIT_LOG_LEVEL"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
SIMPLE_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

DECLARATION_LOGGERS = (
    "recordkit.catalog",
    "recordkit.core.record",
    "recordkit.serializer",
    "recordkit.utils.accessors",
    "recordkit.utils.container",
)


def _resolve_level(level) -> int:
    """Accept a level number or name. Unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(str(level).upper(), logging.INFO)


def configure_logging(level=None, format_string=None):
    """Configure the root logger and the `recordkit` loggers.

    Args:
        level: Level number or name. Read from `RECORDKIT_LOG_LEVEL` when not
            given, `INFO` by default.
        format_string: Format of log lines. Includes the logger name at DEBUG.

    Returns:
        The `recordkit` logger
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    numeric_level = _resolve_level(level)
    debugging = numeric_level <= logging.DEBUG

    logging.basicConfig(
        level=numeric_level,
        format=format_string or (VERBOSE_FORMAT if debugging else SIMPLE_FORMAT),
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    declaration_level = logging.DEBUG if debugging else logging.WARNING
    for name in DECLARATION_LOGGERS:
        logging.getLogger(name).setLevel(declaration_level)

    package_logger = logging.getLogger("recordkit")
    package_logger.setLevel(numeric_level)
    return package_logger
